# file: main.py

import argparse
import logging
import sys

import matplotlib.pyplot as plt
import numpy as np

from components import Host, Workload
from config import (
    DEFAULT_NUM_HOSTS, DEFAULT_NUM_WORKLOADS, DEFAULT_GROUP_SIZE,
    DEFAULT_TICKS, DEFAULT_TICK_SECONDS, DEFAULT_SEED,
    DEFAULT_CPU_CAP, DEFAULT_MEM_CAP, DEFAULT_STORAGE_CAP, DEFAULT_BW_CAP,
    DEFAULT_MAX_POWER, DEFAULT_STATIC_POWER
)
from exceptions import HostModelError
from power import PowerModel, PowerMeasurement
from suitability import ResourceDimension, explain
from utils import setup_logging

logger = logging.getLogger(__name__)

def build_fleet(num_hosts, rng):
    """Hosts of two sizes, with startup/shutdown costs on the larger ones."""
    small_model = PowerModel(DEFAULT_MAX_POWER * 0.6, DEFAULT_STATIC_POWER * 0.6)
    large_model = PowerModel(DEFAULT_MAX_POWER, DEFAULT_STATIC_POWER,
                             startup_power=40.0, shutdown_power=20.0)
    hosts = []
    for i in range(num_hosts):
        if rng.random() < 0.5:
            hosts.append(Host(i, DEFAULT_CPU_CAP // 2, DEFAULT_MEM_CAP // 2,
                              DEFAULT_STORAGE_CAP // 2, DEFAULT_BW_CAP // 2,
                              power_model=small_model))
        else:
            hosts.append(Host(i, DEFAULT_CPU_CAP, DEFAULT_MEM_CAP,
                              DEFAULT_STORAGE_CAP, DEFAULT_BW_CAP,
                              power_model=large_model))
    return hosts

def build_groups(num_workloads, group_size, rng):
    """Random workloads split into co-located groups."""
    workloads = [
        Workload(i,
                 cpu_req=int(rng.integers(5, 30)),
                 mem_req=int(rng.integers(8, 40)),
                 storage_req=int(rng.integers(50, 300)),
                 bw_req=int(rng.integers(500, 3000)))
        for i in range(num_workloads)
    ]
    return [workloads[i:i + group_size] for i in range(0, num_workloads, group_size)]

def suitability_matrix(hosts, groups, lazy):
    """Group suitability of every host (rows) for every group (columns)."""
    return [[host.get_group_suitability(group, lazy=lazy) for group in groups] for host in hosts]

def failed_dimensions(matrix):
    """Count of False dimensions per resource over a suitability matrix."""
    counts = {d: 0 for d in ResourceDimension}
    for row in matrix:
        for result in row:
            for d in ResourceDimension:
                if not result.for_dimension(d):
                    counts[d] += 1
    return counts

def run_ticks(hosts, ticks, tick_seconds, rng):
    """
    Drives hosts through random on/off and utilization changes, returning
    the per-host energy ledger (joules) and the power drawn at each tick.
    """
    ledger = [PowerMeasurement() for _ in hosts]
    trace = np.zeros((ticks, len(hosts)))
    for t in range(ticks):
        for idx, host in enumerate(hosts):
            if rng.random() < 0.8:
                host.power_on()
                host.cpu_used = float(rng.uniform(0, host.cpu_cap))
            else:
                host.power_off()
            measurement = host.get_power_measurement()
            ledger[idx] = ledger[idx] + measurement * tick_seconds
            trace[t, idx] = measurement.total_power
    return ledger, trace

def calculate_metrics(hosts, ledger, tick_seconds, ticks):
    """Summarizes the energy ledger of a run."""
    total = sum(ledger, PowerMeasurement())
    duration = tick_seconds * ticks
    started = [h for h in hosts if h.has_ever_started()]
    return {
        'energy_kwh': total.total_power / 3.6e6,
        'static_kwh': total.static_power / 3.6e6,
        'dynamic_kwh': total.dynamic_power / 3.6e6,
        'avg_power': (total.total_power / duration) if duration > 0 else 0.0,
        'started_hosts': len(started),
        'active_hosts': sum(1 for h in hosts if h.is_active()),
        'legacy_power': sum(h.get_power() for h in hosts),
    }

def plot_results(hosts, ledger, trace):
    fig, axes = plt.subplots(1, 3, figsize=(20, 6))
    ax1, ax2, ax3 = axes

    utilizations = np.linspace(0.0, 1.0, 101)
    models = {id(h.power_model): h.power_model for h in hosts}
    for model in models.values():
        ax1.plot(utilizations * 100, model.power_curve(utilizations),
                 label=f"{model.static_power:.0f}-{model.max_power:.0f} W")
    ax1.set_title('Power Models', fontsize=14)
    ax1.set_xlabel('CPU Utilization (%)', fontsize=12)
    ax1.set_ylabel('Watts', fontsize=12)
    ax1.legend()

    ax2.plot(trace.sum(axis=1))
    ax2.set_title('Fleet Power per Tick', fontsize=14)
    ax2.set_xlabel('Tick', fontsize=12)
    ax2.set_ylabel('Watts', fontsize=12)

    host_ids = [str(h.id) for h in hosts]
    static = [m.static_power / 3.6e6 for m in ledger]
    dynamic = [m.dynamic_power / 3.6e6 for m in ledger]
    ax3.bar(host_ids, static, color='#1f77b4', label='Static')
    ax3.bar(host_ids, dynamic, bottom=static, color='#ff7f0e', label='Dynamic')
    ax3.set_title('Energy per Host (kWh)', fontsize=14)
    ax3.set_xlabel('Host', fontsize=12)
    ax3.legend()

    plt.tight_layout()
    plt.show()

def run_simulation(num_hosts=DEFAULT_NUM_HOSTS, num_workloads=DEFAULT_NUM_WORKLOADS,
                   group_size=DEFAULT_GROUP_SIZE, ticks=DEFAULT_TICKS,
                   tick_seconds=DEFAULT_TICK_SECONDS, seed=DEFAULT_SEED, plot=False):
    """Evaluates group suitability across the fleet, then accounts its energy."""
    rng = np.random.default_rng(seed)

    logger.info("Setting up %d hosts and %d workloads...", num_hosts, num_workloads)
    hosts = build_fleet(num_hosts, rng)
    groups = build_groups(num_workloads, group_size, rng)

    lazy = suitability_matrix(hosts, groups, lazy=True)
    eager = suitability_matrix(hosts, groups, lazy=False)
    fully = np.array([[r.fully for r in row] for row in eager], dtype=bool)
    logger.info("Suitable (host, group) pairs: %d of %d", int(fully.sum()), fully.size)
    example = next((r for row in eager for r in row if not r.fully), None)
    if example is not None:
        logger.debug("Example unsuitability: %s", explain(example))

    lazy_failures = failed_dimensions(lazy)
    eager_failures = failed_dimensions(eager)

    logger.info("Running %d ticks of %.0f s...", ticks, tick_seconds)
    ledger, trace = run_ticks(hosts, ticks, tick_seconds, rng)
    metrics = calculate_metrics(hosts, ledger, tick_seconds, ticks)

    print("\n--- Unsuitable dimensions (lazy vs eager) ---")
    header = f"{'Dimension':<10} | {'Lazy':<6} | {'Eager':<6}"
    print(header)
    print("-" * len(header))
    for d in ResourceDimension:
        print(f"{d.name:<10} | {lazy_failures[d]:<6} | {eager_failures[d]:<6}")

    print("\n--- Energy Results ---")
    for key, value in metrics.items():
        print(f"{key:<15} | {value:.3f}" if isinstance(value, float) else f"{key:<15} | {value}")

    if plot:
        plot_results(hosts, ledger, trace)
    return metrics

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Evaluate host suitability and account host power draw"
    )
    parser.add_argument("--hosts", type=int, default=DEFAULT_NUM_HOSTS,
                        help=f"Number of hosts (default: {DEFAULT_NUM_HOSTS})")
    parser.add_argument("--workloads", type=int, default=DEFAULT_NUM_WORKLOADS,
                        help=f"Number of workloads (default: {DEFAULT_NUM_WORKLOADS})")
    parser.add_argument("--group-size", type=int, default=DEFAULT_GROUP_SIZE,
                        help=f"Workloads per co-located group (default: {DEFAULT_GROUP_SIZE})")
    parser.add_argument("--ticks", type=int, default=DEFAULT_TICKS,
                        help=f"Number of simulation ticks (default: {DEFAULT_TICKS})")
    parser.add_argument("--tick-seconds", type=float, default=DEFAULT_TICK_SECONDS,
                        help=f"Length of a tick in seconds (default: {DEFAULT_TICK_SECONDS})")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED,
                        help=f"Random seed (default: {DEFAULT_SEED})")
    parser.add_argument("--plot", action="store_true", help="Plot power curves and energy")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        run_simulation(args.hosts, args.workloads, args.group_size, args.ticks,
                       args.tick_seconds, args.seed, args.plot)
        return 0
    except HostModelError as e:
        logger.error(f"Host model error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

if __name__ == '__main__':
    sys.exit(main())
