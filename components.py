# file: components.py

from config import (
    DEFAULT_MAX_POWER, DEFAULT_STATIC_POWER,
    DEFAULT_STORAGE_CAP, DEFAULT_BW_CAP
)
from power import PowerModel, PowerMeasurement
from suitability import ResourceDimension, evaluate, combine_all
from utils import utilization_fraction

class Workload:
    """Represents a workload (VM) with resource requirements."""
    def __init__(self, workload_id, cpu_req, mem_req, storage_req=0, bw_req=0):
        self.id = workload_id
        self.cpu = cpu_req
        self.mem = mem_req
        self.storage = storage_req
        self.bw = bw_req

    def requested(self, dimension):
        """Amount of `dimension` this workload asks for."""
        return {
            ResourceDimension.COMPUTE: self.cpu,
            ResourceDimension.MEMORY: self.mem,
            ResourceDimension.STORAGE: self.storage,
            ResourceDimension.BANDWIDTH: self.bw,
        }[dimension]

    def __repr__(self):
        return f"Workload({self.id})"

class Host:
    """
    Represents a physical host with resource capacity, an activity
    lifecycle and a power model.
    """
    def __init__(self, host_id, cpu_cap, mem_cap,
                 storage_cap=DEFAULT_STORAGE_CAP, bw_cap=DEFAULT_BW_CAP,
                 power_model=None, lazy_suitability_evaluation=True):
        self.id = host_id
        self.cpu_cap = cpu_cap
        self.mem_cap = mem_cap
        self.storage_cap = storage_cap
        self.bw_cap = bw_cap
        self.power_model = power_model or PowerModel(DEFAULT_MAX_POWER, DEFAULT_STATIC_POWER)
        self.lazy_suitability_evaluation = lazy_suitability_evaluation
        self.workloads = []  # Workloads placed on this host
        self.cpu_used = 0
        self.mem_used = 0
        self.storage_used = 0
        self.bw_used = 0
        self._active = False
        self._ever_started = False

    # --- Activity state ---

    def power_on(self):
        self._active = True
        self._ever_started = True

    def power_off(self):
        self._active = False

    def is_active(self):
        return self._active

    def has_ever_started(self):
        return self._ever_started

    # --- Capacity ---

    def available(self, dimension):
        """Free amount of `dimension` on this host."""
        return {
            ResourceDimension.COMPUTE: self.cpu_cap - self.cpu_used,
            ResourceDimension.MEMORY: self.mem_cap - self.mem_used,
            ResourceDimension.STORAGE: self.storage_cap - self.storage_used,
            ResourceDimension.BANDWIDTH: self.bw_cap - self.bw_used,
        }[dimension]

    def get_suitability(self, workload, lazy=None):
        """Per-dimension suitability of this host for a single workload."""
        if lazy is None:
            lazy = self.lazy_suitability_evaluation
        return evaluate(self, workload, lazy)

    def get_group_suitability(self, workloads, lazy=None):
        """
        Combined suitability for a group of workloads, each checked against
        the current free capacity.
        """
        return combine_all(self.get_suitability(w, lazy) for w in workloads)

    def can_host(self, workload):
        """Checks if the host has enough free resources for a given workload."""
        return self.get_suitability(workload).fully

    def place_workload(self, workload):
        """Places a workload on this host, starting it if needed, and updates usage."""
        if not self.can_host(workload):
            return False
        if not self._active:
            self.power_on()
        self.workloads.append(workload)
        self.cpu_used += workload.cpu
        self.mem_used += workload.mem
        self.storage_used += workload.storage
        self.bw_used += workload.bw
        return True

    def remove_workload(self, workload):
        """Releases a workload's resources. Returns False if it is not placed here."""
        if workload not in self.workloads:
            return False
        self.workloads.remove(workload)
        self.cpu_used -= workload.cpu
        self.mem_used -= workload.mem
        self.storage_used -= workload.storage
        self.bw_used -= workload.bw
        return True

    # --- Utilization and power ---

    def get_cpu_utilization(self):
        """Calculates the current CPU utilization of the host."""
        return utilization_fraction(self.cpu_used, self.cpu_cap)

    def get_power_measurement(self) -> PowerMeasurement:
        return self.power_model.measure(self._active, self.get_cpu_utilization())

    def get_power(self):
        """Single-figure power draw, including one-shot lifecycle costs."""
        return self.power_model.get_power(self.get_cpu_utilization(), host=self)

    def reset(self):
        """Resets the host's placement for a new simulation run."""
        self.workloads = []
        self.cpu_used = 0
        self.mem_used = 0
        self.storage_used = 0
        self.bw_used = 0

    def __repr__(self):
        return f"Host({self.id})"
