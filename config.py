# file: config.py

"""Configuration settings for the host suitability and power simulation."""

# Power model calibration (watts)
DEFAULT_MAX_POWER = 300.0     # Draw at 100% CPU utilization
DEFAULT_STATIC_POWER = 150.0  # Draw of an active, idle host
DEFAULT_STARTUP_POWER = 0.0   # One-shot cost of booting a host
DEFAULT_SHUTDOWN_POWER = 0.0  # One-shot cost of shutting a host down

# Host capacities used by the demo fleet
DEFAULT_CPU_CAP = 100        # Compute units
DEFAULT_MEM_CAP = 128        # GB
DEFAULT_STORAGE_CAP = 1000   # GB
DEFAULT_BW_CAP = 10000       # Mbps

# Demo simulation defaults
DEFAULT_NUM_HOSTS = 10
DEFAULT_NUM_WORKLOADS = 40
DEFAULT_GROUP_SIZE = 4
DEFAULT_TICKS = 24
DEFAULT_TICK_SECONDS = 3600.0
DEFAULT_SEED = 42

# Suitability explanations
FULLY_SUITABLE_MESSAGE = "Host is fully suitable for the last requested workload"
LACK_OF_PREFIX = "lack of "
DIMENSION_SEPARATOR = ", "
REASON_SEPARATOR = "; "

# Logging format
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
