# file: power.py

"""Linear host power model and the measurements it produces."""

import logging
import numbers
from dataclasses import dataclass

import numpy as np

from config import DEFAULT_STARTUP_POWER, DEFAULT_SHUTDOWN_POWER
from exceptions import InvalidParameterError, OutOfRangeError

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class PowerMeasurement:
    """Static and dynamic parts (watts) of a host's power draw at one instant."""
    static_power: float = 0.0
    dynamic_power: float = 0.0

    @property
    def total_power(self) -> float:
        return self.static_power + self.dynamic_power

    def __add__(self, other):
        if not isinstance(other, PowerMeasurement):
            return NotImplemented
        return PowerMeasurement(
            self.static_power + other.static_power,
            self.dynamic_power + other.dynamic_power
        )

    def __mul__(self, factor):
        if not isinstance(factor, numbers.Real):
            return NotImplemented
        return PowerMeasurement(self.static_power * factor, self.dynamic_power * factor)

    __rmul__ = __mul__

def _validate_power(value, name):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a number, got {value!r}")
    if not np.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")
    if value < 0:
        raise InvalidParameterError(f"{name} cannot be negative, got {value}")
    return float(value)

def _check_utilization(utilization_fraction):
    if not 0 <= utilization_fraction <= 1:
        raise OutOfRangeError(
            f"utilization_fraction has to be between [0 and 1], got {utilization_fraction}"
        )

class PowerModel:
    """
    Power profile growing linearly from `static_power` (idle) to `max_power`
    (full load). Calibration is validated once and never changes afterwards.
    """
    def __init__(self, max_power, static_power,
                 startup_power=DEFAULT_STARTUP_POWER,
                 shutdown_power=DEFAULT_SHUTDOWN_POWER):
        self._max_power = _validate_power(max_power, "max_power")
        self._static_power = _validate_power(static_power, "static_power")
        self._startup_power = _validate_power(startup_power, "startup_power")
        self._shutdown_power = _validate_power(shutdown_power, "shutdown_power")
        if self._max_power < self._static_power:
            raise InvalidParameterError(
                f"max_power ({max_power}) has to be bigger than static_power ({static_power})"
            )
        logger.debug("Created %r", self)

    @property
    def max_power(self):
        return self._max_power

    @property
    def static_power(self):
        return self._static_power

    @property
    def startup_power(self):
        return self._startup_power

    @property
    def shutdown_power(self):
        return self._shutdown_power

    def measure(self, is_active, cpu_utilization_fraction) -> PowerMeasurement:
        """
        Current draw of a host. An inactive host draws nothing whatever its
        last utilization was. The fraction is expected in [0, 1] and is not
        clamped here.
        """
        if not is_active:
            return PowerMeasurement()
        dynamic = (self._max_power - self._static_power) * cpu_utilization_fraction
        return PowerMeasurement(self._static_power, dynamic)

    def get_power(self, utilization_fraction, host=None) -> float:
        """
        Total power (watts) at a given utilization, for callers wanting a
        single number.

        `host` exposes `has_ever_started()` and `is_active()`; None stands for
        a host that never started. The startup cost is added once the host has
        ever started, the shutdown cost once it has started and is now off.
        Only one occurrence of each transition is accounted for.
        """
        _check_utilization(utilization_fraction)

        started = host is not None and host.has_ever_started()
        startup = self._startup_power if started else 0.0
        shutdown = self._shutdown_power if started and not host.is_active() else 0.0
        linear = self._static_power + (self._max_power - self._static_power) * utilization_fraction
        return linear + startup + shutdown

    def power_curve(self, utilizations):
        """Linear term of the model for an array of utilization fractions."""
        utilizations = np.asarray(utilizations, dtype=float)
        if not np.all((utilizations >= 0) & (utilizations <= 1)):
            raise OutOfRangeError("utilizations have to be between [0 and 1]")
        return self._static_power + (self._max_power - self._static_power) * utilizations

    def __repr__(self):
        return (f"PowerModel(max_power={self._max_power}, static_power={self._static_power}, "
                f"startup_power={self._startup_power}, shutdown_power={self._shutdown_power})")
