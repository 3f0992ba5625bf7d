# file: suitability.py

"""
Host suitability evaluation.

A host is checked against a workload's demand on four independent resource
dimensions. The outcome is a SuitabilityResult value: unsuitable hosts are a
normal result, not an error.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce
from typing import FrozenSet, Optional

from config import (
    FULLY_SUITABLE_MESSAGE, LACK_OF_PREFIX,
    DIMENSION_SEPARATOR, REASON_SEPARATOR
)
from exceptions import InvalidReasonError

logger = logging.getLogger(__name__)

class ResourceDimension(Enum):
    """Resource axes, declared in evaluation and explanation order."""
    COMPUTE = "compute"
    MEMORY = "memory"
    STORAGE = "storage"
    BANDWIDTH = "bandwidth"

@dataclass(frozen=True)
class SuitabilityResult:
    """
    Per-dimension suitability of a host for a workload (or a group of them).

    A False dimension means either "checked and failed" or "never checked
    because an earlier dimension failed under lazy evaluation". A freshly
    constructed result is therefore fully unsuitable.
    """
    compute: bool = False
    memory: bool = False
    storage: bool = False
    bandwidth: bool = False
    reasons: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        reasons = self.reasons
        if isinstance(reasons, str):
            reasons = [reasons]
        object.__setattr__(self, "reasons", frozenset(reasons))
        for reason in self.reasons:
            _check_reason(reason)

    @classmethod
    def unsuitable(cls, reason):
        """Result for a host known to be unsuitable for a non-dimensional cause."""
        _check_reason(reason)
        return cls(reasons=frozenset([reason]))

    @property
    def fully(self) -> bool:
        return self.compute and self.memory and self.storage and self.bandwidth

    @property
    def reason(self) -> Optional[str]:
        if not self.reasons:
            return None
        return REASON_SEPARATOR.join(sorted(self.reasons))

    def for_dimension(self, dimension: ResourceDimension) -> bool:
        return getattr(self, dimension.value)

    def __and__(self, other):
        if not isinstance(other, SuitabilityResult):
            return NotImplemented
        return combine(self, other)

    def __str__(self):
        return explain(self)

# Nothing evaluated, nothing suitable.
NULL_SUITABILITY = SuitabilityResult()

def _check_reason(reason):
    if not isinstance(reason, str) or not reason.strip():
        raise InvalidReasonError(
            f"An unsuitability reason must be a non-empty string, got {reason!r}"
        )

def evaluate(capacity, demand, lazy=True) -> SuitabilityResult:
    """
    Checks every dimension of `demand` against `capacity`.

    `capacity.available(dim)` and `demand.requested(dim)` are compared with
    `>=`. Dimensions are checked in ResourceDimension order; when `lazy` is
    true, checking stops at the first failing dimension and the remaining
    ones are left False.
    """
    checks = {}
    for dimension in ResourceDimension:
        suitable = capacity.available(dimension) >= demand.requested(dimension)
        checks[dimension.value] = suitable
        if lazy and not suitable:
            logger.debug("Lazy suitability evaluation stopped at %s", dimension.name)
            break
    return SuitabilityResult(**checks)

def combine(a: SuitabilityResult, b: SuitabilityResult) -> SuitabilityResult:
    """Suitability of one host for the workloads behind both `a` and `b`."""
    return SuitabilityResult(
        compute=a.compute and b.compute,
        memory=a.memory and b.memory,
        storage=a.storage and b.storage,
        bandwidth=a.bandwidth and b.bandwidth,
        reasons=a.reasons | b.reasons,
    )

def combine_all(results) -> SuitabilityResult:
    """Folds `combine` over a non-empty group of results."""
    results = list(results)
    if not results:
        raise ValueError("combine_all() requires at least one result")
    return reduce(combine, results)

def is_fully_suitable(result: SuitabilityResult) -> bool:
    return result.fully

def explain(result: SuitabilityResult) -> str:
    """Human-readable reason a host is (not) suitable."""
    if result.fully:
        return FULLY_SUITABLE_MESSAGE
    if result.reasons:
        return result.reason

    lacking = [d.name for d in ResourceDimension if not result.for_dimension(d)]
    return LACK_OF_PREFIX + DIMENSION_SEPARATOR.join(lacking)
