"""
Envelope for batch computations.

Kernel operations such as invert() or strassen() hand back containers
directly. Computations that run over a sequence (a Kalman filter over a
measurement history) return a Result, so their per-run metadata, timings
and collected warnings travel with the numbers.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen output of a batch run.

    Attributes:
        params: Payload of the run, e.g. KalmanParams
        info: Run metadata: method name, step count, system dimensions
        timing: Timer.result() of the run, or None when it was not timed
        backend_name: Code path that produced the payload
        warnings: Kernel warnings raised during the run, one string each,
            prefixed with the step at which they occurred
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        return any(substring in w for w in self.warnings)
