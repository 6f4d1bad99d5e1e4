"""
State-space model design.

StateSpaceModel holds the matrices of a discrete linear time-invariant
system and checks once, at construction, that their shapes fit together:

    x[k+1] = F x[k] + B u[k] + w[k],    w ~ N(0, Q)
    z[k]   = H x[k] + v[k],             v ~ N(0, R)

Everything downstream (LTISystem, KalmanFilter, kalman_filter()) trusts a built
model and skips these checks.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pyalgebra.containers.matrix import Matrix
from pyalgebra.core.exceptions import DimensionMismatchError, ValidationError
from pyalgebra.core.validation import check_not_null, check_square, fail


@dataclass(frozen=True)
class StateSpaceModel:
    """
    Validated discrete LTI system.

    Construction:
        StateSpaceModel.build(F, B, Q, H, R, dt)

    The matrices are copied on construction; changing the originals later
    does not affect the model.
    """
    F: Matrix
    B: Matrix
    Q: Matrix
    H: Matrix
    R: Matrix
    dt: float

    @classmethod
    def build(
        cls,
        F: Matrix,
        B: Matrix,
        Q: Matrix,
        H: Matrix,
        R: Matrix,
        dt: float,
    ) -> StateSpaceModel:
        """
        Build a model after checking dimensions.

        Args:
            F: State transition matrix (n x n)
            B: Control input matrix (n x m)
            Q: Process noise covariance (n x n)
            H: Observation matrix (p x n), p <= n
            R: Observation noise covariance (p x p)
            dt: Sampling period, positive and finite

        Raises:
            ValidationError: If dt is not positive and finite
            NullContainerError: If F is null
            NonSquareError: If F, Q or R is not square
            DimensionMismatchError: If B, Q, H or R does not fit F
        """
        if not (dt > 0 and math.isfinite(dt)):
            fail(ValidationError(f"dt: sampling period must be positive and finite, got {dt}"))

        # === System dynamics ===
        check_not_null(F.size, 'F')
        check_square(F.shape, 'F')
        n = F.rows
        if B.rows != n:
            fail(DimensionMismatchError(
                f"B: expected {n} rows to match F, got {B.rows}",
                expected=n, actual=B.rows,
            ))
        check_square(Q.shape, 'Q')
        if Q.rows != n:
            fail(DimensionMismatchError(
                f"Q: expected order {n} to match F, got {Q.rows}",
                expected=(n, n), actual=Q.shape,
            ))

        # === Observation model ===
        if H.cols != n or H.rows > n:
            fail(DimensionMismatchError(
                f"H: expected {n} columns and at most {n} rows, got shape {H.shape}",
                expected=n, actual=H.shape,
            ))
        check_square(R.shape, 'R')
        if R.rows != H.rows:
            fail(DimensionMismatchError(
                f"R: expected order {H.rows} to match the rows of H, got {R.rows}",
                expected=(H.rows, H.rows), actual=R.shape,
            ))

        return cls(
            F=F.copy(), B=B.copy(), Q=Q.copy(),
            H=H.copy(), R=R.copy(), dt=float(dt),
        )

    # === Properties ===

    @property
    def n_states(self) -> int:
        """Length of the state vector x."""
        return self.F.rows

    @property
    def n_inputs(self) -> int:
        """Length of the input vector u."""
        return self.B.cols

    @property
    def n_outputs(self) -> int:
        """Length of the measurement vector z."""
        return self.H.rows
