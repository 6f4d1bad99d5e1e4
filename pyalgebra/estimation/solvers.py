"""
Batch Kalman filtering.

This module provides the kalman_filter() function (public API): it runs a
KalmanFilter over a whole input/measurement sequence and wraps the
trajectory in a KalmanSolution.
"""

from __future__ import annotations

import logging
import warnings
from typing import Iterable

import numpy as np

from pyalgebra.containers._dtypes import result_dtype
from pyalgebra.containers._storage import matrix_from_buffer, raw
from pyalgebra.containers.construct import eye
from pyalgebra.containers.matrix import Matrix
from pyalgebra.containers.vector import Vector
from pyalgebra.core.compute.timing import Timer
from pyalgebra.core.exceptions import DimensionMismatchError, PyAlgebraWarning
from pyalgebra.core.result import Result
from pyalgebra.core.validation import check_not_null, fail
from pyalgebra.estimation.design import StateSpaceModel
from pyalgebra.estimation.kalman import KalmanFilter
from pyalgebra.estimation.solution import KalmanParams, KalmanSolution

logger = logging.getLogger(__name__)

BACKEND_NAME = 'cpu_kernel'


def _as_steps(sequence: Matrix | Iterable[Vector]) -> list[Vector]:
    """Rows of a Matrix, or the vectors of an iterable, one per step."""
    return list(sequence)


def _trajectory_dtype(
    model: StateSpaceModel,
    u_steps: list[Vector],
    z_steps: list[Vector],
    x0: Vector | None,
    P0: Matrix | None,
) -> np.dtype:
    """float64, or complex128 when any operand of the recursion is complex."""
    operands = [model.F, model.B, model.Q, model.H, model.R, *u_steps, *z_steps]
    operands += [c for c in (x0, P0) if c is not None]
    return result_dtype(np.dtype(np.float64), *(c.dtype for c in operands))


def kalman_filter(
    model: StateSpaceModel,
    inputs: Matrix | Iterable[Vector],
    measurements: Matrix | Iterable[Vector],
    *,
    x0: Vector | None = None,
    P0: Matrix | None = None,
) -> KalmanSolution:
    """
    Run a Kalman filter over a sequence of inputs and measurements.

    Args:
        model: Validated state-space model
        inputs: One input vector per step, as the rows of a Matrix or an
            iterable of Vectors (length n_inputs each)
        measurements: One measurement per step, same layout (length
            n_outputs each)
        x0: Initial state estimate. Defaults to zeros.
        P0: Initial error covariance. Defaults to the identity.

    Returns:
        KalmanSolution with estimates and error variances per step

    Raises:
        NullContainerError: If there are no steps
        DimensionMismatchError: If inputs and measurements differ in length
            or a vector has the wrong size

    Note:
        Numerical warnings from the kernel (for example a singular
        innovation covariance) are collected in solution.warnings with
        the step at which they occurred.

    Example:
        >>> model = StateSpaceModel.build(F, B, Q, H, R, dt=1.0)
        >>> solution = kalman_filter(model, [u] * 5, measurements, x0=x_hat0, P0=P0)
        >>> print(solution.summary())
    """
    # === Input Validation ===
    u_steps = _as_steps(inputs)
    z_steps = _as_steps(measurements)
    check_not_null(len(z_steps), 'measurements')
    if len(u_steps) != len(z_steps):
        fail(DimensionMismatchError(
            f"inputs: expected {len(z_steps)} steps to match measurements, got {len(u_steps)}",
            expected=len(z_steps), actual=len(u_steps),
        ))

    # === Construct Filter ===
    kf = KalmanFilter(model)
    if x0 is not None or P0 is not None:
        n = model.n_states
        kf.set_initial_conditions(
            x0 if x0 is not None else Vector(n),
            P0 if P0 is not None else eye(n),
        )

    # === Run ===
    timer = Timer()
    timer.start()
    n_steps = len(z_steps)
    dtype = _trajectory_dtype(model, u_steps, z_steps, x0, P0)
    estimates = np.zeros((n_steps, model.n_states), dtype=dtype)
    variances = np.zeros((n_steps, model.n_states), dtype=dtype)
    gains = []
    warn_list = []

    for k, (u, z) in enumerate(zip(u_steps, z_steps)):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always', PyAlgebraWarning)
            with timer.section('predict'):
                kf.predict(u)
            with timer.section('correct'):
                kf.correct(z)
        for w in caught:
            if issubclass(w.category, PyAlgebraWarning):
                warn_list.append(f"step {k}: {w.message}")
            else:
                warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

        estimates[k] = raw(kf.estimate)
        variances[k] = raw(kf.error_variances)
        gains.append(kf.gain)

    timer.stop()
    logger.info("Kalman filter ran %d steps with %d warnings", n_steps, len(warn_list))

    # === Wrap and Return ===
    params = KalmanParams(
        estimates=matrix_from_buffer(estimates),
        variances=matrix_from_buffer(variances),
        gains=tuple(gains),
        covariance=kf.covariance,
    )
    result = Result(
        params=params,
        info={
            'method': 'kalman',
            'n_steps': n_steps,
            'n_states': model.n_states,
            'n_inputs': model.n_inputs,
            'n_outputs': model.n_outputs,
            'dt': model.dt,
        },
        timing=timer.result(),
        backend_name=BACKEND_NAME,
        warnings=tuple(warn_list),
    )
    return KalmanSolution(_result=result)
