"""
Tests for KalmanFilter and kalman_filter().

The reference recursion is written out directly with numpy arrays so the
kernel's containers, inverse and products are all checked against it.
"""

import numpy as np
import pytest

from pyalgebra import Matrix, Vector, diag, eye, zeros
from pyalgebra.core.exceptions import DimensionMismatchError, NullContainerError
from pyalgebra.estimation import KalmanFilter, KalmanSolution, StateSpaceModel, kalman_filter


def _reference(model, u, zs, x0, P0):
    F, B, Q, H, R = (np.asarray(m) for m in (model.F, model.B, model.Q, model.H, model.R))
    x, P = np.asarray(x0, dtype=float), np.asarray(P0, dtype=float)
    u = np.asarray(u)
    estimates, variances = [], []
    for z in zs:
        x = F @ x + B @ u
        P = F @ P @ F.T + Q
        K = P @ H.T @ np.linalg.inv(H @ P @ H.T + R)
        x = x + K @ (np.asarray(z) - H @ x)
        P = (np.eye(len(x)) - K @ H) @ P
        P = (P + P.T) / 2
        estimates.append(x)
        variances.append(np.diag(P).copy())
    return np.array(estimates), np.array(variances), P


@pytest.fixture
def x_hat0():
    return Vector.parse("[95 1]")


@pytest.fixture
def P0():
    return diag(Vector.parse("[10 1]"))


# ═══════════════════════════════════════════════════════════════════════
# KalmanFilter
# ═══════════════════════════════════════════════════════════════════════


class TestKalmanFilter:
    """Online predict/correct cycles."""

    def test_matches_reference(self, falling_ball, gravity, ball_measurements, x_hat0, P0):
        kf = KalmanFilter(falling_ball)
        kf.set_initial_conditions(x_hat0, P0)
        for z in ball_measurements:
            kf.update(gravity, z)

        est, var, P = _reference(falling_ball, gravity, ball_measurements, x_hat0, P0)
        np.testing.assert_allclose(np.asarray(kf.estimate), est[-1], rtol=1e-10)
        np.testing.assert_allclose(np.asarray(kf.error_variances), var[-1], rtol=1e-10)
        np.testing.assert_allclose(np.asarray(kf.covariance), P, rtol=1e-10)

    def test_variances_decrease(self, falling_ball, gravity, ball_measurements, x_hat0, P0):
        kf = KalmanFilter(falling_ball)
        kf.set_initial_conditions(x_hat0, P0)
        history = []
        for z in ball_measurements:
            kf.update(gravity, z)
            history.append(kf.error_variances[0])
        assert all(b < a for a, b in zip(history, history[1:]))
        assert history[0] < 10.0

    def test_estimate_tracks_truth(self, falling_ball, gravity, ball_measurements, x_hat0, P0):
        kf = KalmanFilter(falling_ball)
        kf.set_initial_conditions(x_hat0, P0)
        for z in ball_measurements:
            kf.update(gravity, z)
        assert abs(kf.estimate[0] - 87.5) < 3.0

    def test_covariance_symmetric(self, rng):
        F = Matrix.from_rows(rng.standard_normal((3, 3)) * 0.5 + np.eye(3))
        Q = Matrix.from_rows(np.eye(3) * 0.1)
        H = Matrix.parse("[1 0 0;0 0 1]")
        model = StateSpaceModel.build(F, zeros(3, 1), Q, H, eye(2) * 0.5, dt=0.5)
        kf = KalmanFilter(model)
        for _ in range(10):
            kf.update(Vector(1), Vector.from_values(rng.standard_normal(2)))
        P = np.asarray(kf.covariance)
        np.testing.assert_array_equal(P, P.T)

    def test_gain_shape(self, falling_ball, gravity, ball_measurements):
        kf = KalmanFilter(falling_ball)
        assert kf.gain.shape == (2, 1)
        assert np.asarray(kf.gain).tolist() == [[0.0], [0.0]]
        kf.update(gravity, ball_measurements[0])
        assert kf.gain[0, 0] > 0

    def test_default_initial_conditions(self, falling_ball):
        kf = KalmanFilter(falling_ball)
        assert kf.estimate.tolist() == [0.0, 0.0]
        assert kf.covariance == eye(2)

    def test_initial_conditions_copied(self, falling_ball, x_hat0, P0):
        kf = KalmanFilter(falling_ball)
        kf.set_initial_conditions(x_hat0, P0)
        x_hat0[0] = 0.0
        assert kf.estimate[0] == 95.0


class TestKalmanFilterErrors:
    """Lengths and shapes are validated."""

    def test_bad_x0(self, falling_ball, P0):
        with pytest.raises(DimensionMismatchError, match="x0"):
            KalmanFilter(falling_ball).set_initial_conditions(Vector(3), P0)

    def test_bad_P0(self, falling_ball, x_hat0):
        with pytest.raises(DimensionMismatchError, match="P0"):
            KalmanFilter(falling_ball).set_initial_conditions(x_hat0, eye(3))

    def test_bad_u(self, falling_ball, ball_measurements):
        with pytest.raises(DimensionMismatchError, match="u"):
            KalmanFilter(falling_ball).update(Vector(2), ball_measurements[0])

    def test_bad_z_leaves_state(self, falling_ball, gravity, x_hat0, P0):
        kf = KalmanFilter(falling_ball)
        kf.set_initial_conditions(x_hat0, P0)
        with pytest.raises(DimensionMismatchError, match="z"):
            kf.update(gravity, Vector(2))
        assert kf.estimate.tolist() == [95.0, 1.0]


# ═══════════════════════════════════════════════════════════════════════
# kalman_filter()
# ═══════════════════════════════════════════════════════════════════════


class TestBatchFilter:
    """kalman_filter() runs the recursion and wraps the trajectory."""

    def test_matches_reference(self, falling_ball, gravity, ball_measurements, x_hat0, P0):
        solution = kalman_filter(falling_ball, [gravity] * 5, ball_measurements, x0=x_hat0, P0=P0)
        est, var, P = _reference(falling_ball, gravity, ball_measurements, x_hat0, P0)

        assert isinstance(solution, KalmanSolution)
        assert solution.n_steps == 5
        np.testing.assert_allclose(np.asarray(solution.estimates), est, rtol=1e-10)
        np.testing.assert_allclose(np.asarray(solution.variances), var, rtol=1e-10)
        np.testing.assert_allclose(np.asarray(solution.covariance), P, rtol=1e-10)
        np.testing.assert_allclose(np.asarray(solution.final_estimate), est[-1], rtol=1e-10)
        np.testing.assert_allclose(np.asarray(solution.trajectory(1)), est[:, 1], rtol=1e-10)
        assert len(solution.gains) == 5

    def test_matrix_inputs(self, falling_ball, x_hat0, P0):
        inputs = Matrix.from_rows([[-1.0]] * 3)
        measurements = Matrix.from_rows([[100.0], [97.9], [94.4]])
        solution = kalman_filter(falling_ball, inputs, measurements, x0=x_hat0, P0=P0)
        assert solution.estimates.shape == (3, 2)

    def test_info_and_timing(self, falling_ball, gravity, ball_measurements):
        solution = kalman_filter(falling_ball, [gravity] * 5, ball_measurements)
        assert solution.backend_name == 'cpu_kernel'
        assert solution.info['method'] == 'kalman'
        assert solution.info['n_steps'] == 5
        assert solution.info['n_states'] == 2
        assert solution.info['dt'] == 1.0
        assert {'total_seconds', 'predict', 'correct'} <= set(solution.timing)
        assert solution.warnings == ()

    def test_only_x0_given(self, falling_ball, gravity, ball_measurements, x_hat0):
        solution = kalman_filter(falling_ball, [gravity] * 5, ball_measurements, x0=x_hat0)
        _, var, _ = _reference(falling_ball, gravity, ball_measurements, x_hat0, np.eye(2))
        np.testing.assert_allclose(np.asarray(solution.variances), var, rtol=1e-10)

    def test_complex_model(self, gravity, ball_measurements, x_hat0, P0):
        model = StateSpaceModel.build(
            F=Matrix.from_rows([[1, 1j], [0, 1]]),
            B=Matrix.parse("[0.5;1]"),
            Q=eye(2) * 0.1,
            H=Matrix.parse("[1 0]"),
            R=Matrix.parse("[1]"),
            dt=1.0,
        )
        solution = kalman_filter(model, [gravity] * 5, ball_measurements, x0=x_hat0, P0=P0)
        est, var, _ = _reference(model, gravity, ball_measurements, x_hat0, P0)

        assert solution.estimates.dtype == np.complex128
        assert np.abs(est.imag).max() > 0
        np.testing.assert_allclose(np.asarray(solution.estimates), est, rtol=1e-10)
        np.testing.assert_allclose(np.asarray(solution.variances), var, rtol=1e-10)

    def test_summary_and_repr(self, falling_ball, gravity, ball_measurements):
        solution = kalman_filter(falling_ball, [gravity] * 5, ball_measurements)
        text = solution.summary()
        assert "Kalman Filter Results" in text
        assert "Steps: 5" in text
        assert "Backend: cpu_kernel" in text
        assert repr(solution) == "KalmanSolution(n_steps=5, n_states=2)"


class TestBatchFilterWarnings:
    """Singular innovation covariance is reported per step, not raised."""

    @pytest.fixture
    def unobservable(self):
        return StateSpaceModel.build(
            F=eye(2), B=zeros(2, 1), Q=zeros(2, 2), H=eye(2), R=zeros(2, 2), dt=1.0,
        )

    def test_warnings_collected(self, unobservable):
        solution = kalman_filter(
            unobservable, [Vector(1)], [Vector.parse("[1 2]")], P0=zeros(2, 2),
        )
        assert len(solution.warnings) == 1
        assert solution.warnings[0].startswith("step 0:")
        assert solution._result.has_warning("singular")
        assert np.isnan(np.asarray(solution.estimates)).all()
        assert "Warning: step 0" in solution.summary()

    def test_scalar_zero_innovation(self):
        """A 1x1 innovation covariance of zero warns at every step."""
        blind = StateSpaceModel.build(
            F=eye(1), B=zeros(1, 1), Q=zeros(1, 1), H=zeros(1, 1), R=zeros(1, 1), dt=1.0,
        )
        solution = kalman_filter(blind, [Vector(1)] * 2, [Vector.parse("[3]")] * 2)
        assert len(solution.warnings) == 2
        assert solution.warnings[1].startswith("step 1:")
        assert np.isnan(np.asarray(solution.estimates)).all()


class TestBatchFilterErrors:
    """Sequence validation."""

    def test_empty(self, falling_ball):
        with pytest.raises(NullContainerError):
            kalman_filter(falling_ball, [], [])

    def test_length_mismatch(self, falling_ball, gravity, ball_measurements):
        with pytest.raises(DimensionMismatchError, match="inputs"):
            kalman_filter(falling_ball, [gravity] * 4, ball_measurements)

    def test_bad_measurement_length(self, falling_ball, gravity):
        with pytest.raises(DimensionMismatchError, match="z"):
            kalman_filter(falling_ball, [gravity], [Vector(2)])
