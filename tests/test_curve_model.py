"""Tests for the polynomial curve model."""

import os
import sys
import unittest

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from curve_optimizers.curve_model import (
    Curve,
    EmptyDatasetError,
    Point,
    compute_loss,
    design_matrix,
    evaluate,
    loss,
    loss_gradient,
    points_to_arrays,
    refresh_curve_loss,
)


POINTS = [Point(-1.0, 2.0), Point(0.0, 1.0), Point(0.5, -0.5), Point(2.0, 3.0)]


class TestEvaluate(unittest.TestCase):

    def test_constant(self):
        self.assertAlmostEqual(evaluate(Curve(1, [3.0]), 10.0), 3.0)

    def test_known_cubic(self):
        # 1 + 2x - x^2 + 0.5x^3 at x=2: 1 + 4 - 4 + 4 = 5
        curve = Curve(1, [1.0, 2.0, -1.0, 0.5])
        self.assertAlmostEqual(evaluate(curve, 2.0), 5.0)

    def test_array_input(self):
        curve = Curve(1, [0.0, 1.0, 1.0])
        xs = np.array([-2.0, 0.0, 3.0])
        np.testing.assert_allclose(evaluate(curve, xs), xs + xs ** 2)

    def test_zero_power_at_origin_is_one(self):
        self.assertAlmostEqual(evaluate(Curve(1, [7.0, 5.0]), 0.0), 7.0)

    def test_matches_power_sum(self):
        rng = np.random.default_rng(0)
        w = rng.normal(size=6)
        x = 0.7
        expected = sum(w[i] * x ** i for i in range(6))
        self.assertAlmostEqual(evaluate(Curve(1, w), x), expected)


class TestLoss(unittest.TestCase):

    def test_zero_penalty_is_mean_squared_residual(self):
        curve = Curve(1, [0.5, -1.0, 0.25])
        residuals = [evaluate(curve, p.x) - p.y for p in POINTS]
        expected = np.mean(np.square(residuals))
        self.assertAlmostEqual(loss(curve, POINTS, 0.0), expected)

    def test_penalty_adds_scaled_sum_of_squares(self):
        curve = Curve(1, [0.5, -1.0, 0.25])
        for p in [0.0, 0.01, 0.3, 1.0]:
            diff = loss(curve, POINTS, p) - loss(curve, POINTS, 0.0)
            self.assertAlmostEqual(diff, p * np.sum(curve.weights ** 2))

    def test_negative_penalty_ignored(self):
        curve = Curve(1, [1.0, 1.0])
        self.assertAlmostEqual(loss(curve, POINTS, -0.5), loss(curve, POINTS, 0.0))

    def test_perfect_fit_is_zero(self):
        curve = Curve(1, [1.0, 2.0])
        pts = [Point(x, 1.0 + 2.0 * x) for x in [-1.0, 0.0, 1.0, 2.0]]
        self.assertAlmostEqual(loss(curve, pts), 0.0)

    def test_empty_dataset_raises(self):
        with self.assertRaises(EmptyDatasetError):
            loss(Curve(1, [1.0]), [], 0.0)

    def test_empty_dataset_error_is_value_error(self):
        with self.assertRaises(ValueError):
            compute_loss(np.array([1.0]), [], 0.1)

    def test_refresh_curve_loss_stores_value(self):
        curve = Curve(1, [0.0, 0.0])
        value = refresh_curve_loss(curve, [Point(0.0, 1.0), Point(1.0, 1.0)], 0.0)
        self.assertAlmostEqual(value, 1.0)
        self.assertAlmostEqual(curve.loss, 1.0)


class TestGradient(unittest.TestCase):

    def test_hand_computed(self):
        # w = [0, 0], errors = [-1, -1] -> g0 = 2*(-1-1)/2 = -2, g1 = 2*(0*-1 + 1*-1)/2 = -1
        grad = loss_gradient(np.zeros(2), [Point(0.0, 1.0), Point(1.0, 1.0)], 0.0)
        np.testing.assert_allclose(grad, [-2.0, -1.0])

    def test_penalty_term(self):
        w = np.array([1.0, -2.0])
        pts = [Point(0.0, 1.0), Point(1.0, -1.0)]
        diff = loss_gradient(w, pts, 0.25) - loss_gradient(w, pts, 0.0)
        np.testing.assert_allclose(diff, 2 * 0.25 * w)

    def test_matches_finite_differences(self):
        rng = np.random.default_rng(3)
        w = rng.normal(size=4)
        h = 1e-6
        analytic = loss_gradient(w, POINTS, 0.1)
        numeric = np.zeros_like(w)
        for i in range(w.shape[0]):
            e = np.zeros_like(w)
            e[i] = h
            numeric[i] = (compute_loss(w + e, POINTS, 0.1) - compute_loss(w - e, POINTS, 0.1)) / (2 * h)
        np.testing.assert_allclose(analytic, numeric, rtol=1e-5, atol=1e-6)

    def test_empty_dataset_raises(self):
        with self.assertRaises(EmptyDatasetError):
            loss_gradient(np.zeros(3), [], 0.0)


class TestHelpers(unittest.TestCase):

    def test_points_to_arrays(self):
        xs, ys = points_to_arrays([Point(1.0, 2.0), (3.0, 4.0)])
        np.testing.assert_array_equal(xs, [1.0, 3.0])
        np.testing.assert_array_equal(ys, [2.0, 4.0])

    def test_points_to_arrays_empty(self):
        xs, ys = points_to_arrays([])
        self.assertEqual(xs.shape, (0,))
        self.assertEqual(ys.shape, (0,))

    def test_design_matrix(self):
        X = design_matrix(np.array([2.0, 3.0]), 3)
        np.testing.assert_array_equal(X, [[1.0, 2.0, 4.0], [1.0, 3.0, 9.0]])

    def test_curve_copy_is_independent(self):
        curve = Curve(4, [1.0, 2.0], 0.5)
        clone = curve.copy()
        clone.weights[0] = 99.0
        self.assertEqual(curve.weights[0], 1.0)
        self.assertEqual(clone.id, 4)
        self.assertEqual(clone.loss, 0.5)

    def test_point_is_immutable(self):
        p = Point(1.0, 2.0)
        with self.assertRaises(AttributeError):
            p.x = 3.0


if __name__ == "__main__":
    unittest.main()
