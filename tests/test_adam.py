"""Tests for the Adam optimizer."""

import os
import sys
import unittest

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from curve_optimizers.adam import AdamOptimizer, AdamState
from curve_optimizers.curve_model import Point, compute_loss, loss_gradient


TWO_POINTS = [Point(0.0, 1.0), Point(1.0, 1.0)]
QUADRATIC_POINTS = [Point(x, 1.0 - x + 2.0 * x ** 2) for x in np.linspace(-1.0, 1.0, 7)]


class TestAdamState(unittest.TestCase):

    def test_initialize_resets_moments(self):
        opt = AdamOptimizer(seed=0)
        opt.initialize(5, TWO_POINTS, 0.0)
        np.testing.assert_array_equal(opt.adam_state.m, np.zeros(5))
        np.testing.assert_array_equal(opt.adam_state.v, np.zeros(5))
        self.assertEqual(opt.adam_state.t, 0)

    def test_reinitialize_discards_accumulators(self):
        opt = AdamOptimizer(seed=0)
        opt.initialize(3, TWO_POINTS, 0.0)
        for _ in range(5):
            opt.step(0.1, 0.9, 0.999, 1e-8, TWO_POINTS, 0.0)
        self.assertEqual(opt.adam_state.t, 5)
        opt.initialize(4, TWO_POINTS, 0.0)
        self.assertEqual(opt.adam_state.t, 0)
        self.assertEqual(opt.adam_state.m.shape, (4,))
        np.testing.assert_array_equal(opt.adam_state.v, np.zeros(4))

    def test_moment_lengths_match_weights(self):
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[0.1, 0.2, 0.3]], TWO_POINTS, 0.0)
        opt.step(0.1, 0.9, 0.999, 1e-8, TWO_POINTS, 0.0)
        self.assertEqual(opt.adam_state.m.shape, opt.curve.weights.shape)
        self.assertEqual(opt.adam_state.v.shape, opt.curve.weights.shape)

    def test_zeros_constructor(self):
        state = AdamState.zeros(2)
        self.assertEqual(state.t, 0)
        np.testing.assert_array_equal(state.m, [0.0, 0.0])

    def test_step_before_initialize_is_noop(self):
        opt = AdamOptimizer(seed=0)
        opt.step(0.1, 0.9, 0.999, 1e-8, TWO_POINTS, 0.0)
        self.assertIsNone(opt.adam_state)
        self.assertIsNone(opt.curve)


class TestAdamStep(unittest.TestCase):

    def test_first_step_bias_correction(self):
        """At t=1 the corrected moments equal g and g^2."""
        beta1, beta2 = 0.97, 0.999
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[0.0, 0.0]], TWO_POINTS, 0.0)
        g = loss_gradient(opt.curve.weights, TWO_POINTS, 0.0)
        opt.step(0.1, beta1, beta2, 1e-8, TWO_POINTS, 0.0)

        state = opt.adam_state
        self.assertEqual(state.t, 1)
        np.testing.assert_allclose(state.m, (1 - beta1) * g)
        np.testing.assert_allclose(state.v, (1 - beta2) * g ** 2)
        m_hat = state.m / (1 - beta1 ** state.t)
        v_hat = state.v / (1 - beta2 ** state.t)
        np.testing.assert_allclose(m_hat, g, rtol=1e-12)
        np.testing.assert_allclose(v_hat, g ** 2, rtol=1e-12)

    def test_first_step_moves_by_learning_rate(self):
        # m_hat / sqrt(v_hat) = sign(g), so every coefficient moves by ~lr
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[0.0, 0.0]], TWO_POINTS, 0.0)
        opt.step(0.1, 0.9, 0.999, 1e-8, TWO_POINTS, 0.0)
        np.testing.assert_allclose(opt.curve.weights, [0.1, 0.1], atol=1e-8)
        self.assertAlmostEqual(opt.curve.loss, compute_loss(opt.curve.weights, TWO_POINTS, 0.0))

    def test_epsilon_outside_square_root(self):
        # Zero gradient on w[1]: update is lr * 0 / (sqrt(0) + eps) = 0
        pts = [Point(0.0, 1.0)]
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[0.0, 5.0]], pts, 0.0)
        opt.step(0.1, 0.9, 0.999, 1e-8, pts, 0.0)
        self.assertEqual(opt.curve.weights[1], 5.0)
        # w[0]: g = -2, update = 0.1 * -2 / (2 + 1e-8)
        self.assertAlmostEqual(opt.curve.weights[0], 0.1 * 2.0 / (2.0 + 1e-8), places=14)

    def test_large_epsilon_damps_step(self):
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[0.0, 0.0]], TWO_POINTS, 0.0)
        opt.step(0.1, 0.9, 0.999, 1.0, TWO_POINTS, 0.0)
        # g = [-2, -1]: updates 0.1*2/3 and 0.1*1/2
        np.testing.assert_allclose(opt.curve.weights, [0.2 / 3.0, 0.05])

    def test_two_steps_hand_computed(self):
        beta1, beta2, lr, eps = 0.9, 0.999, 0.1, 1e-8
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[0.0, 0.0]], TWO_POINTS, 0.0)
        opt.step(lr, beta1, beta2, eps, TWO_POINTS, 0.0)
        opt.step(lr, beta1, beta2, eps, TWO_POINTS, 0.0)

        g1 = np.array([-2.0, -1.0])
        w1 = -lr * g1 / (np.abs(g1) + eps)
        g2 = loss_gradient(w1, TWO_POINTS, 0.0)
        m = beta1 * (1 - beta1) * g1 + (1 - beta1) * g2
        v = beta2 * (1 - beta2) * g1 ** 2 + (1 - beta2) * g2 ** 2
        m_hat = m / (1 - beta1 ** 2)
        v_hat = v / (1 - beta2 ** 2)
        w2 = w1 - lr * m_hat / (np.sqrt(v_hat) + eps)
        np.testing.assert_allclose(opt.curve.weights, w2, rtol=1e-12)

    def test_penalty_included_in_gradient(self):
        pts = [Point(0.0, 1.0)]
        opt = AdamOptimizer(seed=0)
        opt.load_weights([[1.0]], pts, 0.5)
        g = loss_gradient(np.array([1.0]), pts, 0.5)
        np.testing.assert_allclose(g, [1.0])
        opt.step(0.1, 0.9, 0.999, 1e-8, pts, 0.5)
        self.assertLess(opt.curve.weights[0], 1.0)

    def test_converges_on_quadratic(self):
        opt = AdamOptimizer(seed=3)
        opt.initialize(3, QUADRATIC_POINTS, 0.0)
        for _ in range(5000):
            opt.step(0.01, 0.9, 0.999, 1e-8, QUADRATIC_POINTS, 0.0)
        np.testing.assert_allclose(opt.curve.weights, [1.0, -1.0, 2.0], atol=0.1)

    def test_refresh_loss_leaves_moments(self):
        opt = AdamOptimizer(seed=0)
        opt.initialize(2, TWO_POINTS, 0.0)
        opt.step(0.1, 0.9, 0.999, 1e-8, TWO_POINTS, 0.0)
        m = opt.adam_state.m.copy()
        opt.refresh_loss(QUADRATIC_POINTS, 0.2)
        np.testing.assert_array_equal(opt.adam_state.m, m)
        self.assertEqual(opt.adam_state.t, 1)


if __name__ == "__main__":
    unittest.main()
