import unittest

import numpy as np

import gpreparam as gr
import gpreparam.num as gnp
from gpreparam.core.qr import factor


def quadratic_design():
    return gnp.array([[1.0, 1.0], [2.0, 4.0], [3.0, 9.0], [4.0, 16.0]])


class TestFactor(unittest.TestCase):
    def test_quadratic_design(self):
        X = quadratic_design()
        qr = gr.QRReparameterization(X)
        self.assertEqual(qr.Q.shape, (4, 2))
        self.assertEqual(qr.R.shape, (2, 2))
        self.assertEqual(qr.R[1, 0], 0.0)
        self.assertGreater(qr.R[0, 0], 0.0)
        self.assertGreater(qr.R[1, 1], 0.0)
        self.assertTrue(gnp.allclose(qr.Q @ qr.R, X))

    def test_orthogonality_n_scaling(self):
        qr = gr.QRReparameterization(quadratic_design())
        QtQ = qr.forward_design().T @ qr.forward_design()
        self.assertTrue(gnp.allclose(QtQ, 16.0 * gnp.eye(2)))

    def test_orthogonality_sqrt_n_scaling(self):
        X = quadratic_design()
        qr = gr.QRReparameterization(X, scaling="sqrt_n")
        self.assertTrue(gnp.allclose(qr.Q.T @ qr.Q, 4.0 * gnp.eye(2)))
        self.assertTrue(gnp.allclose(qr.Q @ qr.R, X))

    def test_scalings_are_reciprocal(self):
        X = quadratic_design()
        Q1, R1 = factor(X, scaling="n")
        Q2, R2 = factor(X, scaling="sqrt_n")
        self.assertTrue(gnp.allclose(Q1 @ R1, Q2 @ R2))
        self.assertTrue(gnp.allclose(Q1 / 4.0, Q2 / 2.0))

    def test_identical_columns(self):
        X = gnp.array([[1.0, 1.0], [2.0, 2.0], [3.0, 3.0]])
        with self.assertRaises(gr.RankDeficient) as cm:
            gr.QRReparameterization(X)
        self.assertEqual(cm.exception.context["column"], 1)
        self.assertIsInstance(cm.exception, np.linalg.LinAlgError)

    def test_more_columns_than_rows(self):
        with self.assertRaises(gr.DimensionMismatch):
            gr.QRReparameterization(gnp.ones((2, 3)))
        with self.assertRaises(gr.DimensionMismatch):
            gr.QRReparameterization(gnp.ones((3,)))

    def test_invalid_scaling(self):
        with self.assertRaises(ValueError):
            gr.QRReparameterization(quadratic_design(), scaling="n_minus_1")

    def test_factors_are_read_only(self):
        qr = gr.QRReparameterization(quadratic_design())
        with self.assertRaises(ValueError):
            qr.R[0, 0] = 1.0


class TestCoefficientMaps(unittest.TestCase):
    def setUp(self):
        self.X = quadratic_design()
        self.qr = gr.QRReparameterization(self.X)

    def test_round_trip(self):
        for beta in ([0.5, -0.2], [0.0, 0.0], [-3.0, 12.5], [1e3, 1e-3]):
            beta = gnp.array(beta)
            beta_back = self.qr.to_original(self.qr.to_transformed(beta))
            self.assertTrue(gnp.allclose(beta_back, beta))

    def test_batch_of_draws(self):
        draws = gnp.array([[0.5, -0.2], [1.0, 2.0], [-1.0, 0.3]])
        transformed = self.qr.to_transformed(draws)
        self.assertEqual(transformed.shape, (3, 2))
        for k in range(3):
            self.assertTrue(gnp.allclose(transformed[k], self.qr.R @ draws[k]))
        self.assertTrue(gnp.allclose(self.qr.to_original(transformed), draws))

    def test_linear_predictor_is_invariant(self):
        beta = gnp.array([0.7, -0.1])
        beta_tilde = self.qr.to_transformed(beta)
        mu = self.qr.linear_predictor(beta_tilde, intercept=2.0)
        self.assertTrue(gnp.allclose(mu, self.X @ beta + 2.0))

    def test_linear_predictor_batch(self):
        draws = gnp.array([[0.7, -0.1], [0.1, 0.2]])
        intercepts = gnp.array([2.0, -1.0])
        mu = self.qr.linear_predictor(self.qr.to_transformed(draws), intercepts)
        self.assertEqual(mu.shape, (2, 4))
        self.assertTrue(gnp.allclose(mu[1], self.X @ draws[1] - 1.0))

    def test_design_for_new_covariates(self):
        beta = gnp.array([0.7, -0.1])
        beta_tilde = self.qr.to_transformed(beta)
        X_new = gnp.array([[5.0, 25.0], [0.5, 0.25]])
        self.assertTrue(gnp.allclose(self.qr.design_for(X_new) @ beta_tilde, X_new @ beta))

    def test_wrong_coefficient_length(self):
        with self.assertRaises(gr.DimensionMismatch):
            self.qr.to_original(gnp.ones((3,)))
        with self.assertRaises(gr.DimensionMismatch):
            self.qr.to_transformed(gnp.ones((2, 3)))


class TestCentering(unittest.TestCase):
    def test_center(self):
        X = quadratic_design()
        Xc, means = gr.center(X)
        self.assertTrue(gnp.allclose(means, [2.5, 7.5]))
        self.assertTrue(gnp.allclose(gnp.mean(Xc, axis=0), 0.0))

    def test_uncenter_intercept(self):
        X = quadratic_design()
        Xc, means = gr.center(X)
        beta = gnp.array([1.5, -0.25])
        alpha = 0.8
        alpha_original = gr.uncenter_intercept(alpha, beta, means)
        self.assertTrue(gnp.allclose(Xc @ beta + alpha, X @ beta + alpha_original))

    def test_uncenter_intercept_batch(self):
        means = gnp.array([2.5, 7.5])
        betas = gnp.array([[1.0, 0.0], [0.0, 1.0]])
        alphas = gnp.array([1.0, 1.0])
        self.assertTrue(gnp.allclose(gr.uncenter_intercept(alphas, betas, means), [-1.5, -6.5]))

    def test_centering_decorrelates_intercept(self):
        # With centered covariates the columns of Q are orthogonal to
        # the constant column, so beta_tilde and the intercept decouple.
        Xc, _ = gr.center(quadratic_design())
        qr = gr.QRReparameterization(Xc)
        self.assertTrue(gnp.allclose(gnp.sum(qr.Q, axis=0), 0.0))


if __name__ == "__main__":
    unittest.main()
