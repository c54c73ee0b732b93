import unittest

import numpy as np

import gpreparam.num as gnp
from gpreparam.core import linalg
from gpreparam.core.errors import DimensionMismatch, SingularMatrix


class TestMatrixProduct(unittest.TestCase):
    def test_multiply(self):
        A = gnp.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        B = gnp.array([[1.0], [0.0], [-1.0]])
        self.assertTrue(gnp.allclose(linalg.multiply(A, B), gnp.array([[-2.0], [-2.0]])))
        self.assertTrue(gnp.allclose(linalg.multiply(A, gnp.array([1.0, 1.0, 1.0])), [6.0, 15.0]))

    def test_multiply_dimension_mismatch(self):
        A = gnp.ones((2, 3))
        with self.assertRaises(DimensionMismatch) as cm:
            linalg.multiply(A, A)
        self.assertEqual(cm.exception.shapes, ((2, 3), (2, 3)))
        self.assertIsInstance(cm.exception, ValueError)

    def test_transpose_is_a_copy(self):
        A = gnp.array([[1.0, 2.0], [3.0, 4.0]])
        At = linalg.transpose(A)
        At[0, 1] = 100.0
        self.assertEqual(A[1, 0], 3.0)
        self.assertTrue(gnp.allclose(linalg.transpose(A), A.T))


class TestTriangular(unittest.TestCase):
    def setUp(self):
        self.T = gnp.array([[2.0, 0.0, 0.0], [1.0, 3.0, 0.0], [4.0, 5.0, 6.0]])

    def test_lower_solve(self):
        b = gnp.array([2.0, 5.0, 32.0])
        x = linalg.triangular_solve(self.T, b, lower=True)
        self.assertTrue(gnp.allclose(self.T @ x, b))

    def test_upper_solve_matrix_rhs(self):
        U = self.T.T
        B = gnp.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        X = linalg.triangular_solve(U, B, lower=False)
        self.assertEqual(X.shape, (3, 2))
        self.assertTrue(gnp.allclose(U @ X, B))

    def test_zero_pivot(self):
        T = gnp.array([[1.0, 0.0], [2.0, 0.0]])
        with self.assertRaises(SingularMatrix) as cm:
            linalg.triangular_solve(T, gnp.array([1.0, 1.0]))
        self.assertIsInstance(cm.exception, np.linalg.LinAlgError)
        self.assertEqual(cm.exception.context["pivot"], 1)

    def test_configurable_tolerance(self):
        T = gnp.diag(gnp.array([1.0, 1e-8]))
        b = gnp.array([1.0, 1.0])
        x = linalg.triangular_solve(T, b)
        self.assertAlmostEqual(x[1], 1e8)
        with self.assertRaises(SingularMatrix):
            linalg.triangular_solve(T, b, tol=1e-6)

    def test_rhs_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            linalg.triangular_solve(self.T, gnp.ones((2,)))

    def test_inverse(self):
        Tinv = linalg.triangular_inverse(self.T, lower=True)
        self.assertTrue(gnp.allclose(self.T @ Tinv, gnp.eye(3)))
        self.assertTrue(gnp.allclose(gnp.triu(Tinv, 1), 0.0))

    def test_cholesky_inverse(self):
        K = self.T @ self.T.T
        self.assertTrue(gnp.allclose(linalg.cholesky_inverse(self.T) @ K, gnp.eye(3)))


class TestJitter(unittest.TestCase):
    def test_add_diagonal_jitter(self):
        A = gnp.array([[1.0, 0.5], [0.5, 1.0]])
        B = linalg.add_diagonal_jitter(A, 1e-6)
        self.assertTrue(gnp.allclose(B - A, 1e-6 * gnp.eye(2), atol=0.0))
        self.assertEqual(A[0, 0], 1.0)

    def test_invalid_jitter(self):
        with self.assertRaises(ValueError):
            linalg.add_diagonal_jitter(gnp.eye(2), -1.0)
        with self.assertRaises(DimensionMismatch):
            linalg.add_diagonal_jitter(gnp.ones((2, 3)), 1e-8)

    def test_symmetrize(self):
        A = gnp.array([[1.0, 2.0], [0.0, 1.0]])
        S = linalg.symmetrize(A)
        self.assertTrue(np.array_equal(S, S.T))
        self.assertEqual(S[0, 1], 1.0)


if __name__ == "__main__":
    unittest.main()
