import unittest
import numpy as np

import gpr
from gpr.core.linalg import (
    InversionMethod,
    SolverOptions,
    invert_kernel_matrix,
    invert_kernel_matrix_with_determinant,
    invert_kernel_matrix_with_log_determinant,
)

METHODS = list(InversionMethod)


def spd_matrix(n, seed=0):
    rng = np.random.default_rng(seed)
    A = rng.normal(size=(n, n))
    return A @ A.T + n * np.eye(n)


class TestInversion(unittest.TestCase):
    def test_inverse_and_determinant(self):
        K = spd_matrix(6)
        det_ref = np.linalg.det(K)
        for method in METHODS:
            with self.subTest(method=method.value):
                Kinv, det = invert_kernel_matrix_with_determinant(K, method)
                np.testing.assert_allclose(K @ Kinv, np.eye(6), atol=1e-10)
                self.assertAlmostEqual(float(det) / det_ref, 1.0, places=10)

    def test_log_determinant_without_underflow(self):
        n = 300
        K = 1e-3 * np.eye(n)
        K[0, 0] = -1e-3
        for method in METHODS:
            with self.subTest(method=method.value):
                Kinv, sign, logdet = invert_kernel_matrix_with_log_determinant(K, method)
                self.assertEqual(sign, -1.0)
                self.assertAlmostEqual(logdet / (n * np.log(1e-3)), 1.0, places=12)
                np.testing.assert_allclose(np.diag(Kinv)[1:], 1e3)

    def test_method_names(self):
        K = spd_matrix(4)
        Kinv = invert_kernel_matrix(K, "fast-svd")
        np.testing.assert_allclose(K @ Kinv, np.eye(4), atol=1e-10)
        with self.assertRaises(ValueError):
            invert_kernel_matrix(K, "cholesky")

    def test_negative_determinant(self):
        K = np.diag([2.0, -3.0])
        P = np.array([[0.0, 1.0], [1.0, 0.0]])
        for method in METHODS:
            with self.subTest(method=method.value):
                _, det = invert_kernel_matrix_with_determinant(K, method)
                self.assertAlmostEqual(float(det), -6.0)
                _, det = invert_kernel_matrix_with_determinant(P, method)
                self.assertAlmostEqual(float(det), -1.0)

    def test_singular_matrix(self):
        K = np.ones((3, 3))
        for method in METHODS:
            with self.subTest(method=method.value):
                with self.assertRaises(gpr.SingularMatrix):
                    invert_kernel_matrix(K, method)

    def test_zero_matrix(self):
        for method in METHODS:
            with self.subTest(method=method.value):
                with self.assertRaises(gpr.SingularMatrix):
                    invert_kernel_matrix(np.zeros((3, 3)), method, stable=True)

    def test_stable_flag(self):
        K = np.ones((3, 3))
        for method in METHODS[1:]:
            with self.subTest(method=method.value):
                Kinv = invert_kernel_matrix(K, method, stable=True)
                self.assertTrue(np.all(np.isfinite(Kinv)))
        with self.assertRaises(gpr.SingularMatrix):
            invert_kernel_matrix(K, InversionMethod.DIRECT, stable=True)

    def test_singular_matrix_is_linalg_error(self):
        with self.assertRaises(np.linalg.LinAlgError):
            invert_kernel_matrix(np.ones((2, 2)))

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            invert_kernel_matrix(np.ones((2, 3)))
        K = spd_matrix(3)
        K[0, 1] = np.nan
        with self.assertRaises(gpr.SingularMatrix):
            invert_kernel_matrix(K)


class TestSolverOptions(unittest.TestCase):
    def test_default_from_config(self):
        options = SolverOptions()
        self.assertIs(options.method, InversionMethod.DIRECT)
        self.assertFalse(options.stable)

    def test_config_default_method(self):
        config = gpr.config.get_config()
        saved = config.inversion_method
        try:
            gpr.config.set_inversion_method("symmetric-eigen")
            self.assertIs(SolverOptions().method, InversionMethod.SYMMETRIC_EIGEN)
            with self.assertRaises(ValueError):
                gpr.config.set_inversion_method("qr")
        finally:
            config.inversion_method = saved


if __name__ == "__main__":
    unittest.main()
