import os
import tempfile
import unittest

import numpy as np

import gpr
from gpr.core import persistence
from gpr.kernel import GaussianKernel, PeriodicKernel


def make_gp(kernel=None, sigma=1e-6):
    rng = np.random.default_rng(3)
    gp = gpr.GaussianProcess(kernel or PeriodicKernel(1.2, 3.0, 0.9), sigma=sigma)
    for _ in range(9):
        x = rng.uniform(-1.0, 1.0, size=2)
        gp.add_sample(x, [np.cos(x[0]) + x[1], x[0] * x[1], 1.0 / 3.0])
    return gp


class TestPersistence(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.prefix = os.path.join(self._tmp.name, "model")

    def tearDown(self):
        self._tmp.cleanup()

    def saved_gp(self, **kwargs):
        gp = make_gp(**kwargs)
        gp.initialize()
        gp.save(self.prefix)
        return gp

    def reference_gp(self):
        gp = gpr.GaussianProcess(GaussianKernel(0.5), sigma=0.1)
        gp.add_sample([0.0], [1.0])
        gp.add_sample([1.0], [2.0])
        gp.initialize()
        return gp

    def assert_unchanged(self, gp):
        self.assertEqual(gp, self.reference_gp())

    def test_save_requires_initialization(self):
        gp = make_gp()
        with self.assertRaises(gpr.InvalidState):
            gp.save(self.prefix)
        self.assertFalse(os.path.exists(self.prefix + "-ParameterFile.txt"))

    def test_artifacts(self):
        self.saved_gp()
        for suffix in persistence.ARTIFACT_SUFFIXES.values():
            self.assertTrue(os.path.isfile(self.prefix + suffix))
        with open(self.prefix + "-ParameterFile.txt") as f:
            tokens = f.read().split()
        self.assertEqual(tokens[:2], ["PeriodicKernel", "3"])
        self.assertEqual(float(tokens[5]), 1e-6)
        self.assertEqual(tokens[6:], ["2", "3", "0"])
        X = np.loadtxt(self.prefix + "-SampleVectors.txt", ndmin=2)
        self.assertEqual(X.shape, (2, 9))

    def test_round_trip(self):
        gp = self.saved_gp()
        loaded = gpr.GaussianProcess(GaussianKernel(1.0))
        loaded.load(self.prefix)

        self.assertTrue(loaded.initialized)
        np.testing.assert_array_equal(loaded.regression_vectors, gp.regression_vectors)
        for a, b in zip(loaded.samples, gp.samples):
            np.testing.assert_array_equal(a, b)
        for a, b in zip(loaded.labels, gp.labels):
            np.testing.assert_array_equal(a, b)
        self.assertEqual(loaded.sigma, gp.sigma)
        self.assertEqual(loaded.kernel, gp.kernel)
        self.assertEqual((loaded.input_dim, loaded.output_dim), (2, 3))
        self.assertEqual(loaded, gp)

        x = np.array([0.1, 0.2])
        np.testing.assert_array_equal(loaded.predict(x), gp.predict(x))
        self.assertAlmostEqual(
            loaded.get_credible_interval(x), gp.get_credible_interval(x), places=8
        )

    def test_round_trip_debug_flag(self):
        gp = make_gp(kernel=GaussianKernel(0.7, 2.0))
        gp.initialize()
        gp.debug_on()
        with self.assertLogs("gpr", level="INFO"):
            gp.save(self.prefix)
        loaded = gpr.GaussianProcess(GaussianKernel(1.0))
        loaded.load(self.prefix)
        self.assertTrue(loaded.debug)
        with self.assertLogs("gpr", level="INFO"):
            self.assertEqual(loaded, gp)

    def test_loaded_engine_keeps_learning(self):
        self.saved_gp()
        loaded = gpr.GaussianProcess(GaussianKernel(1.0))
        loaded.load(self.prefix)
        y = [np.cos(0.5) + 0.5, 0.25, 1.0 / 3.0]
        loaded.add_sample([0.5, 0.5], y)
        self.assertFalse(loaded.initialized)
        np.testing.assert_allclose(loaded.predict([0.5, 0.5]), y, atol=1e-4)

    def test_missing_artifact(self):
        self.saved_gp()
        os.remove(self.prefix + "-LabelVectors.txt")
        gp = self.reference_gp()
        with self.assertRaises(gpr.MissingArtifact):
            gp.load(self.prefix)
        self.assert_unchanged(gp)

    def test_missing_artifact_is_file_not_found(self):
        with self.assertRaises(FileNotFoundError):
            self.reference_gp().load(os.path.join(self._tmp.name, "nothing"))

    def test_unknown_kernel(self):
        self.saved_gp()
        filename = self.prefix + "-ParameterFile.txt"
        with open(filename) as f:
            line = f.read()
        with open(filename, "w") as f:
            f.write(line.replace("PeriodicKernel", "MaternKernel"))
        gp = self.reference_gp()
        with self.assertRaises(gpr.UnrecognizedKernel):
            gp.load(self.prefix)
        self.assert_unchanged(gp)

    def test_corrupt_parameter_file(self):
        self.saved_gp()
        filename = self.prefix + "-ParameterFile.txt"
        with open(filename) as f:
            line = f.read().strip()
        for bad in [line + " 7", line.rsplit(" ", 1)[0] + " 2", "", line.replace(" 2 ", " two ", 1)]:
            with self.subTest(line=bad):
                with open(filename, "w") as f:
                    f.write(bad)
                gp = self.reference_gp()
                with self.assertRaises(gpr.CorruptState):
                    gp.load(self.prefix)
                self.assert_unchanged(gp)

    def test_corrupt_matrix(self):
        self.saved_gp()
        filename = self.prefix + "-RegressionVectors.txt"
        with open(filename, "a") as f:
            f.write("1 abc 2\n")
        gp = self.reference_gp()
        with self.assertRaises(gpr.CorruptState):
            gp.load(self.prefix)
        self.assert_unchanged(gp)

    def test_inconsistent_shapes(self):
        self.saved_gp()
        filename = self.prefix + "-LabelVectors.txt"
        Y = np.loadtxt(filename, ndmin=2)
        persistence.write_matrix(Y[:, :-1], filename)
        gp = self.reference_gp()
        with self.assertRaises(gpr.CorruptState):
            gp.load(self.prefix)
        self.assert_unchanged(gp)


class TestParameterLine(unittest.TestCase):
    def test_format_and_parse(self):
        line = persistence.format_parameter_line(GaussianKernel(0.1, 3.0), 0.2, 4, 2, True)
        self.assertEqual(
            persistence.parse_parameter_line(line),
            ("GaussianKernel", [0.1, 3.0], 0.2, 4, 2, True),
        )

    def test_exact_float_round_trip(self):
        line = persistence.format_parameter_line(GaussianKernel(1.0 / 3.0), 0.1 + 0.2, 1, 1, False)
        _, params, sigma, _, _, _ = persistence.parse_parameter_line(line)
        self.assertEqual(params[0], 1.0 / 3.0)
        self.assertEqual(sigma, 0.1 + 0.2)

    def test_rejects(self):
        for bad in [
            "GaussianKernel",
            "GaussianKernel 2 1 1 0 1 1",
            "GaussianKernel 2 1 1 0 1 1 0 0",
            "GaussianKernel 2 1 1 0 1 1 yes",
            "GaussianKernel 2 1 1 0 0 1 0",
            "GaussianKernel 2 1 1 0 1.5 1 0",
            "GaussianKernel 2 1 1 0 1 1 0\nGaussianKernel 2 1 1 0 1 1 0",
        ]:
            with self.subTest(line=bad):
                with self.assertRaises(gpr.CorruptState):
                    persistence.parse_parameter_line(bad)


if __name__ == "__main__":
    unittest.main()
