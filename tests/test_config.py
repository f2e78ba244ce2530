import logging
import unittest

import gpr
from gpr import config


class TestConfig(unittest.TestCase):
    def setUp(self):
        cfg = config.get_config()
        self._saved = (cfg.workers, cfg.inversion_method)

    def tearDown(self):
        config.get_config().update(
            workers=self._saved[0], inversion_method=self._saved[1]
        )

    def test_defaults(self):
        cfg = config.get_config()
        self.assertEqual(cfg.version, gpr.__version__)
        self.assertGreaterEqual(cfg.workers, 1)
        self.assertIn("inversion_method=", str(cfg))

    def test_workers(self):
        config.set_workers(2)
        gp = gpr.GaussianProcess(gpr.kernel.GaussianKernel(1.0))
        self.assertEqual(gp.workers, 2)
        self.assertEqual(gpr.GaussianProcess(gp.kernel, workers=3).workers, 3)
        with self.assertRaises(ValueError):
            config.set_workers(-1)

    def test_inversion_method(self):
        config.get_config().update(inversion_method="high-accuracy-svd")
        gp = gpr.GaussianProcess(gpr.kernel.GaussianKernel(1.0))
        self.assertIs(gp.inversion_method, gpr.InversionMethod.HIGH_ACCURACY_SVD)

    def test_logger(self):
        logger = config.get_logger()
        self.assertEqual(logger.name, "gpr")
        level = logger.level
        try:
            config.set_log_level(logging.DEBUG)
            self.assertEqual(logger.level, logging.DEBUG)
        finally:
            config.set_log_level(level)


if __name__ == "__main__":
    unittest.main()
