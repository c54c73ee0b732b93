import logging
import unittest

import gpreparam as gr
import gpreparam.num as gnp
from gpreparam import config


class TestConfig(unittest.TestCase):
    def setUp(self):
        self.cfg = config.get_config()
        self.saved = (self.cfg.nugget, self.cfg.rank_tol)

    def tearDown(self):
        self.cfg.update(nugget=self.saved[0], rank_tol=self.saved[1])
        config.set_log_level(logging.INFO)

    def test_defaults(self):
        self.assertEqual(self.cfg.nugget, 1e-10)
        self.assertEqual(self.cfg.cholesky_jitter, 1e-8)
        self.assertEqual(self.cfg.version, gr.__version__)
        self.assertIn("GPReparamConfig", str(self.cfg))

    def test_arrays_are_float64_without_a_dtype_setting(self):
        self.assertFalse(hasattr(self.cfg, "dtype"))
        self.assertFalse(hasattr(config, "set_dtype"))
        self.assertEqual(gnp.zeros((2,)).dtype, gnp.float64)

    def test_update(self):
        self.cfg.update(rank_tol=0.5)
        X = gnp.array([[1.0, 0.0], [0.0, 0.1], [0.0, 0.0]])
        with self.assertRaises(gr.RankDeficient):
            gr.QRReparameterization(X)
        with self.assertRaises(AttributeError):
            self.cfg.update(not_an_option=1)

    def test_logger(self):
        logger = config.get_logger()
        self.assertEqual(logger.name, "gpreparam")
        config.set_log_level(logging.WARNING)
        self.assertEqual(logger.level, logging.WARNING)


class TestNum(unittest.TestCase):
    def test_array_is_float64(self):
        self.assertEqual(gnp.array([1, 2]).dtype, gnp.float64)
        self.assertEqual(gnp.asarray(3).dtype, gnp.float64)

    def test_as_covariates(self):
        self.assertEqual(gnp.as_covariates([1.0, 2.0, 3.0]).shape, (3, 1))
        self.assertEqual(gnp.as_covariates(gnp.zeros((3, 2))).shape, (3, 2))

    def test_namespace_exports(self):
        for name in ("to_np", "isarray", "einsum", "hstack", "concatenate", "zeros_like",
                     "tril", "minimum", "reshape"):
            self.assertFalse(hasattr(gnp, name), name)
        self.assertFalse(hasattr(gr.GaussianProcess, "_ensure_shapes_and_type"))

    def test_seeded_draws_are_reproducible(self):
        gnp.set_seed(7)
        a = gnp.randn(5)
        gnp.set_seed(7)
        b = gnp.randn(5)
        self.assertTrue(gnp.allclose(a, b))


if __name__ == "__main__":
    unittest.main()
