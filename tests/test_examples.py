import importlib.util
import os
import unittest

EXAMPLES_DIR = os.path.join(os.path.dirname(__file__), "..", "examples")


def load_example(name):
    spec = importlib.util.spec_from_file_location(name, os.path.join(EXAMPLES_DIR, name + ".py"))
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestExamples(unittest.TestCase):
    def test_01(self):
        load_example("example01_qr_regression").main()

    def test_02(self):
        load_example("example02_gp_prior_posterior").main()

    def test_03(self):
        load_example("example03_poisson_latent").main(n_iter=200)


if __name__ == "__main__":
    unittest.main()
