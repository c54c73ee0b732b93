'''GP prior sample paths and conjugate posterior

Draw a sample path from a GP prior with an exponentiated quadratic
kernel, observe it with Gaussian noise at a few points, and compute the
posterior mean and variances on a grid.

Copyright (c) 2022-2026, CentraleSupelec
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
License: GPLv3 (see LICENSE)
'''
import gpreparam.num as gnp
import gpreparam as gr

## -- model specification

kernel = gr.kernel.ExponentiatedQuadratic()
covparam = gnp.array([1.0, 0.3])
sigma = 0.05


def main():
    gnp.set_seed(1)
    model = gr.GaussianProcess(kernel, covparam, sigma=sigma, use_cache=True)
    print(model)

    xt = gnp.linspace(0.0, 1.0, 101)
    ind = gnp.arange(0, 101, 10)
    ni = ind.shape[0]

    # sample path and noisy observations at every tenth point
    zt, yt = model.sample_prior(
        xt, gnp.randn(xt.shape[0]), observation_model=lambda f: f + sigma * gnp.randn(f.shape[0])
    )
    xi, yi = xt[ind], yt[ind]

    mean, var = model.predict(xi, yi, xt)
    err = gnp.sqrt(gnp.mean((mean - zt) ** 2))
    inside = gnp.mean(gnp.abs(mean - zt) <= 3.0 * gnp.sqrt(var + 1e-12))
    print(f"{ni} observations, RMSE on the grid: {err:.4f}")
    print(f"fraction of the path inside the 3-sigma envelope: {inside:.2f}")

    # the same factorization is reused for a second set of draws
    model.sample_prior(xt, gnp.randn(xt.shape[0], 5))
    print(f"cache: {model.cache.misses} factorization(s), {model.cache.hits} hit(s)")


if __name__ == '__main__':
    main()
