'''Non-centered latent GP with Poisson observations

Counts are drawn from a Poisson distribution with log rate f(x), where
f is a GP sample path. The non-centered transform f = mu + L eta gives
the log density of eta that an external sampler would explore; here a
few steps of gradient-free random-walk Metropolis stand in for it.

Copyright (c) 2022-2026, CentraleSupelec
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
License: GPLv3 (see LICENSE)
'''
from scipy.stats import poisson

import gpreparam.num as gnp
import gpreparam as gr

## -- dataset


def generate_data(model, n=20):
    xs = gnp.linspace(0.0, 1.0, n)
    f, counts = model.sample_prior(
        xs, gnp.randn(n), observation_model=lambda f: gnp.poisson(gnp.exp(f))
    )
    return xs, f, counts


def main(n_iter=2000, step=0.15):
    gnp.set_seed(2)
    model = gr.GaussianProcess(gr.kernel.ExponentiatedQuadratic(), [0.8, 0.25], mean=1.0)
    xs, f_true, counts = generate_data(model)

    latent = model.non_centered(xs)

    def log_likelihood(f):
        return gnp.sum(poisson.logpmf(counts, gnp.exp(f)), axis=-1)

    log_density = latent.log_density(log_likelihood)

    # random-walk Metropolis on eta
    eta = gnp.zeros((latent.size,))
    lp = log_density(eta)
    accepted = 0
    draws = []
    for i in range(n_iter):
        proposal = eta + step * gnp.randn(latent.size)
        lp_new = log_density(proposal)
        if gnp.log(gnp.rand(1)[0]) < lp_new - lp:
            eta, lp = proposal, lp_new
            accepted += 1
        if i >= n_iter // 2:
            draws.append(eta)

    f_draws = latent.forward(gnp.vstack(draws))
    f_mean = gnp.mean(f_draws, axis=0)
    print(f"acceptance rate: {accepted / n_iter:.2f}")
    print(f"RMSE of the posterior mean log rate: {gnp.sqrt(gnp.mean((f_mean - f_true) ** 2)):.3f}")


if __name__ == '__main__':
    main()
