'''QR reparameterization of a linear regression

A quadratic regression y = alpha + beta_1 x + beta_2 x^2 + noise has
strongly correlated coefficients. Centering the covariates and working
with beta_tilde = R beta makes the least-squares problem orthogonal; the
coefficients are then mapped back to the original covariates.

Copyright (c) 2022-2026, CentraleSupelec
Author: Emmanuel Vazquez <emmanuel.vazquez@centralesupelec.fr>
License: GPLv3 (see LICENSE)
'''
import gpreparam.num as gnp
import gpreparam as gr

## -- dataset


def generate_data(n=50):
    x = gnp.linspace(1.0, 10.0, n)
    X = gnp.vstack((x, x**2)).T
    alpha, beta = 1.5, gnp.array([0.8, -0.05])
    y = alpha + X @ beta + 0.1 * gnp.randn(n)
    return X, y, alpha, beta


def main():
    gnp.set_seed(0)
    X, y, alpha, beta = generate_data()

    Xc, means = gr.center(X)
    qr = gr.QRReparameterization(Xc)
    Q = qr.forward_design()

    # Columns of Q are orthogonal and orthogonal to the constant
    # column, so the least-squares estimates decouple.
    n = qr.n
    intercept = gnp.mean(y)
    beta_tilde = Q.T @ (y - intercept) / n**2

    beta_hat = qr.to_original(beta_tilde)
    alpha_hat = gr.uncenter_intercept(intercept, beta_hat, means)

    print(qr)
    print("QtQ / n^2 =\n", Q.T @ Q / n**2)
    print(f"alpha: true {alpha:.3f}, estimated {alpha_hat:.3f}")
    print(f"beta:  true {beta}, estimated {beta_hat}")

    residuals = y - qr.linear_predictor(beta_tilde, intercept)
    print(f"residual standard deviation: {gnp.sqrt(gnp.mean(residuals**2)):.3f}")


if __name__ == '__main__':
    main()
