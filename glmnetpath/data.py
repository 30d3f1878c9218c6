"""
glmnetpath.data
---------------
Synthetic datasets for the path fitters.

Similar to sklearn's `make_regression`, with responses drawn from the
Gaussian, Binomial or Poisson family and optional control of the
signal-to-noise ratio (SNR).
"""

import numpy as np
from scipy.special import expit
from numpy.random import default_rng

from .family import Family


def make_dataset(family='gaussian', n_samples=100, n_features=20, n_informative=10, noise=1.0, snr=None,
                 coef=None, random_state=None, bias=None):
    """
    Generate a random regression or classification problem.

    Parameters
    ----------
    family : str, Family or path estimator class, default='gaussian'
        Response family, e.g. "binomial", or a fitter such as `LogNet`.
    n_samples : int, default=100
        The number of samples.
    n_features : int, default=20
        The total number of features.
    n_informative : int, default=10
        The number of informative features.
    noise : float, default=1.0
        Standard deviation of the Gaussian noise added to the output (Gaussian only).
    snr : float or None, default=None
        Desired signal-to-noise ratio. For the Gaussian family the noise is
        scaled to achieve it, otherwise the linear predictor is shrunk.
    coef : array-like, default=None
        The coefficients to use. If None, random coefficients are generated.
    random_state : int, Generator or None, default=None
        Determines random number generation for dataset creation.
    bias : float or None, default=None
        The intercept of the underlying linear model. If None, a random value is generated.

    Returns
    -------
    X : ndarray of shape (n_samples, n_features)
        The input samples.
    y : ndarray of shape (n_samples,)
        Responses: floats, 0/1 labels or counts.
    coef : ndarray of shape (n_features,)
        The underlying true coefficients.
    intercept : float
        The intercept used in the data generation.

    Examples
    --------
    >>> X, y, coef, intercept = make_dataset('binomial', n_samples=100, n_features=10, snr=5)
    >>> X.shape, y.shape, coef.shape
    ((100, 10), (100,), (10,))
    """
    family = Family.from_family(getattr(family, '_family', family))

    rng = default_rng(random_state)
    X = rng.standard_normal((n_samples, n_features))

    # Ensure n_informative does not exceed n_features
    n_informative = min(n_informative, n_features)

    if coef is None:
        coef = np.zeros(n_features)
        coef[:n_informative] = rng.normal(0, 1, size=n_informative)
        rng.shuffle(coef)
    else:
        coef = np.asarray(coef, float)
    if bias is None:
        intercept = rng.normal(0, 1)
    else:
        intercept = bias
    lin_pred = X @ coef + intercept

    if family == Family.NORMAL:
        if snr is not None:
            signal_var = np.var(lin_pred)
            noise = np.sqrt(signal_var / snr)
        y = lin_pred + rng.normal(0, noise, size=n_samples)
        return X, y, coef, intercept

    if snr is not None:
        var_signal = np.var(lin_pred)
        var_noise = var_signal / snr
        lin_pred = lin_pred * np.sqrt(var_signal / (var_signal + var_noise))

    if family == Family.BINOMIAL:
        y = rng.binomial(1, expit(lin_pred), size=n_samples)
    else:
        y = rng.poisson(np.exp(lin_pred))
    return X, y, coef, intercept
