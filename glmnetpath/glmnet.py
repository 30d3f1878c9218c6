"""
Fit a solution path by family name.
"""

from dataclasses import fields

from .family import Family
from .paths import (GaussNet,
                    LogNet,
                    FishNet)
from ._utils import InputValidationError

_FITTERS = {Family.NORMAL:GaussNet,
            Family.BINOMIAL:LogNet,
            Family.POISSON:FishNet}


def get_fitter(family='gaussian', **params):
    """
    Unfitted path estimator for `family`.

    Parameters
    ----------
    family: Union[str, Family, statsmodels family]
        Response family; see `Family.from_family`.
    params: dict
        Fields of the estimator, e.g. `alpha` or `nlambda`.

    Returns
    -------
    FastNetMixin
        One of `GaussNet`, `LogNet` or `FishNet`.
    """
    klass = _FITTERS[Family.from_family(family)]
    names = set([f.name for f in fields(klass)])
    unknown = set(params) - names
    if unknown:
        raise InputValidationError(f"unknown arguments for {klass.__name__}: {sorted(unknown)}")
    return klass(**params)


def glmnet(X,
           y,
           family='gaussian',
           weights=None,
           offsets=None,
           **kwargs):
    """
    Fit an elastic net solution path.

    Parameters
    ----------
    X: np.ndarray
        Input matrix, of shape `(nobs, nvars)`.
    y: np.ndarray
        Response; for the Binomial family a `(nobs, 2)` matrix of
        (negative, positive) counts or a vector of two class labels.
    family: Union[str, Family, statsmodels family]
        Response family, default "gaussian".
    weights: Optional[np.ndarray]
        Observation weights, default ones.
    offsets: Optional[np.ndarray]
        Offsets of the linear predictor, Binomial and Poisson only.
    kwargs: dict
        Fields of the path estimator, e.g. `alpha`, `nlambda`,
        `lambda_values`, `penalty_factor`.

    Returns
    -------
    GLMNetPath
        The fitted path.

    Examples
    --------
    >>> from glmnetpath.data import make_dataset
    >>> X, y, coef, intercept = make_dataset('gaussian', n_samples=50, n_features=5, random_state=0)
    >>> path = glmnet(X, y, alpha=0.5)
    >>> path.coefs.shape[1]
    5
    """
    fitter = get_fitter(family, **kwargs)
    if isinstance(fitter, GaussNet):
        if offsets is not None:
            raise InputValidationError("offsets are not supported for the Gaussian family")
        fitter.fit(X, y, weights=weights)
    else:
        fitter.fit(X, y, weights=weights, offsets=offsets)
    return fitter.path_
