"""
Per-observation losses used to score a solution path on new data.
"""

from dataclasses import dataclass, field

import numpy as np
from scipy.special import expit, xlogy

from .family import Family
from ._utils import (InputValidationError,
                     _validate_x_y_weights)

# hard-coded in the glmnet Fortran code
PMIN = 1e-5
PMAX = 1 - 1e-5


class Loss(object):

    def __call__(self, mu):
        raise NotImplementedError

    def _column(self, v, mu):
        # broadcast per-observation quantities against (n,) or (n, k)
        mu = np.asarray(mu, float)
        if mu.ndim == 2:
            return v[:, None], mu
        return v, mu


@dataclass
class MSE(Loss):
    """
    Squared error loss, `(y - mu)**2`.
    """

    y: np.ndarray

    def __post_init__(self):
        self.y = np.asarray(self.y, float).reshape(-1)

    def __call__(self, mu):
        y, mu = self._column(self.y, mu)
        return (y - mu)**2


@dataclass
class LogisticDeviance(Loss):
    """
    Binomial deviance for a two-column response of (negative, positive)
    counts. `mu` is the linear predictor of the positive class.
    """

    y: np.ndarray
    fulldev: np.ndarray = field(init=False)

    def __post_init__(self):
        self.y = np.asarray(self.y, float)
        if self.y.ndim != 2 or self.y.shape[1] != 2:
            raise InputValidationError("LogisticDeviance requires a two-column matrix of "
                                       "(negative, positive) counts")
        # deviance of the saturated model
        self.fulldev = xlogy(self.y[:, 0], self.y[:, 0]) + xlogy(self.y[:, 1], self.y[:, 1])

    def __call__(self, mu):
        fulldev, mu = self._column(self.fulldev, mu)
        y0, _ = self._column(self.y[:, 0], mu)
        y1, _ = self._column(self.y[:, 1], mu)
        lf = np.clip(expit(mu), PMIN, PMAX)
        return 2 * (fulldev - (y0 * np.log1p(-lf) + y1 * np.log(lf)))


@dataclass
class PoissonDeviance(Loss):
    """
    Poisson deviance; `mu` is the linear predictor (log of the mean).
    """

    y: np.ndarray
    fulldev: np.ndarray = field(init=False)

    def __post_init__(self):
        self.y = np.asarray(self.y, float).reshape(-1)
        self.fulldev = xlogy(self.y, self.y) - self.y

    def __call__(self, mu):
        fulldev, mu = self._column(self.fulldev, mu)
        y, _ = self._column(self.y, mu)
        return 2 * (fulldev - (y * mu - np.exp(mu)))


_LOSSES = {Family.NORMAL:MSE,
           Family.BINOMIAL:LogisticDeviance,
           Family.POISSON:PoissonDeviance}


def devloss(family, y):
    """
    The deviance-based loss for `family` on responses `y`.
    """
    return _LOSSES[Family.from_family(family)](y)


def path_loss(path,
              X,
              y,
              weights=None,
              lossfun=None,
              model=None,
              offsets=None):
    """
    Weighted mean loss of solutions along a path on data `(X, y)`.

    Parameters
    ----------
    path: GLMNetPath
        A fitted solution path.
    X: np.ndarray
        Design matrix of shape `(nobs, nvars)`.
    y: np.ndarray
        Responses; `(nobs, 2)` counts for the Binomial family.
    weights: Optional[np.ndarray]
        Observation weights, defaults to ones.
    lossfun: Optional[Loss]
        Loss to use, defaults to `devloss(path.family, y)`.
    model: Optional[Union[int, sequence]]
        Solutions to score, defaults to all.
    offsets: Optional[np.ndarray]
        Offsets added to the linear predictor.

    Returns
    -------
    np.ndarray
        `sum_i w_i loss_i / sum_i w_i` for each selected solution (a
        float if `model` is an int).
    """
    X = np.asarray(X, float)
    y = np.asarray(y, float)
    if weights is None:
        weights = np.ones(y.shape[0])
    weights = np.asarray(weights, float).reshape(-1)
    _validate_x_y_weights(X, y, weights)

    if lossfun is None:
        lossfun = devloss(path.family, y)

    mu = path.predict(X, model=model, offsets=offsets)
    devs = weights @ lossfun(mu)
    return devs / weights.sum()
