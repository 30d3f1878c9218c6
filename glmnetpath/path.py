from dataclasses import dataclass
from numbers import Integral

import numpy as np
import pandas as pd

from .compressed import CompressedPredictorMatrix
from .family import Family
from .loss import path_loss
from ._utils import InputValidationError


@dataclass(frozen=True)
class GLMNetPath(object):
    """
    Fitted solution path for one family.

    Attributes
    ----------
    family: Family
        Response family of the fit.
    a0: np.ndarray
        Intercept of each solution.
    betas: CompressedPredictorMatrix
        Coefficients, shape `(nvars, nsoln)`.
    null_dev: float
        Deviance of the intercept-only model.
    dev_ratio: np.ndarray
        Fraction of null deviance explained by each solution.
    lambda_values: np.ndarray
        Penalty strength of each solution, decreasing.
    npasses: int
        Total number of passes over the data made by the solver.
    """

    family: Family
    a0: np.ndarray
    betas: CompressedPredictorMatrix
    null_dev: float
    dev_ratio: np.ndarray
    lambda_values: np.ndarray
    npasses: int

    def __post_init__(self):
        nsoln = self.betas.shape[1]
        if not (self.a0.shape[0] == self.dev_ratio.shape[0] ==
                self.lambda_values.shape[0] == nsoln):
            raise InputValidationError("a0, dev_ratio, lambda_values and betas "
                                       "must have one entry per solution")

    @property
    def coefs(self):
        """
        Dense coefficients of shape `(nsoln, nvars)`.
        """
        return self.betas.toarray().T

    def nactive(self, model=None):
        return self.betas.nactive(model)

    def predict(self,
                X,
                model=None,
                prediction_type='link',
                offsets=None):
        """
        Predictions of solutions along the path.

        Parameters
        ----------
        X: np.ndarray
            Design matrix of shape `(nobs, nvars)`.
        model: Optional[Union[int, sequence, slice]]
            Solution index, or indices. Defaults to all solutions.
        prediction_type: str
            "link" returns the linear predictor, any other value
            applies the inverse link of the family.
        offsets: Optional[np.ndarray]
            Added to the linear predictor of every solution.

        Returns
        -------
        np.ndarray
            Shape `(nobs,)` for an int `model`, else `(nobs, len(model))`.
        """
        X = np.asarray(X, float)
        nsoln = self.betas.shape[1]
        if X.ndim != 2 or X.shape[1] != self.betas.shape[0]:
            raise InputValidationError(f"X should have {self.betas.shape[0]} columns")

        single = isinstance(model, Integral)
        if model is None:
            model = np.arange(nsoln)
        elif isinstance(model, slice):
            model = np.arange(nsoln)[model]
        model = np.atleast_1d(np.asarray(model, int))
        if np.any(model >= nsoln) or np.any(model < -nsoln):
            raise IndexError(f"solution index out of bounds for {nsoln} solutions")
        model = model % nsoln

        ca, ia, nin = self.betas.ca, self.betas.ia, self.betas.nin

        y = np.tile(self.a0[model], (X.shape[0], 1))
        for b, m in enumerate(model):
            k = nin[m]
            if k > 0:
                y[:, b] += X[:, ia[:k]] @ ca[:k, m]

        if offsets is not None:
            offsets = np.asarray(offsets, float).reshape(-1)
            if offsets.shape[0] != X.shape[0]:
                raise InputValidationError("length of offsets must match rows in X")
            if np.any(offsets != 0):
                y += offsets[:, None]

        if prediction_type != 'link':
            y = self.family.inverse_link(y)

        if single:
            return y[:, 0]
        return y

    def loss(self,
             X,
             y,
             weights=None,
             lossfun=None,
             model=None,
             offsets=None):
        """
        Weighted mean deviance loss of solutions on `(X, y)`.
        See `glmnetpath.loss.path_loss`.
        """
        return path_loss(self,
                         X,
                         y,
                         weights=weights,
                         lossfun=lossfun,
                         model=model,
                         offsets=offsets)

    @property
    def summary(self):
        summary = pd.DataFrame({'Fraction Deviance Explained':self.dev_ratio},
                               index=pd.Series(self.lambda_values, name='lambda'))
        summary.insert(0, 'Degrees of Freedom', self.nactive())
        return summary

    def __str__(self):
        nvars, nsoln = self.betas.shape
        header = (f"{self.family.modeltype} GLMNet Solution Path "
                  f"({nsoln} solutions for {nvars} predictors in {self.npasses} passes):")
        return '\n'.join([header, self.summary.to_string()])
