from typing import ClassVar, Optional
from dataclasses import dataclass

import numpy as np

from .fastnet import FastNetMixin
from ..family import Family
from .._utils import InputValidationError
from ..docstrings import add_dataclass_docstring

from .._coordinate_descent import gaussnet as _dense

"""
Implements the GaussNet path algorithm for Gaussian regression models.
Provides the GaussNet estimator class using the FastNetMixin base.
"""

@dataclass
class GaussNet(FastNetMixin):
    """GaussNet estimator for Gaussian (least squares) elastic net paths.
    """

    naive_algorithm: Optional[bool] = None

    _family: ClassVar[Family] = Family.NORMAL
    _dense = staticmethod(_dense)

    def fit(self,
            X,
            y,
            weights=None):
        """
        Fit the solution path. The Gaussian family takes no offsets.

        Parameters
        ----------
        X: np.ndarray
            Input matrix, of shape `(nobs, nvars)`.
        y: np.ndarray
            Response variable.
        weights: Optional[np.ndarray]
            Observation weights, default ones.

        Returns
        -------
        self: object
            With the fitted `GLMNetPath` in `path_`.
        """
        return super().fit(X, y, weights=weights)

    # private methods

    def _extract_fits(self, nvars):
        self._fit['dev'] = self._fit['rsq'] # gaussian fit calls it rsq
        return super()._extract_fits(nvars)

    def _null_deviance(self):
        return self._nulldev

    def _wrapper_args(self,
                      X,
                      response,
                      weights,
                      offsets):

        # compute nulldeviance

        y = response # shorthand
        ybar = (y * weights).sum() / weights.sum()
        self._nulldev = ((y - ybar)**2 * weights).sum()

        if self._nulldev == 0:
            raise InputValidationError("response is constant; GaussNet fails at standardization step")

        _args = super()._wrapper_args(X,
                                      y.copy(), # it will otherwise be scaled
                                      weights,
                                      offsets)

        # add 'ka'
        naive = self.naive_algorithm
        if naive is None:
            naive = X.shape[1] >= 500

        _args['ka'] = {False:1,
                       True:2}[bool(naive)]

        # Gaussian calls it rsq
        _args['rsq'] = _args['dev']
        del(_args['dev'])

        # doesn't use nulldev
        del(_args['nulldev'])
        return _args

add_dataclass_docstring(GaussNet)
