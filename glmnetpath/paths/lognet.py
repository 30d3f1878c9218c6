from typing import ClassVar
from dataclasses import dataclass

import numpy as np

from sklearn.preprocessing import (OneHotEncoder,
                                   LabelEncoder)

from .fastnet import FastNetMixin
from ..family import Family
from .._utils import InputValidationError
from ..docstrings import add_dataclass_docstring

from .._coordinate_descent import lognet as _dense

"""
Implements the LogNet path algorithm for binomial (logistic) regression models.
Provides the LogNet estimator class using the FastNetMixin base.
"""

_ALGORITHMS = {'newtonraphson':0,
               'modifiednewtonraphson':1,
               'nzsame':2}


@dataclass
class LogNet(FastNetMixin):
    """LogNet estimator for binomial (logistic) elastic net paths.

    The response is a two-column matrix with counts of negative
    responses in the first column and positive responses in the
    second, or a vector of (at most two) class labels.
    """

    algorithm: str = 'newtonraphson'

    _family: ClassVar[Family] = Family.BINOMIAL
    _dense = staticmethod(_dense)

    def get_response(self, y):
        """
        Two-column (negative, positive) counts for `y`.

        A 1-d `y` is treated as class labels: the first class in sorted
        order is negative and the second positive.
        """
        y = np.asarray(y)
        if y.ndim == 1:
            encoder = LabelEncoder()
            labels = encoder.fit_transform(y)
            self.classes_ = encoder.classes_
            if len(encoder.classes_) > 2:
                raise InputValidationError("LogNet expecting a binary classification problem.")
            onehot = OneHotEncoder(sparse_output=False,
                                   categories=[np.arange(2)])
            return onehot.fit_transform(labels.reshape((-1, 1)))

        if y.ndim != 2 or y.shape[1] != 2:
            raise InputValidationError("glmnet for logistic models requires a two-column matrix with "
                                       "counts of negative responses in the first column and positive "
                                       "responses in the second")
        y = np.asarray(y, float)
        if np.any(y < 0):
            raise InputValidationError("negative counts encountered; not permitted for binomial family")
        return y

    # private methods

    def _wrapper_args(self,
                      X,
                      response,
                      weights,
                      offsets):

        if self.algorithm not in _ALGORITHMS:
            raise InputValidationError(f"unknown algorithm {self.algorithm!r}; expecting one of "
                                       f"{sorted(_ALGORITHMS)}")

        _args = super()._wrapper_args(X,
                                      response,
                                      weights,
                                      offsets)

        if offsets is None:
            offsets = np.zeros(response.shape[0])

        _args['kopt'] = _ALGORITHMS[self.algorithm]
        _args['g'] = np.asfortranarray(offsets.copy())

        # the solver expects positive responses in the first column,
        # scaled by the observation weights
        y = np.empty_like(response)
        y[:, 0] = response[:, 1] * weights
        y[:, 1] = response[:, 0] * weights
        _args['y'] = np.asfortranarray(y)

        # remove w
        del(_args['w'])

        return _args

add_dataclass_docstring(LogNet)
