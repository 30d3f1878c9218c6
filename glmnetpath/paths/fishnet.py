from typing import ClassVar
from dataclasses import dataclass

import numpy as np

from .fastnet import FastNetMixin
from ..family import Family
from .._utils import InputValidationError
from ..docstrings import add_dataclass_docstring

from .._coordinate_descent import fishnet as _dense

"""
Implements the FishNet path algorithm for Poisson regression models.
Provides the FishNet estimator class using the FastNetMixin base.
"""

@dataclass
class FishNet(FastNetMixin):
    """FishNet estimator for Poisson elastic net paths."""

    _family: ClassVar[Family] = Family.POISSON
    _dense = staticmethod(_dense)

    def get_response(self, y):
        y = super().get_response(y)
        if np.any(y < 0):
            raise InputValidationError("negative responses encountered; not permitted for Poisson family")
        return y

    # private methods

    def _wrapper_args(self,
                      X,
                      response,
                      weights,
                      offsets):

        if offsets is None:
            offsets = np.zeros(response.shape[0])

        _args = super()._wrapper_args(X,
                                      response,
                                      weights,
                                      offsets)

        _args['g'] = np.asfortranarray(offsets.reshape((-1,1)).copy())
        return _args

add_dataclass_docstring(FishNet)
