import logging
import warnings

from typing import ClassVar, Optional
from dataclasses import dataclass, field, asdict

import numpy as np
from tqdm import tqdm

from sklearn.base import BaseEstimator

from ..compressed import CompressedPredictorMatrix
from ..family import Family
from ..path import GLMNetPath
from .._utils import (InputValidationError,
                      SolverFatalError,
                      SolverWarning,
                      _check_data,
                      _jerr_glmnet)
from ..docstrings import add_dataclass_docstring


@dataclass
class FastNetControl(object):
    """
    Internal parameters of the path solvers (as in `glmnet.control`).

    Parameters
    ----------
    fdev: float
        Minimum fractional change in deviance for stopping the path.
    eps: float
        Minimum value of lambda_min_ratio.
    big: float
        Large number standing in for an infinite lambda.
    mnlam: int
        Minimum number of path points (lambda values) allowed.
    devmax: float
        Maximum fraction of explained deviance for stopping the path.
    pmin: float
        Minimum probability for any class.
    exmx: float
        Maximum allowed exponent.
    itrace: int
        If 1 then a progress bar is shown.
    mxit: int
        Maximum number of outer (IRLS) iterations at each lambda.
    epsnr: float
        Convergence threshold for the Newton iterations of the null model.
    mxitnr: int
        Maximum number of Newton iterations of the null model.
    logging: bool
        Write info and debug messages to log?
    """

    fdev: float = 1e-5
    eps: float = 1e-6
    big: float = 9.9e35
    mnlam: int = 5
    devmax: float = 0.999
    pmin: float = 1e-9
    exmx: float = 250.
    itrace: int = 0
    mxit: int = 100
    epsnr: float = 1e-6
    mxitnr: int = 25
    # logging is not part of glmnet.control but used in the wrapper
    logging: bool = False


@dataclass
class FastNetSpec(object):
    """
    Options shared by the path fitters.
    """

    alpha: float = 1.0
    penalty_factor: Optional[np.ndarray] = None
    constraints: Optional[np.ndarray] = None
    df_max: Optional[int] = None
    pmax: Optional[int] = None
    nlambda: int = 100
    lambda_min_ratio: Optional[float] = None
    lambda_values: Optional[np.ndarray] = None
    tol: float = 1e-7
    standardize: bool = True
    fit_intercept: bool = True
    maxit: int = 1000000
    control: FastNetControl = field(default_factory=FastNetControl)

add_dataclass_docstring(FastNetSpec)


@dataclass
class FastNetMixin(BaseEstimator,
                   FastNetSpec): # base class for the path solvers

    _family: ClassVar[Family] = Family.NORMAL

    def fit(self,
            X,
            y,
            weights=None,
            offsets=None):
        """
        Fit the solution path.

        Parameters
        ----------
        X: np.ndarray
            Input matrix, of shape `(nobs, nvars)`.
        y: np.ndarray
            Response variable.
        weights: Optional[np.ndarray]
            Observation weights, default ones.
        offsets: Optional[np.ndarray]
            Offsets added to the linear predictor, default zeros.

        Returns
        -------
        self: object
            With the fitted `GLMNetPath` in `path_`.
        """
        response = self.get_response(y)
        X, response, weights, offsets = _check_data(X,
                                                    response,
                                                    weights=weights,
                                                    offsets=offsets)
        nobs, nvars = X.shape

        if self.control is None:
            self.control = FastNetControl()

        if self.control.logging: logging.info(f'Fitting {self._family.modeltype} path: '
                                              f'{nobs} observations, {nvars} predictors')

        self._args = self._wrapper_args(X,
                                        response,
                                        weights,
                                        offsets)

        # set control args
        D = asdict(self.control)
        del(D['logging']) # logging is not in glmnet.control

        pb = tqdm(total=self._args['nlam'], disable=not self.control.itrace)
        self._args.update(pb=pb, **D)
        try:
            self._fit = self._dense(**self._args)
        finally:
            pb.close()

        # if error code > 0, fatal error occurred: stop immediately
        # if error code < 0, non-fatal error occurred: return the path

        self.jerr_ = self._fit['jerr']
        if self.jerr_ != 0:
            errmsg = _jerr_glmnet(self.jerr_, self.maxit, self._args['nx'])
            if self.control.logging: logging.debug(errmsg['msg'])
            if errmsg['fatal']:
                raise SolverFatalError(errmsg['msg'])
            warnings.warn(errmsg['msg'], SolverWarning)

        self.path_ = self._extract_fits(nvars)
        self.lambda_values_ = self.path_.lambda_values

        if self.control.logging: logging.info(f'Path has {self.lambda_values_.shape[0]} solutions '
                                              f'after {self.path_.npasses} passes')
        return self

    def get_response(self, y):
        """
        Response in the form expected by `fit` and by the loss of
        the family.
        """
        y = np.asarray(y, float)
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.reshape(-1)
        if y.ndim != 1:
            raise InputValidationError(f"{self._family.modeltype} path expects a 1-d response")
        return y

    # private methods

    def _extract_fits(self, nvars):
        _fit = self._fit
        lmu = _fit['lmu']

        if lmu < 1:
            warnings.warn("an empty model has been returned; probably a convergence issue",
                          SolverWarning)

        alm = np.asarray(_fit['alm']).reshape(-1)[:lmu].copy()

        # first lambda is infinity; changed to entry point
        if self.lambda_values is None and lmu >= 3:
            alm[0] = np.exp(2 * np.log(alm[1]) - np.log(alm[2]))

        betas = CompressedPredictorMatrix(ni=nvars,
                                          ca=_fit['ca'][:, :lmu].copy(),
                                          ia=np.asarray(_fit['ia']).reshape(-1).astype(int) - 1,
                                          nin=np.asarray(_fit['nin']).reshape(-1)[:lmu].astype(int))

        return GLMNetPath(family=self._family,
                          a0=np.asarray(_fit['a0']).reshape(-1)[:lmu].copy(),
                          betas=betas,
                          null_dev=float(self._null_deviance()),
                          dev_ratio=np.asarray(_fit['dev']).reshape(-1)[:lmu].copy(),
                          lambda_values=alm,
                          npasses=int(_fit['nlp']))

    def _null_deviance(self):
        return self._fit['nulldev']

    def _wrapper_args(self,
                      X,
                      response,
                      weights,
                      offsets):

        nobs, nvars = X.shape

        if self.penalty_factor is None:
            penalty_factor = np.ones(nvars)
        else:
            penalty_factor = np.asarray(self.penalty_factor, float).reshape(-1)
        if penalty_factor.shape[0] != nvars:
            raise InputValidationError("length of penalty_factor must match columns in X")

        if self.constraints is None:
            cl = np.asarray([[-np.inf] * nvars,
                             [np.inf] * nvars], float)
        else:
            cl = np.asarray(self.constraints, float)
        if cl.shape != (2, nvars):
            raise InputValidationError("constraints must be a 2 x nvars matrix")

        default_ratio = 1e-2 if nobs < nvars else 1e-4
        if self.lambda_min_ratio is None:
            lambda_min_ratio = default_ratio
        else:
            lambda_min_ratio = float(self.lambda_min_ratio)
        if not 0 <= lambda_min_ratio <= 1:
            raise InputValidationError("lambda_min_ratio must be in range [0.0, 1.0]")

        if self.lambda_values is not None and len(self.lambda_values) > 0:
            # user-specified lambda values
            if self.nlambda != 100:
                raise InputValidationError("cannot specify both lambda_values and nlambda")
            if lambda_min_ratio != default_ratio:
                raise InputValidationError("cannot specify both lambda_values and lambda_min_ratio")
            lambda_values = np.asarray(self.lambda_values, float).reshape(-1)
            if np.any(lambda_values < 0):
                raise InputValidationError("lambdas should be non-negative")
            ulam = np.asfortranarray(np.sort(lambda_values)[::-1].reshape((-1, 1)))
            nlambda = ulam.shape[0]
            flmin = 2.
        else:
            ulam = np.zeros((1, 1))
            nlambda = int(self.nlambda)
            flmin = lambda_min_ratio
        if nlambda < 1:
            raise InputValidationError("nlambda should be at least 1")

        df_max = nvars if self.df_max is None else int(self.df_max)
        nx = min(df_max * 2 + 20, nvars) if self.pmax is None else int(self.pmax)

        _args = {'parm':float(self.alpha),
                 'ni':nvars,
                 'no':nobs,
                 'x':X,
                 'y':response,
                 'w':weights.reshape((-1, 1)),
                 'vp':penalty_factor.reshape((-1, 1)),
                 'cl':np.asfortranarray(cl),
                 'ne':df_max,
                 'nx':nx,
                 'nlam':nlambda,
                 'flmin':flmin,
                 'ulam':ulam,
                 'thr':float(self.tol),
                 'isd':int(self.standardize),
                 'intr':int(self.fit_intercept),
                 'maxit':int(self.maxit),
                 'lmu':0,
                 'a0':np.zeros((nlambda, 1), float),
                 'ca':np.asfortranarray(np.zeros((nx, nlambda))),
                 'ia':np.zeros((nx, 1), np.int32),
                 'nin':np.zeros((nlambda, 1), np.int32),
                 'nulldev':0.,
                 'dev':np.zeros((nlambda, 1)),
                 'alm':np.zeros((nlambda, 1)),
                 'nlp':0,
                 'jerr':0,
                 }

        return _args
