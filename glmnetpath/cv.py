"""
K-fold cross-validation of a solution path.
"""

import logging

from dataclasses import dataclass

import numpy as np
import pandas as pd

from sklearn.base import clone
from sklearn.utils import check_random_state
from sklearn.utils.parallel import (Parallel,
                                    delayed)

from .family import Family
from .glmnet import get_fitter
from .path import GLMNetPath
from .paths.fastnet import FastNetSpec
from ._utils import (InputValidationError,
                     _check_data)


@dataclass
class GLMNetCrossValidation(object):
    """
    Cross-validated loss along a solution path.

    Attributes
    ----------
    path: GLMNetPath
        Path fit to the full data.
    nfolds: int
        Number of folds.
    lambda_values: np.ndarray
        Lambda values of the path, truncated to the shortest fold path.
    meanloss: np.ndarray
        Mean held-out loss at each lambda, folds weighted by size.
    stdloss: np.ndarray
        Standard error of `meanloss`.
    folds: np.ndarray
        Fold label of each observation.
    """

    path: GLMNetPath
    nfolds: int
    lambda_values: np.ndarray
    meanloss: np.ndarray
    stdloss: np.ndarray
    folds: np.ndarray

    def __post_init__(self):
        if not (self.lambda_values.shape[0] ==
                self.meanloss.shape[0] ==
                self.stdloss.shape[0]):
            raise InputValidationError("lambda_values, meanloss and stdloss must have equal length")

    @property
    def index_best(self):
        return int(np.argmin(self.meanloss))

    @property
    def lambda_best(self):
        return self.lambda_values[self.index_best]

    @property
    def summary(self):
        loss_name = self.path.family.loss_name
        return pd.DataFrame({loss_name:self.meanloss,
                             f'SD({loss_name})':self.stdloss},
                            index=pd.Series(self.lambda_values, name='lambda'))

    def __str__(self):
        i = self.index_best
        nvars = self.path.betas.shape[0]
        return '\n'.join([f"{self.path.family.modeltype} GLMNet Cross Validation",
                          f"{self.lambda_values.shape[0]} models for {nvars} predictors in {self.nfolds} folds",
                          "Best λ %.3f (mean loss %.3f, std %.3f)" % (self.lambda_best,
                                                                      self.meanloss[i],
                                                                      self.stdloss[i])])


def make_folds(nobs, nfolds, random_state=None):
    """
    Random fold labels `0, ..., nfolds-1` of (nearly) equal sizes.

    Parameters
    ----------
    nobs: int
        Number of observations.
    nfolds: int
        Number of folds.
    random_state: Optional[Union[int, np.random.RandomState]]
        Seed of the shuffle.

    Returns
    -------
    np.ndarray
        Labels of length `nobs`; fold `k` has `nobs // nfolds` members,
        plus one if `k < nobs % nfolds`.
    """
    if nfolds < 2:
        raise InputValidationError("nfolds must be at least 2")
    if nfolds > nobs:
        raise InputValidationError("nfolds must not exceed the number of observations")
    n, r = divmod(nobs, nfolds)
    folds = np.hstack([np.tile(np.arange(nfolds), n), np.arange(r)])
    check_random_state(random_state).shuffle(folds)
    return folds


def _fold_loss(estimator,
               X,
               response,
               weights,
               offsets,
               test):
    """
    Fit `estimator` without the rows in `test` and return the loss
    of its path on `test`.
    """
    train = ~test
    fitter = clone(estimator)
    fit_args = {'weights':weights[train]}
    test_offsets = None
    if offsets is not None:
        fit_args['offsets'] = offsets[train]
        test_offsets = offsets[test]
    fitter.fit(X[train], response[train], **fit_args)
    return fitter.path_.loss(X[test],
                             response[test],
                             weights=weights[test],
                             offsets=test_offsets)


def glmnetcv(X,
             y,
             family='gaussian',
             weights=None,
             offsets=None,
             nfolds=None,
             folds=None,
             parallel=False,
             n_jobs=None,
             random_state=None,
             **kwargs):
    """
    Cross-validate an elastic net solution path.

    The path is first fit to all the data. Each fold is then fit on
    the remaining observations at the lambda values of this path and
    scored on the held-out observations with the deviance loss of
    the family.

    Parameters
    ----------
    X: np.ndarray
        Input matrix, of shape `(nobs, nvars)`.
    y: np.ndarray
        Response variable.
    family: Union[str, Family, statsmodels family]
        Response family, default "gaussian".
    weights: Optional[np.ndarray]
        Observation weights, default ones.
    offsets: Optional[np.ndarray]
        Offsets of the linear predictor, Binomial and Poisson only.
    nfolds: Optional[int]
        Number of random folds, default `min(10, nobs // 3)`. Ignored
        if `folds` is given.
    folds: Optional[np.ndarray]
        Fold label of each observation; any values, one fold per
        distinct label.
    parallel: bool
        Fit the folds in parallel?
    n_jobs: Optional[int]
        Number of jobs for the parallel fold fits, default all cores
        when `parallel` is set.
    random_state: Optional[Union[int, np.random.RandomState]]
        Seed of the random fold assignment.
    kwargs: dict
        Fields of the path estimator, e.g. `alpha`.

    Returns
    -------
    GLMNetCrossValidation
    """
    family = Family.from_family(family)
    if family == Family.NORMAL and offsets is not None:
        raise InputValidationError("offsets are not supported for the Gaussian family")

    estimator = get_fitter(family, **kwargs)
    response = estimator.get_response(y)
    X, response, weights, offsets = _check_data(X,
                                                response,
                                                weights=weights,
                                                offsets=offsets)
    nobs = X.shape[0]

    if folds is None:
        if nfolds is None:
            nfolds = min(10, nobs // 3)
        folds = make_folds(nobs, nfolds, random_state=random_state)
    else:
        folds = np.asarray(folds).reshape(-1)
        if folds.shape[0] != nobs:
            raise InputValidationError("length of folds must match length of y")
    labels = np.unique(folds)
    nfolds = labels.shape[0]
    if nfolds < 2:
        raise InputValidationError("at least 2 folds are needed for cross-validation")

    fit_args = {'weights':weights}
    if offsets is not None:
        fit_args['offsets'] = offsets
    estimator.fit(X, response, **fit_args)
    path = estimator.path_
    verbose = estimator.control.logging

    # folds are fit on the lambda values of the full path
    default = FastNetSpec()
    fold_estimator = clone(estimator).set_params(lambda_values=path.lambda_values.copy(),
                                                 nlambda=default.nlambda,
                                                 lambda_min_ratio=default.lambda_min_ratio)

    if parallel and n_jobs is None:
        n_jobs = -1
    if not parallel:
        n_jobs = None

    if verbose: logging.info(f'Cross-validating {path.lambda_values.shape[0]} lambda values in {nfolds} folds')
    losses = Parallel(n_jobs=n_jobs)(delayed(_fold_loss)(fold_estimator,
                                                         X,
                                                         response,
                                                         weights,
                                                         offsets,
                                                         folds == label)
                                     for label in labels)
    if verbose:
        for label, loss in zip(labels, losses):
            logging.debug(f'Fold {label}: {loss.shape[0]} solutions')

    # each fold may have a shorter path
    nlambda = min([loss.shape[0] for loss in losses])
    fitloss = np.column_stack([loss[:nlambda] for loss in losses])

    ninfold = np.array([(folds == label).sum() for label in labels])
    meanloss = fitloss @ ninfold / nobs
    stdloss = np.sqrt(((fitloss - meanloss[:, None])**2) @ ninfold / nobs / (nfolds - 1))

    return GLMNetCrossValidation(path=path,
                                 nfolds=nfolds,
                                 lambda_values=path.lambda_values[:nlambda],
                                 meanloss=meanloss,
                                 stdloss=stdloss,
                                 folds=folds)
