import numpy as np

from sklearn.utils import check_array


class InputValidationError(ValueError):
    """
    Dimension or range mismatch detected before the solver is called.
    """


class SolverFatalError(RuntimeError):
    """
    Fatal status code returned by the coordinate descent solver.
    No path is returned.
    """


class SolverWarning(UserWarning):
    """
    Non-fatal status code returned by the coordinate descent solver.
    The (possibly truncated) path is still returned.
    """


def _jerr_glmnet(n, maxit, pmax=None):
    """
    Decode a solver status code.

    Parameters
    ----------
    n: int
        Status code returned by the solver.
    maxit: int
        Maximum number of passes used in the fit.
    pmax: int
        Maximum number of variables allowed to enter the active set.

    Returns
    -------
    dict
        With keys `n`, `fatal` and `msg`.
    """
    if n == 0:
        fatal = False
        msg = ''
    elif n == 1000:
        fatal = True
        msg = "All predictors are unpenalized"
    elif 0 < n < 7777:
        fatal = True
        msg = "Memory allocation error; contact package maintainer"
    elif n == 7777:
        fatal = True
        msg = "All used predictors have zero variance"
    elif n == 8000:
        fatal = True
        msg = "Null probability for the positive class < pmin"
    elif n == 9000:
        fatal = True
        msg = "Null probability for the positive class > 1 - pmin"
    elif n > 0:
        fatal = True
        msg = "Unknown error"
    elif n > -10001:
        fatal = False
        msg = (f"Convergence for {-n}-th lambda value not reached after maxit={maxit}" +
               " iterations; solutions for larger lambdas returned")
    else:
        fatal = False
        msg = (f"Number of nonzero coefficients along the path exceeds pmax={pmax}" +
               f" at {-n-10000}-th lambda value; solutions for larger lambdas returned")
    return {'n':n,
            'fatal':fatal,
            'msg':f"Error code {n}: " + msg}


def _validate_x_y_weights(X, y, weights):
    """
    Check that the rows of `X`, `y` and `weights` agree.
    """
    if X.shape[0] != y.shape[0]:
        raise InputValidationError("length of y must match rows in X")
    if weights.shape[0] != y.shape[0]:
        raise InputValidationError("length of weights must match y")


def _check_data(X,
                y,
                weights=None,
                offsets=None):
    """
    Convert `(X, y, weights, offsets)` to float arrays and check that
    their shapes agree.

    Returns
    -------
    tuple
        (X, y, weights, offsets); `weights` defaults to ones and
        `offsets` is left as `None` if not given.
    """
    X = check_array(X, dtype=np.float64, order='F', copy=True)
    y = np.asarray(y, float)
    if weights is None:
        weights = np.ones(y.shape[0])
    weights = np.asarray(weights, float).reshape(-1)
    _validate_x_y_weights(X, y, weights)
    if np.any(weights < 0) or weights.sum() <= 0:
        raise InputValidationError("weights should be non-negative with a positive sum")

    if offsets is not None:
        offsets = np.asarray(offsets, float).reshape(-1)
        if offsets.shape[0] != y.shape[0]:
            raise InputValidationError("length of offsets must match length of y")
    return X, y, weights, offsets
