from dataclasses import fields

_docstrings = {
    'X':'''
X: np.ndarray
    Input matrix, of shape `(nobs, nvars)`; each row is an observation
    vector.''',

    'y':'''
y: np.ndarray
    Response variable.''',

    'weights':'''
weights: Optional[np.ndarray]
    Observation weights, default ones.''',

    'offsets':'''
offsets: Optional[np.ndarray]
    Offsets added to the linear predictor, default zeros.''',

    'alpha':r'''
alpha: float
    The elasticnet mixing parameter in [0,1].  The penalty is
    defined as $(1-\alpha)/2||\beta||_2^2+\alpha||\beta||_1.$
    `alpha=1` is the lasso penalty, and `alpha=0` the ridge
    penalty. Defaults to 1. For the Gaussian family, lambda applies on the
    scale of the response standardized to unit (weighted) standard
    deviation `sd(y)`, as in glmnet, so on the original scale the
    ridge part of the penalty is divided by `sd(y)`.''',

    'penalty_factor':'''
penalty_factor: Optional[np.ndarray]
    Separate penalty factors can be applied to each
    coefficient. This is a number that multiplies `lambda` to
    allow differential shrinkage. Can be 0 for some variables,
    which implies no shrinkage, and that variable is always
    included in the model. Default is 1 for all variables. Note:
    the penalty factors are internally rescaled to sum to
    `nvars=X.shape[1]`.''',

    'constraints':'''
constraints: Optional[np.ndarray]
    Array of shape `(2, nvars)` with a lower (first row) and an
    upper (second row) limit for each coefficient. Default
    `-np.inf` and `np.inf`.''',

    'df_max':'''
df_max: Optional[int]
    Limit on the number of nonzero coefficients; the path stops
    once it is exceeded. Default `nvars`.''',

    'pmax':'''
pmax: Optional[int]
    Limit on the number of variables ever entering the active set.
    Default `min(2 * df_max + 20, nvars)`.''',

    'nlambda':'''
nlambda: int
    Number of values on data-dependent grid of lambda values.
    Values are equally spaced on a log-scale from lambda_max to
    lambda_max * lambda_min_ratio.''',

    'lambda_min_ratio':'''
lambda_min_ratio: Optional[float]
    Ratio of lambda_max to smallest lambda, in [0,1]. Default
    `1e-2` if `nobs < nvars`, else `1e-4`.''',

    'lambda_values':'''
lambda_values: Optional[np.ndarray]
    An array of `lambda` hyperparameters. Cannot be combined with
    `nlambda` or `lambda_min_ratio`.''',

    'tol':'''
tol: float
    Convergence threshold for coordinate descent. Each inner
    coordinate-descent loop continues until the maximum weighted
    squared change of any coefficient is less than `tol`.
    Default value is `1e-7`.''',

    'standardize':'''
standardize: bool
    Standardize columns of X according to weights? Default is True.''',

    'fit_intercept':'''
fit_intercept: bool
    Should intercept be fitted (default=`True`) or set to zero (`False`)?''',

    'maxit':'''
maxit: int
    Maximum total number of passes over the data.''',

    'control':'''
control: FastNetControl
    Parameters to control the solver.''',

    'naive_algorithm':'''
naive_algorithm: Optional[bool]
    Use residual ("naive") updates rather than covariance updates.
    Defaults to `True` when `nvars >= 500`.''',

    'algorithm':'''
algorithm: str
    One of "newtonraphson", "modifiednewtonraphson" or "nzsame".''',

    'logging':'''
logging: bool
    Write info and debug messages to log?''',
}


def make_docstring(*fieldnames):

    field_str = '\n\n'.join([_docstrings[f].strip() for f in fieldnames])
    return f'''
Parameters
----------

{field_str}
'''

def add_dataclass_docstring(kls, subs={}):
    """
    Add a docstring to a dataclass using entries in `._docstrings` based on the fields
    of the dataclass.
    """

    fieldnames = [f.name for f in fields(kls)]
    for k in subs:
        fieldnames[fieldnames.index(k)] = subs[k]

    kls.__doc__ = '\n'.join([kls.__doc__, make_docstring(*fieldnames)])
    return kls
