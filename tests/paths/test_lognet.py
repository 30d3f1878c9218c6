import numpy as np
import pytest
import statsmodels.api as sm

from glmnetpath.paths import LogNet
from glmnetpath._utils import (InputValidationError,
                               SolverFatalError)

rng = np.random.default_rng(0)

def get_data(n, p):
    X = rng.standard_normal((n, p))
    coef = np.zeros(p)
    coef[:2] = [1, -0.5]
    prob = 1 / (1 + np.exp(-(X @ coef + 0.3)))
    y = rng.binomial(1, prob)
    return X, y

def two_column(y):
    return np.column_stack([1 - y, y])

lambda_values = np.exp(np.linspace(np.log(0.2), np.log(0.005), 10))

sample_weight_pyt = pytest.mark.parametrize('sample_weight', [None, lambda n: rng.uniform(0.5, 2, size=n)])
offset_pyt = pytest.mark.parametrize('offset', [None, lambda n: rng.uniform(-0.5, 0.5, size=n)])

@sample_weight_pyt
@offset_pyt
def test_statsmodels(sample_weight, offset):

    n, p = 200, 3
    X, y = get_data(n, p)
    weights = sample_weight(n) if sample_weight is not None else None
    offsets = offset(n) if offset is not None else None

    fitter = LogNet(lambda_values=[0],
                    tol=1e-14).fit(X, y, weights=weights, offsets=offsets)
    path = fitter.path_

    glm = sm.GLM(y,
                 sm.add_constant(X),
                 family=sm.families.Binomial(),
                 offset=offsets,
                 var_weights=weights).fit(tol=1e-12)

    assert np.allclose(path.a0[0], glm.params[0], atol=1e-5)
    assert np.allclose(path.coefs[0], glm.params[1:], atol=1e-5)
    assert np.allclose(path.null_dev, glm.null_deviance, rtol=1e-6)
    assert np.allclose(path.dev_ratio[0], 1 - glm.deviance / glm.null_deviance, atol=1e-7)

def test_kkt():
    n, p = 150, 6
    X, y = get_data(n, p)
    lambda_val = 0.03
    path = LogNet(lambda_values=[lambda_val],
                  standardize=False,
                  tol=1e-14).fit(X, y).path_
    coef = path.coefs[0]
    prob = 1 / (1 + np.exp(-(X @ coef + path.a0[0])))
    grad = X.T @ (y - prob) / n
    active = coef != 0
    assert np.any(active)
    assert np.allclose(grad[active], lambda_val * np.sign(coef[active]), atol=1e-5)
    assert np.all(np.fabs(grad[~active]) <= lambda_val + 1e-5)
    assert np.allclose((y - prob).mean(), 0, atol=1e-6)

def test_column_swap():
    n, p = 100, 5
    X, y = get_data(n, p)
    Y = two_column(y)

    path1 = LogNet(lambda_values=lambda_values, tol=1e-14).fit(X, Y).path_
    path2 = LogNet(lambda_values=lambda_values, tol=1e-14).fit(X, Y[:,::-1]).path_

    assert np.allclose(path1.a0, -path2.a0, atol=1e-5)
    assert np.allclose(path1.coefs, -path2.coefs, atol=1e-5)
    assert np.allclose(path1.dev_ratio, path2.dev_ratio, atol=1e-7)

def test_labels():
    n, p = 100, 5
    X, y = get_data(n, p)
    labels = np.array(['A', 'B'])[y]

    fitter = LogNet(lambda_values=lambda_values).fit(X, labels)
    path1 = fitter.path_
    path2 = LogNet(lambda_values=lambda_values).fit(X, two_column(y)).path_
    assert list(fitter.classes_) == ['A', 'B']
    assert np.allclose(path1.coefs, path2.coefs)
    assert np.allclose(path1.a0, path2.a0)

def test_default_path():
    n, p = 100, 5
    X, y = get_data(n, p)
    path = LogNet().fit(X, y).path_
    lam = path.lambda_values
    assert np.allclose(lam[0] / lam[1], lam[1] / lam[2])
    assert np.all(path.coefs[0] == 0)
    assert np.all(np.diff(path.dev_ratio) >= -1e-6)

    prob = path.predict(X, prediction_type='response')
    assert np.all((prob > 0) & (prob < 1))

def test_algorithm():
    n, p = 100, 5
    X, y = get_data(n, p)
    fitter = LogNet(lambda_values=lambda_values, algorithm='nzsame').fit(X, y)
    assert fitter._args['kopt'] == 2
    path = LogNet(lambda_values=lambda_values).fit(X, y).path_
    assert np.allclose(fitter.path_.coefs, path.coefs)

    with pytest.raises(InputValidationError):
        LogNet(algorithm='gradientdescent').fit(X, y)

def test_one_class_fatal():
    n, p = 30, 4
    X, _ = get_data(n, p)
    Y = np.column_stack([np.zeros(n), np.ones(n)])
    with pytest.raises(SolverFatalError):
        LogNet().fit(X, Y)

@pytest.mark.parametrize('y', [np.arange(30) % 3,
                               np.ones((30, 3)),
                               -np.ones((30, 2))])
def test_response_validation(y):
    X = rng.standard_normal((30, 4))
    with pytest.raises(InputValidationError):
        LogNet().fit(X, y)
