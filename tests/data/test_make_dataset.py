import numpy as np
import pytest
from glmnetpath.data import make_dataset
from glmnetpath.paths import LogNet, GaussNet, FishNet

@pytest.mark.parametrize("family", ['gaussian', GaussNet])
@pytest.mark.parametrize("n_samples,n_features,n_informative,snr,bias", [
    (50, 8, 4, 3, 0.0),
    (30, 5, 2, None, 1.5),
    (10, 10, 10, 1, -2.0),
])
def test_gaussian(family, n_samples, n_features, n_informative, snr, bias):
    X, y, coef, intercept = make_dataset(family, n_samples=n_samples, n_features=n_features, n_informative=n_informative, snr=snr, bias=bias)
    assert X.shape == (n_samples, n_features)
    assert y.shape == (n_samples,)
    assert coef.shape == (n_features,)
    assert np.count_nonzero(coef) <= n_informative
    assert np.issubdtype(y.dtype, np.floating)
    assert intercept == bias

@pytest.mark.parametrize("family", ['binomial', LogNet])
@pytest.mark.parametrize("n_samples,n_features,n_informative,snr,bias", [
    (60, 7, 3, 4, 0.0),
    (15, 5, 2, None, -1.0),
])
def test_binomial(family, n_samples, n_features, n_informative, snr, bias):
    X, y, coef, intercept = make_dataset(family, n_samples=n_samples, n_features=n_features, n_informative=n_informative, snr=snr, bias=bias)
    assert X.shape == (n_samples, n_features)
    assert y.shape == (n_samples,)
    assert coef.shape == (n_features,)
    assert set(np.unique(y)).issubset({0, 1})

@pytest.mark.parametrize("family", ['poisson', FishNet])
@pytest.mark.parametrize("n_samples,n_features,n_informative,snr,bias", [
    (30, 4, 2, 1.5, 0.0),
    (12, 6, 3, None, 2.0),
])
def test_poisson(family, n_samples, n_features, n_informative, snr, bias):
    X, y, coef, intercept = make_dataset(family, n_samples=n_samples, n_features=n_features, n_informative=n_informative, snr=snr, bias=bias)
    assert X.shape == (n_samples, n_features)
    assert y.shape == (n_samples,)
    assert np.all(y >= 0)
    assert np.issubdtype(y.dtype, np.integer)

def test_reproducible():
    X1, y1 = make_dataset('poisson', random_state=3)[:2]
    X2, y2 = make_dataset('poisson', random_state=3)[:2]
    assert np.all(X1 == X2) and np.all(y1 == y2)

def test_coef():
    coef = np.array([1., 0., -1.])
    X, y, coef_, intercept = make_dataset('gaussian', n_features=3, coef=coef, bias=0., noise=0.)
    assert np.allclose(y, X @ coef)
