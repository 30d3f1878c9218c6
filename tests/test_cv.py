import numpy as np
import pytest

import glmnetpath.cv
from glmnetpath import (glmnetcv,
                        make_folds,
                        GLMNetCrossValidation,
                        InputValidationError)
from glmnetpath.paths import GaussNet
from glmnetpath.data import make_dataset

def get_data(family='gaussian', n=60, p=5, random_state=0):
    X, y = make_dataset(family,
                        n_samples=n,
                        n_features=p,
                        n_informative=3,
                        snr=5,
                        random_state=random_state)[:2]
    return X, y

def test_make_folds():
    folds = make_folds(23, 5, random_state=0)
    assert folds.shape == (23,)
    assert list(np.bincount(folds)) == [5, 5, 5, 4, 4]
    assert np.all(folds == make_folds(23, 5, random_state=0))

    with pytest.raises(InputValidationError):
        make_folds(23, 1)

@pytest.mark.parametrize('family', ['gaussian', 'binomial', 'poisson'])
def test_lengths(family):
    X, y = get_data(family)
    cv = glmnetcv(X, y, family=family, nfolds=4, random_state=1)
    assert isinstance(cv, GLMNetCrossValidation)
    L = cv.lambda_values.shape[0]
    assert cv.meanloss.shape == cv.stdloss.shape == (L,)
    assert L <= cv.path.lambda_values.shape[0]
    assert np.all(cv.lambda_values == cv.path.lambda_values[:L])
    assert cv.nfolds == 4
    assert np.all(cv.stdloss >= 0)

def test_deterministic_folds():
    X, y = get_data()
    folds = np.arange(60) % 3
    cv1 = glmnetcv(X, y, folds=folds)
    cv2 = glmnetcv(X, y, folds=folds)
    assert np.all(cv1.meanloss == cv2.meanloss)
    assert np.all(cv1.stdloss == cv2.stdloss)

    cv3 = glmnetcv(X, y, nfolds=3, random_state=5)
    cv4 = glmnetcv(X, y, nfolds=3, random_state=5)
    assert np.all(cv3.folds == cv4.folds)
    assert np.all(cv3.meanloss == cv4.meanloss)

def test_aggregation():
    X, y = get_data(n=50)
    # unequal folds of sizes 20, 20, 10
    folds = np.array(['a'] * 20 + ['b'] * 20 + ['c'] * 10)
    cv = glmnetcv(X, y, folds=folds)
    assert cv.nfolds == 3

    L = cv.lambda_values.shape[0]
    losses, sizes = [], []
    for label in ['a', 'b', 'c']:
        test = folds == label
        fitter = GaussNet(lambda_values=cv.path.lambda_values).fit(X[~test], y[~test])
        losses.append(fitter.path_.loss(X[test], y[test])[:L])
        sizes.append(test.sum())
    losses, sizes = np.array(losses), np.array(sizes)

    meanloss = sizes @ losses / 50
    stdloss = np.sqrt(sizes @ (losses - meanloss[None,:])**2 / 50 / 2)
    assert np.allclose(cv.meanloss, meanloss)
    assert np.allclose(cv.stdloss, stdloss)

def test_equal_folds_mean():
    X, y = get_data(n=60)
    folds = np.arange(60) % 4
    cv = glmnetcv(X, y, folds=folds)
    L = cv.lambda_values.shape[0]
    losses = []
    for label in range(4):
        test = folds == label
        fitter = GaussNet(lambda_values=cv.path.lambda_values).fit(X[~test], y[~test])
        losses.append(fitter.path_.loss(X[test], y[test])[:L])
    assert np.allclose(cv.meanloss, np.mean(losses, 0))

def test_short_fold_truncates(monkeypatch):
    X, y = get_data()
    folds = np.arange(60) % 3
    fold_loss = glmnetpath.cv._fold_loss
    losses = {}

    # the fold holding the first observation stops after 4 lambda values
    def short_fold_loss(estimator, X, response, weights, offsets, test):
        loss = fold_loss(estimator, X, response, weights, offsets, test)
        if test[0]:
            loss = loss[:4]
        losses[folds[test][0]] = loss
        return loss

    monkeypatch.setattr(glmnetpath.cv, '_fold_loss', short_fold_loss)
    cv = glmnetcv(X, y, folds=folds)

    assert cv.path.lambda_values.shape[0] > 4
    assert cv.lambda_values.shape == cv.meanloss.shape == cv.stdloss.shape == (4,)
    assert np.all(cv.lambda_values == cv.path.lambda_values[:4])

    fitloss = np.array([losses[label][:4] for label in range(3)])
    meanloss = fitloss.mean(0)
    stdloss = np.sqrt(((fitloss - meanloss[None,:])**2).mean(0) / 2)
    assert np.allclose(cv.meanloss, meanloss)
    assert np.allclose(cv.stdloss, stdloss)

def test_best():
    # many noise predictors, so the smallest lambda overfits
    X, y = make_dataset('gaussian',
                        n_samples=100,
                        n_features=30,
                        n_informative=3,
                        snr=1,
                        random_state=0)[:2]
    cv = glmnetcv(X, y, nfolds=5, random_state=0)
    assert 0 < cv.index_best < cv.lambda_values.shape[0] - 1
    assert cv.lambda_best == cv.lambda_values[cv.index_best]
    assert list(cv.summary.columns) == ['Mean Squared Error', 'SD(Mean Squared Error)']
    assert cv.summary.index.name == 'lambda'
    text = str(cv).split('\n')
    assert text[0] == 'Least Squares GLMNet Cross Validation'
    assert text[1] == f'{cv.lambda_values.shape[0]} models for 30 predictors in 5 folds'
    assert text[2].startswith('Best λ')

def test_parallel():
    X, y = get_data('poisson')
    folds = np.arange(60) % 3
    cv1 = glmnetcv(X, y, family='poisson', folds=folds)
    cv2 = glmnetcv(X, y, family='poisson', folds=folds, parallel=True, n_jobs=2)
    assert np.allclose(cv1.meanloss, cv2.meanloss)
    assert np.allclose(cv1.stdloss, cv2.stdloss)

def test_weights_offsets():
    X, y = get_data('poisson')
    weights = np.linspace(0.5, 1.5, 60)
    offsets = np.linspace(-0.5, 0.5, 60)
    cv = glmnetcv(X, y, family='poisson', weights=weights, offsets=offsets, nfolds=3, random_state=0)
    assert np.all(np.isfinite(cv.meanloss))

def test_binomial_labels():
    X, y = get_data('binomial')
    labels = np.array(['no', 'yes'])[y]
    folds = np.arange(60) % 3
    cv1 = glmnetcv(X, labels, family='binomial', folds=folds)
    cv2 = glmnetcv(X, np.column_stack([1 - y, y]), family='binomial', folds=folds)
    assert np.allclose(cv1.meanloss, cv2.meanloss)

def test_errors():
    X, y = get_data()
    with pytest.raises(InputValidationError):
        glmnetcv(X, y, folds=np.zeros(60))
    with pytest.raises(InputValidationError):
        glmnetcv(X, y, folds=np.arange(59) % 3)
    with pytest.raises(InputValidationError):
        glmnetcv(X, y, offsets=np.zeros(60))
    with pytest.raises(InputValidationError):
        glmnetcv(X[:5], y[:5]) # a single fold
