import numpy as np
import pytest

from glmnetpath.compressed import CompressedPredictorMatrix

# 5 predictors, 3 solutions: predictor 3 enters first, then 0, then 4;
# the coefficient of predictor 3 returns to zero in the last solution
ia = np.array([3, 0, 4])
nin = np.array([1, 2, 3])
ca = np.array([[1., 2., 0.],
               [7., -1., 0.5], # first entry beyond nin[0], never read
               [0., 0., 3.]])

dense = np.array([[0., -1., 0.5],
                  [0., 0., 0.],
                  [0., 0., 0.],
                  [1., 2., 0.],
                  [0., 0., 3.]])

@pytest.fixture
def M():
    return CompressedPredictorMatrix(ni=5, ca=ca, ia=ia, nin=nin)

def test_toarray(M):
    assert M.shape == (5, 3)
    assert np.allclose(M.toarray(), dense)
    assert np.allclose(np.asarray(M), dense)
    assert np.allclose(M.to_sparse().toarray(), dense)

def test_scalar_index(M):
    for a in range(5):
        for b in range(3):
            assert M[a, b] == dense[a, b]
    assert M[-1, 2] == 3
    assert M[0, 0] == 0 # beyond nin[0]

@pytest.mark.parametrize('key', [(5, 0), (0, 3), (-6, 0), (0, -4)])
def test_out_of_bounds(M, key):
    with pytest.raises(IndexError):
        M[key]

@pytest.mark.parametrize('rows', [slice(0, 4), slice(None), range(1, 4), [2, 3, 4],
                                  np.array([0, 1]), slice(1, 1)])
@pytest.mark.parametrize('cols', [0, 2, slice(None), slice(0, 2), [2, 0]])
def test_contiguous_rows(M, rows, cols):
    expected = dense[list(range(5))[rows] if isinstance(rows, slice) else list(rows)]
    expected = expected[:, cols]
    assert np.allclose(M[rows, cols], expected)

@pytest.mark.parametrize('rows', [[4, 0, 3], slice(None, None, 2), np.array([3, 1])])
def test_noncontiguous_rows(M, rows):
    assert np.allclose(M[rows, 1], dense[rows, 1])
    assert np.allclose(M[rows, [0, 2]], dense[rows][:, [0, 2]])

def test_row_with_columns(M):
    assert np.allclose(M[3, :], dense[3])
    assert np.allclose(M[0, [0, 2]], dense[0, [0, 2]])

def test_nactive(M):
    assert M.nactive(0) == 1
    assert M.nactive(2) == 2 # predictor 3 is stored but zero
    assert np.all(M.nactive() == [1, 2, 2])
    assert np.all(M.nactive() <= nin)

def test_repr(M):
    assert repr(M).startswith('5x3 CompressedPredictorMatrix:\n')

def test_empty_solution():
    M = CompressedPredictorMatrix(ni=3,
                                  ca=np.zeros((2, 2)),
                                  ia=np.zeros(2, int),
                                  nin=np.zeros(2, int))
    assert np.all(M.toarray() == 0)
    assert M[2, 1] == 0
    assert np.all(M.nactive() == 0)
