import numpy as np
import pytest

from glmnetpath._utils import (_jerr_glmnet,
                               _check_data,
                               InputValidationError)

@pytest.mark.parametrize('n,fatal,text', [(1000, True, 'unpenalized'),
                                          (1, True, 'Memory allocation'),
                                          (7776, True, 'Memory allocation'),
                                          (7777, True, 'zero variance'),
                                          (8000, True, '< pmin'),
                                          (9000, True, '> 1 - pmin'),
                                          (9999, True, 'Unknown'),
                                          (-3, False, '3-th lambda'),
                                          (-10000, False, '10000-th lambda'),
                                          (-10004, False, 'pmax=12 at 4-th lambda')])
def test_jerr(n, fatal, text):
    errmsg = _jerr_glmnet(n, maxit=100, pmax=12)
    assert errmsg['n'] == n
    assert errmsg['fatal'] == fatal
    assert errmsg['msg'].startswith(f'Error code {n}:')
    assert text in errmsg['msg']

def test_jerr_success():
    errmsg = _jerr_glmnet(0, maxit=100)
    assert not errmsg['fatal']

def test_check_data():
    X = np.arange(12.).reshape((4, 3))
    y = np.arange(4)
    X_, y_, weights, offsets = _check_data(X, y)
    assert X_.flags['F_CONTIGUOUS']
    assert X_ is not X
    assert np.all(weights == 1)
    assert offsets is None

@pytest.mark.parametrize('kwargs', [{'y':np.ones(3)},
                                    {'weights':np.ones(3)},
                                    {'weights':-np.ones(4)},
                                    {'weights':np.zeros(4)},
                                    {'offsets':np.ones(5)}])
def test_check_data_errors(kwargs):
    args = {'X':np.ones((4, 3)), 'y':np.ones(4)}
    args.update(kwargs)
    with pytest.raises(InputValidationError):
        _check_data(**args)
