"""
Compressed storage of the coefficients along a solution path.

The solver stores, for each solution, the values of the variables in
the active set in the order they entered the path. A single index
array `ia` maps storage rows to predictors and is shared by all
solutions: solution `b` uses the first `nin[b]` rows.
"""

from dataclasses import dataclass
from numbers import Integral

import numpy as np
import scipy.sparse


@dataclass(frozen=True)
class CompressedPredictorMatrix(object):
    """
    Read-only `(ni, nsoln)` matrix of coefficients in compressed form.

    Parameters
    ----------
    ni: int
        Number of predictors.
    ca: np.ndarray
        Coefficient values of shape `(nx, nsoln)` in storage order.
    ia: np.ndarray
        Predictor index (0-based) of each storage row, shape `(nx,)`.
    nin: np.ndarray
        Number of storage rows used by each solution, shape `(nsoln,)`.
    """

    ni: int
    ca: np.ndarray
    ia: np.ndarray
    nin: np.ndarray

    @property
    def shape(self):
        return (self.ni, self.nin.shape[0])

    def __getitem__(self, key):
        if not isinstance(key, tuple) or len(key) != 2:
            raise IndexError("CompressedPredictorMatrix requires a pair of indices")
        a, b = key

        if isinstance(a, Integral) and isinstance(b, Integral):
            a = _check_index(a, self.ni, 'predictor')
            b = _check_index(b, self.shape[1], 'solution')
            for i in range(self.nin[b]):
                if self.ia[i] == a:
                    return self.ca[i, b]
            return 0.

        rows = _as_range(a, self.ni)
        if rows is None:
            # not a contiguous increasing range, use the dense view
            dense = self.toarray()[a]
            if isinstance(b, Integral):
                return dense[:, _check_index(b, self.shape[1], 'solution')]
            return dense[:, list(_as_columns(b, self.shape[1]))]

        if isinstance(b, Integral):
            b = _check_index(b, self.shape[1], 'solution')
            return self._get_column(rows, b)

        cols = _as_columns(b, self.shape[1])
        out = np.zeros((len(rows), len(cols)))
        for j, col in enumerate(cols):
            out[:, j] = self._get_column(rows, col)
        if isinstance(a, Integral):
            return out[0]
        return out

    def _get_column(self, rows, b):
        out = np.zeros(len(rows))
        if len(rows) == 0:
            return out
        first, last = rows[0], rows[-1]
        for i in range(self.nin[b]):
            if first <= self.ia[i] <= last:
                out[self.ia[i] - first] = self.ca[i, b]
        return out

    def nactive(self, b=None):
        """
        Number of nonzero coefficients in each solution.

        `nin[b]` can exceed this count: a variable stays in the active
        set after its coefficient returns to zero.
        """
        if b is None:
            b = range(self.shape[1])
        if isinstance(b, Integral):
            b = _check_index(b, self.shape[1], 'solution')
            return int(np.count_nonzero(self.ca[:self.nin[b], b]))
        return np.array([self.nactive(j) for j in _as_columns(b, self.shape[1])], int)

    def toarray(self):
        """
        Dense `(ni, nsoln)` version of the matrix.
        """
        mat = np.zeros(self.shape)
        for b in range(self.shape[1]):
            k = self.nin[b]
            mat[self.ia[:k], b] = self.ca[:k, b]
        return mat

    def to_sparse(self):
        """
        The matrix as a `scipy.sparse.csc_array`.
        """
        data, indices, indptr = [], [], [0]
        for b in range(self.shape[1]):
            k = self.nin[b]
            keep = self.ca[:k, b] != 0
            order = np.argsort(self.ia[:k][keep])
            data.append(self.ca[:k, b][keep][order])
            indices.append(self.ia[:k][keep][order])
            indptr.append(indptr[-1] + keep.sum())
        if data:
            data = np.concatenate(data)
            indices = np.concatenate(indices)
        return scipy.sparse.csc_array((data, indices, np.asarray(indptr)),
                                      shape=self.shape)

    def __array__(self, dtype=None, copy=None):
        mat = self.toarray()
        if dtype is not None:
            mat = mat.astype(dtype)
        return mat

    def __repr__(self):
        return (f"{self.shape[0]}x{self.shape[1]} CompressedPredictorMatrix:\n" +
                np.array2string(self.toarray()))


def _check_index(idx, n, name):
    if not -n <= idx < n:
        raise IndexError(f"{name} index {idx} out of bounds for size {n}")
    return int(idx) % n


def _as_range(a, n):
    """
    Return `a` as a unit-step `range` of predictor indices, or `None`
    if it does not describe a contiguous increasing set.
    """
    if isinstance(a, Integral):
        a = _check_index(a, n, 'predictor')
        return range(a, a + 1)
    if isinstance(a, slice):
        start, stop, step = a.indices(n)
        if step != 1:
            return None
        return range(start, max(start, stop))
    if isinstance(a, range):
        if a.step != 1 and len(a) > 1:
            return None
        a = list(a)
    idx = np.asarray(a)
    if idx.ndim != 1 or idx.dtype.kind not in 'iu':
        return None
    if idx.shape[0] == 0:
        return range(0)
    if np.any(idx < 0) or np.any(idx >= n):
        raise IndexError(f"predictor index out of bounds for size {n}")
    if np.any(np.diff(idx) != 1):
        return None
    return range(int(idx[0]), int(idx[-1]) + 1)


def _as_columns(b, n):
    if isinstance(b, slice):
        return range(*b.indices(n))
    cols = np.asarray(b).reshape(-1)
    return [_check_index(c, n, 'solution') for c in cols]
