"""
arrays: conversion between matrices and numpy arrays.

A Matrix of shape (I, J) corresponds to a 2D numpy array of shape (I, J). Exact entries such as Fractions cannot be
held in a numeric dtype, so matrices containing them become arrays of dtype object unless a dtype is asked for.
"""

from fractions import Fraction

import numpy as np
import numpy.typing as npt

from .errors import DimensionMismatch
from .matrix import Matrix


def to_array(mat: Matrix, dtype: npt.DTypeLike = None) -> npt.NDArray:
    """
    Return the matrix as a 2D numpy array of shape (nrows, ncols).

    >>> to_array(Matrix([1, 2], [3, 4]))
    array([[1, 2],
           [3, 4]])
    >>> to_array(Matrix.zeros(0, 3)).shape
    (0, 3)
    """
    if dtype is None and any(isinstance(x, Fraction) for x in mat.data):
        dtype = object

    # Reshape, since np.array([]) has shape (0,) whatever the number of columns.
    return np.array(mat.rows(), dtype=dtype).reshape(mat.nrows, mat.ncols)


def from_array(A: npt.ArrayLike) -> Matrix:
    """
    Convert a 2D array (or anything numpy can turn into one) to a Matrix. Entries become plain Python scalars, so
    that integer arrays give matrices with exact determinants and inverses.

    >>> from_array(np.arange(4).reshape(2, 2)).rows()
    [[0, 1], [2, 3]]
    """
    A = np.asarray(A)
    if len(A.shape) != 2:
        raise DimensionMismatch(f"Can only convert a 2D array to a matrix, was given an array of shape {A.shape}.")

    I, J = A.shape
    return Matrix._make(I, J, tuple(A.ravel().tolist()))
