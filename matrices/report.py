"""
Tabulate the structural properties of a collection of matrices as a pandas DataFrame.
"""

import abc
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

import pandas as pd

from .matrix import Matrix

T = TypeVar('T')


class PropertyBase(Generic[T]):
    name: str
    dtype: Any = object

    @staticmethod
    @abc.abstractmethod
    def calculate(matrices: Sequence[Matrix]) -> Sequence[T]:
        """Calculate this property for every matrix."""


def _square_only(f):
    """Apply f to square matrices, and give None for the others rather than raising."""
    return lambda matrices: [f(mat) if mat.is_square() else None for mat in matrices]


class Properties:
    class Shape(PropertyBase[tuple]):
        """The pair (nrows, ncols)."""
        name = 'shape'

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[tuple]:
            return [mat.shape() for mat in matrices]

    class Square(PropertyBase[bool]):
        name = 'square'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_square() for mat in matrices]

    class Symmetric(PropertyBase[bool]):
        name = 'symmetric'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_symmetric() for mat in matrices]

    class SkewSymmetric(PropertyBase[bool]):
        name = 'skew_symmetric'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_skew_symmetric() for mat in matrices]

    class UpperTriangular(PropertyBase[bool]):
        name = 'upper'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_upper_triangular() for mat in matrices]

    class LowerTriangular(PropertyBase[bool]):
        name = 'lower'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_lower_triangular() for mat in matrices]

    class Diagonal(PropertyBase[bool]):
        name = 'diagonal'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_diagonal() for mat in matrices]

    class Identity(PropertyBase[bool]):
        name = 'identity'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_identity() for mat in matrices]

    class NonZero(PropertyBase[bool]):
        name = 'nonzero'
        dtype = bool

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[bool]:
            return [mat.is_nonzero() for mat in matrices]

    class Singular(PropertyBase[Optional[bool]]):
        """Whether the determinant is zero, or None for a non-square matrix."""
        name = 'singular'

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[Optional[bool]]:
            return _square_only(Matrix.is_singular)(matrices)

    class Determinant(PropertyBase[Any]):
        """The determinant, or None for a non-square matrix."""
        name = 'determinant'

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[Any]:
            return _square_only(Matrix.determinant)(matrices)

    class Trace(PropertyBase[Any]):
        name = 'trace'

        @staticmethod
        def calculate(matrices: Sequence[Matrix]) -> Sequence[Any]:
            return _square_only(Matrix.trace)(matrices)


DEFAULT_PROPERTIES: list[Type[PropertyBase]] = [
    Properties.Shape,
    Properties.Square,
    Properties.Symmetric,
    Properties.SkewSymmetric,
    Properties.UpperTriangular,
    Properties.LowerTriangular,
    Properties.Diagonal,
    Properties.Identity,
    Properties.NonZero,
    Properties.Singular,
]


def describe(matrices: Sequence[Matrix], properties: Sequence[Type[PropertyBase]] = DEFAULT_PROPERTIES) -> pd.DataFrame:
    """
    Retrieve a DataFrame with one row per matrix: a 'matrix' column holding the matrix itself, followed by a column
    for each of the properties. Boolean properties get a bool column, everything else is kept as Python objects so
    that exact determinants are not converted to floats.
    """
    matrices = list(matrices)
    return pd.DataFrame.from_dict(dict(
        matrix=pd.Series(matrices, dtype=object),
        **{
            prop.name: pd.Series(prop.calculate(matrices), dtype=prop.dtype)
            for prop in properties
        },
    ))


def to_frame(mat: Matrix) -> pd.DataFrame:
    """The entries of a matrix as a DataFrame, indexed by row and column number."""
    return pd.DataFrame(mat.rows(), index=range(mat.nrows), columns=range(mat.ncols))
