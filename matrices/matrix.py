from __future__ import annotations

import dataclasses
import logging
import numbers
from fractions import Fraction
from typing import Any, Callable, Sequence

from .errors import (
    DimensionMismatch,
    IncompatibleDimensions,
    NonIntegerExponent,
    NotSquare,
    RaggedRows,
    Singular,
)

logger = logging.getLogger(__name__)

# Laplace expansion takes factorial time: starting one on a matrix at least this big logs a warning.
LARGE_EXPANSION = 9


def _is_row(x) -> bool:
    # Anything indexable with a length counts, so numpy arrays and their rows are unwrapped too.
    if isinstance(x, (str, bytes, numbers.Number)):
        return False
    return hasattr(x, '__len__') and hasattr(x, '__getitem__')


def _normalise(rows: Sequence[Sequence[Any]]) -> tuple[int, int, tuple]:
    """Flatten a sequence of rows into (nrows, ncols, data), rejecting ragged input."""
    ncols = len(rows[0]) if len(rows) > 0 else 0
    if any(len(row) != ncols for row in rows):
        raise RaggedRows("All rows must have the same length")

    return len(rows), ncols, tuple(x for row in rows for x in row)


def _reciprocal(x):
    # Integer determinants give exact rational inverses.
    if isinstance(x, numbers.Integral):
        return Fraction(1, int(x))
    return 1 / x


def _as_exponent(exponent) -> int:
    if isinstance(exponent, numbers.Integral):
        return int(exponent)
    if isinstance(exponent, numbers.Real) and float(exponent).is_integer():
        return int(exponent)
    raise NonIntegerExponent(f"Cannot raise a matrix to the non-integer exponent {exponent!r}")


@dataclasses.dataclass(init=False, frozen=True)
class Matrix:
    """
    An immutable rectangular matrix, suitable for use as a dictionary key. The cells can be any numbers (or any
    values supporting +, - and *), and every operation returns a new matrix. Matrices may be constructed from
    their rows, given either one at a time::

    >>> Matrix([1, 2, 3], [4, 5, 6])
    Matrix([
        [1, 2, 3],
        [4, 5, 6],
    ])

    or as a single sequence of rows::

    >>> Matrix([[1, 2, 3], [4, 5, 6]]) == Matrix([1, 2, 3], [4, 5, 6])
    True

    Construction of special matrices::

    >>> Matrix.identity(2)
    Matrix([
        [1, 0],
        [0, 1],
    ])
    >>> Matrix.scalar(2, 6)
    Matrix([
        [6, 0],
        [0, 6],
    ])
    >>> Matrix.zeros(2, 3)
    Matrix([
        [0, 0, 0],
        [0, 0, 0],
    ])

    The cells are stored in row-major order in `data`.
    """
    nrows: int
    ncols: int
    data: tuple

    def __init__(self, *rows: Sequence[Any]):
        if len(rows) == 1 and len(rows[0]) > 0 and _is_row(rows[0][0]):
            rows = rows[0]

        nrows, ncols, data = _normalise(rows)
        object.__setattr__(self, 'nrows', nrows)
        object.__setattr__(self, 'ncols', ncols)
        object.__setattr__(self, 'data', data)

    @classmethod
    def _make(cls, nrows: int, ncols: int, data: tuple) -> Matrix:
        """Build a matrix directly from its row-major cells, bypassing row normalisation."""
        data = tuple(data)
        if not (nrows >= 0 and ncols >= 0):
            raise ValueError("Cannot have a negative number of rows or columns.")
        if not nrows * ncols == len(data):
            raise ValueError("Length of data incompatible")
        mat = object.__new__(cls)
        object.__setattr__(mat, 'nrows', nrows)
        object.__setattr__(mat, 'ncols', ncols)
        object.__setattr__(mat, 'data', data)
        return mat

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> Matrix:
        """
        Construct a matrix from a sequence of rows, which must have uniform lengths. An empty sequence gives the
        0 x 0 matrix.

        >>> Matrix.from_rows([[1, 2, 3], [4, 5, 6]]).rows()
        [[1, 2, 3], [4, 5, 6]]
        >>> Matrix.from_rows([]).shape()
        (0, 0)
        """
        return cls._make(*_normalise(rows))

    @classmethod
    def identity(cls, size: int) -> Matrix:
        """
        >>> Matrix.identity(2).rows()
        [[1, 0], [0, 1]]
        """
        return cls._make(size, size, tuple(1 if i == j else 0 for i in range(size) for j in range(size)))

    @classmethod
    def zeros(cls, nrows: int, ncols: int) -> Matrix:
        """
        >>> Matrix.zeros(1, 3)
        Matrix([[0, 0, 0]])
        """
        return cls._make(nrows, ncols, tuple(0 for _ in range(nrows * ncols)))

    @classmethod
    def scalar(cls, size: int, scalar) -> Matrix:
        """
        Create an n x n scalar matrix: the diagonal matrix with every diagonal entry equal to the scalar.

        >>> Matrix.scalar(3, 6).rows()
        [[6, 0, 0], [0, 6, 0], [0, 0, 6]]
        """
        return cls._make(size, size, tuple(scalar if i == j else 0 for i in range(size) for j in range(size)))

    @classmethod
    def row_vector(cls, elems: Sequence[Any]) -> Matrix:
        return cls._make(1, len(elems), tuple(elems))

    @classmethod
    def col_vector(cls, elems: Sequence[Any]) -> Matrix:
        return cls._make(len(elems), 1, tuple(elems))

    # Shape and element access.

    def num_rows(self) -> int:
        return self.nrows

    def num_columns(self) -> int:
        return self.ncols

    def shape(self) -> tuple[int, int]:
        return self.nrows, self.ncols

    def indices(self):
        return ((i, j) for i in range(self.nrows) for j in range(self.ncols))

    def entries(self):
        """Return an iterator over the entries of the matrix, in row-major order."""
        return iter(self.data)

    def rows(self) -> list[list]:
        """Return the matrix as a list of lists of rows.

        >>> Matrix([1, 2], [3, 4]).rows()
        [[1, 2], [3, 4]]
        """
        return [list(self._row(i)) for i in range(self.nrows)]

    def columns(self) -> list[list]:
        """
        >>> Matrix([1, 2], [3, 4]).columns()
        [[1, 3], [2, 4]]
        """
        return [list(self.data[j::self.ncols]) for j in range(self.ncols)]

    def _row(self, i: int) -> tuple:
        return self.data[self.ncols * i:self.ncols * (i + 1)]

    def _checkbounds(self, i, j):
        if not (0 <= i < self.nrows and 0 <= j < self.ncols):
            raise IndexError(f"Index ({i}, {j}) out of range for matrix with dimensions ({self.nrows}, {self.ncols})")

    def __getitem__(self, key):
        """
        For a matrix M, M[i, j] returns the zero-indexed (i, j)th entry. Unlike get(), indices out of range raise
        an IndexError.

        >>> M = Matrix([1, 2, 3], [4, 5, 6])
        >>> M[0, 0]
        1
        >>> M[1, 1]
        5
        """
        if not isinstance(key, tuple) or len(key) != 2:
            raise KeyError(f"Supplied key {key!r} should be a tuple of length 2.")

        i, j = key
        self._checkbounds(i, j)
        return self.data[self.ncols * i + j]

    def get(self, row: int, col: int):
        """
        Return the entry at (row, col), or None if either index lies outside the matrix.

        >>> M = Matrix([1, 2, 3], [4, 5, 6])
        >>> M.get(1, 2)
        6
        >>> M.get(500, 0) is None and M.get(0, -1) is None
        True
        """
        if 0 <= row < self.nrows and 0 <= col < self.ncols:
            return self.data[self.ncols * row + col]
        return None

    def get_row(self, row: int) -> Matrix:
        """
        Return a row of the matrix as a row vector.
        """
        if not 0 <= row < self.nrows:
            raise IndexError(f"Row {row} is out of bounds for a {self.nrows} x {self.ncols} matrix.")

        return Matrix._make(1, self.ncols, self._row(row))

    def get_column(self, col: int) -> Matrix:
        """
        Return a column of the matrix as a column vector.
        """
        if not 0 <= col < self.ncols:
            raise IndexError(f"Column {col} is out of bounds for a {self.nrows} x {self.ncols} matrix.")

        return Matrix._make(self.nrows, 1, self.data[col::self.ncols])

    # Structural operations. These never fail on out-of-range indices: slices clamp like Python slices, and
    # omitting a row or column which does not exist leaves the matrix as it is.

    def _take(self, rows: Sequence[int], cols: Sequence[int]) -> Matrix:
        return Matrix._make(len(rows), len(cols), tuple(self.data[self.ncols * i + j] for i in rows for j in cols))

    def slice_rows(self, start: int | None = None, end: int | None = None) -> Matrix:
        """
        The half-open range [start, end) of rows.

        >>> Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9]).slice_rows(0, 2).rows()
        [[1, 2, 3], [4, 5, 6]]
        >>> Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9]).slice_rows(5).shape()
        (0, 3)
        """
        return self._take(range(self.nrows)[start:end], range(self.ncols))

    def slice_columns(self, start: int | None = None, end: int | None = None) -> Matrix:
        """
        >>> Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9]).slice_columns(1).rows()
        [[2, 3], [5, 6], [8, 9]]
        """
        return self._take(range(self.nrows), range(self.ncols)[start:end])

    def slice_block(self, row_start: int | None, row_end: int | None, col_start: int | None, col_end: int | None):
        return self.slice_rows(row_start, row_end).slice_columns(col_start, col_end)

    def omit_row(self, row: int) -> Matrix:
        return self._take([i for i in range(self.nrows) if i != row], range(self.ncols))

    def omit_column(self, col: int) -> Matrix:
        return self._take(range(self.nrows), [j for j in range(self.ncols) if j != col])

    def replace(self, row: int, col: int, value) -> Matrix:
        """
        Return a copy of the matrix with the entry at (row, col) replaced by value.

        >>> Matrix([1, 2], [3, 4]).replace(1, 0, 9).rows()
        [[1, 2], [9, 4]]
        """
        self._checkbounds(row, col)
        newdata = list(self.data)
        newdata[self.ncols * row + col] = value
        return Matrix._make(self.nrows, self.ncols, tuple(newdata))

    def combine_horizontal(self, other: Matrix) -> Matrix:
        """
        Place other to the right of this matrix.

        >>> Matrix([1, 2], [3, 4]).combine_horizontal(Matrix([5], [6])).rows()
        [[1, 2, 5], [3, 4, 6]]
        """
        if self.nrows != other.nrows:
            raise DimensionMismatch(
                f"Cannot horizontally combine matrices with different numbers of rows: {self.nrows} and {other.nrows}"
            )

        newdata = tuple(x for i in range(self.nrows) for x in self._row(i) + other._row(i))
        return Matrix._make(self.nrows, self.ncols + other.ncols, newdata)

    def combine_vertical(self, other: Matrix) -> Matrix:
        """
        Place other underneath this matrix.
        """
        if self.ncols != other.ncols:
            raise DimensionMismatch(
                f"Cannot vertically combine matrices with different numbers of columns: {self.ncols} and {other.ncols}"
            )

        return Matrix._make(self.nrows + other.nrows, self.ncols, self.data + other.data)

    def transpose(self) -> Matrix:
        """
        >>> Matrix([1, 2, 3], [4, 5, 6]).transpose().rows()
        [[1, 4], [2, 5], [3, 6]]
        """
        return Matrix._make(self.ncols, self.nrows, tuple(self[j, i] for i in range(self.ncols) for j in range(self.nrows)))

    def map(self, f: Callable[[Any], Any]) -> Matrix:
        """Map a function over the entries of the matrix."""
        return Matrix._make(self.nrows, self.ncols, tuple(f(c) for c in self.data))

    # Determinants and inverses, by cofactor (Laplace) expansion. This is factorial time in the size of the matrix,
    # but needs nothing more than +, - and * of the entries, and is exact for exact entries.

    def _laplace(self):
        """Expand the determinant along the first row. Assumes the matrix is square."""
        if self.nrows == 0:
            return 1
        if self.nrows == 1:
            return self.data[0]

        total = 0
        for j in range(self.ncols):
            # No need to expand the minor if it will be multiplied by zero anyway.
            if self.data[j] == 0:
                continue
            total += self.data[j] * self._signed_minor(0, j)

        return total

    def _signed_minor(self, row: int, col: int):
        sign = -1 if (row + col) % 2 else 1
        return sign * self.omit_row(row).omit_column(col)._laplace()

    def determinant(self):
        """
        The determinant of a square matrix. The determinant of the 0 x 0 matrix is 1.

        >>> Matrix([1, 2], [3, 4]).determinant()
        -2
        >>> Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9]).determinant()
        0
        """
        if not self.is_square():
            raise NotSquare("Cannot compute the determinant of a non-square matrix")
        if self.nrows >= LARGE_EXPANSION:
            logger.warning("Computing the determinant of a %d x %d matrix by cofactor expansion", self.nrows, self.ncols)

        return self._laplace()

    def cofactor(self, row: int, col: int):
        """
        The (row, col) cofactor: the determinant of the minor with that row and column deleted, times (-1)^(row + col).
        """
        if not self.is_square():
            raise NotSquare("Cannot compute a cofactor of a non-square matrix")
        self._checkbounds(row, col)

        return self._signed_minor(row, col)

    def cofactor_matrix(self) -> Matrix:
        if not self.is_square():
            raise NotSquare("Cannot compute the cofactor matrix of a non-square matrix")
        if self.nrows >= LARGE_EXPANSION:
            logger.warning("Computing the cofactor matrix of a %d x %d matrix by cofactor expansion", self.nrows, self.ncols)

        return Matrix._make(self.nrows, self.ncols, tuple(self._signed_minor(i, j) for i, j in self.indices()))

    def adjugate(self) -> Matrix:
        """
        The adjugate is the transpose of the cofactor matrix, so that M * adj(M) = det(M) * I.

        >>> Matrix([1, 2], [3, 4]).adjugate().rows()
        [[4, -2], [-3, 1]]
        """
        return self.cofactor_matrix().transpose()

    def inverse(self) -> Matrix:
        """
        The inverse of a nonsingular square matrix, computed as adj(M) / det(M). When the determinant is an integer
        the result has exact Fraction entries.

        >>> Matrix([1, 2], [3, 4]).inverse() == Matrix([-2, 1], [1.5, -0.5])
        True
        """
        if not self.is_square():
            raise NotSquare("Cannot compute the inverse of a non-square matrix")

        det = self.determinant()
        if det == 0:
            raise Singular("Cannot compute the inverse of a singular matrix")

        logger.debug("Inverting a %d x %d matrix with determinant %r", self.nrows, self.ncols, det)
        return self.adjugate().scale(_reciprocal(det))

    # Arithmetic.

    def add(self, other: Matrix) -> Matrix:
        if self.shape() != other.shape():
            raise DimensionMismatch(f"Cannot add matrices of different sizes: {self.shape()} and {other.shape()}")

        return Matrix._make(self.nrows, self.ncols, tuple(a + b for a, b in zip(self.data, other.data)))

    def subtract(self, other: Matrix) -> Matrix:
        """
        >>> Matrix([1, 2], [3, 4]).subtract(Matrix([5, 5], [5, 5])).rows()
        [[-4, -3], [-2, -1]]
        """
        return other.scale(-1).add(self)

    def scale(self, scalar) -> Matrix:
        return Matrix._make(self.nrows, self.ncols, tuple(scalar * x for x in self.data))

    def multiply(self, other: Matrix) -> Matrix:
        """
        >>> M = Matrix([1, 1], [1, 0]) # Fibonacci matrix
        >>> M.multiply(M).multiply(M).rows()
        [[3, 2], [2, 1]]
        """
        if self.ncols != other.nrows:
            raise IncompatibleDimensions(f"Matrix dimensions incompatible: {self.shape()} * {other.shape()}")

        newdata = [0] * (self.nrows * other.ncols)
        for i in range(self.nrows):
            for j in range(other.ncols):
                for k in range(self.ncols):
                    newdata[other.ncols * i + j] += self.data[self.ncols * i + k] * other.data[other.ncols * k + j]

        return Matrix._make(self.nrows, other.ncols, tuple(newdata))

    def pow(self, exponent: int) -> Matrix:
        """
        Raise a square matrix to an integer power by repeated squaring. Negative powers are powers of the inverse.

        >>> (Matrix([1, 1], [1, 0]) ** 6).rows()
        [[13, 8], [8, 5]]
        >>> Matrix([2, 0], [0, 4]).pow(-1) == Matrix([0.5, 0], [0, 0.25])
        True
        """
        if not self.is_square():
            raise NotSquare("Can only take powers of square matrices")

        exponent = _as_exponent(exponent)
        if exponent == 0:
            return Matrix.identity(self.nrows)
        if exponent < 0:
            logger.debug("Raising a %d x %d matrix to the power %d through its inverse", self.nrows, self.ncols, exponent)
            return self.pow(-exponent).inverse()

        # Work through the bits of the exponent from the top: an odd power is one more factor of self on the power
        # below it, an even power is the square of half of it.
        acc = Matrix.identity(self.nrows)
        for i, bit in enumerate(bin(exponent)[2:]):
            if i > 0:
                acc = acc.multiply(acc)
            if bit == '1':
                acc = acc.multiply(self)

        return acc

    def trace(self):
        """
        The trace of a square matrix is the sum of the diagonal entries.

        >>> Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9]).trace()
        15
        """
        if not self.is_square():
            raise NotSquare("Trace defined only for square matrices")

        return sum(self.data[self.ncols*i + i] for i in range(self.nrows))

    def __add__(self, other):
        if isinstance(other, Matrix):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Matrix):
            return self.subtract(other)
        return NotImplemented

    def __neg__(self):
        return self.scale(-1)

    def __mul__(self, other):
        if isinstance(other, numbers.Number):
            return self.scale(other)
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, numbers.Number):
            return self.scale(other)
        return NotImplemented

    def __matmul__(self, other):
        if isinstance(other, Matrix):
            return self.multiply(other)
        return NotImplemented

    def __pow__(self, exponent):
        return self.pow(exponent)

    # Predicates.

    def equals(self, other) -> bool:
        """Two matrices are equal when they have the same shape and the same entries."""
        return isinstance(other, Matrix) and self == other

    def is_square(self) -> bool:
        return self.nrows == self.ncols

    def is_symmetric(self) -> bool:
        return self.transpose().equals(self)

    def is_skew_symmetric(self) -> bool:
        """
        >>> Matrix([0, 2], [-2, 0]).is_skew_symmetric()
        True
        """
        return self.transpose().scale(-1).equals(self)

    def is_upper_triangular(self) -> bool:
        """True if every entry strictly below the diagonal is zero. Need not be square."""
        return not any(self.data[self.ncols * i + j] for i in range(self.nrows) for j in range(min(i, self.ncols)))

    def is_lower_triangular(self) -> bool:
        return self.transpose().is_upper_triangular()

    def is_diagonal(self) -> bool:
        return self.is_upper_triangular() and self.is_lower_triangular()

    def is_identity(self) -> bool:
        return self.is_square() and Matrix.identity(self.nrows).equals(self)

    def is_nonzero(self) -> bool:
        return any(self.data)

    def is_singular(self) -> bool:
        return self.determinant() == 0

    def is_integral(self) -> bool:
        return all(isinstance(c, numbers.Integral) for c in self.data)

    # Display.

    def __repr__(self):
        """
        >>> Matrix.zeros(5, 0)
        Matrix.zeros(5, 0)
        >>> Matrix([1, 2, 3, 4])
        Matrix([[1, 2, 3, 4]])
        >>> Matrix([1], [2], [3], [4])
        Matrix([[1], [2], [3], [4]])
        >>> Matrix([2, 3, 4], [5, 6, 7])
        Matrix([
            [2, 3, 4],
            [5, 6, 7],
        ])
        """
        if self.nrows == 0 or self.ncols == 0:
            return f'Matrix.zeros({self.nrows}, {self.ncols})'
        if self.nrows == 1:
            return 'Matrix([[' + ', '.join(repr(c) for c in self.data) + ']])'
        if self.ncols == 1:
            return 'Matrix([' + ', '.join(f'[{c!r}]' for c in self.data) + '])'
        return '\n'.join([
            'Matrix([',
            *(
                '    [' + ', '.join(repr(c) for c in self._row(i)) + '],'
                for i in range(self.nrows)
            ),
            '])'
        ])

    def _repr_latex_(self):
        def get_repr(x):
            return x._repr_latex_() if hasattr(x, '_repr_latex_') else str(x)

        return ''.join([
            r'\begin{pmatrix}',
            r' \\ '.join(' & '.join(get_repr(c) for c in self._row(i)) for i in range(self.nrows)),
            r'\end{pmatrix}',
        ])

    def __str__(self):
        rows = ['[' + ', '.join(str(c) for c in row) + ']' for row in self.rows()]
        return f"M[{', '.join(rows)}]"


def identity(size: int) -> Matrix:
    """The size x size identity matrix."""
    return Matrix.identity(size)


def zeros(nrows: int, ncols: int) -> Matrix:
    """The nrows x ncols matrix of zeros."""
    return Matrix.zeros(nrows, ncols)
