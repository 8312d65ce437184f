"""
Exceptions raised by matrix operations. All of them are ValueErrors, so code which already guards against bad
arguments with `except ValueError` keeps working.
"""


class MatrixError(ValueError):
    """Base class for errors raised by matrix operations."""


class DimensionMismatch(MatrixError):
    """The shapes of the operands do not fit together."""


class RaggedRows(DimensionMismatch):
    """Rows given to the constructor do not all have the same length."""


class IncompatibleDimensions(DimensionMismatch):
    """The column count of the left factor differs from the row count of the right factor."""


class NotSquare(MatrixError):
    pass


class Singular(MatrixError):
    pass


class NonIntegerExponent(MatrixError):
    pass
