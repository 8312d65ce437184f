from .errors import (
    DimensionMismatch,
    IncompatibleDimensions,
    MatrixError,
    NonIntegerExponent,
    NotSquare,
    RaggedRows,
    Singular,
)
from .matrix import Matrix, identity, zeros

__all__ = [
    "DimensionMismatch",
    "IncompatibleDimensions",
    "Matrix",
    "MatrixError",
    "NonIntegerExponent",
    "NotSquare",
    "RaggedRows",
    "Singular",
    "identity",
    "zeros",
]
