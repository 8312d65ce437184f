import unittest
from fractions import Fraction

from matrices import (
    DimensionMismatch,
    IncompatibleDimensions,
    Matrix,
    NonIntegerExponent,
    NotSquare,
    Singular,
)

M = Matrix([1, 2, 3], [4, 5, 6], [7, 8, 9])
SMALL = Matrix([1, 2], [3, 4])
SMALL_CONSTANT = Matrix([5, 5], [5, 5])
NOT_SQUARE = Matrix([1, 2, 3], [4, 5, 6])
INVERTIBLE = Matrix([2, 1, 1], [1, 3, 2], [1, 0, 0])
FIBONACCI = Matrix([1, 1], [1, 0])


class ZeroTrap(int):
    """An integer which refuses to be a zero factor, to catch expansions of minors which get multiplied by zero."""
    def __mul__(self, other):
        if self == 0:
            raise AssertionError("Expanded a minor whose coefficient is zero")
        return int(self) * other


class TestDeterminant(unittest.TestCase):
    def test_small(self):
        self.assertEqual(-2, SMALL.determinant())
        self.assertEqual(0, M.determinant())
        self.assertEqual(-1, INVERTIBLE.determinant())
        self.assertEqual(7, Matrix([7]).determinant())

    def test_empty(self):
        self.assertEqual(1, Matrix().determinant())

    def test_zero_first_row_entries(self):
        self.assertEqual(-12, Matrix([0, 0, 2], [1, 3, 0], [3, 3, 5]).determinant())
        self.assertEqual(0, Matrix([0, 0], [3, 4]).determinant())

    def test_zero_entries_are_not_expanded(self):
        rows = [[0, 0, 2], [1, 3, 0], [3, 0, 5]]
        trapped = Matrix.from_rows([[ZeroTrap(x) for x in row] for row in rows])
        self.assertEqual(-18, trapped.determinant())

        # Without skipping zeros this would take 12! steps.
        self.assertEqual(1, Matrix.identity(12).determinant())

    def test_triangular(self):
        upper = Matrix([2, 5, 7, 1], [0, 3, 8, 2], [0, 0, 4, 9], [0, 0, 0, 5])
        self.assertEqual(2 * 3 * 4 * 5, upper.determinant())
        self.assertEqual(2 * 3 * 4 * 5, upper.transpose().determinant())

    def test_not_square(self):
        with self.assertRaises(NotSquare):
            NOT_SQUARE.determinant()
        with self.assertRaises(NotSquare):
            NOT_SQUARE.cofactor(0, 0)
        with self.assertRaises(NotSquare):
            NOT_SQUARE.cofactor_matrix()
        with self.assertRaises(NotSquare):
            NOT_SQUARE.adjugate()


class TestInverse(unittest.TestCase):
    def test_cofactors(self):
        self.assertEqual(4, SMALL.cofactor(0, 0))
        self.assertEqual(-3, SMALL.cofactor(0, 1))
        self.assertEqual(Matrix([4, -3], [-2, 1]), SMALL.cofactor_matrix())
        with self.assertRaises(IndexError):
            SMALL.cofactor(2, 0)

    def test_adjugate(self):
        self.assertEqual(Matrix([4, -2], [-3, 1]), SMALL.adjugate())
        self.assertEqual(Matrix([1]), Matrix([5]).adjugate())

        # M adj(M) = det(M) I, even for a singular M.
        for mat in [SMALL, M, INVERTIBLE]:
            self.assertEqual(Matrix.scalar(mat.nrows, mat.determinant()), mat.multiply(mat.adjugate()))

    def test_inverse(self):
        self.assertEqual(Matrix([-2, 1], [1.5, -0.5]), SMALL.inverse())
        self.assertEqual(Fraction(3, 2), SMALL.inverse().get(1, 0))
        self.assertEqual(Matrix([0.25]), Matrix([4]).inverse())
        self.assertEqual(Matrix([0.5, 0], [0, 0.25]), Matrix([2.0, 0.0], [0.0, 4.0]).inverse())

    def test_inverse_round_trip(self):
        for mat in [SMALL, INVERTIBLE, FIBONACCI, Matrix([3, 0, 2], [2, 0, -2], [0, 1, 1])]:
            inverse = mat.inverse()
            self.assertEqual(Matrix.identity(mat.nrows), mat.multiply(inverse))
            self.assertEqual(Matrix.identity(mat.nrows), inverse.multiply(mat))
            self.assertEqual(mat, inverse.inverse())

    def test_inverse_errors(self):
        with self.assertRaises(Singular):
            M.inverse()
        with self.assertRaises(NotSquare):
            NOT_SQUARE.inverse()


class TestArithmetic(unittest.TestCase):
    def test_add(self):
        self.assertEqual(Matrix([6, 7], [8, 9]), SMALL.add(SMALL_CONSTANT))
        self.assertEqual(Matrix([6, 7], [8, 9]), SMALL + SMALL_CONSTANT)
        with self.assertRaises(DimensionMismatch):
            SMALL.add(NOT_SQUARE)

    def test_subtract(self):
        self.assertEqual(Matrix([-4, -3], [-2, -1]), SMALL.subtract(SMALL_CONSTANT))
        self.assertEqual(Matrix([-4, -3], [-2, -1]), SMALL - SMALL_CONSTANT)
        self.assertEqual(Matrix.zeros(2, 3), NOT_SQUARE - NOT_SQUARE)
        with self.assertRaises(DimensionMismatch):
            SMALL.subtract(M)

    def test_scale(self):
        self.assertEqual(Matrix([5, 10, 15], [20, 25, 30], [35, 40, 45]), M.scale(5))
        self.assertEqual(M.scale(5), 5 * M)
        self.assertEqual(M.scale(5), M * 5)
        self.assertEqual(M.scale(-1), -M)

    def test_multiply(self):
        self.assertEqual(Matrix([15, 15], [35, 35]), SMALL.multiply(SMALL_CONSTANT))
        self.assertEqual(Matrix([15, 15], [35, 35]), SMALL * SMALL_CONSTANT)
        self.assertEqual(Matrix([15, 15], [35, 35]), SMALL @ SMALL_CONSTANT)
        self.assertEqual(Matrix([14], [32]), NOT_SQUARE.multiply(Matrix([1], [2], [3])))
        self.assertEqual(Matrix.zeros(2, 2), Matrix.zeros(2, 0).multiply(Matrix.zeros(0, 2)))
        with self.assertRaises(IncompatibleDimensions):
            NOT_SQUARE.multiply(NOT_SQUARE)

    def test_identity_multiplication(self):
        for mat in [M, SMALL, INVERTIBLE, Matrix([7])]:
            n = mat.nrows
            self.assertEqual(mat, mat.multiply(Matrix.identity(n)))
            self.assertEqual(mat, Matrix.identity(n).multiply(mat))

    def test_trace(self):
        self.assertEqual(15, M.trace())
        with self.assertRaises(NotSquare):
            NOT_SQUARE.trace()


class TestPower(unittest.TestCase):
    def test_power(self):
        self.assertEqual(Matrix([468, 576, 684], [1062, 1305, 1548], [1656, 2034, 2412]), M.pow(3))
        self.assertEqual(Matrix([13, 8], [8, 5]), FIBONACCI ** 6)
        self.assertEqual(M, M.pow(1))
        self.assertEqual(Matrix.identity(3), M.pow(0))
        self.assertEqual(SMALL.pow(2), SMALL.pow(2.0))

    def test_power_laws(self):
        for a in range(6):
            for b in range(6):
                self.assertEqual(FIBONACCI.pow(a + b), FIBONACCI.pow(a).multiply(FIBONACCI.pow(b)))
                self.assertEqual(M.pow(a + b), M.pow(a).multiply(M.pow(b)))

    def test_negative_power(self):
        self.assertEqual(SMALL.pow(3).inverse(), SMALL.pow(-3))
        self.assertEqual(SMALL.inverse(), SMALL ** -1)
        for a in range(1, 5):
            self.assertEqual(FIBONACCI.pow(a).inverse(), FIBONACCI.pow(-a))
            self.assertEqual(Matrix.identity(2), FIBONACCI.pow(a).multiply(FIBONACCI.pow(-a)))

    def test_huge_power(self):
        self.assertEqual(Matrix.identity(2), Matrix.identity(2).pow(2**600 - 1))
        self.assertEqual(Matrix([1, 2**100], [0, 1]), Matrix([1, 1], [0, 1]).pow(2**100))
        self.assertEqual(Matrix([1, -(2**100)], [0, 1]), Matrix([1, 1], [0, 1]).pow(-(2**100)))

    def test_power_errors(self):
        with self.assertRaises(NotSquare):
            NOT_SQUARE.pow(2)
        with self.assertRaises(NonIntegerExponent):
            SMALL.pow(0.5)
        with self.assertRaises(NonIntegerExponent):
            SMALL.pow(Fraction(1, 2))
        with self.assertRaises(Singular):
            M.pow(-2)

        # The exponent is only inspected once the matrix is known to be square.
        with self.assertRaises(NotSquare):
            NOT_SQUARE.pow(0.5)
