import pytest

from sparse_calc.utils.errors import DimensionMismatchError, IntegerOverflowError
from sparse_calc.utils.sparse_matrix import (
    INT64_MAX,
    INT64_MIN,
    SparseMatrix,
    create_identity_matrix,
    create_sparse_matrix_from_data,
    create_zero_matrix,
)

@pytest.fixture
def matrix_a():
    """A = [[1, 0], [0, 2]]"""
    return SparseMatrix.from_text("rows=2\ncols=2\n(0,0,1)\n(1,1,2)")

@pytest.fixture
def matrix_b():
    """B = [[3, 4], [0, 0]]"""
    return SparseMatrix.from_text("rows=2\ncols=2\n(0,0,3)\n(0,1,4)")

def test_empty_matrix():
    """Test a freshly constructed matrix reads as all zeros"""
    matrix = SparseMatrix(3, 4)

    assert matrix.rows == 3
    assert matrix.cols == 4
    assert matrix.nnz == 0
    assert matrix.get_element(2, 3) == 0

def test_negative_dimensions_rejected():
    """Test negative dimensions are refused"""
    with pytest.raises(ValueError):
        SparseMatrix(-1, 2)

def test_get_element_has_no_bounds_check():
    """Test any non-negative coordinate can be queried"""
    matrix = SparseMatrix(2, 2)
    assert matrix.get_element(100, 100) == 0
    assert matrix.rows == 2

def test_set_element_replaces_value():
    """Test setting twice keeps the last value"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(0, 1, 5)
    matrix.set_element(0, 1, -3)

    assert matrix.get_element(0, 1) == -3
    assert matrix.nnz == 1

def test_explicit_zero_is_stored():
    """Test zero values are kept as stored elements"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(1, 0, 0)

    assert matrix.nnz == 1
    assert matrix.get_element(1, 0) == 0
    assert "(1, 0, 0)" in matrix.to_text()

def test_growth_on_write():
    """Test writing outside the declared shape grows it"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(5, 5, 7)

    assert matrix.rows == 6
    assert matrix.cols == 6
    assert matrix.get_element(5, 5) == 7

def test_growth_on_write_single_dimension():
    """Test only the exceeded dimension grows"""
    matrix = SparseMatrix(2, 2)
    matrix.set_element(0, 4, 1)

    assert matrix.rows == 2
    assert matrix.cols == 5

def test_set_element_overflow():
    """Test values outside 64 bits are refused"""
    matrix = SparseMatrix(1, 1)
    matrix.set_element(0, 0, INT64_MAX)
    matrix.set_element(0, 0, INT64_MIN)

    with pytest.raises(IntegerOverflowError):
        matrix.set_element(0, 0, INT64_MAX + 1)
    assert matrix.get_element(0, 0) == INT64_MIN

def test_add_scenario(matrix_a, matrix_b):
    """Test addition of two 2x2 matrices"""
    result = matrix_a.add(matrix_b)

    assert (result.rows, result.cols) == (2, 2)
    assert result.get_element(0, 0) == 4
    assert result.get_element(0, 1) == 4
    assert result.get_element(1, 1) == 2
    assert result.get_element(1, 0) == 0

def test_add_does_not_mutate_operands(matrix_a, matrix_b):
    """Test arithmetic leaves its operands untouched"""
    before_a = matrix_a.get_non_zero_elements()
    before_b = matrix_b.get_non_zero_elements()

    matrix_a.add(matrix_b)
    matrix_a.subtract(matrix_b)
    matrix_a.multiply(matrix_b)

    assert matrix_a.get_non_zero_elements() == before_a
    assert matrix_b.get_non_zero_elements() == before_b

def test_additive_identity(matrix_a):
    """Test adding a zero matrix returns an equal matrix"""
    assert matrix_a.add(create_zero_matrix(2, 2)) == matrix_a

def test_add_is_commutative(matrix_a, matrix_b):
    """Test A + B == B + A"""
    assert matrix_a.add(matrix_b) == matrix_b.add(matrix_a)

def test_subtract_inverts_add(matrix_a, matrix_b):
    """Test (A + B) - B == A"""
    assert matrix_a.add(matrix_b).subtract(matrix_b) == matrix_a

def test_subtract_values(matrix_a, matrix_b):
    """Test subtraction with coordinates present in only one operand"""
    result = matrix_a.subtract(matrix_b)

    assert result.get_element(0, 0) == -2
    assert result.get_element(0, 1) == -4
    assert result.get_element(1, 1) == 2

def test_add_dimension_mismatch():
    """Test addition refuses different shapes"""
    with pytest.raises(DimensionMismatchError):
        SparseMatrix(2, 2).add(SparseMatrix(2, 3))

def test_subtract_dimension_mismatch():
    """Test subtraction refuses different shapes"""
    with pytest.raises(DimensionMismatchError):
        SparseMatrix(3, 2).subtract(SparseMatrix(2, 2))

def test_multiply_scenario():
    """Test a 1x2 by 2x1 product"""
    a = SparseMatrix.from_text("rows=1\ncols=2\n(0,0,1)\n(0,1,2)")
    b = SparseMatrix.from_text("rows=2\ncols=1\n(0,0,3)\n(1,0,4)")

    result = a.multiply(b)

    assert (result.rows, result.cols) == (1, 1)
    assert result.get_element(0, 0) == 11

def test_multiply_dimension_mismatch():
    """Test a 2x3 matrix cannot multiply a 2x2 matrix"""
    with pytest.raises(DimensionMismatchError):
        SparseMatrix(2, 3).multiply(SparseMatrix(2, 2))

def test_multiply_general(matrix_a, matrix_b):
    """Test A * B against the dense product"""
    result = matrix_a.multiply(matrix_b)

    # [[1, 0], [0, 2]] * [[3, 4], [0, 0]] = [[3, 4], [0, 0]]
    assert result.get_element(0, 0) == 3
    assert result.get_element(0, 1) == 4
    assert result.get_element(1, 0) == 0
    assert result.get_element(1, 1) == 0
    assert result.nnz == 2

def test_multiply_by_identity():
    """Test multiplying by the identity returns the same matrix"""
    matrix = create_sparse_matrix_from_data(3, 3, {(0, 2): 5, (1, 1): -2, (2, 0): 9})

    assert matrix.multiply(create_identity_matrix(3)) == matrix
    assert create_identity_matrix(3).multiply(matrix) == matrix

def test_multiply_rectangular_shape():
    """Test result shape is rows of the first by cols of the second"""
    a = SparseMatrix(2, 3)
    a.set_element(1, 2, 2)
    b = SparseMatrix(3, 4)
    b.set_element(2, 3, 5)

    result = a.multiply(b)

    assert (result.rows, result.cols) == (2, 4)
    assert result.get_element(1, 3) == 10

def test_arithmetic_overflow():
    """Test sums leaving 64 bits raise instead of wrapping"""
    a = create_sparse_matrix_from_data(1, 1, {(0, 0): INT64_MAX})
    b = create_sparse_matrix_from_data(1, 1, {(0, 0): 1})

    with pytest.raises(IntegerOverflowError):
        a.add(b)

def test_equality_ignores_explicit_zeros():
    """Test an explicit zero equals an absent element"""
    a = SparseMatrix(2, 2)
    b = SparseMatrix(2, 2)
    b.set_element(1, 1, 0)

    assert a == b
    assert a != SparseMatrix(2, 3)

def test_density_and_repr():
    """Test density percentage and repr"""
    matrix = create_sparse_matrix_from_data(2, 2, {(0, 0): 1})

    assert matrix.get_density() == 25
    assert SparseMatrix(0, 0).get_density() == 0
    assert repr(matrix) == "SparseMatrix(2x2, 1 stored elements)"

def test_create_from_data_requires_tuple_keys():
    """Test text-encoded coordinates are not accepted"""
    with pytest.raises(ValueError):
        create_sparse_matrix_from_data(2, 2, {'1,1': 3})
