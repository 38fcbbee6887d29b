import pytest

from sparse_calc.services.matrix_service import MatrixService
from sparse_calc.utils.errors import InvalidSelectionError, MatrixNotFoundError
from sparse_calc.utils.sparse_matrix import SparseMatrix

@pytest.fixture
def service():
    return MatrixService()

def test_get_operations(service):
    """Test the menu lists the three operations in order"""
    assert service.get_operations() == [
        {'key': '1', 'name': 'addition'},
        {'key': '2', 'name': 'subtraction'},
        {'key': '3', 'name': 'multiplication'},
    ]

@pytest.mark.parametrize("choice", ['0', '4', '', 'add', ' 1', None])
def test_invalid_selection(service, choice):
    """Test anything but 1, 2 or 3 is rejected"""
    with pytest.raises(InvalidSelectionError) as excinfo:
        service.get_operation(choice)

    assert str(excinfo.value) == 'Invalid operation choice.'

@pytest.mark.parametrize("choice,name,expected", [
    ('1', 'addition', 4),
    ('2', 'subtraction', -2),
    ('3', 'multiplication', 3),
])
def test_compute(service, choice, name, expected):
    """Test each selector dispatches to its operation"""
    first = SparseMatrix.from_text("rows=2\ncols=2\n(0,0,1)\n(1,1,2)")
    second = SparseMatrix.from_text("rows=2\ncols=2\n(0,0,3)\n(0,1,4)")

    op_name, result = service.compute(choice, first, second)

    assert op_name == name
    assert result.get_element(0, 0) == expected

def test_load_and_save(service, tmp_path):
    """Test loading a file and saving a result"""
    source = tmp_path / "a.txt"
    source.write_text("rows=1\ncols=1\n(0,0,5)", encoding="utf-8")
    target = tmp_path / "out.txt"

    matrix = service.load_matrix(str(source))
    service.save_result(matrix, str(target))

    assert target.read_text(encoding="utf-8") == "rows=1\ncols=1\n(0, 0, 5)"

def test_load_missing(service, tmp_path):
    """Test the not-found error reaches the caller"""
    with pytest.raises(MatrixNotFoundError):
        service.load_matrix(str(tmp_path / "missing.txt"))
