import logging

from sparse_calc.utils.errors import InvalidSelectionError
from sparse_calc.utils.sparse_matrix import SparseMatrix

logger = logging.getLogger(__name__)

OPERATIONS = {
    '1': {'name': 'addition', 'method': 'add'},
    '2': {'name': 'subtraction', 'method': 'subtract'},
    '3': {'name': 'multiplication', 'method': 'multiply'}
}


class MatrixService:
    """Loads, combines and saves sparse matrices for every front end"""

    def get_operations(self):
        """Menu entries in selector order"""
        return [{'key': key, 'name': op['name']} for key, op in OPERATIONS.items()]

    def get_operation(self, choice):
        """Resolve a selector ('1', '2' or '3') to its menu entry"""
        operation = OPERATIONS.get(choice)
        if not operation:
            raise InvalidSelectionError('Invalid operation choice.')
        return operation

    def load_matrix(self, path):
        """Load a matrix file"""
        matrix = SparseMatrix.from_file(path)
        logger.info("Loaded %s (%dx%d, %d stored)", path, matrix.rows, matrix.cols, matrix.nnz)
        return matrix

    def parse_matrix(self, text, source):
        """Parse matrix text received from a client"""
        return SparseMatrix.from_text(text, source=source)

    def compute(self, choice, first, second):
        """
        Run the selected operation on two matrices.

        Returns:
            tuple: (operation name, result matrix)
        """
        operation = self.get_operation(choice)
        result = getattr(first, operation['method'])(second)
        logger.info(
            "Computed %s: %dx%d result with %d stored elements",
            operation['name'], result.rows, result.cols, result.nnz
        )
        return operation['name'], result

    def save_result(self, matrix, path):
        """Save a result matrix"""
        matrix.save_to_file(path)
        logger.info("Saved result to %s", path)
        return path
