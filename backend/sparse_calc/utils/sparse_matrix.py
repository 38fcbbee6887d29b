import logging
import re

from .errors import (
    DimensionMismatchError,
    IntegerOverflowError,
    MatrixFormatError,
    MatrixIOError,
    MatrixNotFoundError,
)

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

ROWS_PATTERN = re.compile(r"rows=(\d+)", re.ASCII)
COLS_PATTERN = re.compile(r"cols=(\d+)", re.ASCII)
ELEMENT_PATTERN = re.compile(r"\((\d+),\s*(\d+),\s*(-?\d+)\)", re.ASCII)


def _fits_int64(value):
    return INT64_MIN <= value <= INT64_MAX


class SparseMatrix:
    """
    Sparse matrix of signed 64-bit integers backed by a dictionary.

    Only stored elements live in ``elements``, keyed by ``(row, col)`` tuples in
    insertion order; every other coordinate reads as 0. Writing outside the
    declared shape grows ``rows``/``cols`` to fit the new coordinate.
    """

    def __init__(self, rows, cols):
        """
        Initializes an empty matrix with the given declared dimensions.

        Args:
            rows (int): Number of rows
            cols (int): Number of columns
        """
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.elements = {}  # (row, col) -> value

    @classmethod
    def from_text(cls, text, source="<string>"):
        """
        Parses a matrix from its sparse text representation.

        Args:
            text (str): Text with ``rows=``/``cols=`` headers followed by
                ``(row, col, value)`` lines
            source (str): Name reported in format errors

        Returns:
            SparseMatrix: The parsed matrix

        Raises:
            MatrixFormatError: If a header or element line is malformed
        """
        lines = [line.strip() for line in text.split("\n")]

        if len(lines) < 2:
            raise MatrixFormatError(
                source, f"File {source} does not contain enough lines for matrix dimensions"
            )

        row_match = ROWS_PATTERN.fullmatch(lines[0])
        col_match = COLS_PATTERN.fullmatch(lines[1])
        if not row_match or not col_match:
            raise MatrixFormatError(
                source,
                f"Invalid dimension format in file {source}. Expected 'rows=X' and 'cols=Y'",
            )

        matrix = cls(int(row_match.group(1)), int(col_match.group(1)))

        for index, line in enumerate(lines[2:], start=3):
            if not line:
                continue

            match = ELEMENT_PATTERN.fullmatch(line)
            if not match:
                raise MatrixFormatError(
                    source,
                    f"Invalid format at line {index} in file {source}: {line}",
                    line_number=index,
                    line=line,
                )

            row, col, value = (int(group) for group in match.groups())
            if not _fits_int64(value):
                raise MatrixFormatError(
                    source,
                    f"Value out of 64-bit range at line {index} in file {source}: {line}",
                    line_number=index,
                    line=line,
                )
            matrix.set_element(row, col, value)

        logger.debug(
            "Parsed %s: %dx%d with %d stored elements",
            source, matrix.rows, matrix.cols, matrix.nnz,
        )
        return matrix

    @classmethod
    def from_file(cls, path):
        """
        Reads and parses a matrix file.

        Raises:
            MatrixNotFoundError: If ``path`` does not exist
            MatrixIOError: If the file exists but cannot be read
            MatrixFormatError: If the content is malformed
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except FileNotFoundError as e:
            raise MatrixNotFoundError(path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise MatrixIOError(path, e) from e

        return cls.from_text(content, source=str(path))

    def get_element(self, row, col):
        """
        Gets the value at the given position.

        Args:
            row (int): Row index (0-based)
            col (int): Column index (0-based)

        Returns:
            int: Stored value at (row, col), 0 if nothing is stored there
        """
        return self.elements.get((row, col), 0)

    def set_element(self, row, col, value):
        """
        Stores a value at the given position, growing the declared shape when
        the position lies outside it. Zero is stored explicitly.

        Args:
            row (int): Row index (0-based)
            col (int): Column index (0-based)
            value (int): Value to store

        Raises:
            IntegerOverflowError: If ``value`` does not fit in 64 bits
        """
        if not _fits_int64(value):
            raise IntegerOverflowError(
                f"Value {value} at ({row}, {col}) overflows a signed 64-bit integer"
            )
        if row >= self.rows:
            self.rows = row + 1
        if col >= self.cols:
            self.cols = col + 1
        self.elements[(row, col)] = value

    def get_non_zero_elements(self):
        """Returns a copy of the stored elements as ``{(row, col): value}``."""
        return self.elements.copy()

    @property
    def nnz(self):
        return len(self.elements)

    def get_density(self):
        """
        Calculates the density of the matrix (percentage of stored elements).

        Returns:
            float: Density as a percentage
        """
        total_elements = self.rows * self.cols
        return (self.nnz / total_elements) * 100 if total_elements > 0 else 0

    def _copy_into(self, result):
        for (r, c), value in self.elements.items():
            result.set_element(r, c, value)

    def add(self, other):
        """
        Adds another sparse matrix to this one.

        Args:
            other (SparseMatrix): Matrix to add

        Returns:
            SparseMatrix: New matrix with the result

        Raises:
            DimensionMismatchError: If the declared shapes differ
        """
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatchError("Matrices must have the same dimensions for addition.")

        result = SparseMatrix(self.rows, self.cols)
        self._copy_into(result)

        for (r, c), value in other.elements.items():
            result.set_element(r, c, result.get_element(r, c) + value)

        return result

    def subtract(self, other):
        """
        Subtracts another sparse matrix from this one.

        Args:
            other (SparseMatrix): Matrix to subtract

        Returns:
            SparseMatrix: New matrix with the result

        Raises:
            DimensionMismatchError: If the declared shapes differ
        """
        if self.rows != other.rows or self.cols != other.cols:
            raise DimensionMismatchError("Matrices must have the same dimensions for subtraction.")

        result = SparseMatrix(self.rows, self.cols)
        self._copy_into(result)

        for (r, c), value in other.elements.items():
            result.set_element(r, c, result.get_element(r, c) - value)

        return result

    def multiply(self, other):
        """
        Multiplies this matrix by another sparse matrix.

        Only stored, nonzero elements of this matrix are visited; for each one
        the matching row of ``other`` is scanned across its columns.

        Args:
            other (SparseMatrix): Right-hand matrix

        Returns:
            SparseMatrix: New ``self.rows`` x ``other.cols`` matrix

        Raises:
            DimensionMismatchError: If ``self.cols != other.rows``
        """
        if self.cols != other.rows:
            raise DimensionMismatchError(
                "Number of columns of first matrix must equal number of rows of second matrix."
            )

        result = SparseMatrix(self.rows, other.cols)

        for (row, col), value1 in self.elements.items():
            if value1 == 0:
                continue
            for k in range(other.cols):
                other_value = other.get_element(col, k)
                if other_value != 0:
                    current_value = result.get_element(row, k)
                    result.set_element(row, k, current_value + value1 * other_value)

        return result

    def to_text(self):
        """
        Serializes the matrix to its sparse text representation.

        Returns:
            str: ``rows=``/``cols=`` headers and one ``(row, col, value)`` line
            per stored element, in insertion order
        """
        lines = [f"rows={self.rows}", f"cols={self.cols}"]
        for (r, c), value in self.elements.items():
            lines.append(f"({r}, {c}, {value})")
        return "\n".join(lines).strip()

    def save_to_file(self, path):
        """
        Writes the text representation to ``path``.

        Raises:
            MatrixIOError: If the file cannot be written
        """
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.to_text())
        except OSError as e:
            raise MatrixIOError(path, e) from e

    def __eq__(self, other):
        if not isinstance(other, SparseMatrix):
            return NotImplemented
        if self.rows != other.rows or self.cols != other.cols:
            return False
        coordinates = set(self.elements) | set(other.elements)
        return all(
            self.get_element(r, c) == other.get_element(r, c) for r, c in coordinates
        )

    def __str__(self):
        return self.to_text()

    def __repr__(self):
        return f"SparseMatrix({self.rows}x{self.cols}, {self.nnz} stored elements)"


def create_sparse_matrix_from_data(rows, cols, data_dict):
    """
    Creates a sparse matrix from a dictionary of values.

    Args:
        rows (int): Number of rows
        cols (int): Number of columns
        data_dict (dict): Keys are (row, col) tuples

    Returns:
        SparseMatrix: New sparse matrix
    """
    matrix = SparseMatrix(rows, cols)
    for key, value in data_dict.items():
        row, col = key
        matrix.set_element(row, col, value)
    return matrix


def create_identity_matrix(size):
    """
    Creates an identity matrix of the given size.

    Args:
        size (int): Size of the identity matrix

    Returns:
        SparseMatrix: Identity matrix
    """
    matrix = SparseMatrix(size, size)
    for i in range(size):
        matrix.set_element(i, i, 1)
    return matrix


def create_zero_matrix(rows, cols):
    """Creates a zero matrix with the given dimensions."""
    return SparseMatrix(rows, cols)
