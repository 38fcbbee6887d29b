class MatrixError(Exception):
    """Base class for every error raised by the sparse matrix calculator."""


class MatrixNotFoundError(MatrixError):
    """The textual source of a matrix could not be located."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"File not found: {path}")


class MatrixFormatError(MatrixError, ValueError):
    """
    Malformed header or element line in a matrix source.

    Args:
        source (str): File path or label of the text being parsed
        message (str): Description of the problem
        line_number (int): 1-based number of the offending line, if any
        line (str): Raw content of the offending line, if any
    """

    def __init__(self, source, message, line_number=None, line=None):
        self.source = source
        self.line_number = line_number
        self.line = line
        super().__init__(message)


class DimensionMismatchError(MatrixError, ValueError):
    """Operand shapes are incompatible with the requested operation."""


class MatrixIOError(MatrixError):
    """Reading (other than not-found) or writing a matrix file failed."""

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"I/O error on {path}: {reason}")


class InvalidSelectionError(MatrixError, ValueError):
    """Operation selector outside the menu."""


class IntegerOverflowError(MatrixError, OverflowError):
    """A matrix value does not fit in a signed 64-bit integer."""


class MatrixTooLargeError(MatrixError, ValueError):
    """A declared dimension exceeds the limit accepted by a front end."""
