import logging
from datetime import datetime, timezone

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level="INFO"):
    """Install a single stream handler on the package logger"""
    package_logger = logging.getLogger("sparse_calc")
    package_logger.setLevel(level.upper() if isinstance(level, str) else level)

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)

    return package_logger


def format_datetime(dt):
    """Format datetime to ISO string"""
    if isinstance(dt, datetime):
        return dt.isoformat()
    return dt


def matrix_to_dict(matrix):
    """Summarize a matrix for JSON responses"""
    return {
        'rows': matrix.rows,
        'cols': matrix.cols,
        'nnz': matrix.nnz,
        'density': matrix.get_density(),
        'text': matrix.to_text()
    }


def generate_response(success=True, data=None, message=None, error=None):
    """Generate standardized API response"""
    response = {
        'success': success,
        'timestamp': format_datetime(datetime.now(timezone.utc))
    }

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if error:
        response['error'] = error

    return response
