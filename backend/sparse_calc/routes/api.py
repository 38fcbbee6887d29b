import os
from uuid import uuid4

import graphviz
from flask import Blueprint, Response, current_app, jsonify, request
from marshmallow import Schema, ValidationError, fields, validate
from werkzeug.utils import secure_filename

from sparse_calc.services.matrix_service import MatrixService
from sparse_calc.utils.errors import (
    MatrixError,
    MatrixIOError,
    MatrixNotFoundError,
    MatrixTooLargeError,
)
from sparse_calc.utils.graph import render_matrix
from sparse_calc.utils.helpers import generate_response, matrix_to_dict

api_bp = Blueprint('api', __name__, url_prefix='/api/v1')
matrix_service = MatrixService()


class MatrixOperationSchema(Schema):
    first = fields.String(required=True)
    second = fields.String(required=True)
    operation = fields.String(required=True)
    save = fields.Boolean(load_default=False)


class RenderSchema(Schema):
    matrix = fields.String(required=True)
    format = fields.String(load_default='dot', validate=validate.OneOf(['dot', 'svg']))
    title = fields.String(load_default='MATRIX')


operation_schema = MatrixOperationSchema()
render_schema = RenderSchema()


def _error_status(error):
    if isinstance(error, MatrixNotFoundError):
        return 404
    if isinstance(error, MatrixIOError):
        return 500
    return 400


@api_bp.errorhandler(MatrixError)
def handle_matrix_error(error):
    status = _error_status(error)
    if status >= 500:
        current_app.logger.exception("Matrix request failed")
    else:
        current_app.logger.warning("Rejected matrix request: %s", error)
    return jsonify(generate_response(success=False, error=str(error))), status


@api_bp.errorhandler(ValidationError)
def handle_validation_error(error):
    current_app.logger.warning("Invalid payload: %s", error.messages)
    return jsonify(generate_response(success=False, error='Invalid request payload', data=error.messages)), 400


@api_bp.errorhandler(graphviz.ExecutableNotFound)
def handle_missing_graphviz(error):
    current_app.logger.error("Graphviz executable not available: %s", error)
    return jsonify(generate_response(success=False, error='Graphviz is not installed on the server')), 503


def _parse_limited(text, source):
    """Parse matrix text, refusing shapes above MAX_DIMENSION"""
    matrix = matrix_service.parse_matrix(text, source)
    limit = current_app.config['MAX_DIMENSION']
    if matrix.rows > limit or matrix.cols > limit:
        raise MatrixTooLargeError(
            f"Matrix {source} is {matrix.rows}x{matrix.cols}; at most {limit} rows and columns are accepted"
        )
    return matrix


def _read_upload(field):
    """Read an uploaded matrix file as text, returning (text, source name)"""
    file = request.files[field]
    source = secure_filename(file.filename) or field
    try:
        return file.read().decode('utf-8'), source
    except UnicodeDecodeError:
        raise ValidationError({field: ['Matrix files must be UTF-8 text']})


def _load_operation_payload():
    """Accept either a JSON body or a multipart upload with 'first'/'second' files"""
    if request.files:
        for field in ('first', 'second'):
            if field not in request.files:
                raise ValidationError({field: ['No file provided']})
        first_text, first_source = _read_upload('first')
        second_text, second_source = _read_upload('second')
        payload = operation_schema.load({
            'first': first_text,
            'second': second_text,
            'operation': request.form.get('operation', ''),
            'save': request.form.get('save', 'false')
        })
        return payload, first_source, second_source

    data = request.get_json(silent=True)
    if not data:
        raise ValidationError({'_schema': ['No data provided']})
    return operation_schema.load(data), 'first', 'second'


@api_bp.route('/operations', methods=['GET'])
def get_operations():
    """List the available operations"""
    operations = matrix_service.get_operations()
    return jsonify(generate_response(data=operations)), 200


@api_bp.route('/calculate', methods=['POST'])
def calculate():
    """Apply addition, subtraction or multiplication to two uploaded matrices"""
    payload, first_source, second_source = _load_operation_payload()

    # Reject the selector before parsing either matrix
    matrix_service.get_operation(payload['operation'])

    first = _parse_limited(payload['first'], first_source)
    second = _parse_limited(payload['second'], second_source)
    name, result = matrix_service.compute(payload['operation'], first, second)

    data = {'operation': name, 'result': matrix_to_dict(result)}

    if payload['save']:
        output_dir = current_app.config['OUTPUT_DIR']
        try:
            os.makedirs(output_dir, exist_ok=True)
        except OSError as e:
            raise MatrixIOError(output_dir, e) from e
        filename = secure_filename(f"{name}_{uuid4().hex}.txt")
        data['saved_to'] = matrix_service.save_result(result, os.path.join(output_dir, filename))

    return jsonify(generate_response(data=data, message=f'Output of {name}')), 200


@api_bp.route('/render', methods=['POST'])
def render():
    """Render a matrix as Graphviz DOT source or SVG"""
    data = request.get_json(silent=True)
    if not data:
        raise ValidationError({'_schema': ['No data provided']})
    payload = render_schema.load(data)

    matrix = _parse_limited(payload['matrix'], 'matrix')
    output = render_matrix(matrix, output_format=payload['format'], title=payload['title'])

    if payload['format'] == 'svg':
        return Response(output, mimetype='image/svg+xml')
    return Response(output, mimetype='text/vnd.graphviz')
