from flask import Blueprint, jsonify

from sparse_calc import __version__
from sparse_calc.services.matrix_service import MatrixService

main_bp = Blueprint('main', __name__)
matrix_service = MatrixService()

@main_bp.route('/')
def index():
    """Root endpoint"""
    return jsonify({
        'message': 'Sparse Matrix Calculator',
        'version': __version__,
        'status': 'running',
        'operations': matrix_service.get_operations()
    })

@main_bp.route('/health')
def health_check():
    """Health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'message': 'API is running successfully'
    })

@main_bp.route('/api-info')
def api_info():
    """API information endpoint"""
    return jsonify({
        'name': 'Sparse Matrix Calculator',
        'version': __version__,
        'description': 'Addition, subtraction and multiplication of sparse integer matrices',
        'endpoints': {
            'main': '/',
            'health': '/health',
            'api_info': '/api-info',
            'operations': '/api/v1/operations',
            'calculate': '/api/v1/calculate',
            'render': '/api/v1/render'
        }
    })
