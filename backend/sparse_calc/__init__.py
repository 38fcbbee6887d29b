from flask import Flask
from flask_cors import CORS
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from .config import config  # noqa: E402
from .utils.helpers import configure_logging  # noqa: E402

__version__ = '1.0.0'


def create_app(config_name='development'):
    """Application factory pattern"""
    app = Flask(__name__)

    # Configuration
    app.config.from_object(config.get(config_name, config['default']))
    configure_logging(app.config['LOG_LEVEL'])

    # Enable CORS
    CORS(app)

    # Register blueprints
    from .routes.main import main_bp
    from .routes.api import api_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    return app
