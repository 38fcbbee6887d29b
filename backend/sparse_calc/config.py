import os


class Config:
    """Base configuration read from the environment"""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key')
    LOG_LEVEL = os.environ.get('SPARSE_CALC_LOG_LEVEL', 'INFO')
    OUTPUT_DIR = os.environ.get('SPARSE_CALC_OUTPUT_DIR', 'results')
    MAX_CONTENT_LENGTH = int(os.environ.get('MAX_CONTENT_LENGTH', 1024 * 1024))
    MAX_DIMENSION = int(os.environ.get('SPARSE_CALC_MAX_DIMENSION', 10000))
    TESTING = False


class DevelopmentConfig(Config):
    LOG_LEVEL = os.environ.get('SPARSE_CALC_LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    TESTING = True


config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'default': Config
}
