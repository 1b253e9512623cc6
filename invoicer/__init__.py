''' Initialization of the application '''
from json import load
import logging
import os
import secrets
from urllib.parse import quote_plus

from flask import Flask
from flask.wrappers import Response
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError

__version__ = '1.0.0'

db = SQLAlchemy()


def create_app(config=None):
    ''' Application factory '''
    config_file = config or os.environ.get('INVOICER_CONFIG_FILE') or 'config-default.json'
    app = Flask(__name__, static_folder='statics', static_url_path='/statics')
    app.config.from_file(config_file, load=load)
    init_config(app)
    init_logging(app)

    init_db(app, db)
    init_csrf(app)

    from invoicer.middleware import init_middleware
    init_middleware(app)
    register_components(app)
    init_error_handlers(app)

    logging.info("The application is started")
    return app

def init_config(flask_app):
    '''Applies environment overrides on top of the config file'''
    if os.environ.get('INVOICER_USE_POSTGRES'):
        flask_app.config['SQLALCHEMY_DATABASE_URI'] = \
            'postgresql://{user}:{password}@{host}/{db}?sslmode={sslmode}'.format(
                user=quote_plus(os.environ.get('INVOICER_POSTGRES_USER', '')),
                password=quote_plus(os.environ.get('INVOICER_POSTGRES_PASSWORD', '')),
                host=os.environ.get('INVOICER_POSTGRES_HOST', 'localhost'),
                db=os.environ.get('INVOICER_POSTGRES_DB', 'invoicer'),
                sslmode=os.environ.get('INVOICER_POSTGRES_SSLMODE') or 'prefer')
    for key in ('INVOICER_USER', 'INVOICER_PASSWORD'):
        if os.environ.get(key):
            flask_app.config[key] = os.environ[key]
    flask_app.config.setdefault('RESPONSE_HEADERS', {})

def register_components(flask_app):
    import invoicer.invoices
    from invoicer.routes.service import service

    flask_app.register_blueprint(service)
    invoicer.invoices.register_blueprints(flask_app)
    flask_app.logger.info('Blueprints are registered')

def import_models(flask_app):
    import invoicer.invoices.models #pyright: ignore
    with flask_app.app_context():
        db.create_all()

def init_db(flask_app: Flask, db: SQLAlchemy):
    logger = logging.getLogger('init_db()')
    db.init_app(flask_app)
    import_models(flask_app)
    logger.info("Database is initialized")

def init_csrf(flask_app):
    '''
    Creates the CSRF token service. The signing key lives as long as the
    process does and is never persisted
    '''
    from invoicer.auth.csrf import CSRFTokenService
    flask_app.extensions['csrf'] = CSRFTokenService(secrets.token_bytes(32))

def init_error_handlers(flask_app):
    from invoicer.exceptions import InternalStoreError, InvoicerError
    from invoicer.audit import get_app_logger

    @flask_app.errorhandler(InvoicerError)
    def handle_invoicer_error(ex: InvoicerError):
        get_app_logger().warning("%s", ex)
        response = Response(str(ex), status=ex.status, mimetype='text/plain')
        for header, value in ex.headers.items():
            response.headers[header] = value
        return response

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_store_error(ex: SQLAlchemyError):
        db.session.rollback()
        get_app_logger().exception("Store failure")
        return handle_invoicer_error(InternalStoreError(
            f"failed to access invoice store: {ex.__class__.__name__}"))

def init_logging(flask_app):
    logger = logging.getLogger()
    logger.setLevel(flask_app.config['LOG_LEVEL'])
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s\t%(levelname)s\t%(name)s:%(funcName)s(%(filename)s:%(lineno)d): %(message)s"))
        logger.addHandler(handler)
    logger.info("Starting %s", flask_app.name)
    logger.info("Log level is %s", logging.getLevelName(logger.level))
    flask_app.logger.setLevel(flask_app.config['LOG_LEVEL'])
