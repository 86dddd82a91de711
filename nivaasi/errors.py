import logging
import traceback

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from nivaasi.config import db

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""
    status_code = 500
    error = 'server_error'

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {
            'success': False,
            'error': self.error,
            'message': self.message
        }


class ValidationError(ApiError):
    status_code = 400
    error = 'bad_request'


class InvalidCredentials(ApiError):
    status_code = 401
    error = 'unauthorized'

    def __init__(self, message='Invalid credentials'):
        super().__init__(message)


class NotFound(ApiError):
    status_code = 404
    error = 'not_found'


class Conflict(ApiError):
    status_code = 409
    error = 'conflict'


class UnitOccupied(Conflict):
    error = 'unit_occupied'

    def __init__(self, message='Unit is already occupied'):
        super().__init__(message)


class NoUnitsAvailable(Conflict):
    error = 'no_units_available'

    def __init__(self, message='Property has no available units'):
        super().__init__(message)


class AlreadyUsed(Conflict):
    status_code = 400
    error = 'already_used'

    def __init__(self, message='Connection code has already been used'):
        super().__init__(message)


class HasActiveTenants(Conflict):
    status_code = 400
    error = 'has_active_tenants'


class Expired(ApiError):
    status_code = 400
    error = 'expired'

    def __init__(self, message='Connection code has expired'):
        super().__init__(message)


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def api_error(e):
        logger.warning(f"{request.method} {request.path} rejected: {e.error} - {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def http_error(e):
        if e.code == 404 and request.path.startswith('/api/'):
            return jsonify({
                'error': 'API endpoint not implemented yet',
                'endpoint': request.path,
                'method': request.method
            }), 501
        return jsonify({'success': False, 'error': e.name, 'message': e.description}), e.code

    @app.errorhandler(Exception)
    def server_error(e):
        db.session.rollback()
        logger.error(f"Unhandled error on {request.method} {request.path}: {str(e)}", exc_info=e)
        body = {
            'success': False,
            'error': 'Internal Server Error',
            'message': str(e)
        }
        if app.config.get('NIVAASI_ENV') != 'production':
            body['stack'] = traceback.format_exception(type(e), e, e.__traceback__)
        return jsonify(body), 500
