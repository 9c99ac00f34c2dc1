"""
API View Helpers
================

Request parsing, JSON error bodies and the translation of service errors
into HTTP status codes:

    ValidationError        400  (409 when code == 'already_released')
    NotFoundError          404
    ConcurrentUpdateError  409
    ConfigurationError     500
    anything else          500, logged with the traceback
"""

from functools import wraps
import json
import logging

from django.http import JsonResponse

from welfare.exceptions import (
    ConcurrentUpdateError,
    ConfigurationError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


CONFLICT_CODES = {'already_released'}


def json_error(msg, code, status, errors=None):
    body = {'msg': msg, 'code': code}
    if errors:
        body['errors'] = errors
    return JsonResponse(body, status=status)


def parse_request_data(request):
    """JSON body for JSON requests, POST data otherwise"""
    if request.content_type == 'application/json':
        if not request.body:
            return {}
        data = json.loads(request.body)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object", code='invalid_body')
        return data
    return request.POST


def form_error_response(form):
    errors = {
        field: [error['message'] for error in field_errors]
        for field, field_errors in form.errors.get_json_data().items()
    }
    first = next(iter(errors.values()))[0] if errors else 'Invalid data'
    return json_error(first, 'invalid', 400, errors)


def validation_error_response(error):
    code = getattr(error, 'code', None) or 'invalid'
    status = 409 if code in CONFLICT_CODES else 400

    errors = None
    if hasattr(error, 'error_dict'):
        errors = error.message_dict
        msg = next(iter(errors.values()))[0]
        codes = [e.code for field_errors in error.error_dict.values() for e in field_errors if e.code]
        if codes:
            code = codes[0]
            status = 409 if code in CONFLICT_CODES else 400
    else:
        msg = error.messages[0] if error.messages else 'Invalid data'

    return json_error(msg, code, status, errors)


def handle_service_errors(view_func):
    """Turn the exceptions raised by welfare.utils services into JSON responses"""
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except ValidationError as e:
            return validation_error_response(e)
        except json.JSONDecodeError:
            return json_error('Request body is not valid JSON', 'invalid_json', 400)
        except NotFoundError as e:
            return json_error(str(e) or 'Not found', 'not_found', 404)
        except ConcurrentUpdateError as e:
            return json_error(str(e), 'concurrent_update', 409)
        except ConfigurationError as e:
            logger.error(f"{request.method} {request.path}: {e}")
            return json_error(str(e), 'configuration_error', 500)
        except Exception:
            logger.exception(f"{request.method} {request.path} failed")
            return json_error('Internal server error', 'server_error', 500)
    return wrapper
