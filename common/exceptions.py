import logging

from rest_framework import exceptions
from rest_framework.views import exception_handler

from common.responses import ErrorResponse, format_first_error

logger = logging.getLogger("common.exceptions")


def envelope_exception_handler(exc, context):
    """
    Wrap the errors raised by the framework (authentication, permission, 404, validation...)
    in the same envelope the views return, so clients only ever parse one error shape.
    Anything DRF does not handle is left to Django and surfaces as a 500.
    """
    response = exception_handler(exc, context)
    if response is None:
        view = context.get("view")
        logger.exception(f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}")
        return None

    if isinstance(exc, exceptions.ValidationError):
        message = format_first_error(exc.detail)
        data = exc.detail
    else:
        message = response.data.get("detail", str(exc)) if isinstance(response.data, dict) else str(exc)
        data = None

    logger.warning(f"{context['request'].method} {context['request'].path} failed with {response.status_code}: {message}")
    return ErrorResponse(data=data, message=str(message), status=response.status_code, headers=_forwarded_headers(response))


def _forwarded_headers(response):
    # keep WWW-Authenticate / Allow / Retry-After set by DRF
    return {name: response[name] for name in ("WWW-Authenticate", "Allow", "Retry-After") if response.has_header(name)}
