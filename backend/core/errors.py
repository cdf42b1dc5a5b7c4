"""Error types shared by the gate, the repositories and the routes.

Every error is terminal for the request. ``backend.main`` renders them as
``{"error": <message>}`` with the class's status code.
"""

from fastapi import status


class PortalError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal server error'

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(PortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = 'Unauthorized'


class Forbidden(PortalError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Access denied'


class ValidationFailed(PortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request'


class NotFound(PortalError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Not found'


class Conflict(PortalError):
    status_code = status.HTTP_409_CONFLICT
    default_message = 'Conflict'


class Internal(PortalError):
    pass


MISSING_ERROR_TYPES = {'missing', 'string_too_short'}
MALFORMED_BODY_MESSAGE = 'Malformed JSON body'
_LOCATION_ROOTS = {'body', 'query', 'path', 'header'}


def describe_validation_errors(errors) -> str:
    """Summarize pydantic errors as one message naming the offending fields."""
    missing: dict[str, None] = {}
    invalid: dict[str, None] = {}
    for error in errors:
        if error.get('type') == 'json_invalid':
            return MALFORMED_BODY_MESSAGE
        parts = [str(part) for part in error.get('loc', ()) if part not in _LOCATION_ROOTS]
        field = '.'.join(parts) or 'body'
        if error.get('type') in MISSING_ERROR_TYPES:
            missing[field] = None
        else:
            invalid[field] = None

    messages = []
    if missing:
        messages.append(f"Missing required fields: {', '.join(missing)}")
    if invalid:
        messages.append(f"Invalid fields: {', '.join(invalid)}")
    return '; '.join(messages) or ValidationFailed.default_message
