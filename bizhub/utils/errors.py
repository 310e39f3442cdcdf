from werkzeug.exceptions import HTTPException


class APIError(HTTPException):
    """Base for errors that render as ``{"success": false, "message": ...}``.

    Subclassing ``HTTPException`` lets flask-restful pick up ``code`` and
    ``data`` directly instead of turning the error into a bare 500.
    """

    code = 500
    default_message = "Internal server error"

    def __init__(self, message=None, errors=None):
        message = message or self.default_message
        super().__init__(description=message)
        self.message = message
        self.errors = errors
        self.data = {"success": False, "message": message}
        if errors:
            self.data["errors"] = errors


class ValidationError(APIError):
    code = 400
    default_message = "Validation failed"


class Unauthorized(APIError):
    code = 401
    default_message = "Authorization required"


class Forbidden(APIError):
    code = 403
    default_message = "Forbidden: Insufficient permissions"


class NotFound(APIError):
    code = 404
    default_message = "Resource not found"


class DashboardError(APIError):
    code = 500
    default_message = "Failed to fetch dashboard"
