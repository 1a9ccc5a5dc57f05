"""
Error kinds shared by the services and routes.

Services never let these escape: they are converted into tagged result
dicts (``{"success": False, "error": ..., "error_type": ...}``) at the
service boundary and mapped to HTTP statuses by the routes.
"""
from typing import Dict, Any


class ServiceError(Exception):
    """Base class for classified service failures"""

    error_type = "error"
    status_code = 500
    retryable = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_result(self) -> Dict[str, Any]:
        """Render as a failed service result"""
        return {
            "success": False,
            "error": self.message,
            "error_type": self.error_type,
            "retryable": self.retryable
        }


class ValidationError(ServiceError):
    """Missing or empty field, malformed identifier"""
    error_type = "validation"
    status_code = 400


class NotFoundError(ServiceError):
    """Referenced entity does not exist"""
    error_type = "not_found"
    status_code = 404


class AuthorizationError(ServiceError):
    """Caller is not the owner, or is anonymous where identity is required"""
    error_type = "authorization"
    status_code = 403


class ConflictError(ServiceError):
    """A uniqueness constraint rejected an insert"""
    error_type = "conflict"
    status_code = 409


class DependencyError(ServiceError):
    """Persistence or media store unreachable or failed"""
    error_type = "dependency"
    status_code = 503
    retryable = True


ERROR_STATUS_CODES = {
    cls.error_type: cls.status_code
    for cls in (ValidationError, NotFoundError, AuthorizationError, ConflictError, DependencyError)
}


def status_code_for(error_type: str) -> int:
    """HTTP status for a failed result's error_type"""
    return ERROR_STATUS_CODES.get(error_type, 500)
