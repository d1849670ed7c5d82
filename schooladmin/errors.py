"""
Error Types
Raised by the grading services and the backend gateway
"""


class SchoolAdminError(Exception):
    """Base error carrying an HTTP status for the JSON error handler"""
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {
            'success': False,
            'error': self.__class__.__name__,
            'message': self.message,
        }


class ValidationError(SchoolAdminError):
    """Malformed grading or answer input, rejected before any mutation"""
    status_code = 400


class InvalidStateError(SchoolAdminError):
    """Attempt transition requested out of order"""
    status_code = 409


class RemoteError(SchoolAdminError):
    """Backend or network failure; message is passed through from the API"""
    status_code = 502
