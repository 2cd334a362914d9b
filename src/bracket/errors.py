"""
Error types raised by bracket mutations and the registration store.
"""


class BracketError(Exception):
    """Base class for business errors reported back to the caller."""
    status_code = 400

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self):
        data = {'success': False, 'error': self.message}
        if self.details:
            data['details'] = self.details
        return data


class ValidationError(BracketError):
    """Malformed registration fields or a reference to a team that is not there."""
    status_code = 400


class CapacityExceeded(BracketError):
    """The tournament already holds the maximum number of teams."""
    status_code = 409


class Unauthorized(BracketError):
    status_code = 401


class NotFound(BracketError):
    status_code = 404


class StorageError(BracketError):
    """The data files could not be read or written."""
    status_code = 500
