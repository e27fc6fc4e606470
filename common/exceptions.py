"""
Custom exceptions for the HMC volunteer portal backend.
"""


class PortalBaseException(Exception):
    """Base exception for all custom exceptions in the portal backend."""
    def __init__(self, message="An error occurred in the volunteer portal"):
        self.message = message
        super().__init__(self.message)

class ValidationError(PortalBaseException):
    """Exception raised for errors in the input validation."""
    def __init__(self, message="Invalid input provided"):
        super().__init__(message)

class InvalidInputError(ValidationError):
    """Exception raised for invalid input data."""
    def __init__(self, message="Invalid input data provided"):
        super().__init__(message)

class MissingFieldError(ValidationError):
    """Exception raised when a required field is missing."""
    def __init__(self, field_name):
        self.field_name = field_name
        message = f"Required field '{field_name}' is missing"
        super().__init__(message)

class DatabaseError(PortalBaseException):
    """Exception raised for errors in database operations."""
    def __init__(self, message="An error occurred during database operation"):
        super().__init__(message)

class NotFoundError(DatabaseError):
    """Exception raised when a requested resource is not found in the database."""
    def __init__(self, resource_type, identifier):
        self.resource_type = resource_type
        self.identifier = identifier
        message = f"{resource_type} with identifier '{identifier}' not found"
        super().__init__(message)

class InvalidUsageError(PortalBaseException):
    """Exception raised by request handlers; carries the HTTP status to return."""
    def __init__(self, message="Invalid request", status_code=400):
        self.status_code = status_code
        super().__init__(message)
