"""
DuelLog custom exceptions

Every error raised by the services derives from DuelLogError so the HTTP
layer and the CLI can map them without inspecting messages.
"""

from typing import Optional


class DuelLogError(Exception):
    """Base exception for the match log"""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class NotFoundError(DuelLogError):
    """
    Referenced entity does not exist

    Attributes:
        entity: entity kind ("game", "match", ...)
        key: the lookup key that missed
    """

    status_code = 404

    def __init__(self, entity: str, key: Optional[str] = None):
        self.entity = entity
        self.key = key
        message = f"{entity} not found"
        if key is not None:
            message = f"{message}: {key}"
        super().__init__(message)


class InvalidInputError(DuelLogError):
    """Missing required field or an empty update"""

    status_code = 400


class ConflictError(DuelLogError):
    """Unique identity conflict that could not be resolved locally"""

    status_code = 409


class StoreFailureError(DuelLogError):
    """
    Store I/O or constraint failure

    Attributes:
        original_error: the driver/SQLAlchemy exception
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        if original_error is not None:
            message = f"{message}: {original_error}"
        super().__init__(message)


class BootstrapError(DuelLogError):
    """Schema setup failed; the service must not start"""

    def __init__(self, message: str, step: Optional[str] = None):
        self.step = step
        full_message = f"[{step}] {message}" if step else message
        super().__init__(full_message)
