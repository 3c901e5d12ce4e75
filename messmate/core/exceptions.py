class MessMateException(Exception):
    """Base exception for MessMate"""

    pass


class UnauthorizedException(MessMateException):
    """Raised when JWT validation fails"""

    pass


class NotFoundException(MessMateException):
    """Raised when resource not found"""

    pass


class ForbiddenException(MessMateException):
    """Raised when an actor tries to manage a group it does not own"""

    pass


class ValidationException(MessMateException):
    """Raised for business logic validation errors"""

    pass


class LedgerException(MessMateException):
    """Base for failures inside the ledger stores.

    These never reach callers of a store: the store logs them and abandons
    the operation, leaving the previous snapshot in place.
    """

    pass


class TenantResolutionFailure(LedgerException):
    """Raised when no group can be resolved for the current actor"""

    pass


class PersistenceFailure(LedgerException):
    """Raised when the persistence backend rejects or fails a call"""

    pass
