"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ServiceError(DomainError):
    """Base error for failed Comment Service calls."""

    pass


class TransportFailure(ServiceError):
    """Raised when the service is unreachable or returns a malformed response."""

    pass


class RejectedOperation(ServiceError):
    """Raised when the service answers with a well-formed error."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotAuthorizedError(RejectedOperation):
    """Raised when a user attempts to delete a comment they may not delete."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not authorized to delete {resource} {resource_id}",
            status_code=403,
        )
