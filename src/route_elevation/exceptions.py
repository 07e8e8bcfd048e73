"""Custom exception hierarchy for the application."""


class AppError(Exception):
    """Base exception for the application."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class ConfigurationError(AppError):
    """Raised when the deployment is not configured for elevation profiles."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR")


class ValidationError(AppError):
    """Raised when a routing request is inconsistent and the caller must fix it."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="VALIDATION_ERROR")


class InvalidCoordinateError(AppError):
    """Raised when coordinate input is malformed or out of range."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_COORDINATE")


class RoutingError(AppError):
    """Raised when the routing engine reports one or more errors.

    The full list is kept in order on ``errors``; the exception message is
    the first entry.
    """

    def __init__(self, errors: list[str]) -> None:
        super().__init__(errors[0] if errors else "Routing failed", code="ROUTING_ERROR")
        self.errors = list(errors)


class NotFoundError(AppError):
    """Raised when routing succeeded but produced no traversable path."""

    def __init__(self, message: str = "No route found") -> None:
        super().__init__(message, code="ROUTE_NOT_FOUND")


class StateError(AppError):
    """Raised when a routed path lacks elevation although it was requested."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="ELEVATION_STATE_ERROR")


class RoutingEngineUnavailableError(AppError):
    """Raised when the upstream routing engine cannot be reached or fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="ROUTING_ENGINE_UNAVAILABLE")
