"""Error taxonomy for the user service and the dispatcher."""


class UserClusterError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIdentifier(UserClusterError):
    """The user id is not a syntactically valid UUID."""

    status_code = 400
    default_message = "Invalid user ID (not UUID)"


class MalformedBody(UserClusterError):
    """The request body is not valid JSON."""

    status_code = 400
    default_message = "Malformed JSON or invalid request"


class InvalidPayload(UserClusterError):
    """The request body parsed but does not describe a user."""

    status_code = 400
    default_message = "Invalid user data in request body"


class NotFound(UserClusterError):
    """No user exists for a valid id."""

    status_code = 404
    default_message = "User not found"


class RouteNotFound(UserClusterError):
    """No route matches the request method and path."""

    status_code = 404
    default_message = "Route not found"

    def __init__(self, method: str, path: str) -> None:
        super().__init__(f"Route not found: {method} {path}")


class UpstreamProxyError(UserClusterError):
    """The dispatcher could not get a response from a worker."""

    status_code = 500
    default_message = "Proxy error"


class InternalError(UserClusterError):
    """An unexpected failure inside a request handler."""

    status_code = 500

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Internal server error: {cause}")
