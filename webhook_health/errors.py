"""Error kinds raised while checking webhook health and publishing results."""


class HealthCheckError(Exception):
    """Base for failures that abort a health check run."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RequestTimeout(HealthCheckError):
    """The health request did not complete within its deadline."""

    def __init__(self, timeout: float):
        super().__init__(f"Request timed out after {timeout:g}s")
        self.timeout = timeout


class ApiError(HealthCheckError):
    """The health API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API request failed: {status_code} - {body}", status_code)
        self.body = body


class MalformedResponse(HealthCheckError):
    """The health API answered 2xx with a body that is not a JSON object."""


class ConnectionFailed(HealthCheckError):
    """The health API could not be reached at all."""


class MissingConfiguration(HealthCheckError):
    """A required input was not provided."""


class PublishError(Exception):
    """Raised when the pull-request comment API fails.

    Deliberately outside the HealthCheckError tree: publishing problems are
    reported as warnings and never fail the run.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
