"""Newsroom newsletter exceptions module."""


class NewsroomError(Exception):
    """Base exception for all newsletter exceptions."""


class NewsroomInvalidBackendError(NewsroomError):
    """Exception raised when the backend is invalid."""


class NotConfiguredError(NewsroomError):
    """Exception raised when the subscription service is not configured."""


class ClientError(NewsroomError):
    """Base exception for failed requests to the Newsroom API."""


class InvalidResponseError(ClientError):
    """Exception raised when the Newsroom API does not return a valid response."""


class ServiceUnavailableError(ClientError):
    """Exception raised when the Newsroom API cannot serve the request."""


class NotFoundError(ClientError):
    """Exception raised when a subscriber is unknown for a distribution list."""
