"""Exceptions raised by the FRITZ!Box AHA client."""


class FritzApiClientError(Exception):
    """Base exception for FRITZ!Box client errors."""


class FritzNetworkError(FritzApiClientError):
    """Exception raised when the router cannot be reached."""


class FritzParseError(FritzApiClientError):
    """Exception raised when a response does not have the expected XML shape."""


class FritzAuthError(FritzApiClientError):
    """Exception raised for rejected credentials or missing access rights."""


class FritzCommandError(FritzApiClientError):
    """Exception raised when the router rejects a device command."""
