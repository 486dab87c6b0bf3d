"""Ordsøk error types."""


class OrdsokError(Exception):
    """Base error for all ordsok failures."""


class OrdsokParseError(OrdsokError, ValueError):
    """An API response or definition could not be normalized."""


class DhlabClientError(OrdsokError):
    """Error communicating with the DH-lab API."""
