"""Refresh failure taxonomy."""


class OracleError(Exception):
    """Base class for failures while refreshing a price."""


class NetworkFailure(OracleError):
    """Connection error, timeout or non-success HTTP status."""


class ParseFailure(OracleError):
    """Provider response did not match the expected shape."""


class ConfigurationError(OracleError):
    """Asset entry cannot be mapped to a price provider."""
