# ingres/errors.py
"""
Exception hierarchy shared by the edge functions.

Routes catch these (and anything else) and turn them into JSON
error bodies; `status_code` picks the HTTP status.
"""


class IngresError(Exception):
    """Base error. Surfaces as HTTP 500 unless a subclass says otherwise."""

    status_code = 500


class BadRequestError(IngresError):
    """The caller sent something the function cannot act on."""

    status_code = 400


class ConfigurationError(IngresError):
    """A vendor credential or setting is missing."""


class UpstreamError(IngresError):
    """A vendor API answered with an error or could not be reached."""
