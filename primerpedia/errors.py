# primerpedia/errors.py
from __future__ import annotations


class PrimerpediaError(Exception):
    """Base class for errors raised by primerpedia."""


class TransportError(PrimerpediaError):
    """
    The request to the Wikipedia API did not produce a usable response
    (connection error, HTTP error status, body that isn't JSON).
    """


class MalformedPayloadError(PrimerpediaError):
    """
    The API answered, but the payload is missing fields needed to build an article.
    """
