"""Exception hierarchy for the measurement store service.

Every per-request failure is a ``MeasureStoreError``; its ``str()`` is sent
back to the caller as the body of a 422 response.
"""


class MeasureStoreError(Exception):
    """Base exception for all service errors."""


class DecodeError(MeasureStoreError):
    """Raised when a request or a stored record has the wrong structure."""


class ReadError(MeasureStoreError):
    """Raised when the uploaded file cannot be read."""


class ParseError(MeasureStoreError):
    """Raised when uploaded bytes are not a valid (extended) JSON document."""


class StoreError(MeasureStoreError):
    """Raised when inserting a document fails."""


class QueryError(MeasureStoreError):
    """Raised when stored documents cannot be queried."""


class RenderError(MeasureStoreError):
    """Raised when the table template cannot be parsed or rendered."""


class StartupError(MeasureStoreError):
    """Raised for fatal conditions while starting the service."""
