"""
Errors - Failure taxonomy shared by the core and its adapters

Every error knows the HTTP status it maps to and how to render itself as
the JSON body returned to the caller.
"""
from typing import Any, Optional


class NoteAnalyzerError(Exception):
    """Base class for all handled failures"""

    status_code = 500

    def __init__(self, message: str, **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body = {"message": self.message}
        body.update({k: v for k, v in self.details.items() if v is not None})
        return body


class InvalidInput(NoteAnalyzerError):
    """Missing or empty request parameter"""

    status_code = 400


class MissingConfiguration(NoteAnalyzerError):
    """A required environment variable is not set"""

    status_code = 500

    def __init__(self, variable: str):
        super().__init__(f"{variable} environment variable is not set.")
        self.variable = variable


class NotFound(NoteAnalyzerError):
    """Nothing matched; not a failure of the pipeline"""

    status_code = 404


class UpstreamError(NoteAnalyzerError):
    """Non-success response from an external dependency

    The upstream status code and body are surfaced verbatim.
    """

    def __init__(self, message: str, status: int, body: Optional[str] = None, **details: Any):
        super().__init__(message, status=status, body=body, **details)
        self.status = status
        self.body = body

    @property
    def status_code(self) -> int:  # type: ignore[override]
        return self.status


class ParseError(NoteAnalyzerError):
    """Upstream body was not valid JSON or did not have the expected shape"""

    status_code = 500


class ExtractionParseError(ParseError):
    """Model output was not a JSON object after fence stripping"""

    def __init__(self, message: str, raw: str):
        super().__init__(message, raw=raw)
        self.raw = raw
