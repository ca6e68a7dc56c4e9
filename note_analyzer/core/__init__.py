"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models
- errors.py: Failure taxonomy mapped to HTTP statuses
- ports.py: Port interfaces (abstractions for external dependencies)
- services.py: Application services (use cases)
"""
from .domain import (
    FilingQuery,
    FilingMetadata,
    LocateResult,
    DirectoryItem,
    FilingDocument,
    DocumentContent,
    NoteTerms,
)
from .errors import (
    NoteAnalyzerError,
    InvalidInput,
    MissingConfiguration,
    NotFound,
    UpstreamError,
    ParseError,
    ExtractionParseError,
)
from .ports import FilingLocator, DocumentFetcher, TextExtractor, TermExtractor
from .services import LocateFilingService, FetchDocumentService, ExtractTermsService

__all__ = [
    # Domain models
    "FilingQuery",
    "FilingMetadata",
    "LocateResult",
    "DirectoryItem",
    "FilingDocument",
    "DocumentContent",
    "NoteTerms",
    # Errors
    "NoteAnalyzerError",
    "InvalidInput",
    "MissingConfiguration",
    "NotFound",
    "UpstreamError",
    "ParseError",
    "ExtractionParseError",
    # Ports
    "FilingLocator",
    "DocumentFetcher",
    "TextExtractor",
    "TermExtractor",
    # Services
    "LocateFilingService",
    "FetchDocumentService",
    "ExtractTermsService",
]
