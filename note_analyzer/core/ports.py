"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the outside world,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from typing import Optional

from .domain import FilingDocument, FilingQuery, LocateResult, NoteTerms


class FilingLocator(ABC):
    """Port for finding the most recent filing that mentions a CUSIP"""

    source: str = ""

    @abstractmethod
    def locate(self, query: FilingQuery) -> LocateResult:
        """Return the newest match, or a result with filings_count == 0"""
        pass


class DocumentFetcher(ABC):
    """Port for downloading a filing's primary document"""

    @abstractmethod
    def fetch(self, cik: str, accession_number: str) -> FilingDocument:
        """Resolve the filing folder and download its primary document"""
        pass


class TextExtractor(ABC):
    """Port for turning HTML into plain text"""

    @abstractmethod
    def extract(self, html: str) -> str:
        pass


class TermExtractor(ABC):
    """Port for extracting structured note terms from document text"""

    def check_configuration(self) -> None:
        """Raise MissingConfiguration before any work is done"""
        pass

    @abstractmethod
    def extract(self, text: str, cusip: Optional[str] = None) -> NoteTerms:
        pass
