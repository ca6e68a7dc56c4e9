"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.
"""
import logging
from typing import Optional

from .domain import DocumentContent, FilingDocument, FilingQuery, LocateResult, NoteTerms
from .errors import InvalidInput
from .ports import DocumentFetcher, FilingLocator, TermExtractor, TextExtractor

logger = logging.getLogger(__name__)


def normalize_cusip(cusip: Optional[str]) -> str:
    """Trim and upper-case a CUSIP, rejecting empty values"""
    if cusip is None or not cusip.strip():
        raise InvalidInput("CUSIP missing")
    return cusip.strip().upper()


def require_params(**params: Optional[str]) -> dict[str, str]:
    """Check that every named parameter is present and non-blank"""
    missing = [name for name, value in params.items() if value is None or not value.strip()]
    if missing:
        raise InvalidInput(
            f"Missing required query params: {', '.join(missing)}",
            example="?cusip=48136H7D4&accessionNo=0001213900-25-104551&cik=19617"
        )
    return {name: value.strip() for name, value in params.items()}


class LocateFilingService:
    """Use case: Find the most recent pricing supplement for a CUSIP"""

    def __init__(self, locator: FilingLocator):
        self.locator = locator

    def execute(self, cusip: Optional[str]) -> LocateResult:
        query = FilingQuery(identifier=normalize_cusip(cusip))
        logger.info(f"locate: {query.identifier} via {self.locator.source}")

        result = self.locator.locate(query)

        if result.found:
            logger.info(
                f"locate: {query.identifier} -> {result.filing.accession_number} "
                f"({result.filings_count} matches)"
            )
        else:
            logger.info(f"locate: {query.identifier} -> no filing found")
        return result


class FetchDocumentService:
    """Use case: Download the primary HTML document of a filing"""

    def __init__(self, fetcher: DocumentFetcher):
        self.fetcher = fetcher

    def execute(self, accession_number: Optional[str], cik: Optional[str]) -> FilingDocument:
        params = require_params(accessionNo=accession_number, cik=cik)
        document = self.fetcher.fetch(params["cik"], params["accessionNo"])
        logger.info(f"fetch: {document.url} ({document.length:,} chars)")
        return document


class ExtractTermsService:
    """Use case: Fetch a filing document and extract its note terms"""

    def __init__(
        self,
        fetcher: DocumentFetcher,
        text_extractor: TextExtractor,
        term_extractor: TermExtractor,
        max_chars: int = 20000
    ):
        self.fetcher = fetcher
        self.text_extractor = text_extractor
        self.term_extractor = term_extractor
        self.max_chars = max_chars

    def execute(
        self,
        cusip: Optional[str],
        accession_number: Optional[str],
        cik: Optional[str]
    ) -> tuple[DocumentContent, NoteTerms]:
        """
        Run fetch -> text -> extract for one filing.

        Returns the bounded document content together with the parsed terms.
        """
        params = require_params(cusip=cusip, accessionNo=accession_number, cik=cik)
        cusip = params["cusip"].upper()
        self.term_extractor.check_configuration()

        document = self.fetcher.fetch(params["cik"], params["accessionNo"])
        text = self.text_extractor.extract(document.html)
        content = DocumentContent(document=document, text=text[:self.max_chars])
        logger.info(
            f"extract: {cusip} {document.file_name} "
            f"text={len(text):,} chars, sending {len(content.text):,}"
        )

        terms = self.term_extractor.extract(content.text, cusip=cusip)
        return content, terms
