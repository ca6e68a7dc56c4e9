"""
HTTP Handlers

Shared handlers for the HTTP endpoints that use the hexagonal core.
Each returns (status_code, body); errors never escape as unhandled faults.
"""
import asyncio
import logging
from typing import Any, Callable, Optional

from ...container import Container
from ...core.errors import NoteAnalyzerError
from ...formatters import format_extract_terms, format_fetch_document, format_locate_filing

logger = logging.getLogger(__name__)

Result = tuple[int, dict[str, Any]]


class HTTPHandlers:
    """Handlers for the analyzer endpoints using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    async def _run(self, path: str, work: Callable[[], Result]) -> Result:
        try:
            return await asyncio.to_thread(work)
        except NoteAnalyzerError as e:
            logger.info(f"{path}: {e.status_code} {e.message}")
            return e.status_code, e.to_dict()
        except Exception as e:
            logger.exception(f"{path}: FAILED")
            return 500, {
                "message": f"Internal server error in {path}",
                "error": str(e)
            }

    async def analyze_cusip(self, cusip: Optional[str]) -> Result:
        """Locate the most recent filing mentioning a CUSIP"""
        def work() -> Result:
            result = self.container.locate_filing.execute(cusip)
            status = 200 if result.found else 404
            return status, format_locate_filing(result)

        return await self._run("/api/analyze-cusip", work)

    async def filing_html(self, accession_number: Optional[str], cik: Optional[str]) -> Result:
        """Fetch the primary HTML document of a filing"""
        def work() -> Result:
            document = self.container.fetch_document.execute(accession_number, cik)
            return 200, format_fetch_document(
                document,
                accession_number=document.accession_number,
                preview_chars=self.container.settings.preview_chars
            )

        return await self._run("/api/filing-html", work)

    async def parse_filing(
        self,
        cusip: Optional[str],
        accession_number: Optional[str],
        cik: Optional[str]
    ) -> Result:
        """Fetch a filing and extract its note terms"""
        def work() -> Result:
            content, terms = self.container.extract_terms.execute(cusip, accession_number, cik)
            return 200, format_extract_terms(content, terms, cusip=cusip.strip().upper())

        return await self._run("/api/parse-filing", work)
