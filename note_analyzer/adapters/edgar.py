"""
EDGAR Adapter

Implements DocumentFetcher against the www.sec.gov filing archives and a
FilingLocator that scans an issuer's submissions feed for the CUSIP.
SEC requires a descriptive User-Agent on every request.
"""
import logging
from typing import Any, Mapping, Optional

import httpx

from ..core.domain import DirectoryItem, FilingDocument, FilingMetadata, FilingQuery, LocateResult
from ..core.errors import NotFound, ParseError
from ..core.ports import DocumentFetcher, FilingLocator
from .transport import open_client, parse_json, send

logger = logging.getLogger(__name__)

ARCHIVES_URL = "https://www.sec.gov/Archives/edgar/data"
SUBMISSIONS_URL = "https://data.sec.gov/submissions"

# Form codes that identify the primary document by file name, in priority order
PRIMARY_FORM_CODES = ("424b2", "fwp")

LOCATOR_PREVIEW_CHARS = 1200

NO_RECENT_FILINGS = "No recent filings found in SEC submissions data."
NO_CANDIDATES = "No 424B2/FWP filings found for this issuer in recent submissions."
NO_CUSIP_MATCH = (
    "Scanned recent 424B2/FWP filings for this issuer but did not find this CUSIP in the HTML."
)


def normalize_cik(cik: str) -> str:
    """Strip leading zeros; EDGAR archive paths use the bare number"""
    return str(cik).strip().lstrip("0") or "0"


def pad_cik(cik: str) -> str:
    """10-digit zero-padded CIK used by the submissions API"""
    return normalize_cik(cik).zfill(10)


def normalize_accession(accession_number: str) -> str:
    """Accession folder names drop the dashes"""
    return accession_number.strip().replace("-", "")


def filing_base_url(cik: str, accession_number: str) -> str:
    return f"{ARCHIVES_URL}/{normalize_cik(cik)}/{normalize_accession(accession_number)}"


def parse_directory_listing(data: Any) -> list[DirectoryItem]:
    """Validate an index.json payload into directory items"""
    directory = data.get("directory") if isinstance(data, dict) else None
    items = directory.get("item") if isinstance(directory, dict) else None
    if not isinstance(items, list):
        raise ParseError("SEC index.json did not contain a directory.item list")

    return [
        DirectoryItem(
            name=item["name"],
            type=item.get("type"),
            size=item.get("size"),
            last_modified=item.get("last-modified")
        )
        for item in items
        if isinstance(item, dict) and isinstance(item.get("name"), str)
    ]


def select_primary_document(items: list[DirectoryItem]) -> Optional[DirectoryItem]:
    """
    Pick the filing's primary document.

    Priority: an HTML file named after a known form code, then any HTML
    file, then the first listed file. First match wins within each tier.
    """
    if not items:
        return None

    html_items = [item for item in items if item.is_html]

    for code in PRIMARY_FORM_CODES:
        for item in html_items:
            if code in item.name.lower():
                return item

    if html_items:
        return html_items[0]

    return items[0]


class EdgarDocumentFetcher(DocumentFetcher):
    """Fetch a filing's primary document via its index.json listing"""

    def __init__(
        self,
        user_agent: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None
    ):
        self.user_agent = user_agent
        self.timeout = timeout
        self.client = client

    def list_directory(self, client: httpx.Client, base_url: str) -> list[DirectoryItem]:
        index_url = f"{base_url}/index.json"
        response = send(
            client,
            "GET",
            index_url,
            failure_message="Failed to fetch SEC index.json",
            headers={"User-Agent": self.user_agent, "Accept": "application/json"}
        )
        data = parse_json(response, "Could not parse index.json from sec.gov")
        return parse_directory_listing(data)

    def fetch(self, cik: str, accession_number: str) -> FilingDocument:
        base_url = filing_base_url(cik, accession_number)

        with open_client(self.client, self.timeout) as client:
            items = self.list_directory(client, base_url)
            if not items:
                raise NotFound(
                    "No files listed in SEC index.json for this filing.",
                    indexUrl=f"{base_url}/index.json"
                )

            doc = select_primary_document(items)
            html_url = f"{base_url}/{doc.name}"

            response = send(
                client,
                "GET",
                html_url,
                failure_message="Failed to fetch the filing HTML from sec.gov",
                headers={"User-Agent": self.user_agent, "Accept": "text/html,application/xhtml+xml"}
            )

        return FilingDocument(
            cik=normalize_cik(cik),
            accession_number=accession_number.strip(),
            url=html_url,
            file_name=doc.name,
            html=response.text
        )


class EdgarSubmissionsLocator(FilingLocator):
    """
    Locate a filing by scanning the issuer's recent pricing supplements.

    The issuer is resolved from the CUSIP's 6-character prefix through an
    injected prefix -> CIK mapping. Candidates are scanned newest first and
    the first primary document containing the CUSIP wins.
    """

    source = "sec.gov"

    def __init__(
        self,
        issuer_map: Mapping[str, str],
        user_agent: str,
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        max_candidates: int = 25
    ):
        self.issuer_map = {prefix.upper(): cik for prefix, cik in issuer_map.items()}
        self.user_agent = user_agent
        self.timeout = timeout
        self.client = client
        self.max_candidates = max_candidates

    def resolve_issuer(self, query: FilingQuery) -> str:
        cik = self.issuer_map.get(query.prefix)
        if not cik:
            raise NotFound(
                f"Unknown issuer prefix {query.prefix}. Add it to the issuer map.",
                cusip=query.identifier
            )
        return normalize_cik(cik)

    def candidates(self, query: FilingQuery, submissions: Any, cik: str) -> list[FilingMetadata]:
        """Pricing-supplement filings from a submissions payload, newest first"""
        recent = _recent_filings(submissions)
        if recent is None:
            return []

        forms = recent.get("form") or []
        accessions = recent.get("accessionNumber") or []
        dates = recent.get("filingDate") or []
        documents = recent.get("primaryDocument") or []
        company = submissions.get("name")

        result = []
        for i, form in enumerate(forms):
            if form not in query.form_types or i >= len(accessions) or i >= len(documents):
                continue
            accession = accessions[i]
            result.append(FilingMetadata(
                accession_number=accession,
                cik=cik,
                form_type=form,
                filed_at=dates[i] if i < len(dates) else None,
                company_name=company,
                document_url=f"{filing_base_url(cik, accession)}/{documents[i]}"
            ))
        return result

    def locate(self, query: FilingQuery) -> LocateResult:
        cik = self.resolve_issuer(query)

        with open_client(self.client, self.timeout) as client:
            response = send(
                client,
                "GET",
                f"{SUBMISSIONS_URL}/CIK{pad_cik(cik)}.json",
                failure_message="Error calling SEC submissions API",
                headers={"User-Agent": self.user_agent, "Accept": "application/json"}
            )
            submissions = parse_json(response, "Could not parse SEC submissions JSON")

            if _recent_filings(submissions) is None:
                return self._not_found(query, cik, NO_RECENT_FILINGS)

            candidates = self.candidates(query, submissions, cik)
            if not candidates:
                return self._not_found(query, cik, NO_CANDIDATES)

            for candidate in candidates[:self.max_candidates]:
                html = self._fetch_candidate(client, candidate)
                if html is not None and query.identifier in html.upper():
                    return LocateResult(
                        query=query,
                        filings_count=1,
                        source=self.source,
                        filing=candidate,
                        html_preview=_preview(html),
                        issuer_cik=cik
                    )

        return self._not_found(query, cik, NO_CUSIP_MATCH)

    def _not_found(self, query: FilingQuery, cik: str, reason: str) -> LocateResult:
        logger.info(f"{query.identifier}: {reason}")
        return LocateResult(query=query, filings_count=0, source=self.source, issuer_cik=cik, reason=reason)

    def _fetch_candidate(self, client: httpx.Client, candidate: FilingMetadata) -> Optional[str]:
        url = candidate.document_url
        try:
            response = client.get(url, headers={"User-Agent": self.user_agent, "Accept": "text/html"})
        except httpx.RequestError as e:
            logger.warning(f"Skipping {url}: {e}")
            return None
        if not response.is_success:
            # Skip unreadable documents, keep scanning
            logger.warning(f"Skipping {url}: HTTP {response.status_code}")
            return None
        return response.text


def _recent_filings(submissions: Any) -> Optional[dict]:
    filings = submissions.get("filings") if isinstance(submissions, dict) else None
    recent = filings.get("recent") if isinstance(filings, dict) else None
    if not isinstance(recent, dict) or not recent.get("form") or not recent.get("accessionNumber"):
        return None
    return recent


def _preview(html: str) -> str:
    if len(html) > LOCATOR_PREVIEW_CHARS:
        return html[:LOCATOR_PREVIEW_CHARS] + "..."
    return html
