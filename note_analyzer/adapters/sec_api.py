"""
sec-api.io Adapter

Implements FilingLocator with the sec-api.io query API: exact-phrase match
of the CUSIP, restricted to the query's form types, newest filing first.
"""
from typing import Any, Optional

import httpx

from ..core.domain import FilingMetadata, FilingQuery, LocateResult
from ..core.errors import MissingConfiguration, ParseError
from ..core.ports import FilingLocator
from .transport import open_client, parse_json, send

SEC_API_URL = "https://api.sec-api.io"


def build_search_query(query: FilingQuery, size: int = 1) -> dict[str, Any]:
    """Request body for the most recent filing(s) mentioning the CUSIP"""
    phrase = f'"{query.identifier}"'
    if query.form_types:
        forms = " OR ".join(f'"{form}"' for form in sorted(query.form_types))
        phrase = f"{phrase} AND formType:({forms})"

    return {
        "query": phrase,
        "from": "0",
        "size": str(size),
        "sort": [{"filedAt": {"order": "desc"}}]
    }


def _to_filing_metadata(entry: Any) -> FilingMetadata:
    if not isinstance(entry, dict):
        raise ParseError("sec-api.io filing entry is not an object", entry=entry)

    accession = entry.get("accessionNo")
    cik = entry.get("cik")
    if not accession or cik is None:
        raise ParseError("sec-api.io filing entry is missing accessionNo or cik", entry=entry)

    return FilingMetadata(
        accession_number=str(accession),
        cik=str(cik),
        form_type=entry.get("formType"),
        filed_at=entry.get("filedAt"),
        company_name=entry.get("companyName") or entry.get("companyNameLong"),
        document_url=entry.get("linkToFilingDetails") or entry.get("linkToHtml")
    )


def parse_search_response(query: FilingQuery, data: Any) -> LocateResult:
    """Validate a query API response and keep only the first filing"""
    if not isinstance(data, dict) or not isinstance(data.get("filings"), list):
        raise ParseError("sec-api.io response did not contain a filings list")

    filings = data["filings"]
    total = data.get("total")
    count = total.get("value") if isinstance(total, dict) else None
    if not isinstance(count, int):
        count = len(filings)

    if not filings:
        return LocateResult(query=query, filings_count=0, source=SecApiLocator.source)

    return LocateResult(
        query=query,
        filings_count=count,
        source=SecApiLocator.source,
        filing=_to_filing_metadata(filings[0])
    )


class SecApiLocator(FilingLocator):
    """Filing locator backed by sec-api.io"""

    source = "sec-api.io"

    def __init__(
        self,
        api_key: Optional[str],
        timeout: float = 30.0,
        client: Optional[httpx.Client] = None,
        url: str = SEC_API_URL
    ):
        self.api_key = api_key
        self.timeout = timeout
        self.client = client
        self.url = url

    def locate(self, query: FilingQuery) -> LocateResult:
        if not self.api_key:
            raise MissingConfiguration("SEC_API_KEY")

        with open_client(self.client, self.timeout) as client:
            response = send(
                client,
                "POST",
                self.url,
                failure_message="Error calling sec-api.io query API",
                json=build_search_query(query),
                headers={"Authorization": self.api_key, "Accept": "application/json"}
            )
            data = parse_json(response, "Could not parse JSON from sec-api.io")

        return parse_search_response(query, data)
