"""
Response formatters

Shape service results into the JSON payloads consumed by the UI.
Used by both the HTTP server and the CLI so both print the same thing.
"""
from typing import Any, Optional

from .core.domain import DocumentContent, FilingDocument, FilingMetadata, LocateResult, NoteTerms

EXTRACT_SOURCE = "sec.gov + openai"
DOCUMENT_SOURCE = "sec.gov"


def format_filing_meta(filing: Optional[FilingMetadata]) -> Optional[dict[str, Any]]:
    if filing is None:
        return None
    return {
        "accessionNo": filing.accession_number,
        "formType": filing.form_type,
        "filedAt": filing.filed_at,
        "cik": filing.cik,
        "companyName": filing.company_name,
        "documentUrl": filing.document_url,
    }


def format_locate_filing(result: LocateResult) -> dict[str, Any]:
    """Payload for /api/analyze-cusip

    Example output:
        {
          "source": "sec-api.io",
          "cusip": "48136H7D4",
          "filingsCount": 1,
          "filingMeta": {"accessionNo": "0001213900-25-104551", ...},
          "message": "Found the most recent filing mentioning this CUSIP."
        }
    """
    if result.found:
        message = "Found the most recent filing mentioning this CUSIP."
    else:
        message = result.reason or "No 424B2/FWP filing found mentioning this CUSIP."

    body = {
        "source": result.source,
        "cusip": result.query.identifier,
        "filingsCount": result.filings_count,
        "filingMeta": format_filing_meta(result.filing),
        "message": message,
    }
    if result.issuer_cik is not None:
        body["cik"] = result.issuer_cik
    if result.html_preview is not None:
        body["htmlPreview"] = result.html_preview
    return body


def format_fetch_document(
    document: FilingDocument,
    accession_number: str,
    preview_chars: int
) -> dict[str, Any]:
    """Payload for /api/filing-html"""
    return {
        "source": DOCUMENT_SOURCE,
        "accessionNo": accession_number,
        "cik": document.cik,
        "htmlUrl": document.url,
        "htmlFileName": document.file_name,
        "htmlPreview": document.preview(preview_chars),
        "htmlLength": document.length,
        "message": "Fetched filing HTML from sec.gov successfully.",
    }


def format_extract_terms(content: DocumentContent, terms: NoteTerms, cusip: str) -> dict[str, Any]:
    """Payload for /api/parse-filing"""
    document = content.document
    return {
        "source": EXTRACT_SOURCE,
        "cusip": cusip,
        "accessionNo": document.accession_number,
        "cik": document.cik,
        "htmlUrl": document.url,
        "note": terms.to_dict(),
    }
