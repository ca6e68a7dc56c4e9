"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- sec_api.py: sec-api.io filing locator
- edgar.py: EDGAR document fetcher and submissions-based locator
- html_text.py: BeautifulSoup HTML-to-text extractor
- llm.py: OpenAI chat-completion term extractor
- http/: HTTP handlers that expose the services
"""
from .sec_api import SecApiLocator
from .edgar import EdgarDocumentFetcher, EdgarSubmissionsLocator
from .html_text import SoupTextExtractor
from .llm import OpenAITermExtractor

__all__ = [
    "SecApiLocator",
    "EdgarDocumentFetcher",
    "EdgarSubmissionsLocator",
    "SoupTextExtractor",
    "OpenAITermExtractor",
]
