"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from typing import Optional

import httpx

from .adapters import (
    EdgarDocumentFetcher,
    EdgarSubmissionsLocator,
    OpenAITermExtractor,
    SecApiLocator,
    SoupTextExtractor,
)
from .config import Settings
from .core import ExtractTermsService, FetchDocumentService, FilingLocator, LocateFilingService


class Container:
    """Dependency injection container for the application"""

    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None):
        self.settings = settings

        # Adapters (infrastructure)
        self.locator = self._build_locator(settings, client)
        self.fetcher = EdgarDocumentFetcher(
            user_agent=settings.user_agent,
            timeout=settings.http_timeout,
            client=client
        )
        self.text_extractor = SoupTextExtractor()
        self.term_extractor = OpenAITermExtractor(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.llm_timeout,
            client=client
        )

        # Services (use cases)
        self.locate_filing = LocateFilingService(locator=self.locator)

        self.fetch_document = FetchDocumentService(fetcher=self.fetcher)

        self.extract_terms = ExtractTermsService(
            fetcher=self.fetcher,
            text_extractor=self.text_extractor,
            term_extractor=self.term_extractor,
            max_chars=settings.extract_max_chars
        )

    @staticmethod
    def _build_locator(settings: Settings, client: Optional[httpx.Client]) -> FilingLocator:
        if settings.locator_backend == "edgar":
            return EdgarSubmissionsLocator(
                issuer_map=settings.issuer_map,
                user_agent=settings.user_agent,
                timeout=settings.http_timeout,
                client=client
            )
        return SecApiLocator(
            api_key=settings.sec_api_key,
            timeout=settings.http_timeout,
            client=client
        )
