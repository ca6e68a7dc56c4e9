"""
HTML Text Adapter

Implements TextExtractor with BeautifulSoup: script/style content is
dropped, whitespace collapsed, document order preserved.
"""
from bs4 import BeautifulSoup

from ..core.ports import TextExtractor

DROPPED_TAGS = ["script", "style", "noscript"]


class SoupTextExtractor(TextExtractor):
    """Plain text from filing HTML"""

    def __init__(self, parser: str = "html.parser"):
        self.parser = parser

    def extract(self, html: str) -> str:
        soup = BeautifulSoup(html, self.parser)
        for tag in soup(DROPPED_TAGS):
            tag.decompose()
        text = soup.get_text(separator=" ")
        return " ".join(text.split())
