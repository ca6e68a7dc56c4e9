"""
LLM Adapter

Implements TermExtractor with the OpenAI chat-completions endpoint.
The model is asked for bare JSON in a fixed schema; markdown fences are
stripped anyway since the instruction is not always honored.
"""
import json
import logging
import re
from typing import Any, Optional

import httpx

from ..core.domain import NoteTerms
from ..core.errors import ExtractionParseError, MissingConfiguration, ParseError
from ..core.ports import TermExtractor
from .transport import open_client, parse_json, send

logger = logging.getLogger(__name__)

OPENAI_CHAT_URL = "https://api.openai.com/v1/chat/completions"

SYSTEM_PROMPT = """
You are a structured note analyst. You read pricing supplements and extract key terms
into a clean JSON object. The JSON will be used to populate a UI for financial advisors.

Return ONLY valid JSON. Do not include backticks or any explanation.
If a field is not clearly available, set it to null and do not guess wildly.
""".strip()

SCHEMA_DESCRIPTION = """
You must return a single JSON object with this exact shape:

{
  "issuer": string | null,
  "issuer_sub": string | null,
  "trade_date": string | null,
  "maturity_date": string | null,
  "product_type": string | null,
  "profile_key": string | null,
  "coupon": {
    "label": string | null,
    "structure": string | null,
    "barrier": string | null
  },
  "protection": {
    "label": string | null,
    "principal": string | null,
    "downside": string | null
  },
  "underliers": [
    {
      "name": string | null,
      "ticker": string | null,
      "role": string | null,
      "initial_level": number | null,
      "weighting": string | null,
      "worst_of_or_basket": string | null
    }
  ],
  "payoff_today": {
    "amount_per_1000": number | null,
    "pct_of_par": number | null,
    "status": string,
    "status_variant": "upside" | "downside" | "neutral",
    "explanation": string,
    "subtitle": string
  }
}

Rules:
- "profile_key" should be a short machine-friendly label, e.g.
  "autocallable_single_underlier_barrier" or "point_to_point_single_underlier".
- For "underliers", include one entry per underlier.
- "initial_level" should be the official initial level on the trade/pricing date, if available.
- Do NOT compute payoff_today numbers. Set the numeric fields to null,
  set "status" to "Not yet calculated", "status_variant" to "neutral", and explain that only
  terms have been parsed, not payoff logic.
""".strip()

USER_PROMPT = """
CUSIP (if known): {cusip}

Below is text extracted from a structured note pricing supplement. Extract the fields
according to the schema described. Again: return ONLY JSON, no commentary.

---
{text}
""".strip()

_OPENING_FENCE = re.compile(r"^```[\w+-]*[ \t]*\n?")
_CLOSING_FENCE = re.compile(r"\n?[ \t]*```$")


def strip_code_fences(content: str) -> str:
    """Remove a leading ```lang and a trailing ``` marker if present"""
    text = content.strip()
    text = _OPENING_FENCE.sub("", text, count=1)
    text = _CLOSING_FENCE.sub("", text, count=1)
    return text.strip()


def build_messages(text: str, cusip: Optional[str] = None) -> list[dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "system", "content": SCHEMA_DESCRIPTION},
        {"role": "user", "content": USER_PROMPT.format(cusip=cusip or "unknown", text=text)},
    ]


def message_content(data: Any) -> str:
    """choices[0].message.content of a chat-completion response"""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        content = None

    if not isinstance(content, str) or not content.strip():
        raise ParseError("OpenAI response did not contain choices[0].message.content")
    return content


def parse_note_terms(content: str) -> NoteTerms:
    """Parse assistant output into NoteTerms"""
    try:
        data = json.loads(strip_code_fences(content))
    except ValueError as e:
        raise ExtractionParseError(
            "Assistant did not return valid JSON in message.content.",
            raw=content
        ) from e

    if not isinstance(data, dict):
        raise ExtractionParseError("Assistant JSON was not an object.", raw=content)

    return NoteTerms.from_dict(data)


class OpenAITermExtractor(TermExtractor):
    """Term extractor backed by an OpenAI chat model"""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o",
        timeout: float = 120.0,
        client: Optional[httpx.Client] = None,
        url: str = OPENAI_CHAT_URL
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.client = client
        self.url = url

    def check_configuration(self) -> None:
        if not self.api_key:
            raise MissingConfiguration("OPENAI_API_KEY")

    def extract(self, text: str, cusip: Optional[str] = None) -> NoteTerms:
        self.check_configuration()

        payload = {
            "model": self.model,
            "temperature": 0,
            "messages": build_messages(text, cusip)
        }

        with open_client(self.client, self.timeout) as client:
            response = send(
                client,
                "POST",
                self.url,
                failure_message="OpenAI API returned a non-OK status",
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"}
            )
            data = parse_json(response, "Could not parse JSON from OpenAI chat completion response")

        content = message_content(data)
        logger.info(f"extract: model returned {len(content):,} chars")
        return parse_note_terms(content)
