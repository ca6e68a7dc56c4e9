"""
Shared fixtures: a fake upstream behind httpx.MockTransport plus sample
EDGAR, sec-api.io and OpenAI payloads.
"""
import json

import httpx
import pytest

from note_analyzer.config import Settings

CUSIP = "48136H7D4"
CIK = "19617"
ACCESSION = "0001213900-25-104551"
ACCESSION_FOLDER = "000121390025104551"
BASE_URL = f"https://www.sec.gov/Archives/edgar/data/{CIK}/{ACCESSION_FOLDER}"
INDEX_URL = f"{BASE_URL}/index.json"
HTML_NAME = "ea0261234-01_424b2.htm"
HTML_URL = f"{BASE_URL}/{HTML_NAME}"
SEC_API_URL = "https://api.sec-api.io"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"
SUBMISSIONS_URL = "https://data.sec.gov/submissions/CIK0000019617.json"

FILING_HTML = f"""<html><head><title>Pricing Supplement</title>
<style>p {{ color: red; }}</style><script>var tracking = 1;</script></head>
<body><p>JPMorgan Chase Financial Company LLC</p>
<p>Auto Callable Contingent Interest Notes Linked to the S&amp;P 500 Index</p>
<p>CUSIP: {CUSIP}</p></body></html>"""

NOTE_JSON = {
    "issuer": "JPMorgan Chase Financial Company LLC",
    "issuer_sub": "Fully and unconditionally guaranteed by JPMorgan Chase & Co.",
    "trade_date": "2025-10-20",
    "maturity_date": "2027-10-25",
    "product_type": "Auto Callable Contingent Interest Notes",
    "profile_key": "autocallable_single_underlier_barrier",
    "coupon": {"label": "Contingent Interest", "structure": "Quarterly", "barrier": "70%"},
    "protection": {"label": "Barrier", "principal": "At risk", "downside": "1:1 below 70%"},
    "underliers": [
        {
            "name": "S&P 500 Index",
            "ticker": "SPX",
            "role": "Index",
            "initial_level": 6664.01,
            "weighting": None,
            "worst_of_or_basket": None
        }
    ],
    "payoff_today": {
        "amount_per_1000": 1012.5,
        "pct_of_par": 101.25,
        "status": "Above barrier",
        "status_variant": "upside",
        "explanation": "Made up",
        "subtitle": "As of trade date"
    }
}


def index_payload(*names: str) -> dict:
    return {
        "directory": {
            "name": f"/Archives/edgar/data/{CIK}/{ACCESSION_FOLDER}",
            "item": [
                {"name": name, "type": "text.gif", "size": "1024", "last-modified": "2025-10-21 16:05:12"}
                for name in names
            ]
        }
    }


def sec_api_payload(*filings: dict, total: int | None = None) -> dict:
    return {
        "total": {"value": len(filings) if total is None else total, "relation": "eq"},
        "filings": list(filings)
    }


SEC_API_FILING = {
    "accessionNo": ACCESSION,
    "cik": CIK,
    "companyName": "JPMorgan Chase Financial Co. LLC",
    "formType": "424B2",
    "filedAt": "2025-10-21T16:05:12-04:00",
    "linkToFilingDetails": f"{BASE_URL}/{ACCESSION}-index.htm"
}


def submissions_payload() -> dict:
    return {
        "cik": CIK,
        "name": "JPMorgan Chase Financial Co. LLC",
        "filings": {
            "recent": {
                "form": ["8-K", "424B2", "FWP", "424B2"],
                "accessionNumber": [
                    "0000000000-25-000001",
                    "0001213900-25-200000",
                    "0001213900-25-150000",
                    ACCESSION,
                ],
                "filingDate": ["2025-10-24", "2025-10-23", "2025-10-22", "2025-10-21"],
                "primaryDocument": ["8k.htm", "other_424b2.htm", "ts_fwp.htm", HTML_NAME],
            }
        }
    }


def chat_payload(content: str) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ]
    }


class FakeUpstream:
    """Routes requests by URL to canned responses and records them"""

    def __init__(self, routes: dict | None = None):
        self.routes = {url.rstrip("/"): route for url, route in (routes or {}).items()}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(str(request.url).rstrip("/"))
        if route is None:
            return httpx.Response(404, text=f"no route for {request.url}")
        if callable(route):
            return route(request)
        return httpx.Response(route.status_code, headers=route.headers, content=route.content)

    def urls(self) -> list[str]:
        return [str(r.url).rstrip("/") for r in self.requests]

    def json_body(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def settings():
    return Settings(sec_api_key="sec-test-key", openai_api_key="sk-test", user_agent="tests tests@example.com")


@pytest.fixture
def upstream():
    """Fake upstream serving one 424B2 filing end to end"""
    return FakeUpstream({
        SEC_API_URL: httpx.Response(200, json=sec_api_payload(SEC_API_FILING, total=3)),
        INDEX_URL: httpx.Response(200, json=index_payload(
            f"{ACCESSION}-index.htm", "ex-fees.htm", HTML_NAME, "image001.jpg"
        )),
        HTML_URL: httpx.Response(200, text=FILING_HTML),
        OPENAI_URL: httpx.Response(200, json=chat_payload(json.dumps(NOTE_JSON))),
    })
