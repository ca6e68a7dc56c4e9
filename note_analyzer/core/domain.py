"""
Domain Models - Pure business entities

No external dependencies. Everything here lives for one request only.
"""
import math
from dataclasses import dataclass, field, asdict
from typing import Any, Optional

PRICING_SUPPLEMENT_FORMS = frozenset({"424B2", "FWP"})

NOT_CALCULATED_STATUS = "Not yet calculated"
NOT_CALCULATED_EXPLANATION = (
    "Only the note terms have been parsed from the filing; "
    "payoff logic has not been applied."
)


@dataclass(frozen=True)
class FilingQuery:
    """A CUSIP search request"""
    identifier: str
    form_types: frozenset[str] = PRICING_SUPPLEMENT_FORMS

    @property
    def prefix(self) -> str:
        """Issuer portion of the CUSIP (first 6 characters)"""
        return self.identifier[:6]


@dataclass
class FilingMetadata:
    """A filing found by a locator"""
    accession_number: str
    cik: str
    form_type: Optional[str] = None
    filed_at: Optional[str] = None
    company_name: Optional[str] = None
    document_url: Optional[str] = None


@dataclass
class LocateResult:
    """Outcome of a filing search; filings_count == 0 means nothing matched"""
    query: FilingQuery
    filings_count: int
    source: str
    filing: Optional[FilingMetadata] = None
    html_preview: Optional[str] = None
    issuer_cik: Optional[str] = None
    reason: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.filing is not None


@dataclass
class DirectoryItem:
    """One entry of an EDGAR filing folder listing"""
    name: str
    type: Optional[str] = None
    size: Optional[str] = None
    last_modified: Optional[str] = None

    @property
    def is_html(self) -> bool:
        return self.name.lower().endswith((".htm", ".html"))


@dataclass
class FilingDocument:
    """Primary document of a filing, as downloaded"""
    cik: str
    accession_number: str
    url: str
    file_name: str
    html: str

    @property
    def length(self) -> int:
        return len(self.html)

    def preview(self, limit: int, marker: str = "\n...[truncated]...") -> str:
        if len(self.html) > limit:
            return self.html[:limit] + marker
        return self.html


@dataclass
class DocumentContent:
    """A fetched document plus its bounded plain text"""
    document: FilingDocument
    text: str


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _number_or_none(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if not isinstance(value, (int, float)):
        value = str(value).replace(",", "")
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return None
    # NaN and infinities have no JSON encoding
    return number if math.isfinite(number) else None


def _section(data: Any) -> dict[str, Any]:
    return data if isinstance(data, dict) else {}


@dataclass
class Coupon:
    label: Optional[str] = None
    structure: Optional[str] = None
    barrier: Optional[str] = None


@dataclass
class Protection:
    label: Optional[str] = None
    principal: Optional[str] = None
    downside: Optional[str] = None


@dataclass
class Underlier:
    name: Optional[str] = None
    ticker: Optional[str] = None
    role: Optional[str] = None
    initial_level: Optional[float] = None
    weighting: Optional[str] = None
    worst_of_or_basket: Optional[str] = None


@dataclass
class PayoffToday:
    amount_per_1000: Optional[float] = None
    pct_of_par: Optional[float] = None
    status: str = NOT_CALCULATED_STATUS
    status_variant: str = "neutral"
    explanation: str = NOT_CALCULATED_EXPLANATION
    subtitle: str = ""


@dataclass
class NoteTerms:
    """Structured note terms extracted from a pricing supplement

    Absent values mean "not determinable from the source text".
    """
    issuer: Optional[str] = None
    issuer_sub: Optional[str] = None
    trade_date: Optional[str] = None
    maturity_date: Optional[str] = None
    product_type: Optional[str] = None
    profile_key: Optional[str] = None
    coupon: Coupon = field(default_factory=Coupon)
    protection: Protection = field(default_factory=Protection)
    underliers: list[Underlier] = field(default_factory=list)
    payoff_today: PayoffToday = field(default_factory=PayoffToday)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NoteTerms":
        coupon = _section(data.get("coupon"))
        protection = _section(data.get("protection"))
        payoff = _section(data.get("payoff_today"))
        underliers = data.get("underliers")
        if not isinstance(underliers, list):
            underliers = []

        return cls(
            issuer=_str_or_none(data.get("issuer")),
            issuer_sub=_str_or_none(data.get("issuer_sub")),
            trade_date=_str_or_none(data.get("trade_date")),
            maturity_date=_str_or_none(data.get("maturity_date")),
            product_type=_str_or_none(data.get("product_type")),
            profile_key=_str_or_none(data.get("profile_key")),
            coupon=Coupon(
                label=_str_or_none(coupon.get("label")),
                structure=_str_or_none(coupon.get("structure")),
                barrier=_str_or_none(coupon.get("barrier")),
            ),
            protection=Protection(
                label=_str_or_none(protection.get("label")),
                principal=_str_or_none(protection.get("principal")),
                downside=_str_or_none(protection.get("downside")),
            ),
            underliers=[
                Underlier(
                    name=_str_or_none(u.get("name")),
                    ticker=_str_or_none(u.get("ticker")),
                    role=_str_or_none(u.get("role")),
                    initial_level=_number_or_none(u.get("initial_level")),
                    weighting=_str_or_none(u.get("weighting")),
                    worst_of_or_basket=_str_or_none(u.get("worst_of_or_basket")),
                )
                for u in underliers
                if isinstance(u, dict)
            ],
            payoff_today=PayoffToday(subtitle=str(payoff.get("subtitle") or "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
