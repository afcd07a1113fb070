"""Bottom-line price reconstruction from risk assessments and negotiation transcripts"""

import re
from typing import Any, Dict, Iterable, Optional
from dealscore_gateway.domain.models import Pricing
from dealscore_gateway.domain.fees import coerce_amount, extract_fees, load_payload
from dealscore_gateway.utils.number_utils import parse_money

_CONVERSATION_PATTERNS = {
    "offer_price": re.compile(r"Adjusted Price:\s*([\d,]+\.?\d*)"),
    "tax": re.compile(r"Tax:\s*([\d,]+\.?\d*)"),
    "balance": re.compile(r"Balance:\s*([\d,]+\.?\d*)"),
}


def fee_slug(label: str) -> str:
    """'Doc Fee' -> 'doc_fee'"""
    return re.sub(r"\s+", "_", label.strip().lower())


def parse_conversation_pricing(conversation: Iterable[Any]) -> Dict[str, float]:
    """
    Scan negotiation messages for dealer quote figures.

    Messages are dicts with a 'content' key or plain strings. When a figure
    is quoted more than once the latest message wins.
    """
    found: Dict[str, float] = {}
    for message in conversation:
        content = message.get("content") if isinstance(message, dict) else message
        if not isinstance(content, str):
            continue

        for key, pattern in _CONVERSATION_PATTERNS.items():
            match = pattern.search(content)
            if match:
                value = parse_money(match.group(1))
                if value is not None:
                    found[key] = value
    return found


def _optional_amount(value: Any, strict: bool, field: str) -> Optional[float]:
    if value is None:
        return None
    return coerce_amount(value, strict=strict, field=field)


def reconstruct_pricing(
    payload: Any,
    conversation: Optional[Iterable[Any]] = None,
    strict: bool = False,
) -> Pricing:
    """
    Derive the canonical bottom-line price for a deal.

    Source precedence:
    1. bottom_line_price reported in the risk assessment
    2. "Balance:" quoted in the negotiation transcript
    3. offer price + tax + every fee line item (computed)

    offer_price and tax missing from the payload are filled from the
    transcript ("Adjusted Price:", "Tax:") before computing.
    """
    data = load_payload(payload) or {}
    fees = extract_fees(data, strict=strict) or []
    quoted = parse_conversation_pricing(conversation or [])

    offer_price = _optional_amount(data.get("offer_price"), strict, "offer_price")
    if offer_price is None:
        offer_price = quoted.get("offer_price")

    tax = _optional_amount(data.get("tax"), strict, "tax")
    if tax is None:
        tax = quoted.get("tax")

    fee_total = sum(fee.amount for fee in fees)
    fee_items = {fee_slug(fee.label): fee.amount for fee in fees if fee.label.strip()}

    bottom_line = _optional_amount(data.get("bottom_line_price"), strict, "bottom_line_price")
    if bottom_line is not None:
        source = "payload"
    elif "balance" in quoted:
        bottom_line = quoted["balance"]
        source = "conversation"
    elif offer_price is not None:
        bottom_line = offer_price + (tax or 0) + fee_total
        source = "computed"
    else:
        source = "unavailable"

    return Pricing(
        bottom_line_price=bottom_line,
        offer_price=offer_price,
        tax=tax,
        fee_total=fee_total,
        source=source,
        fee_items=fee_items,
    )
