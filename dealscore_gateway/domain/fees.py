"""Fee extraction from risk-assessment payloads"""

import json
import math
from decimal import Decimal
from typing import Any, Iterable, List, Optional
from dealscore_gateway.domain.models import Fee, FeeAssessment, FeeSummary
from dealscore_gateway.domain.exceptions import InvalidInputError


def coerce_amount(value: Any, strict: bool = False, field: str = "amount") -> float:
    """
    Convert a raw fee amount to a float.

    Lenient mode (default) mirrors the upstream data: a missing amount counts
    as 0 and a negative amount is clamped to 0. Strict mode rejects both.
    Non-numeric and non-finite values are rejected in either mode.

    Raises:
        InvalidInputError: On values that cannot be a currency amount
    """
    if value is None:
        if strict:
            raise InvalidInputError(f"{field} is missing")
        return 0.0

    # bool is an int subclass, but True is not a fee
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInputError(f"{field} must be numeric, got {type(value).__name__}")

    amount = float(value)
    if not math.isfinite(amount):
        raise InvalidInputError(f"{field} must be finite, got {value}")

    if amount < 0:
        if strict:
            raise InvalidInputError(f"{field} must be non-negative, got {value}")
        return 0.0

    return amount


def load_payload(payload: Any) -> Optional[dict]:
    """Risk payloads arrive either as decoded JSON or as the raw JSON text"""
    if payload is None:
        return None

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f"Risk assessment payload is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise InvalidInputError(f"Risk assessment payload must be an object, got {type(payload).__name__}")

    return payload


def parse_fee(raw: Any, strict: bool = False) -> Optional[Fee]:
    """Build a Fee from one entry of payload['fees'], None if the entry is unusable"""
    if not isinstance(raw, dict):
        if strict:
            raise InvalidInputError(f"Fee entry must be an object, got {type(raw).__name__}")
        return None

    assessment_raw = str(raw.get("assessment") or "").upper()
    try:
        assessment = FeeAssessment(assessment_raw)
    except ValueError:
        if strict:
            raise InvalidInputError(f"Unknown fee assessment: {raw.get('assessment')!r}")
        assessment = FeeAssessment.NORMAL

    return Fee(
        label=str(raw.get("label") or ""),
        amount=coerce_amount(raw.get("amount"), strict=strict),
        assessment=assessment,
    )


def extract_fees(payload: Any, strict: bool = False) -> Optional[List[Fee]]:
    """
    Pull the fee list out of a RISK_ASSESSMENT_UPDATE payload.

    Returns None when the payload carries no fee list, so the caller can tell
    "no grading available" apart from "graded with zero fees".
    """
    data = load_payload(payload)
    if data is None:
        return None

    raw_fees = data.get("fees")
    if not isinstance(raw_fees, list):
        return None

    fees = []
    for raw in raw_fees:
        fee = parse_fee(raw, strict=strict)
        if fee is not None:
            fees.append(fee)
    return fees


def summarize_fees(fees: Iterable[Fee]) -> FeeSummary:
    """Total the excessive and illegitimate fees of one deal"""
    excessive_total = 0.0
    illegitimate_total = 0.0

    for fee in fees:
        if fee.assessment == FeeAssessment.EXCESSIVE:
            excessive_total += fee.amount
        elif fee.assessment == FeeAssessment.ILLEGITIMATE:
            illegitimate_total += fee.amount

    return FeeSummary(excessive_total=excessive_total, illegitimate_total=illegitimate_total)
