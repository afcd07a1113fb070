"""Dealer grouping and ranking by fee transparency"""

import logging
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping
from dealscore_gateway.domain.models import DealerDeals, DealerRanking, DealFees
from dealscore_gateway.domain.fees import extract_fees, summarize_fees
from dealscore_gateway.domain.grading import grade_dealer
from dealscore_gateway.domain.exceptions import InvalidInputError
from dealscore_gateway.domain.thresholds import DEFAULT_GRADING_CONFIG, GradingConfig

UNKNOWN_DEALER = "Unknown Dealer"

# Final tiebreaker, best grade first
GRADE_ORDER = {"A": 5, "B": 4, "C": 3, "D": 2, "F": 1, "N/A": 0}


def group_deals_by_dealer(rows: Iterable[Mapping[str, Any]], strict: bool = False) -> List[DealerDeals]:
    """
    Group analysis-stage deal rows by dealer name.

    Each row carries deal_id, dealer_name, city, state_code and the raw
    RISK_ASSESSMENT_UPDATE payload. A deal joined to several task rows is
    only counted once (first row wins); deals without a fee list are skipped.
    """
    dealers: Dict[str, DealerDeals] = {}
    seen_deal_ids = set()

    for row in rows:
        deal_id = row.get("deal_id")
        if deal_id in seen_deal_ids:
            continue
        seen_deal_ids.add(deal_id)

        try:
            fees = extract_fees(row.get("payload"), strict=strict)
        except InvalidInputError as e:
            if strict:
                raise
            logging.warning(f"Skipping deal with malformed payload: {e}", extra={"deal_id": deal_id})
            continue

        if fees is None:
            continue

        summary = summarize_fees(fees)
        dealer_name = row.get("dealer_name") or UNKNOWN_DEALER
        if dealer_name not in dealers:
            dealers[dealer_name] = DealerDeals(
                dealer_name=dealer_name,
                location=f"{row.get('city') or ''}, {row.get('state_code') or ''}",
            )

        dealers[dealer_name].deals.append(
            DealFees(
                excessive_fees=summary.excessive_total,
                illegitimate_fees=summary.illegitimate_total,
                deal_id=deal_id,
            )
        )

    return list(dealers.values())


def _weighted_fees(ranking: DealerRanking, config: GradingConfig) -> float:
    fees = ranking.grading.average_fees
    return (fees.excessive * config.excessive_weight) + (fees.illegitimate * config.illegitimate_weight)


def rank_dealers(
    dealers: Iterable[DealerDeals],
    config: GradingConfig = DEFAULT_GRADING_CONFIG,
    tolerance: float = 0.01,
) -> List[DealerRanking]:
    """
    Grade each dealer and order them best first.

    Ordering (lowest fees first, differences within tolerance count as ties):
    1. weighted average fees (excessive × 0.4 + illegitimate × 0.6)
    2. average illegitimate fees
    3. average excessive fees
    4. letter grade, highest first
    """
    rankings = [
        DealerRanking(
            dealer_name=dealer.dealer_name,
            location=dealer.location,
            deals=dealer.deals,
            grading=grade_dealer(dealer.deals, config),
        )
        for dealer in dealers
    ]
    rankings = [r for r in rankings if r.grading.deal_count > 0]

    def compare(a: DealerRanking, b: DealerRanking) -> float:
        keys = (
            (_weighted_fees(a, config), _weighted_fees(b, config)),
            (a.grading.average_fees.illegitimate, b.grading.average_fees.illegitimate),
            (a.grading.average_fees.excessive, b.grading.average_fees.excessive),
        )
        for a_value, b_value in keys:
            if abs(a_value - b_value) > tolerance:
                return a_value - b_value

        return GRADE_ORDER.get(b.grading.grade, 0) - GRADE_ORDER.get(a.grading.grade, 0)

    return sorted(rankings, key=cmp_to_key(compare))
