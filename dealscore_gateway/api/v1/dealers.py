"""Dealer-level endpoints - dealer grades and transparency rankings"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from dealscore_gateway.api.v1.schemas import (
    DealerGradeRequest,
    DealerGradeResponse,
    DealerRankingSchema,
    RankingsRequest,
    RankingsResponse,
)
from dealscore_gateway.api.dependencies import (
    get_grading_config,
    get_request_id,
    get_strict_mode,
    invalid_input_error,
)
from dealscore_gateway.config import settings
from dealscore_gateway.domain.exceptions import InvalidInputError
from dealscore_gateway.domain.grading import grade_dealer, grading_explanation
from dealscore_gateway.domain.models import DealFees
from dealscore_gateway.domain.rankings import group_deals_by_dealer, rank_dealers
from dealscore_gateway.domain.thresholds import GradingConfig
from dealscore_gateway.infrastructure.observability.metrics import record_dealer_grade
from dealscore_gateway.infrastructure.observability.logging import log_dealer_graded

router = APIRouter()


@router.post("/dealers/grade", response_model=DealerGradeResponse)
def grade_dealer_deals(
    request_body: DealerGradeRequest,
    request: Request,
    config: GradingConfig = Depends(get_grading_config),
    strict: bool = Depends(get_strict_mode),
):
    """
    Grade one dealer from the fee totals of its analysis-stage deals.

    An empty deal list is not an error: the dealer comes back graded N/A.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    deals = [
        DealFees(
            excessive_fees=deal.excessive_fees,
            illegitimate_fees=deal.illegitimate_fees,
            deal_id=deal.deal_id,
        )
        for deal in request_body.deals
    ]

    try:
        grade = grade_dealer(deals, config, strict=strict)
    except InvalidInputError as e:
        raise invalid_input_error(e, request_id)

    record_dealer_grade(grade.grade)
    log_dealer_graded(
        request_id,
        grade.grade,
        grade.deal_count,
        (time.time() - start_time) * 1000,
        dealer_name=request_body.dealer_name,
    )

    return DealerGradeResponse.from_domain(grade)


@router.post("/dealers/rankings", response_model=RankingsResponse)
def dealer_rankings(
    request_body: RankingsRequest,
    request: Request,
    config: GradingConfig = Depends(get_grading_config),
    strict: bool = Depends(get_strict_mode),
):
    """
    Rank dealers by fee transparency.

    Flow:
    1. Group analysis-stage deal rows by dealer (one entry per deal)
    2. Grade every dealer from its deals' fee totals
    3. Order by weighted average fees, lowest first
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        rows = [row.model_dump() for row in request_body.rows]
        dealers = group_deals_by_dealer(rows, strict=strict)
        rankings = rank_dealers(dealers, config, tolerance=settings.ranking_tolerance)

    except InvalidInputError as e:
        raise invalid_input_error(e, request_id)

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    for ranking in rankings:
        record_dealer_grade(ranking.grading.grade)
        log_dealer_graded(
            request_id,
            ranking.grading.grade,
            ranking.grading.deal_count,
            duration_ms,
            dealer_name=ranking.dealer_name,
        )

    logging.info(
        f"Ranked {len(rankings)} dealers from {len(rows)} deal rows",
        extra={"request_id": request_id},
    )

    return RankingsResponse(
        rankings=[DealerRankingSchema.from_domain(r) for r in rankings],
        total_dealers=len(rankings),
        explanation=grading_explanation(config),
    )
