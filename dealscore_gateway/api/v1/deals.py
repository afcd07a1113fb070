"""Deal-level endpoints - fee grading and bottom-line price reconstruction"""

import time
import logging
from fastapi import APIRouter, Depends, Request

from dealscore_gateway.api.v1.schemas import (
    DealGradeRequest,
    DealGradeResponse,
    DealGradingRequest,
    DealGradingResponse,
    DealGradingSchema,
    PricingRequest,
    PricingResponse,
)
from dealscore_gateway.api.dependencies import (
    get_grading_config,
    get_request_id,
    get_strict_mode,
    invalid_input_error,
)
from dealscore_gateway.domain.exceptions import InvalidInputError
from dealscore_gateway.domain.fees import extract_fees
from dealscore_gateway.domain.grading import grade_deal, grade_fees, grading_explanation
from dealscore_gateway.domain.pricing import reconstruct_pricing
from dealscore_gateway.domain.thresholds import GradingConfig
from dealscore_gateway.infrastructure.observability.metrics import record_deal_grade
from dealscore_gateway.infrastructure.observability.logging import log_deal_graded

router = APIRouter()


@router.post("/deals/grade", response_model=DealGradeResponse)
def grade_deal_totals(
    request_body: DealGradeRequest,
    request: Request,
    config: GradingConfig = Depends(get_grading_config),
    strict: bool = Depends(get_strict_mode),
):
    """Grade a deal from its excessive and illegitimate fee totals"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        grade = grade_deal(request_body.excessive_fees, request_body.illegitimate_fees, config, strict=strict)
    except InvalidInputError as e:
        raise invalid_input_error(e, request_id)

    record_deal_grade(grade.overall.grade, grade.scores.overall)
    log_deal_graded(request_id, grade.overall.grade, grade.scores.overall, (time.time() - start_time) * 1000)

    return DealGradeResponse.from_domain(grade)


@router.post("/deals/grading", response_model=DealGradingResponse)
def grade_risk_assessment(
    request_body: DealGradingRequest,
    request: Request,
    config: GradingConfig = Depends(get_grading_config),
    strict: bool = Depends(get_strict_mode),
):
    """
    Grade a deal from its raw RISK_ASSESSMENT_UPDATE payload.

    Deals whose assessment has no fee list come back with has_grading=false.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        fees = extract_fees(request_body.payload, strict=strict)
    except InvalidInputError as e:
        raise invalid_input_error(e, request_id)

    grading = None
    if fees is not None:
        grade = grade_fees(fees, config)
        grading = DealGradingSchema.from_domain(grade, explanation=grading_explanation(config))

        record_deal_grade(grade.overall.grade, grade.scores.overall)
        log_deal_graded(request_id, grade.overall.grade, grade.scores.overall, (time.time() - start_time) * 1000)
    else:
        logging.info("No fee data on risk assessment", extra={"request_id": request_id, "deal_id": request_body.deal_id})

    return DealGradingResponse(
        deal_id=request_body.deal_id,
        state=request_body.state,
        grading=grading,
        has_grading=grading is not None,
    )


@router.post("/deals/pricing", response_model=PricingResponse)
def deal_pricing(
    request_body: PricingRequest,
    request: Request,
    strict: bool = Depends(get_strict_mode),
):
    """Reconstruct the bottom-line price of a deal"""
    request_id = get_request_id(request)

    try:
        pricing = reconstruct_pricing(request_body.payload, request_body.conversation, strict=strict)
    except InvalidInputError as e:
        raise invalid_input_error(e, request_id)

    return PricingResponse.from_domain(pricing)
