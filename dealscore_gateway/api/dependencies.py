"""Dependency injection for FastAPI endpoints"""

import logging
from fastapi import HTTPException, Request
from dealscore_gateway.config import build_grading_config, settings
from dealscore_gateway.domain.exceptions import InvalidInputError
from dealscore_gateway.domain.thresholds import GradingConfig
from dealscore_gateway.infrastructure.observability.metrics import invalid_input_counter


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_grading_config() -> GradingConfig:
    """Provide grading thresholds built from settings"""
    return build_grading_config(settings)


def get_strict_mode() -> bool:
    return settings.strict_mode


def invalid_input_error(error: InvalidInputError, request_id: str) -> HTTPException:
    """Count, log and translate a fee validation failure into a 422"""
    invalid_input_counter.inc()
    logging.warning(f"Invalid fee data: {error}", extra={"request_id": request_id})
    return HTTPException(status_code=422, detail=str(error))
