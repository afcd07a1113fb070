"""GET /v1/grading/explanation - Describe thresholds and weights"""

from typing import Any, Dict
from fastapi import APIRouter, Depends

from dealscore_gateway.api.dependencies import get_grading_config
from dealscore_gateway.domain.grading import grading_explanation
from dealscore_gateway.domain.thresholds import GradingConfig

router = APIRouter()


@router.get("/grading/explanation")
def get_grading_explanation(config: GradingConfig = Depends(get_grading_config)) -> Dict[str, Any]:
    return grading_explanation(config)
