"""Pydantic schemas for API request/response validation"""

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt
from pydantic.alias_generators import to_camel

from dealscore_gateway.domain.models import DealerGrade, DealerRanking, DealGrade, Pricing

# JSON numbers only; lax float would turn "450" and true into amounts
Amount = Union[StrictInt, StrictFloat]


class RequestModel(BaseModel):
    """Request bodies accept both camelCase and snake_case keys"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ResponseModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# Requests


class DealGradeRequest(RequestModel):
    """Request body for POST /v1/deals/grade"""

    excessive_fees: Optional[Amount] = Field(None, description="Total of EXCESSIVE fees")
    illegitimate_fees: Optional[Amount] = Field(None, description="Total of ILLEGITIMATE fees")


class DealGradingRequest(RequestModel):
    """Request body for POST /v1/deals/grading"""

    deal_id: int
    state: Optional[str] = None
    payload: Any = Field(None, description="RISK_ASSESSMENT_UPDATE payload, object or JSON text")


class PricingRequest(RequestModel):
    """Request body for POST /v1/deals/pricing"""

    payload: Any = None
    conversation: List[Any] = Field(default_factory=list)


class DealFeesSchema(RequestModel):
    """Fee totals of one deal"""

    excessive_fees: Optional[Amount] = None
    illegitimate_fees: Optional[Amount] = None
    deal_id: Optional[int] = None


class DealerGradeRequest(RequestModel):
    """Request body for POST /v1/dealers/grade"""

    dealer_name: Optional[str] = None
    deals: List[DealFeesSchema] = Field(default_factory=list)


class RankingRow(RequestModel):
    """One analysis-stage deal joined to its dealer and risk assessment"""

    deal_id: Optional[int] = None
    dealer_name: Optional[str] = None
    city: Optional[str] = None
    state_code: Optional[str] = None
    payload: Any = None


class RankingsRequest(RequestModel):
    """Request body for POST /v1/dealers/rankings"""

    rows: List[RankingRow]


# Responses


class CategoryGradeSchema(ResponseModel):
    grade: str
    label: str
    color: str
    description: str
    amount: float
    fee_type: str = Field(alias="feeType")


class LetterGradeSchema(ResponseModel):
    grade: str
    label: str
    color: str


class DealScoresSchema(ResponseModel):
    excessive: int
    illegitimate: int
    overall: int


class AverageScoresSchema(ResponseModel):
    excessive: float
    illegitimate: float
    overall: float


class AverageFeesSchema(ResponseModel):
    excessive: float
    illegitimate: float


class DealGradeResponse(ResponseModel):
    """Response for POST /v1/deals/grade"""

    excessive: CategoryGradeSchema
    illegitimate: CategoryGradeSchema
    overall: LetterGradeSchema
    scores: DealScoresSchema

    @classmethod
    def from_domain(cls, grade: DealGrade, **extra: Any) -> "DealGradeResponse":
        return cls.model_validate({**asdict(grade), **extra})


class DealGradingSchema(DealGradeResponse):
    explanation: Dict[str, Any]


class DealGradingResponse(ResponseModel):
    """Response for POST /v1/deals/grading"""

    deal_id: int
    state: Optional[str] = None
    grading: Optional[DealGradingSchema] = None
    has_grading: bool


class PricingResponse(ResponseModel):
    """Response for POST /v1/deals/pricing"""

    bottom_line_price: Optional[float]
    offer_price: Optional[float]
    tax: Optional[float]
    fee_total: float
    source: str
    fee_items: Dict[str, float]

    @classmethod
    def from_domain(cls, pricing: Pricing) -> "PricingResponse":
        return cls.model_validate(asdict(pricing))


class DealerGradeResponse(ResponseModel):
    """Response for POST /v1/dealers/grade"""

    grade: str
    label: str
    color: str
    deal_count: int = Field(alias="dealCount")
    average_scores: AverageScoresSchema = Field(alias="averageScores")
    average_fees: AverageFeesSchema = Field(alias="averageFees")
    grade_distribution: Dict[str, int] = Field(alias="gradeDistribution")
    explanation: str
    deal_grades: List[DealGradeResponse] = Field(alias="dealGrades")

    @classmethod
    def from_domain(cls, grade: DealerGrade) -> "DealerGradeResponse":
        return cls.model_validate(asdict(grade))


class RankedDealSchema(ResponseModel):
    deal_id: Optional[int] = None
    excessive_fees: float
    illegitimate_fees: float


class DealerRankingSchema(ResponseModel):
    dealer_name: str
    location: str
    deals: List[RankedDealSchema]
    grading: DealerGradeResponse

    @classmethod
    def from_domain(cls, ranking: DealerRanking) -> "DealerRankingSchema":
        return cls.model_validate(asdict(ranking))


class RankingsResponse(ResponseModel):
    """Response for POST /v1/dealers/rankings"""

    rankings: List[DealerRankingSchema]
    total_dealers: int
    explanation: Dict[str, Any]
