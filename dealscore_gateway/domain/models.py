"""Domain models - pure Python dataclasses representing fee grading entities"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class FeeAssessment(str, Enum):
    """Upstream risk-assessment classification of a fee line item"""

    NORMAL = "NORMAL"
    EXCESSIVE = "EXCESSIVE"
    ILLEGITIMATE = "ILLEGITIMATE"


@dataclass(frozen=True)
class Fee:
    """Single fee line item from a deal's risk assessment"""

    label: str
    amount: float
    assessment: FeeAssessment


@dataclass(frozen=True)
class FeeSummary:
    """Excessive and illegitimate totals derived from a fee list"""

    excessive_total: float
    illegitimate_total: float


@dataclass(frozen=True)
class DealFees:
    """Per-deal input to dealer grading"""

    excessive_fees: float = 0
    illegitimate_fees: float = 0
    deal_id: Optional[int] = None


@dataclass
class CategoryGrade:
    """Descriptive letter for one fee category, from currency bands"""

    grade: str
    label: str
    color: str
    description: str
    amount: float
    fee_type: str  # "excessive" or "illegitimate"


@dataclass
class LetterGrade:
    """Letter derived from a numeric score"""

    grade: str
    label: str
    color: str


@dataclass
class DealScores:
    excessive: float
    illegitimate: float
    overall: float


@dataclass
class DealGrade:
    """Output of grading one deal"""

    excessive: CategoryGrade
    illegitimate: CategoryGrade
    overall: LetterGrade
    scores: DealScores


@dataclass
class AverageFees:
    excessive: float
    illegitimate: float


@dataclass
class DealerGrade:
    """Output of grading all analysis-stage deals of one dealer"""

    grade: str
    label: str
    color: str
    deal_count: int
    average_scores: DealScores
    average_fees: AverageFees
    grade_distribution: Dict[str, int]
    explanation: str
    deal_grades: List[DealGrade] = field(default_factory=list)


@dataclass
class Pricing:
    """Bottom-line price reconstructed from a risk assessment"""

    bottom_line_price: Optional[float]
    offer_price: Optional[float]
    tax: Optional[float]
    fee_total: float
    source: str  # payload | conversation | computed | unavailable
    fee_items: Dict[str, float] = field(default_factory=dict)


@dataclass
class DealerDeals:
    """Deals of one dealer, grouped for ranking"""

    dealer_name: str
    location: str
    deals: List[DealFees] = field(default_factory=list)


@dataclass
class DealerRanking:
    dealer_name: str
    location: str
    deals: List[DealFees]
    grading: DealerGrade
