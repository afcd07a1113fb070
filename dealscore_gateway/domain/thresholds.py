"""Grading threshold tables, held in an immutable config object"""

import math
from dataclasses import dataclass
from typing import Tuple

EXCESSIVE = "excessive"
ILLEGITIMATE = "illegitimate"

LETTERS = ("A", "B", "C", "D", "F")

GRADE_LABELS = {
    "A": "Excellent",
    "B": "Good",
    "C": "Average",
    "D": "Poor",
    "F": "Failing",
}

GRADE_COLORS = {
    "A": "#10b981",
    "B": "#3b82f6",
    "C": "#f59e0b",
    "D": "#ef4444",
    "F": "#dc2626",
}

NO_DATA_COLOR = "#64748b"


@dataclass(frozen=True)
class FeeBand:
    """Currency band for a descriptive category letter (min inclusive, max exclusive)"""

    grade: str
    min: float
    max: float
    description: str

    @property
    def label(self) -> str:
        return GRADE_LABELS[self.grade]

    @property
    def color(self) -> str:
        return GRADE_COLORS[self.grade]

    def contains(self, amount: float) -> bool:
        return self.min <= amount < self.max


@dataclass(frozen=True)
class GradingConfig:
    """
    All tunable numbers used by the grader.

    Score bands:
    - category score = max(0, 100 - amount / ceiling * 100), rounded
    - overall score  = round(excessive * excessive_weight + illegitimate * illegitimate_weight)
    - letter from overall score via score_bands (first floor reached wins)
    """

    excessive_bands: Tuple[FeeBand, ...]
    illegitimate_bands: Tuple[FeeBand, ...]
    excessive_ceiling: float = 1000
    illegitimate_ceiling: float = 2000
    excessive_weight: float = 0.4
    illegitimate_weight: float = 0.6
    score_bands: Tuple[Tuple[float, str], ...] = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))

    def __post_init__(self):
        if self.excessive_ceiling <= 0 or self.illegitimate_ceiling <= 0:
            raise ValueError("Fee ceilings must be positive")
        if not math.isclose(self.excessive_weight + self.illegitimate_weight, 1.0):
            raise ValueError("Excessive and illegitimate weights must sum to 1.0")

    def bands_for(self, fee_type: str) -> Tuple[FeeBand, ...]:
        return self.excessive_bands if fee_type == EXCESSIVE else self.illegitimate_bands

    def ceiling_for(self, fee_type: str) -> float:
        return self.excessive_ceiling if fee_type == EXCESSIVE else self.illegitimate_ceiling


# Bands derived from the fee distribution of analysis-stage deals
EXCESSIVE_FEE_BANDS = (
    FeeBand("A", 0, 450, "Very low excessive fees"),
    FeeBand("B", 450, 550, "Low excessive fees"),
    FeeBand("C", 550, 1248, "Typical excessive fees"),
    FeeBand("D", 1248, 12767, "High excessive fees"),
    FeeBand("F", 12767, math.inf, "Extremely high excessive fees"),
)

ILLEGITIMATE_FEE_BANDS = (
    FeeBand("A", 0, 451.50, "Very low illegitimate fees"),
    FeeBand("B", 451.50, 1231.25, "Low illegitimate fees"),
    FeeBand("C", 1231.25, 2674.25, "Typical illegitimate fees"),
    FeeBand("D", 2674.25, 19039.45, "High illegitimate fees"),
    FeeBand("F", 19039.45, math.inf, "Extremely high illegitimate fees"),
)

DEFAULT_GRADING_CONFIG = GradingConfig(
    excessive_bands=EXCESSIVE_FEE_BANDS,
    illegitimate_bands=ILLEGITIMATE_FEE_BANDS,
)
