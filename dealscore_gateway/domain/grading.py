"""Fee grading engine - core business logic for deal and dealer grades"""

import math
from typing import Any, Dict, Iterable, Mapping, Sequence, Union
from dealscore_gateway.domain.models import (
    AverageFees,
    CategoryGrade,
    DealFees,
    DealerGrade,
    DealGrade,
    DealScores,
    Fee,
    LetterGrade,
)
from dealscore_gateway.domain.fees import coerce_amount, summarize_fees
from dealscore_gateway.domain.thresholds import (
    DEFAULT_GRADING_CONFIG,
    EXCESSIVE,
    GRADE_COLORS,
    GRADE_LABELS,
    ILLEGITIMATE,
    LETTERS,
    NO_DATA_COLOR,
    GradingConfig,
)
from dealscore_gateway.utils.number_utils import format_fixed, round_half_up

NO_DATA_EXPLANATION = "No analysis-stage deals available for grading"


def category_grade(amount: float, fee_type: str, config: GradingConfig = DEFAULT_GRADING_CONFIG) -> CategoryGrade:
    """Descriptive letter for a fee total, looked up in the category's currency bands"""
    for band in config.bands_for(fee_type):
        if band.contains(amount):
            return CategoryGrade(
                grade=band.grade,
                label=band.label,
                color=band.color,
                description=band.description,
                amount=amount,
                fee_type=fee_type,
            )

    return CategoryGrade(
        grade="F",
        label=GRADE_LABELS["F"],
        color=GRADE_COLORS["F"],
        description="Extremely high fees",
        amount=amount,
        fee_type=fee_type,
    )


def category_score(amount: float, fee_type: str, config: GradingConfig = DEFAULT_GRADING_CONFIG) -> int:
    """
    Score a fee total from 0 (at or above the ceiling) to 100 (no fees).

    The ceilings ($1000 excessive, $2000 illegitimate) sit well below the F
    bands so that typical deals spread across the whole 0-100 range.
    """
    if amount == 0:
        return 100

    ceiling = config.ceiling_for(fee_type)
    score = max(0, 100 - (amount / ceiling * 100))
    return round_half_up(score)


def grade_from_score(score: float, config: GradingConfig = DEFAULT_GRADING_CONFIG) -> LetterGrade:
    """Map a 0-100 score to a letter"""
    for floor, letter in config.score_bands:
        if score >= floor:
            return LetterGrade(grade=letter, label=GRADE_LABELS[letter], color=GRADE_COLORS[letter])
    return LetterGrade(grade="F", label=GRADE_LABELS["F"], color=GRADE_COLORS["F"])


def grade_deal(
    excessive_fees: Any,
    illegitimate_fees: Any,
    config: GradingConfig = DEFAULT_GRADING_CONFIG,
    strict: bool = False,
) -> DealGrade:
    """
    Grade a single deal from its excessive and illegitimate fee totals.

    Weighting: 40% excessive, 60% illegitimate (illegitimate fees are more
    serious). Both category scores are rounded before they are combined and
    the weighted sum is rounded again; dashboards depend on these exact values.

    Raises:
        InvalidInputError: If a total is not a usable amount
    """
    excessive_amount = coerce_amount(excessive_fees, strict=strict, field="excessive_fees")
    illegitimate_amount = coerce_amount(illegitimate_fees, strict=strict, field="illegitimate_fees")

    excessive_score = category_score(excessive_amount, EXCESSIVE, config)
    illegitimate_score = category_score(illegitimate_amount, ILLEGITIMATE, config)

    overall_score = round_half_up(
        (excessive_score * config.excessive_weight) + (illegitimate_score * config.illegitimate_weight)
    )

    return DealGrade(
        excessive=category_grade(excessive_amount, EXCESSIVE, config),
        illegitimate=category_grade(illegitimate_amount, ILLEGITIMATE, config),
        overall=grade_from_score(overall_score, config),
        scores=DealScores(
            excessive=excessive_score,
            illegitimate=illegitimate_score,
            overall=overall_score,
        ),
    )


def grade_fees(fees: Iterable[Fee], config: GradingConfig = DEFAULT_GRADING_CONFIG) -> DealGrade:
    """Summarize a deal's fee list and grade the totals"""
    summary = summarize_fees(fees)
    return grade_deal(summary.excessive_total, summary.illegitimate_total, config)


def _deal_amounts(deal: Union[DealFees, Mapping[str, Any]]) -> tuple:
    if isinstance(deal, DealFees):
        return deal.excessive_fees, deal.illegitimate_fees
    return deal.get("excessive_fees"), deal.get("illegitimate_fees")


def no_data_grade() -> DealerGrade:
    """Sentinel grade for a dealer without analysis-stage deals"""
    return DealerGrade(
        grade="N/A",
        label="No Data",
        color=NO_DATA_COLOR,
        deal_count=0,
        average_scores=DealScores(excessive=0, illegitimate=0, overall=0),
        average_fees=AverageFees(excessive=0, illegitimate=0),
        grade_distribution={letter: 0 for letter in LETTERS},
        explanation=NO_DATA_EXPLANATION,
    )


def grade_dealer(
    deals: Sequence[Union[DealFees, Mapping[str, Any]]],
    config: GradingConfig = DEFAULT_GRADING_CONFIG,
    strict: bool = False,
) -> DealerGrade:
    """
    Grade a dealer from the fee totals of its analysis-stage deals.

    The dealer letter comes from the mean of the per-deal overall scores, not
    from the mean fees. Callers filter deals to the analysis state first.
    """
    if not deals:
        return no_data_grade()

    deal_grades = [
        grade_deal(excessive, illegitimate, config, strict=strict)
        for excessive, illegitimate in map(_deal_amounts, deals)
    ]
    count = len(deal_grades)

    avg_excessive_score = sum(d.scores.excessive for d in deal_grades) / count
    avg_illegitimate_score = sum(d.scores.illegitimate for d in deal_grades) / count
    avg_overall_score = sum(d.scores.overall for d in deal_grades) / count

    overall = grade_from_score(avg_overall_score, config)

    distribution = {letter: 0 for letter in LETTERS}
    for d in deal_grades:
        distribution[d.overall.grade] += 1

    return DealerGrade(
        grade=overall.grade,
        label=overall.label,
        color=overall.color,
        deal_count=count,
        average_scores=DealScores(
            excessive=avg_excessive_score,
            illegitimate=avg_illegitimate_score,
            overall=avg_overall_score,
        ),
        average_fees=AverageFees(
            excessive=sum(d.excessive.amount for d in deal_grades) / count,
            illegitimate=sum(d.illegitimate.amount for d in deal_grades) / count,
        ),
        grade_distribution=distribution,
        explanation=generate_dealer_explanation(count, avg_overall_score, distribution),
        deal_grades=deal_grades,
    )


def generate_dealer_explanation(deal_count: int, avg_score: float, distribution: Dict[str, int]) -> str:
    """Human-readable summary of a dealer grade"""
    total_deals = sum(distribution.values())
    top_grades = distribution["A"] + distribution["B"]
    top_grade_pct = round_half_up(top_grades / total_deals * 100) if total_deals > 0 else 0

    breakdown = ", ".join(f"{letter}({distribution[letter]})" for letter in LETTERS)
    return (
        f"Based on {deal_count} analysis-stage deals with an average score of {format_fixed(avg_score, 1)}/100. "
        f"{top_grade_pct}% of deals received A or B grades. "
        f"Grade distribution: {breakdown}."
    )


def _bands_as_dict(config: GradingConfig, fee_type: str) -> Dict[str, Dict[str, Any]]:
    # math.inf is not valid JSON
    return {
        band.grade: {
            "min": band.min,
            "max": None if math.isinf(band.max) else band.max,
            "label": band.label,
            "color": band.color,
            "description": band.description,
        }
        for band in config.bands_for(fee_type)
    }


def grading_explanation(config: GradingConfig = DEFAULT_GRADING_CONFIG) -> Dict[str, Any]:
    """Describe the grading system for dashboard tooltips"""
    excessive_pct = round_half_up(config.excessive_weight * 100)
    illegitimate_pct = round_half_up(config.illegitimate_weight * 100)

    return {
        "overview": (
            "This grading system is based on analysis of deals currently in the 'analysis' "
            "state that have fee data available."
        ),
        "excessive_fees": {
            "description": "Fees that are higher than typical market rates but may be legitimate",
            "thresholds": _bands_as_dict(config, EXCESSIVE),
            "weight": f"{excessive_pct}% of overall grade",
        },
        "illegitimate_fees": {
            "description": "Fees that are unnecessary, deceptive, or potentially illegal",
            "thresholds": _bands_as_dict(config, ILLEGITIMATE),
            "weight": f"{illegitimate_pct}% of overall grade (weighted higher due to severity)",
        },
        "calculation": (
            "Overall grade is calculated as a weighted average: "
            f"(Excessive Score × {config.excessive_weight}) + (Illegitimate Score × {config.illegitimate_weight})"
        ),
        "scoring": (
            "Each category scores 100 - (fees / ceiling × 100), floored at 0; "
            f"ceilings are ${config.excessive_ceiling:g} excessive and ${config.illegitimate_ceiling:g} illegitimate"
        ),
    }
