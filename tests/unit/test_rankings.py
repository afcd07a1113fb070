"""Unit tests for dealer grouping and ranking"""

import pytest
from dealscore_gateway.domain.exceptions import InvalidInputError
from dealscore_gateway.domain.models import DealerDeals, DealFees
from dealscore_gateway.domain.rankings import group_deals_by_dealer, rank_dealers


def test_group_deals_by_dealer(ranking_rows):
    dealers = group_deals_by_dealer(ranking_rows)

    assert [d.dealer_name for d in dealers] == ["Harbor Honda", "Valley Ford"]
    harbor, valley = dealers
    assert harbor.location == "Oakland, CA"
    assert [d.deal_id for d in harbor.deals] == [1, 3]
    assert harbor.deals[0].excessive_fees == 1000
    assert harbor.deals[1].illegitimate_fees == 2000


def test_group_deals_counts_each_deal_once(ranking_rows):
    """Deal 2 appears twice; the first row is kept"""
    valley = group_deals_by_dealer(ranking_rows)[1]

    assert len(valley.deals) == 1
    assert valley.deals[0].illegitimate_fees == 0


def test_group_deals_unknown_dealer_and_location():
    rows = [{"deal_id": 7, "dealer_name": None, "city": None, "state_code": "NV", "payload": {"fees": []}}]

    dealers = group_deals_by_dealer(rows)

    assert dealers[0].dealer_name == "Unknown Dealer"
    assert dealers[0].location == ", NV"


def test_group_deals_skips_rows_without_fees():
    rows = [
        {"deal_id": 1, "dealer_name": "A Motors", "payload": None},
        {"deal_id": 2, "dealer_name": "A Motors", "payload": {"tax": 100}},
    ]
    assert group_deals_by_dealer(rows) == []


def test_group_deals_malformed_payload(caplog):
    rows = [
        {"deal_id": 1, "dealer_name": "A Motors", "payload": "{broken"},
        {"deal_id": 2, "dealer_name": "A Motors", "payload": {"fees": []}},
    ]

    dealers = group_deals_by_dealer(rows)
    assert [d.deal_id for d in dealers[0].deals] == [2]
    assert "malformed payload" in caplog.text

    with pytest.raises(InvalidInputError):
        group_deals_by_dealer(rows, strict=True)


def test_rank_dealers_lowest_fees_first(ranking_rows):
    rankings = rank_dealers(group_deals_by_dealer(ranking_rows))

    # Valley Ford: no graded fees; Harbor Honda: one deal at each ceiling
    assert [r.dealer_name for r in rankings] == ["Valley Ford", "Harbor Honda"]
    assert rankings[0].grading.grade == "A"
    assert rankings[1].grading.deal_count == 2


def test_rank_dealers_drops_dealers_without_deals():
    dealers = [
        DealerDeals("Empty Lot", ", "),
        DealerDeals("Busy Lot", ", ", [DealFees(0, 0)]),
    ]

    rankings = rank_dealers(dealers)

    assert [r.dealer_name for r in rankings] == ["Busy Lot"]


def test_rank_dealers_weighted_tie_breaks_on_illegitimate():
    """Both weigh in at $60; the dealer with fewer illegitimate fees ranks first"""
    dealers = [
        DealerDeals("Illegit Imports", ", ", [DealFees(excessive_fees=0, illegitimate_fees=100)]),
        DealerDeals("Excess Autos", ", ", [DealFees(excessive_fees=150, illegitimate_fees=0)]),
    ]

    rankings = rank_dealers(dealers)

    assert [r.dealer_name for r in rankings] == ["Excess Autos", "Illegit Imports"]


def test_rank_dealers_tolerance():
    """Differences inside the tolerance fall through to the next key"""
    dealers = [
        DealerDeals("Markup Motors", ", ", [DealFees(excessive_fees=0, illegitimate_fees=10)]),
        DealerDeals("Add-On Autos", ", ", [DealFees(excessive_fees=15.01, illegitimate_fees=0)]),
    ]

    # Weighted 6.0 vs 6.004 is a tie at 0.01; illegitimate 0 < 10 decides
    rankings = rank_dealers(dealers)
    assert [r.dealer_name for r in rankings] == ["Add-On Autos", "Markup Motors"]

    rankings = rank_dealers(dealers, tolerance=0.0001)
    assert [r.dealer_name for r in rankings] == ["Markup Motors", "Add-On Autos"]


def test_rank_dealers_grade_breaks_full_fee_tie():
    """Equal average fees fall through to the letter grade, best first"""
    dealers = [
        DealerDeals("Fee Heavy Motors", ", ", [DealFees(excessive_fees=1000, illegitimate_fees=2000)]),
        DealerDeals(
            "Mostly Clean Cars",
            ", ",
            [DealFees(excessive_fees=0, illegitimate_fees=0)] * 3
            + [DealFees(excessive_fees=4000, illegitimate_fees=8000)],
        ),
    ]

    rankings = rank_dealers(dealers)

    heavy, clean = sorted(rankings, key=lambda r: r.dealer_name)
    assert heavy.grading.average_fees == clean.grading.average_fees
    assert (heavy.grading.grade, clean.grading.grade) == ("F", "C")
    assert [r.dealer_name for r in rankings] == ["Mostly Clean Cars", "Fee Heavy Motors"]
