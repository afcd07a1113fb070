"""Unit tests for bottom-line price reconstruction"""

import pytest
from dealscore_gateway.domain.exceptions import InvalidInputError
from dealscore_gateway.domain.pricing import fee_slug, parse_conversation_pricing, reconstruct_pricing
from dealscore_gateway.utils.number_utils import format_fixed, parse_money, round_half_up


def test_pricing_uses_reported_bottom_line(risk_payload):
    pricing = reconstruct_pricing(risk_payload)

    assert pricing.source == "payload"
    assert pricing.bottom_line_price == 36195.0
    assert pricing.offer_price == 32450.0
    assert pricing.tax == 2100.0
    assert pricing.fee_total == 1645.0


def test_pricing_fee_items_are_slugged(risk_payload):
    pricing = reconstruct_pricing(risk_payload)

    assert pricing.fee_items == {
        "doc_fee": 499.0,
        "nitrogen_tires": 396.0,
        "market_adjustment": 750.0,
    }


def test_pricing_computed_when_bottom_line_missing(risk_payload):
    del risk_payload["bottom_line_price"]

    pricing = reconstruct_pricing(risk_payload)

    assert pricing.source == "computed"
    assert pricing.bottom_line_price == 32450.0 + 2100.0 + 1645.0


def test_pricing_fills_gaps_from_conversation():
    conversation = [
        {"role": "dealer", "content": "Here is our quote. Adjusted Price: 28,900.00"},
        {"role": "dealer", "content": "Tax: 1,734.50 and title fees on top"},
    ]
    payload = {"fees": [{"label": "Doc Fee", "amount": 85, "assessment": "NORMAL"}]}

    pricing = reconstruct_pricing(payload, conversation)

    assert pricing.offer_price == 28900.0
    assert pricing.tax == 1734.5
    assert pricing.source == "computed"
    assert pricing.bottom_line_price == 28900.0 + 1734.5 + 85


def test_pricing_prefers_quoted_balance_over_computation():
    conversation = ["Adjusted Price: 30,000", "Balance: 33,250.75"]

    pricing = reconstruct_pricing({"fees": []}, conversation)

    assert pricing.source == "conversation"
    assert pricing.bottom_line_price == 33250.75


def test_pricing_payload_figures_win_over_conversation(risk_payload):
    pricing = reconstruct_pricing(risk_payload, ["Adjusted Price: 1,000", "Tax: 10"])

    assert pricing.offer_price == 32450.0
    assert pricing.tax == 2100.0


def test_pricing_unavailable():
    pricing = reconstruct_pricing({"fees": [{"label": "Etch", "amount": 200, "assessment": "EXCESSIVE"}]})

    assert pricing.source == "unavailable"
    assert pricing.bottom_line_price is None
    assert pricing.fee_total == 200


def test_pricing_rejects_non_numeric_offer():
    with pytest.raises(InvalidInputError):
        reconstruct_pricing({"offer_price": "call us"})


def test_conversation_latest_quote_wins():
    quoted = parse_conversation_pricing(
        [
            {"content": "Adjusted Price: 31,000"},
            {"content": None},
            {"content": "Revised. Adjusted Price: 30,500"},
        ]
    )
    assert quoted == {"offer_price": 30500.0}


def test_fee_slug():
    assert fee_slug("Doc  Fee") == "doc_fee"
    assert fee_slug(" Dealer Prep ") == "dealer_prep"


def test_parse_money():
    assert parse_money("32,450.00") == 32450.0
    assert parse_money("1234") == 1234.0
    assert parse_money("abc") is None


@pytest.mark.parametrize("value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (99.49, 99), (-0.5, 0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("value,digits,expected", [(75.25, 1, "75.3"), (50, 1, "50.0"), (0.125, 2, "0.13"), (2.675, 2, "2.67")])
def test_format_fixed(value, digits, expected):
    assert format_fixed(value, digits) == expected
