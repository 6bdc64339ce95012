"""Unit tests for the suggested-asset portfolio preview"""

import pytest
from finsim_engine.domain.exceptions import InvalidProjectionHorizon
from finsim_engine.domain.models import AssetType, Investment, InvestmentSuggestion, RiskLevel
from finsim_engine.domain.portfolio import infer_risk_level, preview_growth, risk_return_map


@pytest.fixture
def suggestion() -> InvestmentSuggestion:
    return InvestmentSuggestion(
        symbol="BTC",
        name="Bitcoin",
        type=AssetType.CRYPTO,
        risk_level=RiskLevel.HIGH,
        reasoning="Speculative growth",
        estimated_return="12%",
    )


@pytest.mark.parametrize(
    "rate, level",
    [
        (15.0, RiskLevel.HIGH),
        (10.0, RiskLevel.MEDIUM),  # boundary belongs to the band below
        (6.5, RiskLevel.MEDIUM),
        (6.0, RiskLevel.LOW),
        (0.0, RiskLevel.LOW),
    ],
)
def test_infer_risk_level(rate, level):
    assert infer_risk_level(rate) == level


def test_preview_growth_from_empty_portfolio(suggestion):
    growth = preview_growth([], suggestion, months=2, monthly_contribution=100)

    assert [point.label for point in growth] == ["M0", "M1", "M2"]
    assert all(point.current == 0 for point in growth)
    assert growth[0].with_new_asset == 0
    # Contribution lands first, then a month of 12% / 12 growth
    assert growth[1].with_new_asset == pytest.approx(101.0)
    assert growth[2].with_new_asset == pytest.approx((101.0 + 100) * 1.01)


def test_preview_growth_keeps_existing_holdings_untouched(suggestion):
    holdings = [Investment(id="i1", name="401(k)", balance=12500, annual_return_rate=6.5, monthly_contribution=200)]

    growth = preview_growth(holdings, suggestion, months=60)

    assert len(growth) == 61
    assert growth[0].current == growth[0].with_new_asset == 12500
    assert growth[-1].with_new_asset > growth[-1].current
    assert holdings[0].balance == 12500


def test_preview_growth_rejects_negative_months(suggestion):
    with pytest.raises(InvalidProjectionHorizon):
        preview_growth([], suggestion, months=-1)


def test_risk_return_map(suggestion):
    holdings = [
        Investment(id="i1", name="Bonds", balance=1000, annual_return_rate=4.0, monthly_contribution=0),
        Investment(id="i2", name="Index", balance=1000, annual_return_rate=8.0, monthly_contribution=0),
    ]

    points = risk_return_map(holdings, suggestion)

    assert [(p.name, p.risk_level, p.is_new) for p in points] == [
        ("Bonds", RiskLevel.LOW, False),
        ("Index", RiskLevel.MEDIUM, False),
        ("BTC", RiskLevel.HIGH, True),
    ]
    assert points[-1].annual_return_rate == 12.0
