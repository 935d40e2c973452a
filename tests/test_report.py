"""Tests for the dashboard and report payload service."""

import json
from datetime import date
from decimal import Decimal

from bikeflip.domain.entities import CapitalType


def _seed(bike_service, expense_service, capital_service):
    sold = bike_service.create_bike(
        model="Trek FX 3 Disc",
        nickname="Red Rocket",
        buy_price=Decimal("500"),
        other_costs=Decimal("50"),
        buy_date=date(2024, 3, 1),
    )
    expense_service.record_expense(
        date=date(2024, 3, 5), description="Tires", amount=Decimal("100"), bike_id=sold
    )
    bike_service.mark_sold(sold, sell_price=Decimal("700"), sell_date=date(2024, 4, 1))

    kept = bike_service.create_bike(model="Giant Escape", buy_price=Decimal("300"))
    bike_service.mark_kept(kept)

    bike_service.create_bike(model="Cannondale", buy_price=Decimal("250"))

    expense_service.record_expense(
        date=date(2024, 3, 20),
        description="Listing boost",
        amount=Decimal("20"),
        category="Marketing",
        paid_by="Alex",
    )
    capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("1500"), date(2024, 2, 1))
    return sold, kept


def test_build_dashboard(
    report_service, bike_service, expense_service, capital_service, sample_partners
):
    _seed(bike_service, expense_service, capital_service)

    dashboard = report_service.build_dashboard()
    metrics = dashboard.metrics

    assert metrics.total_revenue == Decimal("1000")
    assert metrics.total_cogs == Decimal("950")
    assert metrics.general_expenses == Decimal("20")
    assert metrics.net_profit == Decimal("30")
    assert metrics.inventory_value == Decimal("250")
    assert metrics.net_capital == Decimal("1520")
    # 1520 + 1000 - 1200 - 20
    assert metrics.free_cash == Decimal("1300")
    assert (metrics.sold_count, metrics.inventory_count, metrics.kept_count) == (1, 1, 1)

    assert [(f.label, f.profit) for f in dashboard.flip_profits] == [("Red Rocket", Decimal("50"))]
    assert dashboard.expense_breakdown == {"General": Decimal("100"), "Marketing": Decimal("20")}
    assert dashboard.partner_balances == {"Alex": Decimal("1520"), "Sam": Decimal("0")}


def test_empty_dashboard(report_service):
    dashboard = report_service.build_dashboard()
    assert dashboard.metrics.net_profit == 0
    assert dashboard.metrics.free_cash == 0
    assert dashboard.bikes == ()
    assert dashboard.flip_profits == ()
    assert dashboard.expense_breakdown == {}


def test_build_payload(
    report_service, bike_service, expense_service, capital_service, sample_partners
):
    sold, kept = _seed(bike_service, expense_service, capital_service)

    payload = report_service.build_payload()

    # Must serialize without a custom encoder
    json.dumps(payload)

    assert set(payload) == {
        "summary",
        "metrics",
        "bikes",
        "expenses",
        "capital",
        "partners",
        "partner_balances",
    }
    assert Decimal(payload["summary"]["net_profit"]) == Decimal("30")
    assert payload["summary"]["sold_count"] == 1

    bikes = {b["id"]: b for b in payload["bikes"]}
    assert Decimal(bikes[sold]["profit"]) == Decimal("50")
    assert Decimal(bikes[kept]["profit"]) == Decimal("0")
    in_stock = [b for b in payload["bikes"] if b["status"] == "In Inventory"]
    assert in_stock[0]["profit"] == "N/A"
    assert in_stock[0]["sell"] is None

    assert len(payload["expenses"]) == 2
    assert {e["paid_by"] for e in payload["expenses"]} == {"Business", "Alex"}
    assert len(payload["capital"]) == 2
    assert [p["name"] for p in payload["partners"]] == ["Alex", "Sam"]
    assert Decimal(payload["partner_balances"]["Alex"]) == Decimal("1520")
