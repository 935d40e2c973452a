"""Tests for CLI commands."""

import json
from datetime import date
from decimal import Decimal

from bikeflip.cli.main import cli
from bikeflip.domain.entities import BikeStatus, CapitalType


def run(cli_runner, temp_db, args, **kwargs):
    """Invoke the CLI against the temporary database.

    The fixture's own session is closed before and after so that it never
    serves rows cached before the command ran.
    """
    temp_db.disconnect()
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path] + args, **kwargs)
    temp_db.disconnect()
    return result


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "bike" in result.output
    assert "dashboard" in result.output


def test_bike_add_and_list(cli_runner, temp_db):
    result = run(
        cli_runner,
        temp_db,
        ["bike", "add", "Trek FX 3", "--buy-price", "$450", "--other-costs", "50", "--nickname", "Red Rocket"],
    )
    assert result.exit_code == 0
    assert "Created bike 'Red Rocket'" in result.output

    bikes = temp_db.list_bikes()
    assert len(bikes) == 1
    assert bikes[0].buy_price == Decimal("450")

    result = run(cli_runner, temp_db, ["bike", "list"])
    assert result.exit_code == 0
    assert "Red Rocket" in result.output
    assert "$500.00" in result.output
    assert "In Inventory" in result.output


def test_bike_list_empty(cli_runner, temp_db):
    result = run(cli_runner, temp_db, ["bike", "list"])
    assert result.exit_code == 0
    assert "No bikes found." in result.output


def test_bike_add_invalid_amount(cli_runner, temp_db):
    result = run(cli_runner, temp_db, ["bike", "add", "Trek", "--buy-price", "cheap"])
    assert result.exit_code == 1
    assert "Error: Invalid buy price" in result.output
    assert temp_db.list_bikes() == []


def test_bike_sell_and_keep(cli_runner, temp_db, bike_service):
    sold_id = bike_service.create_bike(model="Trek", buy_price=Decimal("500"), nickname="Fast")
    kept_id = bike_service.create_bike(
        model="Giant", buy_price=Decimal("300"), other_costs=Decimal("20"), nickname="Comfy"
    )

    result = run(cli_runner, temp_db, ["bike", "sell", "Fast", "--price", "650", "--date", "2024-04-01"])
    assert result.exit_code == 0
    assert "Marked 'Fast' as sold" in result.output
    assert "Profit: $150.00" in result.output

    result = run(cli_runner, temp_db, ["bike", "keep", kept_id[:8]])
    assert result.exit_code == 0
    assert "Marked 'Comfy' as kept (booked at cost: $320.00)" in result.output

    assert temp_db.get_bike(sold_id).sell_date == date(2024, 4, 1)
    assert temp_db.get_bike(kept_id).status == BikeStatus.KEPT


def test_bike_sell_pending_price(cli_runner, temp_db, bike_service):
    bike_service.create_bike(model="Trek", buy_price=Decimal("500"), nickname="Fast")

    result = run(cli_runner, temp_db, ["bike", "sell", "Fast"])
    assert result.exit_code == 0
    assert "Sale price not recorded yet" in result.output

    result = run(cli_runner, temp_db, ["bike", "show", "Fast"])
    assert result.exit_code == 0
    assert "pending" in result.output
    assert "Profit:      -" in result.output


def test_bike_edit_back_to_inventory(cli_runner, temp_db, bike_service):
    bike_id = bike_service.create_bike(
        model="Trek", buy_price=Decimal("500"), status="sold", sell_price=Decimal("600")
    )

    result = run(cli_runner, temp_db, ["bike", "edit", bike_id, "--status", "in-inventory"])
    assert result.exit_code == 0
    assert f"Updated bike {bike_id[:8]}" in result.output

    bike = temp_db.get_bike(bike_id)
    assert bike.status == BikeStatus.IN_INVENTORY
    assert bike.sell_price is None


def test_bike_unknown_reference(cli_runner, temp_db):
    result = run(cli_runner, temp_db, ["bike", "show", "ghost"])
    assert result.exit_code == 1
    assert "Error: Bike 'ghost' not found" in result.output


def test_bike_delete_unlinks_expenses(cli_runner, temp_db, bike_service, expense_service):
    bike_id = bike_service.create_bike(model="Trek", buy_price=Decimal("500"), nickname="Fast")
    expense_id, _ = expense_service.record_expense(
        date=date(2024, 3, 1), description="Tube", amount=Decimal("8"), bike_id=bike_id
    )

    result = run(cli_runner, temp_db, ["bike", "delete", "Fast"], input="n\n")
    assert result.exit_code == 0
    assert "1 linked expense will be kept as general expenses." in result.output
    assert "Deletion cancelled." in result.output
    assert temp_db.get_bike(bike_id) is not None

    result = run(cli_runner, temp_db, ["bike", "delete", "Fast", "--yes"])
    assert result.exit_code == 0
    assert "Deleted bike 'Fast'" in result.output
    assert "Unlinked 1 expense" in result.output

    assert temp_db.get_bike(bike_id) is None
    assert temp_db.get_expense(expense_id).bike_id is None


def test_expense_add_paid_by_partner(cli_runner, temp_db, sample_partners):
    result = run(
        cli_runner,
        temp_db,
        ["expense", "add", "Torque wrench", "--amount", "60", "--category", "Tools", "--paid-by", "Alex"],
    )
    assert result.exit_code == 0
    assert "Created expense" in result.output
    assert "Booked as capital contribution from Alex" in result.output

    entries = temp_db.list_capital_entries(partner_name="Alex")
    assert len(entries) == 1
    assert entries[0].type == CapitalType.CONTRIBUTION
    assert entries[0].amount == Decimal("60")
    assert entries[0].description == "Expense: Torque wrench"


def test_expense_add_unknown_payer(cli_runner, temp_db):
    result = run(cli_runner, temp_db, ["expense", "add", "Tape", "--amount", "3", "--paid-by", "Nobody"])
    assert result.exit_code == 1
    assert "Error: Partner 'Nobody' not found" in result.output
    assert temp_db.list_expenses() == []


def test_expense_link_unlink_and_list(cli_runner, temp_db, bike_service, expense_service):
    bike_id = bike_service.create_bike(model="Trek", buy_price=Decimal("500"), nickname="Fast")
    expense_id, _ = expense_service.record_expense(
        date=date(2024, 3, 1), description="Saddle", amount=Decimal("40")
    )

    result = run(cli_runner, temp_db, ["expense", "link", expense_id[:8], "Fast"])
    assert result.exit_code == 0
    assert f"Linked expense {expense_id[:8]} to bike {bike_id[:8]}" in result.output
    assert temp_db.get_expense(expense_id).bike_id == bike_id

    result = run(cli_runner, temp_db, ["expense", "list", "--bike", "Fast"])
    assert result.exit_code == 0
    assert "Saddle" in result.output
    assert "Total: $40.00" in result.output

    result = run(cli_runner, temp_db, ["expense", "unlink", expense_id])
    assert result.exit_code == 0
    assert temp_db.get_expense(expense_id).bike_id is None

    result = run(cli_runner, temp_db, ["expense", "list", "--general"])
    assert "Saddle" in result.output


def test_expense_list_invalid_range(cli_runner, temp_db):
    result = run(
        cli_runner, temp_db, ["expense", "list", "--start-date", "2024-02-01", "--end-date", "2024-01-01"]
    )
    assert result.exit_code == 1
    assert "Start date must be on or before end date" in result.output


def test_expense_delete(cli_runner, temp_db, expense_service):
    expense_id, _ = expense_service.record_expense(
        date=date(2024, 3, 1), description="Ads", amount=Decimal("10")
    )
    result = run(cli_runner, temp_db, ["expense", "delete", expense_id[:8]])
    assert result.exit_code == 0
    assert temp_db.get_expense(expense_id) is None


def test_capital_contribute_withdraw_and_balances(cli_runner, temp_db, sample_partners):
    result = run(cli_runner, temp_db, ["capital", "contribute", "Alex", "--amount", "1000", "--date", "2024-01-01"])
    assert result.exit_code == 0
    assert "Recorded contribution of $1,000.00 for Alex" in result.output

    result = run(cli_runner, temp_db, ["capital", "withdraw", "Alex", "--amount", "200"])
    assert result.exit_code == 0
    assert "Recorded withdrawal of $200.00 for Alex" in result.output

    result = run(cli_runner, temp_db, ["capital", "list", "--partner", "Alex"])
    assert result.exit_code == 0
    assert "Contribution" in result.output
    assert "Withdrawal" in result.output

    result = run(cli_runner, temp_db, ["balances", "--sort", "balance"])
    assert result.exit_code == 0
    lines = [line for line in result.output.splitlines() if "$" in line]
    assert lines[0].startswith("Alex")
    assert "$800.00" in lines[0]
    assert lines[1].startswith("Sam")


def test_capital_delete(cli_runner, temp_db, capital_service):
    entry_id = capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("5"), date(2024, 1, 1))
    result = run(cli_runner, temp_db, ["capital", "delete", entry_id[:8]])
    assert result.exit_code == 0
    assert temp_db.get_capital_entry(entry_id) is None


def test_partner_commands(cli_runner, temp_db, capital_service):
    result = run(cli_runner, temp_db, ["partner", "add", "Alex"])
    assert result.exit_code == 0
    assert "Created partner 'Alex'" in result.output

    result = run(cli_runner, temp_db, ["partner", "add", "Alex"])
    assert result.exit_code == 1
    assert "already exists" in result.output

    capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("100"), date(2024, 1, 1))

    result = run(cli_runner, temp_db, ["partner", "rename", "Alex", "Alexander", "--propagate"])
    assert result.exit_code == 0
    assert "Renamed partner 'Alex' to 'Alexander'" in result.output
    assert "Updated 1 historical record" in result.output

    result = run(cli_runner, temp_db, ["partner", "list"])
    assert "Alexander" in result.output

    result = run(cli_runner, temp_db, ["partner", "delete", "Alexander"], input="y\n")
    assert result.exit_code == 0
    assert "Deleted partner 'Alexander'" in result.output

    result = run(cli_runner, temp_db, ["balances"])
    assert "Alexander" in result.output
    assert "$100.00" in result.output


def test_dashboard(cli_runner, temp_db, bike_service, capital_service):
    bike_id = bike_service.create_bike(model="Trek", buy_price=Decimal("500"), nickname="Fast")
    bike_service.mark_sold(bike_id, sell_price=Decimal("700"))
    capital_service.add_entry("Alex", CapitalType.CONTRIBUTION, Decimal("500"), date(2024, 1, 1))

    result = run(cli_runner, temp_db, ["dashboard", "--details"])
    assert result.exit_code == 0
    assert "Net profit" in result.output
    assert "$200.00" in result.output
    assert "Free cash" in result.output
    assert "$700.00" in result.output
    assert "Profit per flip" in result.output
    assert "No expenses logged yet." in result.output


def test_dashboard_empty(cli_runner, temp_db):
    result = run(cli_runner, temp_db, ["dashboard"])
    assert result.exit_code == 0
    assert "$0.00" in result.output


def test_report_to_file(cli_runner, temp_db, bike_service, tmp_path):
    bike_service.create_bike(model="Trek", buy_price=Decimal("500"))
    output = tmp_path / "payload.json"

    result = run(cli_runner, temp_db, ["report", "--output", str(output)])
    assert result.exit_code == 0
    assert "Wrote report payload" in result.output

    payload = json.loads(output.read_text())
    assert payload["bikes"][0]["profit"] == "N/A"
    assert payload["summary"]["inventory_count"] == 1
