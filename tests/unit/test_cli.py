"""Tests for the ledger-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from ledgercalc.cli.__main__ import cli


TRANSACTIONS = [
    {"id": 1, "amount": 2000, "type": "income", "category": "Sales", "hours_spent": 10,
     "created_at": "2024-03-01T09:00:00Z"},
    {"id": 2, "amount": 300, "type": "expense", "category": "Supplies", "created_at": "2024-03-05T12:00:00Z"},
    {"id": 3, "amount": 1000, "type": "income", "category": "Sales", "hours_spent": 10,
     "created_at": "2024-03-12T09:00:00Z"},
    {"id": 4, "amount": 2500, "type": "income", "category": "Sales", "created_at": "2024-02-10T09:00:00Z"},
]


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Empty config directory plus a transactions export."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("LEDGER_CALC_CONFIG_PATH", str(config_dir))

    transactions_file = tmp_path / "transactions.json"
    transactions_file.write_text(json.dumps(TRANSACTIONS))

    return {"config_dir": config_dir, "transactions_file": transactions_file}


def invoke(*args):
    return CliRunner().invoke(cli, [str(arg) for arg in args])


class TestProjectCommand:

    def test_json_output(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"],
                        "--month", "2024-03", "--today", "2024-03-15", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["should_show"] is True
        assert data["days_elapsed"] == 15
        assert data["projection"] == pytest.approx(2700 / 15 * 31)

    def test_text_output(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"],
                        "--month", "2024-03", "--today", "2024-03-15")

        assert result.exit_code == 0, result.output
        assert "on track to earn" in result.output

    def test_past_month_not_projected(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"],
                        "--month", "2024-02", "--today", "2024-03-15", "--format", "json")

        assert result.exit_code == 0
        assert json.loads(result.output)["projection"] is None

    def test_past_month_text_output(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"],
                        "--month", "2024-02", "--today", "2024-03-15")

        assert result.exit_code == 0, result.output
        assert "not the current one" in result.output

    def test_empty_export_in_current_month(self, isolated_config, tmp_path):
        empty = tmp_path / "empty.json"
        empty.write_text("[]")

        result = invoke("project", empty, "--month", "2024-03", "--today", "2024-03-15")

        assert result.exit_code == 0, result.output
        assert "not the current one" not in result.output
        assert "no transactions recorded" in result.output
        assert "Based on £0/day across 15 days." in result.output

    def test_defaults_to_current_month(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"],
                        "--today", "2024-03-15", "--format", "json")
        assert json.loads(result.output)["total_days"] == 31

    def test_month_and_year_conflict(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"], "--month", "2024-03", "--year", "2024")
        assert result.exit_code != 0
        assert "not both" in result.output

    def test_bad_today(self, isolated_config):
        result = invoke("project", isolated_config["transactions_file"], "--today", "15/03/2024")
        assert result.exit_code != 0
        assert "YYYY-MM-DD" in result.output


class TestTransactionsFile:

    def test_no_file_and_no_setting(self, isolated_config):
        result = invoke("project")
        assert result.exit_code != 0
        assert "No transactions file" in result.output

    def test_default_from_settings(self, isolated_config):
        result = invoke("settings", "transactions-file", isolated_config["transactions_file"])
        assert result.exit_code == 0, result.output

        result = invoke("project", "--today", "2024-03-15", "--format", "json")
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["should_show"] is True

    def test_setting_missing_path_rejected(self, isolated_config, tmp_path):
        result = invoke("settings", "transactions-file", tmp_path / "missing.json")
        assert result.exit_code != 0
        assert "not found" in result.output

    def test_invalid_file_reported(self, isolated_config, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([{"id": 1, "amount": -1, "type": "income", "created_at": "2024-03-01"}]))

        result = invoke("project", bad)
        assert result.exit_code != 0
        assert "bad.json row 1" in result.output


class TestCaptionsCommand:

    def test_json_output(self, isolated_config):
        result = invoke("captions", isolated_config["transactions_file"],
                        "--month", "2024-03", "--today", "2024-03-15", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["income"] == "Pacing above your recent average. Keep it up."
        assert data["expenses"] == "Biggest drain is Supplies (100%). Worth a review?"
        assert data["net"] == "Excellent. You're keeping 90% of every £1 earned."
        assert data["hourly"] == "Elite pace. Well above average."

    def test_profile_currency(self, isolated_config):
        invoke("profile", "set", "currency_symbol", "$")
        result = invoke("captions", isolated_config["transactions_file"],
                        "--month", "2024-03", "--today", "2024-03-15", "--format", "json")
        assert "every $1 earned" in json.loads(result.output)["net"]


class TestDashboardCommand:

    def test_json_output(self, isolated_config):
        result = invoke("dashboard", isolated_config["transactions_file"],
                        "--month", "2024-03", "--today", "2024-03-15", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["period"] == "2024-03"
        assert data["summary"]["net"] == 2700
        assert data["changes"]["income"] == pytest.approx(20)
        assert data["tax"] is None

    def test_text_output(self, isolated_config):
        result = invoke("dashboard", isolated_config["transactions_file"],
                        "--month", "2024-03", "--today", "2024-03-15")

        assert result.exit_code == 0, result.output
        assert "Dashboard 2024-03" in result.output
        assert "Supplies" in result.output


class TestTaxCommand:

    def test_uk_json(self, isolated_config):
        result = invoke("tax", 60000, "--location", "UK", "--format", "json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["total"] == pytest.approx(37700 * 0.20 + 9730 * 0.40)

    def test_custom_rate(self, isolated_config):
        result = invoke("tax", 40000, "-l", "custom", "--custom-rate", 20, "--format", "json")
        assert json.loads(result.output)["total"] == pytest.approx(8000)

    def test_self_employment_flag(self, isolated_config):
        result = invoke("tax", 50000, "-l", "US", "-b", "self-employed", "--self-employment", "--format", "json")
        assert json.loads(result.output)["self_employment_tax"] == pytest.approx(7065)

    def test_location_from_profile(self, isolated_config):
        invoke("profile", "set", "tax.location", "UK")
        result = invoke("tax", 50270, "--format", "json")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total"] == pytest.approx(7540)

    def test_missing_location(self, isolated_config):
        result = invoke("tax", 50000)
        assert result.exit_code != 0
        assert "No location given" in result.output

    def test_text_output(self, isolated_config):
        result = invoke("tax", 60000, "--location", "UK")
        assert result.exit_code == 0, result.output
        assert "United Kingdom" in result.output


class TestProfileCommands:

    def test_set_and_show(self, isolated_config):
        result = invoke("profile", "set", "monthly_net_goal", "5800")
        assert result.exit_code == 0, result.output

        result = invoke("profile", "show")
        assert result.exit_code == 0
        assert "monthly_net_goal: 5800" in result.output

    def test_set_invalid_key(self, isolated_config):
        result = invoke("profile", "set", "currency", "GBP")
        assert result.exit_code != 0
        assert "Invalid value" in result.output


def test_jurisdictions_lists_codes(isolated_config):
    result = invoke("jurisdictions")

    assert result.exit_code == 0, result.output
    assert "Norway" in result.output
    assert "custom" in result.output
