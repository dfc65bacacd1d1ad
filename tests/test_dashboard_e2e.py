"""End-to-end tests for the dashboard workflow.

Tests the full path from a CSV export on disk through load_transactions()
and build_dashboard() with a profile, checking every figure the dashboard
shows for one freelancer's March.

Test scenario (today = 2024-03-15):
- February: 2500 income, 400 Supplies
- March: 3000 income to date (20 hours), 600 expenses (Supplies, Fuel),
  plus 500 income dated the 20th
- Profile: £, 5800 monthly goal, flat 20% custom tax
"""

from datetime import date

import pytest

from ledgercalc.sdk import Profile, build_dashboard, load_transactions


TODAY = date(2024, 3, 15)

EXPORT_CSV = """id,amount,type,category,hours_spent,created_at,transaction_date,user_id
1,2500,income,Sales,,2024-02-09T10:00:00Z,,u1
2,400,expense,Supplies,,2024-02-12T10:00:00Z,,u1
3,2000,income,Sales,10,2024-03-01T09:00:00Z,,u1
4,300,expense,Supplies,,2024-03-05T12:00:00Z,,u1
5,200,expense,Fuel,,2024-03-09T08:00:00Z,2024-03-08,u1
6,100,expense,Supplies,,2024-03-10T16:00:00Z,,u1
7,1000,income,Sales,10,2024-03-12T09:00:00Z,,u1
8,500,income,Sales,,2024-03-20T09:00:00Z,,u1
"""


@pytest.fixture
def transactions(tmp_path):
    path = tmp_path / "transactions.csv"
    path.write_text(EXPORT_CSV)
    return load_transactions(path)


@pytest.fixture
def profile():
    return Profile(
        currency_symbol="£",
        monthly_net_goal=5800,
        tax={"location": "custom", "custom_rate": 20},
    )


class TestMonthDashboard:

    @pytest.fixture
    def report(self, transactions, profile):
        return build_dashboard(transactions, "2024-03", profile=profile, today=TODAY)

    def test_summary_covers_whole_month(self, report):
        assert report.summary.income == 3500
        assert report.summary.expenses == 600
        assert report.summary.net == 2900
        assert report.summary.total_hours == 20
        assert report.summary.effective_hourly == pytest.approx(145)

    def test_changes_against_february(self, report):
        assert report.changes["income"] == pytest.approx(40)
        assert report.changes["expenses"] == pytest.approx(50)
        assert report.changes["net"] == pytest.approx(800 / 2100 * 100)
        # No hours logged in February
        assert report.changes["hourly"] is None

    def test_captions(self, report):
        assert report.captions.income == "Pacing above your recent average. Keep it up."
        assert report.captions.expenses == "Biggest drain is Supplies (67%). Worth a review?"
        assert report.captions.net == "Excellent. You're keeping 83% of every £1 earned."
        assert report.captions.hourly == "Elite pace. Well above average."

    def test_projection_uses_net_to_date(self, report):
        assert report.projection.days_elapsed == 15
        assert report.projection.daily_average == pytest.approx(160)
        assert report.projection.projection == pytest.approx(4960)
        assert report.on_track == "You're on track to earn ~£4,960 this month."
        assert report.projection_basis == "Based on £160/day across 15 days."

    def test_goal_progress(self, report):
        assert report.goal_progress == 50
        assert report.monthly_net_goal == 5800

    def test_categories(self, report):
        assert report.categories == {"Fuel": 200, "Supplies": 400}
        assert report.top_category_change == pytest.approx((400 / 600 * 100 - 100) / 100 * 100)

    def test_series(self, report):
        assert len(report.series) == 31
        assert report.series[7] == {"day": 8, "income": 0.0, "expense": 200.0, "net": -200.0}
        assert report.series[19]["income"] == 500

    def test_tax_on_net(self, report):
        assert report.tax.total == pytest.approx(580)

    def test_to_dict(self, report):
        data = report.to_dict()

        assert data["period"] == "2024-03"
        assert data["today"] == "2024-03-15"
        assert data["tax"]["total"] == pytest.approx(580)
        assert data["projection"]["should_show"] is True


class TestYearDashboard:

    @pytest.fixture
    def report(self, transactions, profile):
        return build_dashboard(transactions, "2024", profile=profile, today=TODAY)

    def test_current_year_is_year_to_date(self, report):
        assert report.summary.income == 5500
        assert report.summary.expenses == 1000
        assert report.summary.net == 4500

    def test_no_previous_year(self, report):
        assert report.changes == {"income": None, "expenses": None, "net": None, "hourly": None}
        assert report.captions.income == "Tracking your income this month."

    def test_year_projection(self, report):
        assert report.projection.days_elapsed == 31 + 29 + 15
        assert report.projection.total_days == 366
        assert report.projection.projection == pytest.approx(4500 / 75 * 366)
        assert report.on_track.endswith("this year.")

    def test_goal_only_for_months(self, report):
        assert report.goal_progress is None
        assert report.monthly_net_goal is None

    def test_series_is_monthly(self, report):
        assert [row["net"] for row in report.series[:3]] == [0.0, 2100.0, 2400.0]


class TestPastMonth:

    def test_no_projection_banner(self, transactions, profile):
        report = build_dashboard(transactions, "2024-02", profile=profile, today=TODAY)

        assert report.summary.net == 2100
        assert report.on_track is None
        assert report.projection_basis is None
        assert report.captions.income == "Tracking your income this month."
        assert report.goal_progress == 36


def test_default_profile(transactions):
    report = build_dashboard(transactions, "2024-03", today=TODAY)

    assert report.currency_symbol == "£"
    assert report.tax is None
    assert report.goal_progress is None
