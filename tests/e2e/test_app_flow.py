"""
🧪 E2E Tests for the Medical Regression Lab

These tests use Playwright to drive the web application through a real browser.

Setup:
- conftest.py starts the Shiny server at http://localhost:8000
- Tests run against the real server (not mocked)

Usage:
    pytest tests/e2e/test_app_flow.py -v                 # Run all E2E tests
    pytest tests/e2e/test_app_flow.py -v --headed        # Show browser
    pytest tests/e2e/test_app_flow.py -v --slowmo=500    # Slow motion (debug)
"""

import pytest
from playwright.sync_api import Page, expect

pytestmark = pytest.mark.e2e

BASE_URL = "http://localhost:8000"
"""Base URL for the Shiny server (started by conftest.py)"""

NAV_TABS = ["🏠 Home", "📈 Linear", "🧮 Multiple", "🎯 Logistic", "⏳ Cox", "🔢 Poisson"]


class TestAppLoading:
    """App initialization and basic structure."""

    def test_app_loads_successfully(self, page: Page):
        response = page.goto(BASE_URL)
        assert response is not None, "page.goto returned None"
        assert response.status in (200, 304), f"Expected 200/304, got {response.status}"

    def test_app_has_correct_title(self, page: Page):
        page.goto(BASE_URL)
        expect(page).to_have_title("Medical Regression Lab")

    def test_navbar_contains_all_tabs(self, page: Page):
        page.goto(BASE_URL)
        for tab_name in NAV_TABS:
            expect(page.get_by_role("tab", name=tab_name)).to_be_visible()

    def test_home_shows_catalog(self, page: Page):
        page.goto(BASE_URL)
        expect(page.get_by_text("Types of Regression Analysis")).to_be_visible()
        expect(page.get_by_text("Which Regression Should I Use?")).to_be_visible()


class TestDecisionGuide:
    def test_default_recommendation(self, page: Page):
        page.goto(BASE_URL)
        expect(page.get_by_text("Simple Linear Regression").first).to_be_visible()

    def test_time_to_event_recommends_cox(self, page: Page):
        page.goto(BASE_URL)
        page.locator("#home-guide_outcome").select_option("time_to_event")
        expect(page.locator("#home-out_recommendation")).to_contain_text("Cox Proportional Hazards")


class TestExplorers:
    """Each explorer tab renders its chart and summary."""

    @pytest.mark.parametrize(
        "tab_name, prefix, heading, count_label",
        [
            ("📈 Linear", "linear-out_lin", "Scatter & Best-Fit Line", "Patients (n)"),
            ("🧮 Multiple", "multiple-out_mult", "Factor vs Outcome", "Pearson r"),
            ("🎯 Logistic", "logistic-out_logit", "Outcomes & Decision Boundary", "Patients (n)"),
            ("⏳ Cox", "cox-out_cox", "Kaplan-Meier Survival Curve", "Patients (n)"),
            ("🔢 Poisson", "poisson-out_pois", "Observed vs Expected Counts", "Units (n)"),
        ],
    )
    def test_explorer_renders(self, page: Page, tab_name, prefix, heading, count_label):
        page.goto(BASE_URL)
        page.get_by_role("tab", name=tab_name).click()

        expect(page.get_by_text(heading)).to_be_visible()
        expect(page.locator(f"#{prefix}_plot .plotly-graph-div")).to_be_visible(timeout=15000)
        expect(page.locator(f"#{prefix}_summary")).to_contain_text(count_label, timeout=15000)

    def test_linear_scenario_switch(self, page: Page):
        page.goto(BASE_URL)
        page.get_by_role("tab", name="📈 Linear").click()
        page.locator("#linear-lin_scenario").select_option("height_weight")
        expect(page.locator("#linear-out_lin_summary")).to_contain_text("height (cm)", timeout=15000)
