from shiny import module, reactive, render, ui

from logger import get_logger
from utils.regression_guide import OUTCOME_TYPES, REGRESSION_TYPES, recommend_regression
from utils.ui_helpers import create_error_alert, create_input_group, create_key_points

logger = get_logger(__name__)

TAB_TITLES = {
    "linear": "📈 Linear",
    "multiple": "🧮 Multiple",
    "logistic": "🎯 Logistic",
    "cox": "⏳ Cox",
    "poisson": "🔢 Poisson",
}


@module.ui
def home_ui():
    return ui.div(
        # Hero Section
        ui.div(
            ui.h1("Medical Regression Lab", style="color: white; margin-bottom: 16px;"),
            ui.p(
                "Build intuition for the regression models used in clinical research "
                "with synthetic datasets and interactive charts.",
                class_="lead",
                style="color: rgba(255,255,255,0.9); max-width: 800px; margin: 0 auto;",
            ),
            class_="hero-section",
        ),
        # Catalog
        ui.h3(
            "Types of Regression Analysis",
            class_="results-title",
            style="text-align: center; margin-bottom: 32px;",
        ),
        ui.div(
            *[_regression_card(reg) for reg in REGRESSION_TYPES],
            class_="feature-grid",
        ),
        # Decision Guide
        ui.h3(
            "Which Regression Should I Use?",
            class_="results-title",
            style="text-align: center; margin-top: 48px; margin-bottom: 32px;",
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header("Describe Your Outcome"),
                create_input_group(
                    "Outcome",
                    ui.input_select("guide_outcome", "Outcome variable type:", OUTCOME_TYPES),
                    type="required",
                ),
                create_input_group(
                    "Details",
                    ui.panel_conditional(
                        "input.guide_outcome == 'continuous' || input.guide_outcome == 'binary'",
                        ui.input_numeric(
                            "guide_predictors", "Number of predictors:", value=1, min=1, step=1
                        ),
                    ),
                    ui.panel_conditional(
                        "input.guide_outcome == 'count'",
                        ui.input_checkbox(
                            "guide_multiple_events", "Several event types per subject", value=False
                        ),
                    ),
                    ui.panel_conditional(
                        "input.guide_outcome == 'time_to_event'",
                        ui.input_checkbox(
                            "guide_censored", "Some subjects were censored", value=True
                        ),
                    ),
                    type="optional",
                ),
            ),
            ui.div(ui.output_ui("out_recommendation")),
            col_widths=[5, 7],
        ),
        # When to use
        ui.layout_columns(
            create_key_points(
                "When to Use Regression Analysis",
                [
                    "Predicting outcomes from known variables",
                    "Understanding relationships between variables",
                    "Controlling for confounding factors",
                    "Analyzing survival and time-to-event data",
                    "Studying count data and rates",
                ],
            ),
            create_key_points(
                "Key Considerations",
                [
                    "Sample size requirements",
                    "Data distribution assumptions",
                    "Variable selection methods",
                    "Model validation techniques",
                    "Interpretation of results",
                ],
            ),
            col_widths=[6, 6],
        ),
        style="margin-bottom: 48px;",
    )


def _regression_card(reg):
    return ui.div(
        ui.div(
            TAB_TITLES[reg.key],
            style="font-size: 11px; text-transform: uppercase; letter-spacing: 1px; color: #666; margin-bottom: 8px; font-weight: 600;",
        ),
        ui.h4(reg.title, style="margin-top: 0; margin-bottom: 12px; font-size: 18px;"),
        ui.p(reg.description, style="color: #555; font-size: 14px;"),
        ui.tags.ul(*[ui.tags.li(point) for point in reg.key_points], style="font-size: 13px;"),
        ui.p(ui.strong("Example: "), reg.example, style="font-size: 13px; margin-bottom: 0;"),
        class_="feature-card",
    )


@module.server
def home_server(input, output, session):
    @reactive.Calc
    def recommendation():
        outcome = input.guide_outcome()
        n_predictors = input.guide_predictors()
        return recommend_regression(
            outcome,
            n_predictors=int(n_predictors) if n_predictors else 1,
            censored=input.guide_censored(),
            multiple_event_types=input.guide_multiple_events(),
        )

    @render.ui
    def out_recommendation():
        try:
            rec = recommendation()
        except ValueError as e:
            return create_error_alert(str(e), title="Cannot Recommend")

        logger.debug("Recommended %s for outcome=%s", rec["method"], input.guide_outcome())

        where = (
            f"Try it in the {TAB_TITLES[rec['family']]} tab."
            if rec["family"] is not None
            else "This app has no explorer for this method."
        )
        return ui.div(
            ui.h4(f"➡️ {rec['method']}", class_="text-primary"),
            ui.p(rec["rationale"]),
            ui.p(ui.strong("Example: "), rec["example"]),
            ui.p(where, class_="text-muted", style="margin-bottom: 0;"),
            class_="recommendation-card",
        )
