from __future__ import annotations

from shiny import module, reactive, render, ui

from logger import get_logger
from utils import scenarios
from utils.plotly_html_renderer import plotly_figure_to_html
from utils.survival_lib import censoring_rate, curve_to_frame, kaplan_meier, median_survival
from utils.ui_helpers import (
    create_error_alert,
    create_input_group,
    create_key_points,
    create_results_container,
    create_stat_grid,
    format_number,
    parse_seed,
)
from utils.visualizations import create_km_plot

logger = get_logger(__name__)


@module.ui
def cox_ui() -> ui.TagChild:
    return ui.div(
        ui.h4("⏳ Cox Proportional Hazards Regression"),
        ui.p(
            "Cox regression analyzes time-to-event data, accounting for censored "
            "observations. It is widely used in clinical trials and survival analysis."
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header("Example Setup"),
                create_input_group(
                    "Dataset",
                    ui.input_select(
                        "cox_scenario",
                        "Example Dataset:",
                        scenarios.scenario_choices("cox"),
                    ),
                    type="required",
                ),
                create_input_group(
                    "Random Seed",
                    ui.input_numeric("cox_seed", "Seed (blank for random):", value=None, min=0),
                    ui.input_action_button(
                        "btn_cox_regenerate",
                        "🎲 New Sample",
                        class_="btn-primary w-100",
                    ),
                    type="advanced",
                ),
            ),
            create_results_container(
                "Kaplan-Meier Survival Curve",
                ui.output_ui("out_cox_plot"),
                ui.output_ui("out_cox_summary"),
            ),
            col_widths=[4, 8],
        ),
        create_key_points(
            "Key Concepts",
            [
                "The survival curve shows probability of survival over time",
                "Red dots indicate censored observations (lost to follow-up)",
                "The curve steps down at each event (death/occurrence)",
                "Cox regression can compare survival between groups",
                "The model assumes proportional hazards over time",
            ],
        ),
    )


@module.server
def cox_server(input, output, session):
    @reactive.Calc
    def analysis():
        input.btn_cox_regenerate()
        scenario = scenarios.get_scenario(input.cox_scenario())
        df = scenarios.generate(scenario, seed=parse_seed(input.cox_seed()))

        with logger.track_time(f"kaplan_meier_{scenario.key}"):
            curve = kaplan_meier(zip(df[scenario.time_col], df[scenario.censored_col]))

        logger.log_fit(
            "kaplan-meier",
            len(curve),
            scenario=scenario.key,
            events=sum(1 for p in curve if not p.censored),
        )
        return scenario, df, curve

    @render.ui
    def out_cox_plot():
        try:
            scenario, _, curve = analysis()
        except Exception:
            logger.exception("Survival explorer failed")
            return create_error_alert("Something went wrong while drawing this example.")

        fig = create_km_plot(curve_to_frame(curve), scenario.x_label, scenario.y_label, title=scenario.name)
        return ui.HTML(plotly_figure_to_html(fig, div_id="km_plot"))

    @render.ui
    def out_cox_summary():
        try:
            scenario, df, curve = analysis()
        except Exception:
            # the plot output reports the failure
            return None

        median = median_survival(curve)
        return ui.div(
            create_stat_grid(
                [
                    ("Patients (n)", format_number(len(curve))),
                    ("Events", format_number(sum(1 for p in curve if not p.censored))),
                    ("Censored", f"{censoring_rate(df, scenario.censored_col):.0%}"),
                    ("Median time (months)", format_number(median)),
                    ("Final probability", format_number(curve[-1].probability if curve else None)),
                ]
            ),
            ui.p(
                "Median time is the first time the curve reaches 50% or below; "
                "'n/a' means it never does in this sample. Values are descriptive.",
                class_="text-muted",
                style="font-size: 0.85em;",
            ),
        )
