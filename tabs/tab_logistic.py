from __future__ import annotations

from shiny import module, reactive, render, ui

from logger import get_logger
from utils import scenarios
from utils.logistic_lib import classification_summary, decision_boundary
from utils.plotly_html_renderer import plotly_figure_to_html
from utils.ui_helpers import (
    create_error_alert,
    create_input_group,
    create_key_points,
    create_results_container,
    create_stat_grid,
    format_number,
    parse_seed,
)
from utils.visualizations import create_logistic_plot

logger = get_logger(__name__)


@module.ui
def logistic_ui() -> ui.TagChild:
    return ui.div(
        ui.h4("🎯 Logistic Regression in Medical Research"),
        ui.p(
            "Logistic regression predicts the probability of a yes/no outcome, such "
            "as disease presence, from one or more risk factors."
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header("Example Setup"),
                create_input_group(
                    "Dataset",
                    ui.input_select(
                        "logit_scenario",
                        "Example Dataset:",
                        scenarios.scenario_choices("logistic"),
                    ),
                    type="required",
                ),
                create_input_group(
                    "Random Seed",
                    ui.input_numeric("logit_seed", "Seed (blank for random):", value=None, min=0),
                    ui.input_action_button(
                        "btn_logit_regenerate",
                        "🎲 New Sample",
                        class_="btn-primary w-100",
                    ),
                    type="advanced",
                ),
            ),
            create_results_container(
                "Outcomes & Decision Boundary",
                ui.output_ui("out_logit_plot"),
                ui.output_ui("out_logit_summary"),
            ),
            col_widths=[4, 8],
        ),
        create_key_points(
            "Key Concepts",
            [
                "Red points are patients with the outcome, teal points without",
                "The dashed line marks where the predicted probability is 50%",
                "Risk rises smoothly with each factor through the logistic (S-shaped) curve",
            ],
        ),
    )


@module.server
def logistic_server(input, output, session):
    @reactive.Calc
    def analysis():
        input.btn_logit_regenerate()
        scenario = scenarios.get_scenario(input.logit_scenario())
        df = scenarios.generate(scenario, seed=parse_seed(input.logit_seed()))
        x = df[scenario.x_col]
        boundary = decision_boundary(scenario.key, float(x.min()) * 0.9, float(x.max()) * 1.1)
        summary = classification_summary(df, scenario.key, scenario.x_col, scenario.y_col, scenario.outcome_col)
        logger.log_fit("logistic-boundary", summary["n"], scenario=scenario.key, positives=summary["positives"])
        return scenario, df, boundary, summary

    @render.ui
    def out_logit_plot():
        try:
            scenario, df, boundary, _ = analysis()
        except Exception:
            logger.exception("Logistic explorer failed")
            return create_error_alert("Something went wrong while drawing this example.")

        fig = create_logistic_plot(
            df, scenario.x_col, scenario.y_col, scenario.outcome_col, boundary, scenario.x_label, scenario.y_label, title=scenario.name
        )
        return ui.HTML(plotly_figure_to_html(fig, div_id="logistic_plot"))

    @render.ui
    def out_logit_summary():
        try:
            _, _, _, summary = analysis()
        except Exception:
            # the plot output reports the failure
            return None

        return ui.div(
            create_stat_grid(
                [
                    ("Patients (n)", format_number(summary["n"])),
                    ("With outcome", format_number(summary["positives"])),
                    ("Outcome rate", f"{summary['positive_rate']:.0%}"),
                    ("Agreement with boundary", f"{summary['boundary_accuracy']:.0%}"),
                ]
            ),
            ui.p(
                "Agreement is the share of patients on the side of the known boundary "
                "that matches their outcome. It describes this sample, not a fitted model.",
                class_="text-muted",
                style="font-size: 0.85em;",
            ),
        )
