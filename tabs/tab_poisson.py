from __future__ import annotations

from shiny import module, reactive, render, ui

from logger import get_logger
from utils import scenarios
from utils.plotly_html_renderer import plotly_figure_to_html
from utils.poisson_lib import dispersion_index, expected_count_curve
from utils.ui_helpers import (
    create_error_alert,
    create_input_group,
    create_key_points,
    create_results_container,
    create_stat_grid,
    format_number,
    parse_seed,
)
from utils.visualizations import create_poisson_plot

logger = get_logger(__name__)


@module.ui
def poisson_ui() -> ui.TagChild:
    return ui.div(
        ui.h4("🔢 Poisson Regression in Medical Research"),
        ui.p(
            "Poisson regression models count data such as infections per ward or "
            "adverse events per week, and how the expected count changes with exposure."
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header("Example Setup"),
                create_input_group(
                    "Dataset",
                    ui.input_select(
                        "pois_scenario",
                        "Example Dataset:",
                        scenarios.scenario_choices("poisson"),
                    ),
                    type="required",
                ),
                create_input_group(
                    "Random Seed",
                    ui.input_numeric("pois_seed", "Seed (blank for random):", value=None, min=0),
                    ui.input_action_button(
                        "btn_pois_regenerate",
                        "🎲 New Sample",
                        class_="btn-primary w-100",
                    ),
                    type="advanced",
                ),
            ),
            create_results_container(
                "Observed vs Expected Counts",
                ui.output_ui("out_pois_plot"),
                ui.output_ui("out_pois_summary"),
            ),
            col_widths=[4, 8],
        ),
        create_key_points(
            "Key Concepts",
            [
                "Poisson regression models count data (non-negative integers)",
                "The mean equals the variance (equidispersion)",
                "Purple dots show observed counts",
                "Dashed red line shows expected counts",
                "Often used for rare events or rates over time/space",
            ],
        ),
    )


@module.server
def poisson_server(input, output, session):
    @reactive.Calc
    def analysis():
        input.btn_pois_regenerate()
        scenario = scenarios.get_scenario(input.pois_scenario())
        df = scenarios.generate(scenario, seed=parse_seed(input.pois_seed()))
        x_max = float(df[scenario.x_col].max()) if len(df) else 0.0
        expected = expected_count_curve(scenario.key, x_max)
        return scenario, df, expected

    @render.ui
    def out_pois_plot():
        try:
            scenario, df, expected = analysis()
        except Exception:
            logger.exception("Poisson explorer failed")
            return create_error_alert("Something went wrong while drawing this example.")

        fig = create_poisson_plot(
            df[scenario.x_col], df[scenario.outcome_col], expected, scenario.x_label, scenario.y_label, title=scenario.name
        )
        return ui.HTML(plotly_figure_to_html(fig, div_id="poisson_plot"))

    @render.ui
    def out_pois_summary():
        try:
            scenario, df, _ = analysis()
        except Exception:
            # the plot output reports the failure
            return None

        counts = df[scenario.outcome_col]
        return ui.div(
            create_stat_grid(
                [
                    ("Units (n)", format_number(len(df))),
                    ("Mean count", format_number(float(counts.mean()) if len(df) else None)),
                    ("Variance", format_number(float(counts.var(ddof=1)) if len(df) > 1 else None)),
                    ("Dispersion (var/mean)", format_number(dispersion_index(counts))),
                ]
            ),
            ui.p(
                "A dispersion near 1 fits the Poisson assumption. Counts here come from "
                "units with different rates, so the pooled value runs above 1. "
                "Values are descriptive.",
                class_="text-muted",
                style="font-size: 0.85em;",
            ),
        )
