from __future__ import annotations

from shiny import module, reactive, render, ui

from config import CONFIG
from logger import get_logger
from utils import scenarios
from utils.linear_lib import InvalidInputError, describe_fit, fit_linear
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
from utils.visualizations import create_fit_plot

logger = get_logger(__name__)


@module.ui
def linear_ui() -> ui.TagChild:
    noise_max = CONFIG.get("analysis.noise_level_max", 2.0)
    return ui.div(
        ui.h4("📈 Linear Regression in Medical Research"),
        ui.p(
            "Linear regression describes the relationship between two continuous "
            "variables. It is used to predict outcomes or to understand how "
            "measurements move together."
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header("Example Setup"),
                create_input_group(
                    "Dataset",
                    ui.input_select(
                        "lin_scenario",
                        "Example Dataset:",
                        scenarios.scenario_choices("linear"),
                    ),
                    type="required",
                ),
                create_input_group(
                    "Measurement Noise",
                    ui.input_slider(
                        "lin_noise",
                        "Noise Level:",
                        min=0,
                        max=noise_max,
                        value=CONFIG.get("analysis.default_noise_level", 1.0),
                        step=0.1,
                    ),
                    ui.p(
                        "Low (0-0.5): clear relationship. Medium (0.5-1.5): typical "
                        "clinical data. High (1.5-2.0): pattern hard to see.",
                        class_="text-muted",
                        style="font-size: 0.85em;",
                    ),
                    type="optional",
                ),
                create_input_group(
                    "Random Seed",
                    ui.input_numeric("lin_seed", "Seed (blank for random):", value=None, min=0),
                    ui.input_action_button(
                        "btn_lin_regenerate",
                        "🎲 New Sample",
                        class_="btn-primary w-100",
                    ),
                    type="advanced",
                ),
            ),
            create_results_container(
                "Scatter & Best-Fit Line",
                ui.output_ui("out_lin_plot"),
                ui.output_ui("out_lin_summary"),
            ),
            col_widths=[4, 8],
        ),
        create_key_points(
            "Key Concepts",
            [
                "The red line is the best fit line through the data points",
                "Each point represents a single patient's measurements",
                "The noise slider shows how measurement variation hides the pattern",
            ],
        ),
    )


@module.server
def linear_server(input, output, session):
    @reactive.Calc
    def base_data():
        # new sample on scenario, seed or button change; noise does not redraw it
        input.btn_lin_regenerate()
        return scenarios.generate(input.lin_scenario(), seed=parse_seed(input.lin_seed()))

    @reactive.Calc
    def analysis():
        scenario = scenarios.get_scenario(input.lin_scenario())
        df = base_data()
        rng = scenarios.make_noise_rng(parse_seed(input.lin_seed()))
        xs = df[scenario.x_col].to_numpy()
        ys = scenarios.apply_measurement_noise(df[scenario.y_col], input.lin_noise(), rng)

        fit = fit_linear(xs, ys)
        logger.log_fit("linear", len(xs), scenario=scenario.key, noise=input.lin_noise())
        return scenario, xs, ys, fit

    @render.ui
    def out_lin_plot():
        try:
            scenario, xs, ys, fit = analysis()
        except InvalidInputError as e:
            logger.warning("Linear fit rejected: %s", e)
            return create_error_alert("Not enough variation in data", title="Cannot Fit Line")
        except Exception:
            logger.exception("Linear explorer failed")
            return create_error_alert("Something went wrong while drawing this example.")

        fig = create_fit_plot(xs, ys, fit, scenario.x_label, scenario.y_label, title=scenario.name)
        return ui.HTML(plotly_figure_to_html(fig, div_id="linear_fit_plot"))

    @render.ui
    def out_lin_summary():
        try:
            scenario, xs, ys, fit = analysis()
            summary = describe_fit(xs, ys, fit)
        except Exception:
            # the plot output reports the failure
            return None

        return ui.div(
            create_stat_grid(
                [
                    ("Patients (n)", format_number(summary["n"])),
                    ("Slope", format_number(summary["slope"])),
                    ("Intercept", format_number(summary["intercept"])),
                    ("Pearson r", format_number(summary["r"])),
                    ("R²", format_number(summary["r_squared"])),
                ]
            ),
            ui.p(
                f"Each extra unit of {scenario.x_label.lower()} goes with a change of "
                f"{format_number(summary['slope'])} in {scenario.y_label.lower()} in this sample. "
                "Values are descriptive, computed from the points shown.",
                class_="text-muted",
                style="font-size: 0.85em;",
            ),
        )
