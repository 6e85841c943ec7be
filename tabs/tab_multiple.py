from __future__ import annotations

from shiny import module, reactive, render, ui

from logger import get_logger
from utils import scenarios
from utils.linear_lib import InvalidInputError, describe_fit, fit_factor, group_means
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
from utils.visualizations import create_fit_plot, create_group_means_plot

logger = get_logger(__name__)

MARITAL_LEVELS = {0: "Single", 1: "Married"}


def _factor_choices(scenario_key: str) -> dict[str, str]:
    return {f.column: f.label for f in scenarios.get_scenario(scenario_key).factors}


@module.ui
def multiple_ui() -> ui.TagChild:
    choices = scenarios.scenario_choices("multiple")
    first = next(iter(choices))
    return ui.div(
        ui.h4("🧮 Multiple Regression in Medical Research"),
        ui.p(
            "Multiple regression looks at how several factors relate to one outcome. "
            "Here each factor is shown on its own so its individual relationship "
            "with the outcome can be inspected."
        ),
        ui.layout_columns(
            ui.card(
                ui.card_header("Example Setup"),
                create_input_group(
                    "Dataset",
                    ui.input_select("mult_scenario", "Example Dataset:", choices),
                    ui.input_select("mult_factor", "Factor to Display:", _factor_choices(first)),
                    type="required",
                ),
                create_input_group(
                    "Random Seed",
                    ui.input_numeric("mult_seed", "Seed (blank for random):", value=None, min=0),
                    ui.input_action_button(
                        "btn_mult_regenerate",
                        "🎲 New Sample",
                        class_="btn-primary w-100",
                    ),
                    type="advanced",
                ),
            ),
            create_results_container(
                "Factor vs Outcome",
                ui.output_ui("out_mult_plot"),
                ui.output_ui("out_mult_summary"),
            ),
            col_widths=[4, 8],
        ),
        create_key_points(
            "Key Concepts",
            [
                "Multiple regression considers several factors simultaneously",
                "Each factor's individual contribution can be isolated and analyzed",
                "A yes/no factor is summarised by the mean outcome of each group",
            ],
        ),
    )


@module.server
def multiple_server(input, output, session):
    @reactive.Effect
    @reactive.event(input.mult_scenario)
    def _update_factors():
        ui.update_select("mult_factor", choices=_factor_choices(input.mult_scenario()))

    @reactive.Calc
    def dataset():
        input.btn_mult_regenerate()
        return scenarios.generate(input.mult_scenario(), seed=parse_seed(input.mult_seed()))

    @reactive.Calc
    def analysis():
        scenario = scenarios.get_scenario(input.mult_scenario())
        factors = {f.column: f for f in scenario.factors}
        # the factor select lags one flush behind a scenario change
        selected = input.mult_factor()
        factor = factors.get(selected, scenario.factors[0])
        df = dataset()

        if factor.binary:
            means = group_means(df, factor.column, scenario.y_col)
            logger.log_fit("group-means", len(df), scenario=scenario.key, factor=factor.column)
            return scenario, factor, df, means

        return scenario, factor, df, fit_factor(df, factor.column, scenario.y_col)

    @render.ui
    def out_mult_plot():
        try:
            scenario, factor, df, result = analysis()
        except InvalidInputError as e:
            logger.warning("Factor fit rejected: %s", e)
            return create_error_alert("Not enough variation in data", title="Cannot Fit Line")
        except Exception:
            logger.exception("Multiple regression explorer failed")
            return create_error_alert("Something went wrong while drawing this example.")

        title = f"{scenario.y_label} by {factor.label}"
        if factor.binary:
            fig = create_group_means_plot(
                df,
                factor.column,
                scenario.y_col,
                result,
                factor.label,
                scenario.y_label,
                level_names=MARITAL_LEVELS,
                title=title,
            )
        else:
            fig = create_fit_plot(
                df[factor.column], df[scenario.y_col], result, factor.label, scenario.y_label, title=title
            )
        return ui.HTML(plotly_figure_to_html(fig, div_id="multiple_factor_plot"))

    @render.ui
    def out_mult_summary():
        try:
            scenario, factor, df, result = analysis()
        except Exception:
            # the plot output reports the failure
            return None

        if factor.binary:
            stats = [
                (f"Mean {scenario.y_label} ({MARITAL_LEVELS.get(int(g['level']), g['level'])}, n={g['n']})",
                 format_number(g["mean"]))
                for g in result
            ]
            if len(result) == 2:
                stats.append(("Difference", format_number(result[1]["mean"] - result[0]["mean"])))
            note = "Group means are descriptive, computed from the points shown."
        else:
            summary = describe_fit(df[factor.column], df[scenario.y_col], result)
            stats = [
                ("Patients (n)", format_number(summary["n"])),
                ("Slope", format_number(summary["slope"])),
                ("Pearson r", format_number(summary["r"])),
                ("R²", format_number(summary["r_squared"])),
            ]
            note = (
                f"Single-factor line for {factor.label.lower()}; other factors are not "
                "adjusted for. Values are descriptive."
            )

        return ui.div(
            create_stat_grid(stats),
            ui.p(note, class_="text-muted", style="font-size: 0.85em;"),
        )
