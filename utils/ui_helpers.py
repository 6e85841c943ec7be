import numbers

from shiny import ui

from config import CONFIG


def create_input_group(title, *inputs, type="required"):
    """
    Wrap explorer controls in a titled form section.

    Args:
        title (str): Section heading.
        *inputs (ui.Tag): Controls to include.
        type (str): 'required' or 'optional' (changes the heading marker),
            or 'advanced' to collapse the controls under a <details> element.

    Returns:
        ui.Tag: Styled section div.
    """
    if type == "advanced":
        return ui.div(
            ui.tags.details(ui.tags.summary("⚙️ " + title), *inputs),
            class_="form-section form-section-advanced",
        )

    header_class = "form-section-title"
    if type in ("required", "optional"):
        header_class += f" form-section-{type}"

    return ui.div(ui.h4(title, class_=header_class), *inputs, class_="form-section")


def create_results_container(title, *content):
    """
    Standard frame for an explorer's chart and summary.

    Args:
        title (str): Section heading.
        *content (ui.Tag): Outputs to show under the heading.

    Returns:
        ui.Tag: Styled results section.
    """
    return ui.div(
        ui.div(ui.h3(title, class_="results-title"), class_="results-header"),
        ui.hr(class_="results-divider"),
        *content,
        class_="results-section",
    )


def create_error_alert(message, title="Error"):
    """
    Styled error card.

    Args:
        message (str): What went wrong, in user terms.
        title (str): Card heading.

    Returns:
        ui.Tag: Alert div.
    """
    return ui.div(
        ui.h5(title, class_="text-danger"),
        ui.p(message),
        class_="alert alert-danger error-alert-card",
    )


def format_number(value, decimals=None):
    """Format a summary value for display; None becomes 'n/a'."""
    if value is None:
        return "n/a"
    if decimals is None:
        decimals = int(CONFIG.get("ui.decimal_places", 2))
    if isinstance(value, numbers.Integral):
        return str(int(value))
    return f"{value:.{decimals}f}"


def create_stat_grid(stats):
    """
    Row of labelled summary values under a chart.

    Args:
        stats (list[tuple[str, str]]): (label, formatted value) pairs.

    Returns:
        ui.Tag: Grid of stat cards.
    """
    cards = [
        ui.div(
            ui.div(value, class_="stat-value"),
            ui.div(label, class_="stat-label"),
            class_="stat-card",
        )
        for label, value in stats
    ]
    return ui.div(*cards, class_="stat-grid")


def create_key_points(title, points):
    """Titled bullet list used for the interpretation notes."""
    return ui.div(
        ui.h5(title),
        ui.tags.ul(*[ui.tags.li(p) for p in points]),
        class_="key-points",
    )


def parse_seed(value):
    """Seed from a numeric input; blank or negative means fresh randomness."""
    if value is None or value == "" or value < 0:
        return None
    return int(value)
