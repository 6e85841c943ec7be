"""Test suite for the UI styling system.

Verifies:
1. Colour keys in tabs/_common.py via get_color_palette()
2. CSS generation in tabs/_styling.py (get_shiny_css)
3. That the CSS is built from the palette
"""

import re
from pathlib import Path

import pytest

from tabs._common import get_color_palette
from tabs._styling import get_color_code, get_shiny_css

PROJECT_ROOT = Path(__file__).parent.parent.parent

pytestmark = pytest.mark.unit


def test_styling_files_exist():
    base_path = PROJECT_ROOT / "tabs"
    assert (base_path / "_common.py").exists()
    assert (base_path / "_styling.py").exists()


def test_essential_ui_colors():
    """Brand, status, neutral and chart colours are all defined."""
    palette = get_color_palette()
    required = [
        "primary", "primary_light", "primary_dark", "smoke_white",
        "success", "danger", "warning", "info",
        "text", "text_secondary", "background", "surface", "border",
    ]
    for color in required:
        assert color in palette, f"Missing colour: {color}"


def test_chart_colors():
    palette = get_color_palette()
    for key in (
        "chart_points", "chart_fit", "chart_positive", "chart_negative",
        "chart_boundary", "chart_survival", "chart_censored", "chart_counts",
    ):
        assert key in palette, f"Missing chart colour: {key}"
    assert palette["chart_points"] == "#69B3A2"
    assert palette["chart_fit"] == "#E74C3C"


def test_color_format_validity():
    hex_regex = re.compile(r"^#([A-Fa-f0-9]{3}){1,2}$")
    for key, hex_val in get_color_palette().items():
        assert hex_regex.match(hex_val), f"Colour '{key}' has invalid HEX format: {hex_val}"


def test_palette_is_a_copy():
    palette = get_color_palette()
    palette["primary"] = "#000000"
    assert get_color_palette()["primary"] != "#000000"


def test_css_uses_palette():
    css = get_shiny_css()
    assert css.lstrip().startswith("<style>")
    assert get_color_palette()["primary"] in css
    for class_name in (".stat-grid", ".stat-card", ".error-alert-card", ".hero-section"):
        assert class_name in css


def test_get_color_code():
    assert get_color_code("danger") == get_color_palette()["danger"]
    assert get_color_code("no_such_colour") == "#1E3A5F"
