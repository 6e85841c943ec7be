"""
🎨 Shiny UI Styling Module

Global CSS for the regression explorers using the Navy Blue theme.

Usage:
    from tabs._styling import get_shiny_css

    ui.head_content(ui.HTML(get_shiny_css()))
"""

from tabs._common import get_color_palette


def get_shiny_css():
    """
    Returns global CSS for the app.

    Usage:
        In the page UI:
        ui.head_content(ui.HTML(get_shiny_css()))
    """
    COLORS = get_color_palette()

    css = f"""
    <style>
        /* ===========================
           GLOBAL STYLES
           =========================== */

        :root {{
            --color-primary: {COLORS['primary']};
            --color-primary-dark: {COLORS['primary_dark']};
            --color-primary-light: {COLORS['primary_light']};
            --color-danger: {COLORS['danger']};
            --color-text: {COLORS['text']};
            --color-text-secondary: {COLORS['text_secondary']};
            --color-border: {COLORS['border']};
        }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', sans-serif;
            background-color: {COLORS['background']};
            color: {COLORS['text']};
        }}

        /* ===========================
           CARDS & BUTTONS
           =========================== */

        .bslib-card {{
            border: 1px solid {COLORS['border']};
            border-radius: 8px;
            box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08), 0 2px 6px rgba(0, 0, 0, 0.05);
        }}

        .bslib-card-header {{
            background-color: {COLORS['primary_light']};
            border-bottom: 2px solid {COLORS['primary']};
            font-weight: 600;
            color: {COLORS['primary_dark']};
        }}

        .btn-primary {{
            background-color: {COLORS['primary']};
            border-color: {COLORS['primary']};
            color: white;
            border-radius: 6px;
        }}

        .btn-primary:hover {{
            background-color: {COLORS['primary_dark']};
            border-color: {COLORS['primary_dark']};
        }}

        /* ===========================
           NAVIGATION
           =========================== */

        .navbar {{
            background-color: {COLORS['primary_dark']} !important;
        }}

        .navbar-brand,
        .navbar .nav-link {{
            color: white !important;
            font-weight: 500;
        }}

        .navbar .nav-link.active,
        .navbar .nav-link:hover {{
            background-color: rgba(255, 255, 255, 0.15) !important;
            border-radius: 4px;
        }}

        /* ===========================
           FORMS
           =========================== */

        .form-section {{
            border: 1px solid {COLORS['border']};
            border-radius: 8px;
            padding: 12px 16px;
            margin-bottom: 16px;
            background-color: {COLORS['surface']};
        }}

        .form-section-title {{
            font-size: 15px;
            font-weight: 600;
            color: {COLORS['primary_dark']};
            margin-bottom: 10px;
        }}

        .form-section-required::after {{
            content: " *";
            color: {COLORS['danger']};
        }}

        /* ===========================
           RESULTS
           =========================== */

        .results-title {{
            color: {COLORS['primary_dark']};
            font-size: 20px;
            font-weight: 600;
        }}

        .results-divider {{
            border-top: 2px solid {COLORS['primary']};
            opacity: 0.3;
        }}

        .error-alert-card {{
            border-radius: 6px;
            background-color: rgba(231, 72, 86, 0.1);
            border-color: {COLORS['danger']};
        }}

        .stat-grid {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(140px, 1fr));
            gap: 12px;
            margin: 16px 0;
        }}

        .stat-card {{
            background-color: {COLORS['primary_light']};
            border-radius: 8px;
            padding: 12px;
            text-align: center;
        }}

        .stat-value {{
            font-size: 22px;
            font-weight: 700;
            color: {COLORS['primary']};
        }}

        .stat-label {{
            font-size: 12px;
            color: {COLORS['text_secondary']};
        }}

        .key-points {{
            background-color: {COLORS['smoke_white']};
            border-left: 4px solid {COLORS['primary']};
            padding: 12px 16px;
            border-radius: 4px;
        }}

        /* ===========================
           HOME PAGE
           =========================== */

        .hero-section {{
            text-align: center;
            padding: 56px 24px;
            background: linear-gradient(135deg, {COLORS['primary']} 0%, {COLORS['primary_dark']} 100%);
            border-radius: 16px;
            margin-bottom: 40px;
            color: white;
        }}

        .feature-grid {{
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
            gap: 24px;
        }}

        .feature-card {{
            background: {COLORS['surface']};
            border: 1px solid {COLORS['border']};
            border-radius: 12px;
            padding: 24px;
            height: 100%;
        }}

        .recommendation-card {{
            background-color: {COLORS['primary_light']};
            border: 1px solid {COLORS['primary']};
            border-radius: 8px;
            padding: 16px;
        }}

        @media (max-width: 768px) {{
            .form-control,
            .form-select {{
                font-size: 16px; /* Prevents zoom on iOS */
            }}
        }}
    </style>
    """

    return css


def get_color_code(color_name: str) -> str:
    """
    Get hex color code by name.

    Args:
        color_name: Color name (e.g., 'primary', 'chart_fit')

    Returns:
        Hex color code, navy when the name is unknown
    """
    colors = get_color_palette()
    return colors.get(color_name, '#1E3A5F')
