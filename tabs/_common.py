# No imports needed - this module provides pure data functions

def get_color_palette():
    """
    Returns a unified color palette dictionary for all modules.
    🎨 Navy Blue theme for the regression explorers.

    UI Colors:
    - primary: Navy (#1E3A5F) - headers, buttons, emphasis
    - primary_dark: Dark Navy (#0F2440) - hero gradient, strong emphasis
    - primary_light: Light Navy (#E8EEF7) - backgrounds, accents

    Chart Colors:
    - chart_points: Teal-green (#69B3A2) - individual patients
    - chart_fit: Red (#E74C3C) - fitted lines, expected counts
    - chart_positive / chart_negative: logistic outcome classes
    - chart_survival: Dark slate (#2C3E50) - Kaplan-Meier curve
    - chart_censored: Red (#E74C3C) - censored observations
    - chart_counts: Purple (#8E44AD) - observed counts
    """
    return {
        # Primary colors
        'primary': '#1E3A5F',
        'primary_dark': '#0F2440',
        'primary_light': '#E8EEF7',

        # Neutral colors
        'smoke_white': '#F8F9FA',
        'text': '#1F2328',
        'text_secondary': '#6B7280',
        'border': '#E5E7EB',
        'background': '#F9FAFB',
        'surface': '#FFFFFF',

        # Status colors
        'success': '#22A765',
        'danger': '#E74856',
        'warning': '#FFB900',
        'info': '#5A7B8E',

        # Chart colors
        'chart_points': '#69B3A2',
        'chart_fit': '#E74C3C',
        'chart_positive': '#FF6B6B',
        'chart_negative': '#4ECDC4',
        'chart_boundary': '#1E3A5F',
        'chart_survival': '#2C3E50',
        'chart_censored': '#E74C3C',
        'chart_counts': '#8E44AD',
    }
