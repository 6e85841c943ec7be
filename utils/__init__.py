"""
Core libraries for the Medical Regression Lab.

Contains:
- scenarios: Synthetic medical datasets for each regression family
- linear_lib / survival_lib / poisson_lib / logistic_lib: Estimators and samplers
- regression_guide: Regression catalog and selection flowchart
- visualizations / plotly_html_renderer: Plotly charts and their HTML embedding
- ui_helpers: Shared Shiny UI building blocks
"""
