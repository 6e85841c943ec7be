"""
Medical Regression Lab - Shiny application.

Run locally with:  shiny run app.py
Deployment goes through asgi.py.
"""

from shiny import App, ui

from config import CONFIG
from logger import LoggerFactory, get_logger
from tabs import tab_cox, tab_home, tab_linear, tab_logistic, tab_multiple, tab_poisson
from tabs._styling import get_shiny_css

# ==========================================
# 1. LOGGING & CONFIG CHECK
# ==========================================
LoggerFactory.configure()
logger = get_logger(__name__)

is_valid, config_errors = CONFIG.validate()
if not is_valid:
    for err in config_errors:
        logger.warning("Configuration problem: %s", err)

# ==========================================
# 2. UI
# ==========================================
app_ui = ui.page_navbar(
    ui.nav_panel("🏠 Home", tab_home.home_ui("home")),
    ui.nav_panel("📈 Linear", tab_linear.linear_ui("linear")),
    ui.nav_panel("🧮 Multiple", tab_multiple.multiple_ui("multiple")),
    ui.nav_panel("🎯 Logistic", tab_logistic.logistic_ui("logistic")),
    ui.nav_panel("⏳ Cox", tab_cox.cox_ui("cox")),
    ui.nav_panel("🔢 Poisson", tab_poisson.poisson_ui("poisson")),
    title=CONFIG.get("ui.page_title", "Medical Regression Lab"),
    id="main_nav",
    header=ui.head_content(ui.HTML(get_shiny_css())),
    window_title=CONFIG.get("ui.page_title", "Medical Regression Lab"),
)


# ==========================================
# 3. SERVER
# ==========================================
def server(input, output, session):
    logger.info("📱 New session started")
    tab_home.home_server("home")
    tab_linear.linear_server("linear")
    tab_multiple.multiple_server("multiple")
    tab_logistic.logistic_server("logistic")
    tab_cox.cox_server("cox")
    tab_poisson.poisson_server("poisson")


app = App(app_ui, server)
