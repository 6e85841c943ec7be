"""
🧪 Pytest Configuration for Medical Regression Lab

- Puts the project root on sys.path so flat modules (config, logger) import
- Starts the Shiny server once per session when E2E tests are collected
- Registers the unit / integration / e2e markers
"""

import os
import subprocess
import sys
import tempfile
import time
from pathlib import Path

import numpy as np
import pytest
import requests

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

SERVER_URL = "http://127.0.0.1:8000"
STARTUP_TIMEOUT = 60


# ============================================================================
# 🎲 Shared Fixtures
# ============================================================================

@pytest.fixture
def rng():
    """Deterministic random source for a single test."""
    return np.random.default_rng(12345)


# ============================================================================
# 🚀 Session-Scoped Fixture: Start Shiny Server
# ============================================================================

def _read_log(log_file) -> str:
    log_file.close()
    with open(log_file.name, encoding="utf-8", errors="replace") as f:
        return f.read()


@pytest.fixture(scope="session", autouse=True)
def start_shiny_server(request):
    """
    Start the Shiny app for the session if any collected test is marked e2e.

    Server output goes to a temp file so a crash on startup can be reported
    with its log.
    """
    collected_items = getattr(request.session, "items", [])
    has_e2e_tests = any(item.get_closest_marker("e2e") for item in collected_items)

    if not has_e2e_tests:
        yield
        return

    app_path = PROJECT_ROOT / "app.py"
    if not app_path.exists():
        raise FileNotFoundError(f"❌ app.py not found at {app_path}")

    env = os.environ.copy()
    env["PYTHONUNBUFFERED"] = "1"

    log_file = None
    process = None

    try:
        log_file = tempfile.NamedTemporaryFile(delete=False, mode="w+")
        try:
            process = subprocess.Popen(
                [
                    sys.executable, "-m", "shiny", "run",
                    "--host", "127.0.0.1",
                    "--port", "8000",
                    str(app_path),
                ],
                stdout=log_file,
                stderr=subprocess.STDOUT,
                env=env,
                cwd=str(PROJECT_ROOT),
                text=True,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise RuntimeError(f"❌ Failed to start Shiny server: {e}") from e

        deadline = time.time() + STARTUP_TIMEOUT
        while True:
            if process.poll() is not None:
                raise RuntimeError(f"❌ Server crashed on startup!\n--- LOG ---\n{_read_log(log_file)}")
            try:
                if requests.get(SERVER_URL, timeout=2).status_code < 400:
                    break
            except (requests.ConnectionError, requests.Timeout):
                pass
            if time.time() > deadline:
                process.terminate()
                raise RuntimeError(
                    f"❌ Timeout: Shiny server failed to start within {STARTUP_TIMEOUT}s\n"
                    f"--- LOG ---\n{_read_log(log_file)}"
                )
            time.sleep(1)

        yield

    finally:
        if process and process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=5)
            except subprocess.TimeoutExpired:
                process.kill()

        if log_file:
            log_file.close()
            try:
                os.remove(log_file.name)
            except OSError:
                pass


# ============================================================================
# 🎨 Pytest Configuration & Markers
# ============================================================================

def pytest_configure(config):
    config.addinivalue_line("markers", "e2e: marks tests as E2E tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
