import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from levelforge import create_app  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app()
    app.config.update(
        {
            "TESTING": True,
            "GENERATION_ENABLE_METRICS": True,
            "GENERATION_DEFAULT_SEED": None,
        }
    )
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails")
