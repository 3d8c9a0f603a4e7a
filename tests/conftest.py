import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from lichcrawl import create_app  # noqa: E402
from lichcrawl.routes.level_api import clear_level_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "LEVELGEN_WIDTH": "48", "LEVELGEN_HEIGHT": "48"})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_level_cache():
    """Cached levels must not leak between tests that change generator settings."""
    clear_level_cache()
    yield
    clear_level_cache()


@pytest.fixture()
def rng():
    return random.Random(1234)
