"""Pytest configuration for the tagtpl walkthrough examples.

Each example directory holds an ``app.py`` that builds its Environment and
renders its templates at import time, plus a ``test_<name>.py`` that checks
the rendered strings. The ``example_app`` fixture imports that ``app.py``
afresh for every test, so template caches and globals never leak between
tests.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """The freshly imported ``app.py`` beside the requesting test file."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"tagtpl_example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    app = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(app)
    return app
