from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tagtpl import Environment, FileSystemLoader

PAGE_SOURCE = textwrap.dedent(
    """
    def rows():
        return (f"<tr><td>{user['name']}</td><td>{user}</td></tr>" for user in users)

    template: f\"\"\"<html>
    <head><title>{title}</title></head>
    <body>
    <h1>{(lambda: title.upper() if shout else title)}</h1>
    <table>{rows}</table>
    </body>
    </html>\"\"\"
    """
).lstrip("\n")


@pytest.fixture(scope="session")
def page_source() -> str:
    return PAGE_SOURCE


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    (tmp_path / "page.py").write_text(PAGE_SOURCE, encoding="utf-8")
    return tmp_path


@pytest.fixture
def tagtpl_env(template_dir: Path) -> Environment:
    return Environment(loader=FileSystemLoader(template_dir))


@pytest.fixture(scope="session")
def page_context() -> dict[str, object]:
    return {
        "title": "Benchmark",
        "shout": True,
        "users": [{"name": f"user{i}", "id": i, "active": i % 2 == 0} for i in range(50)],
    }
