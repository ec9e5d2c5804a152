"""Pytest configuration and fixtures for tagtpl tests."""

import textwrap

import pytest

from tagtpl import DictLoader, Environment


@pytest.fixture
def env():
    """Create a basic tagtpl Environment."""
    return Environment()


@pytest.fixture
def env_with_loader():
    """Create an Environment with a DictLoader and test templates."""
    loader = DictLoader(
        {
            "greeting.py": 'template: f"Hello, {name}!"',
            "header.py": dedent(
                """
                def heading():
                    if mood == "curious":
                        return f"<h1>{name}</h1>"

                template: f"<header>{heading}</header>"
                """
            ),
            "list.py": dedent(
                """
                template: f"<ul>{(f'<li>{item}</li>' for item in items)}</ul>"
                """
            ),
        }
    )
    return Environment(loader=loader)


@pytest.fixture
def write_template(tmp_path):
    """Write a (dedented) template file under tmp_path and return its path."""

    def _write(name: str, source: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(source), encoding="utf-8")
        return path

    return _write


def dedent(source: str) -> str:
    """Dedent a triple-quoted template source and drop the leading newline."""
    return textwrap.dedent(source).lstrip("\n")
