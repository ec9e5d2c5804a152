"""Compile, cache and render benchmarks.

Templates: a single page script with a lazy branch, a generator of rows and
records rendered as JSON (see conftest.py).

Run with: pytest benchmarks/ --benchmark-only
Compare: pytest benchmarks/ --benchmark-compare
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pytest_benchmark.fixture import BenchmarkFixture

from tagtpl import Environment, FileSystemLoader, t


@pytest.mark.benchmark(group="compile")
def test_compile_from_string(benchmark: BenchmarkFixture, page_source: str) -> None:
    env = Environment()
    benchmark(env.from_string, page_source)


@pytest.mark.benchmark(group="load")
def test_get_template_cached(benchmark: BenchmarkFixture, tagtpl_env: Environment) -> None:
    tagtpl_env.get_template("page.py")
    benchmark(tagtpl_env.get_template, "page.py")
    assert tagtpl_env.cache_info()["misses"] == 1


@pytest.mark.benchmark(group="load")
def test_get_template_uncached(benchmark: BenchmarkFixture, template_dir: Path) -> None:
    env = Environment(loader=FileSystemLoader(template_dir), cache_size=0)
    benchmark(env.get_template, "page.py")


@pytest.mark.benchmark(group="load")
def test_from_file_cached(benchmark: BenchmarkFixture, template_dir: Path) -> None:
    env = Environment()
    path = template_dir / "page.py"
    env.from_file(path)
    benchmark(env.from_file, path)


@pytest.mark.benchmark(group="render")
def test_render_page(
    benchmark: BenchmarkFixture,
    tagtpl_env: Environment,
    page_context: dict[str, object],
) -> None:
    template = tagtpl_env.get_template("page.py")
    result = benchmark(template.render, page_context)
    assert "<h1>BENCHMARK</h1>" in result


@pytest.mark.benchmark(group="tag")
def test_tag_nested_values(benchmark: BenchmarkFixture) -> None:
    items = [lambda i=i: ("<li>", i, "</li>") for i in range(100)]
    benchmark(t, ("<ul>", "</ul>"), items)
