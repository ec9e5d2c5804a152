"""Tests for parse, configuration and runtime error behavior."""

import pytest

from tagtpl import (
    CompilerConfig,
    DictLoader,
    Environment,
    TemplateConfigurationError,
    TemplateError,
    TemplateNotFoundError,
    TemplateSyntaxError,
)

from .conftest import dedent


class TestSyntaxErrors:
    def test_invalid_python(self, env):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            env.from_string("x = = 1\ntemplate: f''\n", name="bad.py")
        error = exc_info.value
        assert isinstance(error.__cause__, SyntaxError)
        assert error.message == error.__cause__.msg
        assert error.lineno == 1
        assert error.name == "bad.py"

    def test_snippet_in_message(self, env):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            env.from_string("template: f'{'\n")
        message = str(exc_info.value)
        assert "Syntax Error:" in message
        assert "  1 | template: f'{'" in message

    def test_filename_in_location(self, env, write_template):
        path = write_template("broken.py", "def f(:\n    pass\n")
        with pytest.raises(TemplateSyntaxError) as exc_info:
            env.from_file(path)
        assert exc_info.value.filename == str(path.resolve())
        assert f"--> {path.resolve()}:1" in str(exc_info.value)

    def test_star_import_rejected(self, env):
        with pytest.raises(TemplateSyntaxError):
            env.from_string("from os.path import *\ntemplate: f'{sep}'\n")

    def test_top_level_yield_rejected(self, env):
        with pytest.raises(TemplateSyntaxError, match="'yield' outside function") as exc_info:
            env.from_string("yield 1\ntemplate: f''\n")
        assert exc_info.value.lineno == 1

    def test_late_future_import_rejected(self, env):
        with pytest.raises(TemplateSyntaxError, match="__future__"):
            env.from_string("x = 1\nfrom __future__ import annotations\ntemplate: f''\n")

    def test_top_level_await_rejected(self, env):
        with pytest.raises(TemplateSyntaxError):
            env.from_string("await thing\ntemplate: f''\n")

    def test_is_template_error(self):
        assert issubclass(TemplateSyntaxError, TemplateError)


class TestConfigurationErrors:
    def test_missing_marker(self, env):
        with pytest.raises(TemplateConfigurationError) as exc_info:
            env.from_string("x = f'{y}'\n")
        assert exc_info.value.count == 0

    def test_duplicate_marker(self, env):
        source = dedent(
            """
            template: f"a"
            template: f"b"
            """
        )
        with pytest.raises(TemplateConfigurationError) as exc_info:
            env.from_string(source, name="twice.py")
        error = exc_info.value
        assert error.count == 2
        assert error.linenos == (1, 2)
        assert "twice.py" in str(error)
        assert "Markers at line(s): 1, 2" in str(error)

    def test_marker_in_block(self, env):
        source = dedent(
            """
            if flag:
                template: f"a"
            """
        )
        with pytest.raises(TemplateConfigurationError, match="top level"):
            env.from_string(source)

    def test_marker_label_follows_config(self):
        env = Environment(label="page")
        with pytest.raises(TemplateConfigurationError, match="'page:'"):
            env.from_string('template: f"a"')

    @pytest.mark.parametrize("field", ["tag_name", "label", "context_name", "func_name"])
    def test_invalid_identifier(self, field):
        with pytest.raises(TemplateConfigurationError, match=field):
            CompilerConfig(**{field: "not valid"})

    def test_keyword_rejected(self):
        with pytest.raises(TemplateConfigurationError):
            CompilerConfig(tag_name="class")

    def test_clashing_names(self):
        with pytest.raises(TemplateConfigurationError, match="distinct"):
            Environment(tag_name="template")


class TestRuntimeErrors:
    """Errors raised by template code reach the caller unwrapped."""

    def test_template_code_error(self, env):
        tmpl = env.from_string("x = 1 / 0\ntemplate: f'{x}'\n")
        with pytest.raises(ZeroDivisionError):
            tmpl.render()

    def test_value_callable_error(self, env):
        tmpl = env.from_string("template: f'{value}'\n")

        def value():
            raise ValueError("lazy failure")

        with pytest.raises(ValueError, match="lazy failure"):
            tmpl.render(value=value)

    def test_missing_name(self, env):
        tmpl = env.from_string("template: f'{missing}'\n")
        with pytest.raises(NameError):
            tmpl.render()


class TestNotFound:
    def test_no_loader(self, env):
        with pytest.raises(TemplateNotFoundError, match="no loader"):
            env.get_template("page.py")

    def test_close_match_hint(self):
        env = Environment(loader=DictLoader({"header.py": "template: f''"}))
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'header.py'"):
            env.get_template("headr.py")

    def test_missing_file(self, env, tmp_path):
        with pytest.raises(FileNotFoundError):
            env.from_file(tmp_path / "nope.py")
