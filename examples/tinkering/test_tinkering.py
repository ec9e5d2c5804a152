"""Tests for the tinkering example."""


class TestTinkeringApp:
    """Verify every step of the walkthrough renders as described."""

    def test_plain_strings(self, example_app) -> None:
        assert example_app.concat_output == "Romaric is curious"
        assert example_app.fstring_output == "Romaric is curious"
        assert example_app.simple_output == "Romaric is curious"

    def test_basic_tag(self, example_app) -> None:
        assert example_app.basic_output == "Romaric is curious"

    def test_processing_tag_calls_functions(self, example_app) -> None:
        assert example_app.processed_output == "Romaric is excited"

    def test_branch(self, example_app) -> None:
        assert example_app.branch_output == "<h1>oh no :'(</h1>"

    def test_nested_tags(self, example_app) -> None:
        assert example_app.nested_output == "<header><h1>Not in the data</h1></header>"

    def test_inline_template(self, example_app) -> None:
        assert example_app.inline_output == "Romaric is curious"

    def test_header_template(self, example_app) -> None:
        assert example_app.header_output == (
            "<header>DATA <h1>Not in the data</h1>\n"
            "<ul><li>0</li><li>1</li><li>2</li><li>3</li><li>4</li>\n"
            "</ul>\n"
            "</header>"
        )

    def test_header_without_curiosity(self, example_app) -> None:
        result = example_app.env.render("header.py", name="Romaric", mood="happy")
        assert result.startswith("<header>DATA \n<ul>")

    def test_header_template_cached(self, example_app) -> None:
        env = example_app.env
        assert env.get_template("header.py") is env.get_template("header.py")
