"""Tinkering with f-strings as templates.

Walks from plain concatenation to tagged templates that process their
values, then renders a template file whose f-strings are tagged
automatically.

Run:
    python app.py
"""

import logging
from pathlib import Path

from tagtpl import Environment, FileSystemLoader, basic_tag, t

data = {"name": "Romaric", "mood": "curious"}

# Concatenation, then an f-string
concat_output = data["name"] + " is " + data["mood"]
fstring_output = f"{data['name']} is {data['mood']}"


# Wrapped in a function to accept any data
def simple_template(obj: dict) -> str:
    return f"{obj['name']} is {obj['mood']}"


simple_output = simple_template(data)

# A tag receives the literal fragments and the values separately
basic_output = basic_tag(("", " is ", ""), data["name"], data["mood"])

# The default tag processes values: callables get called
data_with_functions = {"name": lambda: "Romaric", "mood": lambda: "excited"}
processed_output = t(("", " is ", ""), data_with_functions["name"], data_with_functions["mood"])

# Callables make room for branching inside a template
branch_output = t(("<h1>", "</h1>"), lambda: "yeah!" if data["mood"] == "happy" else "oh no :'(")

# A value can build its own tagged template
nested_output = t(
    ("<header>", "</header>"),
    lambda: t(("<h1>", "</h1>"), lambda: "Not in the data") if data["mood"] == "curious" else None,
)

# Inline template source: the f-string is tagged for us
inline_output = Environment().from_string('template: f"{name} is {mood}"').render(data)

# Template file, with a helper exposed to every template
templates_dir = Path(__file__).parent / "templates"
env = Environment(
    loader=FileSystemLoader(templates_dir),
    globals={"extra_data": lambda: "DATA"},
)
header_output = env.render("header.py", data)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    print("concat:", concat_output)
    print("f-string:", fstring_output)
    print("function:", simple_output)
    print("basic tag:", basic_output)
    print("processing tag:", processed_output)
    print(branch_output)
    print(nested_output)
    print("inline:", inline_output)
    print(env.render("header.py", data))


if __name__ == "__main__":
    main()
