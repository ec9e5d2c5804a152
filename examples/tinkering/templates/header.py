# A template written as a plain Python file.
# It runs top to bottom inside its own render function, so it can define
# helpers and import modules like any script.
import logging

logging.getLogger("tinkering").info("Rendering header for %s", name)
more_data = extra_data()


def heading():
    if mood == "curious":
        return f"<h1>{(lambda: 'Not in the data')}</h1>"


def items():
    # for loops output nothing, so harvest the data as we go
    s = ""
    for i in range(5):
        s += f"<li>{i}</li>"
    return s


# The marked statement is what gets rendered; no need to tag the f-strings
template: f"""<header>{more_data} {heading}
<ul>{items}
</ul>
</header>"""
