"""
hand the graph to an online graphviz viewer.

feel free to ignore this; it only exists to open the default browser, if desired.
"""

import logging
import webbrowser
from typing import Optional
from urllib.parse import quote

from . import config

logger = logging.getLogger(__name__)

HINT = (
    "To visualize the output you may Copy/Paste the parser output into:\n"
    f"{config.WEBGRAPHVIZ_HOME}\n"
    "(or any other online graphviz tool)"
)


def graphviz_online_url(code: str) -> Optional[str]:
    """the viewer url carrying the graph after '#', or None when it is too long for a GET."""
    # quote() writes spaces as %20, which the viewer accepts where '+' is not always accepted
    encoded = quote(code, safe="")
    if len(config.WEBGRAPHVIZ_HOME) + len(encoded) >= config.URL_LENGTH_LIMIT:
        return None
    return config.WEBGRAPHVIZ_HOME + "#" + encoded


def open_web_graphviz(code: str, prompt: bool = True) -> bool:
    """returns True when a browser was actually asked to open the graph."""
    url = graphviz_online_url(code)
    if url is None:
        logger.warning("can't use remote graphviz; the output is too long for a GET request")
        print("But you can still manually Copy/Paste instead.")
        return False

    if prompt:
        try:
            answer = input(f"{HINT}\n\nOpen {config.WEBGRAPHVIZ_HOME}? [y/N] ").strip().lower()
        except EOFError:
            # no interactive stdin: same as declining
            answer = ""
        if answer not in ("y", "yes"):
            print(HINT)
            return False

    if not webbrowser.open(url):
        logger.warning("could not open a browser")
        print(HINT)
        return False
    return True
