"""
artifacts built from a finished (or aborted) parse: the .dot file, an optional rendered
image through the graphviz package, and tabulated token listings.
"""

import logging
import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Union

import graphviz
from tabulate import tabulate

from . import config
from .lexer import Token

logger = logging.getLogger(__name__)


def save_dot(code: str, stem: Union[str, Path] = config.DEFAULT_OUTPUT_STEM) -> Path:
    """writes <stem>.dot, creating the directory stem points into."""
    path = Path(f"{stem}.dot")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(code, encoding="utf-8")
    print(f"[ok] dot file saved: {path}")
    return path


def render_graph(code: str, stem: Union[str, Path] = config.DEFAULT_OUTPUT_STEM,
                 fmt: str = config.DEFAULT_RENDER_FORMAT) -> Optional[Path]:
    """
    render the graph with the system graphviz executable. returns the output path, or None
    when the executable is missing or fails; the .dot file is still usable by hand then.
    """
    if fmt not in config.RENDER_FORMATS:
        raise ValueError(f"unsupported render format {fmt!r}; expected one of {config.RENDER_FORMATS}")

    source = graphviz.Source(code, format=fmt)
    try:
        outpath = source.render(filename=str(stem), cleanup=True)
    except (graphviz.ExecutableNotFound, subprocess.CalledProcessError) as e:
        logger.warning("could not render %s through graphviz: %s", fmt, e)
        print(f"    you can render it by hand: dot -T{fmt} {stem}.dot -o {stem}.{fmt}")
        return None
    print(f"[ok] {fmt} with the parse tree: {outpath}")
    return Path(outpath)


def token_rows(tokens: Iterable[Token]) -> List[List[str]]:
    return [[str(i), t.lexeme, t.kind.name] for i, t in enumerate(tokens)]


def token_table(tokens: Iterable[Token]) -> str:
    rows = token_rows(tokens)
    return tabulate(rows or [["—", "—", "—"]], headers=["#", "lexeme", "token"], tablefmt="github",
                    colalign=("right", "left", "center"))


def print_tokens(tokens: Iterable[Token]):
    print("\ntokens:")
    print(token_table(tokens))
