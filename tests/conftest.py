"""Pytest fixtures and helpers."""

import re

import pytest

from descent.codegen import CodeGenerator
from descent.lexer import LexicalStream
from descent.parser import Parser

LEAF_RE = re.compile(r'\[label="((?:[^"\\]|\\.)*)", shape=oval\]')


@pytest.fixture
def leaves():
    """Terminal lexemes of a generated graph, in emission order."""
    return LEAF_RE.findall


@pytest.fixture
def codegen():
    """Fresh code generator without an echo sink."""
    return CodeGenerator()


@pytest.fixture
def make_parser(codegen):
    """Build a parser over the given source text sharing the codegen fixture."""
    def _make(text):
        return Parser(LexicalStream(text), codegen)
    return _make


@pytest.fixture
def program_file(tmp_path):
    """Write a source file and return its path."""
    def _write(text, name="program.txt"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
