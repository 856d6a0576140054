"""Tests for the recursive-descent grammar engine."""

import sys
from pathlib import Path

import pytest

from descent.errors import ParseError
from descent.parser import STMT_FIRST, Parser, analyze_file, analyze_text
from descent.tokens import TokenKind


def test_assignment_with_precedence(leaves):
    outcome = analyze_text("x := 3 + 4 * y")
    assert outcome.ok
    assert leaves(outcome.code) == ["x", ":=", "3", "+", "4", "*", "y"]
    assert outcome.code.endswith("};\n}\n")


def test_read_without_identifier():
    outcome = analyze_text("read")
    assert not outcome.ok
    assert outcome.error.expected == (TokenKind.UNKNOWN,)
    assert outcome.error.found == "EOF"
    assert outcome.error.message == "SYNTAX ERROR: 'UNKNOWN' was expected but 'EOF' was found."


def test_empty_input_derives_empty_program():
    outcome = analyze_text("")
    assert outcome.ok
    assert outcome.code == (
        'digraph ParseTree {\n'
        '\t"PARSE TREE-0" [label="PARSE TREE", shape=diamond];\n'
        '\t"PARSE TREE-0" -> {"<PROGRAM>-1" [label="<PROGRAM>", shape=rect]};\n'
        '\t"<PROGRAM>-1" -> {"<STMT_LIST>-2" [label="<STMT_LIST>", shape=rect]};\n'
        '\t"<STMT_LIST>-2" -> {"EMPTY-3" [label="&epsilon;", shape=none]};\n'
        '}\n'
    )


@pytest.mark.parametrize("source, expected_leaves", [
    ("write ( a + 2 ) / 4.5", ["write", "(", "a", "+", "2", ")", "/", "4.5"]),
    ("while x < 10 do x := x + 1 od",
     ["while", "x", "<", "10", "do", "x", ":=", "x", "+", "1", "od"]),
    ("do read x until x >= 3", ["do", "read", "x", "until", "x", ">=", "3"]),
    ("if a = b then write a else write b fi",
     ["if", "a", "=", "b", "then", "write", "a", "else", "write", "b", "fi"]),
    ("if a != b then else fi", ["if", "a", "!=", "b", "then", "else", "fi"]),
    ("read x read y write x - y", ["read", "x", "read", "y", "write", "x", "-", "y"]),
])
def test_valid_programs(source, expected_leaves, leaves):
    outcome = analyze_text(source)
    assert outcome.ok, outcome.error
    assert leaves(outcome.code) == expected_leaves


def test_nested_statements():
    source = "while i < n do if i = 0 then write i else do i := i * 2 until i > 8 fi od"
    outcome = analyze_text(source)
    assert outcome.ok, outcome.error
    assert outcome.code.count('[label="<STMT>", shape=rect]') == 5


def test_comment_lines_are_ignored(leaves):
    outcome = analyze_text("# sum two numbers\nread a\n  # trailing\nwrite a + 1\n")
    assert outcome.ok
    assert leaves(outcome.code) == ["read", "a", "write", "a", "+", "1"]


def test_terminals_hang_under_their_kind():
    code = analyze_text("read x").code
    assert '[label="<READ>", shape=rect]' in code
    assert '"<READ>-4" -> {"read-5" [label="read", shape=oval]};' in code


def test_error_keeps_partial_graph(leaves):
    outcome = analyze_text("x := 3 +")
    assert not outcome.ok
    assert outcome.error.expected == (TokenKind.LEFTP, TokenKind.UNKNOWN, TokenKind.NUMBER)
    # tokens before the failure point are all in the graph, nothing after
    assert leaves(outcome.code) == ["x", ":=", "3", "+"]
    assert outcome.code.endswith(
        "-> {\"SYNTAX ERROR: one of 'LEFTP', 'UNKNOWN', 'NUMBER' was expected but 'EOF' was found.\"};\n}\n"
    )
    assert outcome.code.count("\n}\n") == 1
    assert outcome.code.count("SYNTAX ERROR") == 1


def test_error_names_the_offending_lexeme(leaves):
    outcome = analyze_text("if a = b then write a fi")
    assert outcome.error.expected == (TokenKind.ELSE,)
    assert outcome.error.found == "fi"
    assert leaves(outcome.code) == ["if", "a", "=", "b", "then", "write", "a"]


def test_trailing_input_is_rejected():
    outcome = analyze_text("x := 1 )")
    assert outcome.error.expected == (TokenKind.EOF,)
    assert outcome.error.message == "SYNTAX ERROR: '$$' was expected but ')' was found."


def test_condition_requires_relation():
    outcome = analyze_text("while x do od")
    assert outcome.error.expected == (TokenKind.RELATION,)
    assert outcome.error.found == "do"


def test_failed_production_is_still_drawn():
    code = analyze_text("write )").code
    assert '[label="<FACTOR>", shape=rect]' in code
    assert "'LEFTP', 'UNKNOWN', 'NUMBER' was expected but ')' was found." in code


def test_statement_without_alternative(make_parser, codegen):
    parser = make_parser("od")
    root = codegen.write_header()
    with pytest.raises(ParseError) as exc_info:
        parser.stmt(root)
    assert exc_info.value.expected == STMT_FIRST
    assert exc_info.value.found == "od"


def test_epsilon_consumes_nothing(make_parser, codegen):
    parser = make_parser("od fi")
    root = codegen.write_header()
    before = len(parser.lexer)
    parser.term_tail(root)
    parser.stmt_list(root)
    assert len(parser.lexer) == before
    assert codegen.code.count("&epsilon;") == 2


def test_match_consumes_one_token(make_parser, codegen):
    parser = make_parser("x := 1")
    root = codegen.write_header()
    parser.match(root, TokenKind.UNKNOWN)
    assert parser.lexer.current_kind() is TokenKind.ASSIGNMENT
    with pytest.raises(ParseError):
        parser.match(root, TokenKind.NUMBER)
    # a failed match leaves the stream alone
    assert parser.lexer.current_kind() is TokenKind.ASSIGNMENT


def test_sessions_do_not_share_node_ids():
    first = analyze_text("read x").code
    second = analyze_text("read x").code
    assert first == second
    assert '"PARSE TREE-0"' in second


def test_echo_mirrors_the_outcome():
    echoed = []
    outcome = analyze_text("write 1", echo=echoed.append)
    assert "".join(echoed) == outcome.code


def test_analyze_file(program_file, leaves):
    path = program_file("# countdown\nn := 3\nwhile n > 0 do\n  write n\n  n := n - 1\nod\n")
    outcome = analyze_file(path)
    assert outcome.ok, outcome.error
    assert leaves(outcome.code)[:3] == ["n", ":=", "3"]


def test_sample_program(leaves):
    sample = Path(__file__).resolve().parent.parent / "samples" / "countdown.txt"
    outcome = analyze_file(sample)
    assert outcome.ok, outcome.error
    assert leaves(outcome.code)[-1] == "fi"


def test_long_statement_list(leaves):
    outcome = analyze_text("read x\n" * 2000)
    assert outcome.ok, outcome.error
    assert len(leaves(outcome.code)) == 4000
    assert outcome.code.endswith("};\n}\n")


def test_deeply_nested_expression(leaves):
    outcome = analyze_text("write " + "( " * 3000 + "1 " + ") " * 3000)
    assert outcome.ok, outcome.error
    assert leaves(outcome.code).count("(") == 3000


def test_recursion_limit_is_restored():
    before = sys.getrecursionlimit()
    analyze_text("read x\n" * 2000)
    analyze_text("read")
    assert sys.getrecursionlimit() == before


def test_runaway_recursion_still_closes_graph(make_parser, monkeypatch):
    def bottomless(self, parent):
        raise RecursionError("maximum recursion depth exceeded")

    monkeypatch.setattr(Parser, "stmt_list", bottomless)
    outcome = make_parser("read x").analyze()

    assert not outcome.ok
    assert outcome.error.expected == ()
    assert outcome.error.found == "read"
    assert outcome.code.endswith(
        "-> {\"SYNTAX ERROR: derivation nested too deeply at 'read'.\"};\n}\n"
    )
    assert outcome.code.count("\n}\n") == 1
