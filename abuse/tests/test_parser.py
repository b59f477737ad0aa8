from abuse.grammar.ast import non_terminal, terminal
from abuse.grammar.errors import ErrorKind, SEMANTIC_KINDS
from abuse.grammar.parser import parse


def _assert_rule(rule, name, right):
    assert rule.left == non_terminal(name)
    assert list(rule.right) == right


# ---- rules ----

def test_whitespace_only_source_has_no_rules():
    res = parse("\n\n\n\n\n\r\t\t \n\n     \r\n\n")
    assert res.rules == []
    assert all(e.kind in SEMANTIC_KINDS for e in res.errors)


def test_terminal_only_rule():
    rules = parse("$SENTENCE -> I hate you!").rules
    assert len(rules) == 1
    _assert_rule(rules[0], "SENTENCE", [terminal("I hate you!")])
    assert rules[0].line == 1


def test_rules_separated_by_newlines():
    rules = parse("$SENTENCE -> I hate you!\n$SENTENCE -> You smell!").rules
    assert len(rules) == 2
    _assert_rule(rules[0], "SENTENCE", [terminal("I hate you!")])
    _assert_rule(rules[1], "SENTENCE", [terminal("You smell!")])


def test_trailing_whitespace_is_trimmed():
    rules = parse("$SENTENCE -> I hate you!   \t\t  ").rules
    _assert_rule(rules[0], "SENTENCE", [terminal("I hate you!")])


def test_final_terminal_is_only_trimmed_on_the_right():
    rules = parse("$VERY -> $VERY very").rules
    _assert_rule(rules[0], "VERY", [non_terminal("VERY"), terminal(" very")])


def test_interior_whitespace_is_kept():
    rules = parse("$SENTENCE -> a  $X  b   \n$X -> x").rules
    _assert_rule(rules[0], "SENTENCE", [terminal("a  "), non_terminal("X"), terminal("  b")])


def test_empty_terminals_are_not_produced():
    rules = parse("$SENTENCE -> $INSULT").rules
    _assert_rule(rules[0], "SENTENCE", [non_terminal("INSULT")])


def test_empty_right_side_is_a_rule():
    rules = parse("$SENTENCE -> ").rules
    assert len(rules) == 1
    assert rules[0].right == ()


def test_blank_lines_are_ignored_but_counted():
    rules = parse("\n    \t\n\n$SENTENCE -> I hate you!\n     \n\n$SENTENCE -> You smell!\n\n\n").rules
    assert [r.line for r in rules] == [4, 7]
    _assert_rule(rules[0], "SENTENCE", [terminal("I hate you!")])
    _assert_rule(rules[1], "SENTENCE", [terminal("You smell!")])


def test_non_terminals_on_right():
    rules = parse("$SENTENCE -> You're as $ADJ as a $ANIMAL").rules
    _assert_rule(rules[0], "SENTENCE",
                 [terminal("You're as "), non_terminal("ADJ"),
                  terminal(" as a "), non_terminal("ANIMAL")])


def test_non_terminal_names_are_alphanumeric_and_underscore():
    rules = parse("$SENTENCE -> You smell of $Smell2.").rules
    _assert_rule(rules[0], "SENTENCE",
                 [terminal("You smell of "), non_terminal("Smell2"), terminal(".")])


def test_braces_delimit_non_terminals():
    rules = parse("$SENTENCE -> You're ${RUDE_ADJ}er than I thought").rules
    _assert_rule(rules[0], "SENTENCE",
                 [terminal("You're "), non_terminal("RUDE_ADJ"), terminal("er than I thought")])
    assert rules[0].right[1].col == 21


def test_lone_dollar_is_literal_text():
    rules = parse("$SENTENCE -> costs $ 5, pay me$").rules
    _assert_rule(rules[0], "SENTENCE", [terminal("costs $ 5, pay me$")])


def test_leading_whitespace_and_crlf():
    rules = parse("   $SENTENCE -> hi\r\n$SENTENCE -> yo\r\n").rules
    _assert_rule(rules[0], "SENTENCE", [terminal("hi")])
    _assert_rule(rules[1], "SENTENCE", [terminal("yo")])


def test_parse_is_idempotent():
    src = "$SENTENCE -> $A and ${B}s\n$A -> x\n$C -> y\n$SENTENCE - broken"
    assert parse(src) == parse(src)


# ---- errors ----

def test_missing_arrow():
    errors = parse("\n\n$SENTENCE - You're ${RUDE_ADJ}er than I thought\n"
                   "$RUDE_ADJ ->\n"
                   "$SENTENCE -> $RUDE_ADJ").errors
    assert len(errors) == 1
    assert str(errors[0]) == "Missing symbol on line 3: ->"
    assert errors[0].kind == ErrorKind.MISSING_ARROW
    assert errors[0].line == 3
    assert errors[0].is_syntactic


def test_missing_arrow_on_first_line():
    errors = parse("$SENTENCE - You're ugly").errors
    assert errors[0].kind == ErrorKind.MISSING_ARROW
    assert errors[0].line == 1


def test_line_without_dollar_head_is_missing_arrow():
    errors = parse("SENTENCE -> hi").errors
    assert errors[0].kind == ErrorKind.MISSING_ARROW


def test_missing_closing_brace():
    errors = parse("\n\n$SENTENCE -> You're ${RUDE_ADJer than I thought\n"
                   "$SENTENCE ->\n").errors
    assert len(errors) == 1
    assert errors[0].message == "Missing closing brace on line 3 (opening brace at character 22)"
    assert errors[0].kind == ErrorKind.MISSING_CLOSING_BRACE
    assert errors[0].line == 3
    assert errors[0].col == 22


def test_missing_closing_brace_for_second_reference():
    res = parse("\n\n$SENTENCE -> You're ${RUDE_ADJ}er than ${OBJ\n"
                "$SENTENCE ->\n\n")
    assert len(res.errors) == 1
    assert res.errors[0].message == "Missing closing brace on line 3 (opening brace at character 41)"
    # 오류 난 줄은 규칙을 만들지 않는다
    assert [r.line for r in res.rules] == [4]


def test_no_production_rule_for_referenced_non_terminal():
    errors = parse("\n\n$SENTENCE -> $INSULT\n\n").errors
    assert len(errors) == 1
    assert errors[0].message == "No production rule for non-terminal $INSULT (line 3, character 14)"
    assert errors[0].kind == ErrorKind.NO_PRODUCTION_RULE
    assert errors[0].non_terminal == "INSULT"
    assert errors[0].line == 3
    assert errors[0].col == 14


def test_every_undefined_reference_is_reported():
    errors = parse("$SENTENCE -> $A and $A").errors
    assert [(e.non_terminal, e.col) for e in errors] == [("A", 14), ("A", 21)]


def test_sentence_without_production_rule():
    errors = parse("").errors
    assert len(errors) == 1
    assert errors[0].message == "No production rule for non-terminal $SENTENCE"
    assert errors[0].kind == ErrorKind.NO_PRODUCTION_RULE
    assert errors[0].non_terminal == "SENTENCE"
    assert errors[0].line is None


def test_rule_never_used():
    errors = parse("$SENTENCE -> \n$RUDE_ADJ -> ugly").errors
    assert len(errors) == 1
    assert errors[0].message == "Production rule with start symbol $RUDE_ADJ is never used (line 2)"
    assert errors[0].kind == ErrorKind.RULE_NEVER_USED
    assert errors[0].line == 2
    assert errors[0].start == "RUDE_ADJ"


def test_rule_never_used_reports_first_rule_only():
    errors = parse("$SENTENCE -> hi\n$X -> a\n$X -> b").errors
    assert [(e.kind, e.line) for e in errors] == [(ErrorKind.RULE_NEVER_USED, 2)]


def test_semantic_errors_follow_syntactic_errors():
    errors = parse("$FOO -> x\n$BAR - y").errors
    assert [e.kind for e in errors] == [
        ErrorKind.MISSING_ARROW,
        ErrorKind.NO_PRODUCTION_RULE,
        ErrorKind.RULE_NEVER_USED,
    ]
    assert errors[1].line is None
    assert errors[2].start == "FOO"
