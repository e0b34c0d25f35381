import pytest
from tests._shared_cases import BALANCE_CASES, MarkupCase

from htmlsnob.config import RuleSet, default_ruleset, resolve_ruleset
from htmlsnob.diagnostics import Diagnostic
from htmlsnob.lexer import Lexer, LexerOptions, tokenize
from htmlsnob.matcher import TagBalanceMatcher, match_tokens
from htmlsnob.text import LineIndex, Position, TextRange


def check(source: str, ruleset: RuleSet | None = None) -> list[Diagnostic]:
    resolved = ruleset if ruleset is not None else default_ruleset()
    options = LexerOptions.from_ruleset(resolved)
    return match_tokens(tokenize(source, options), resolved, source, "test.html")


@pytest.mark.parametrize("case", BALANCE_CASES, ids=lambda case: case.name)
def test_balance_cases(case: MarkupCase) -> None:
    assert tuple(d.code for d in check(case.source)) == case.expected_codes


def test_unclosed_paragraph_reports_open_tag_position() -> None:
    diagnostics = check("<p>Hello World!")

    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.code == "missing_close_tag"
    assert diagnostic.message == "Open tag `p` is missing close tag"
    assert diagnostic.severity == "error"
    assert diagnostic.path == "test.html"
    assert diagnostic.range == TextRange(0, 3)
    assert (diagnostic.start, diagnostic.end) == (Position(0, 0), Position(0, 3))


def test_balanced_paragraph_has_no_diagnostics() -> None:
    assert check("<p>Hello World!</p>") == []


def test_disabled_missing_close_tag_reports_nothing() -> None:
    ruleset = resolve_ruleset({"missing_close_tag": {"enabled": False}})

    assert check("<p>Hello World!", ruleset) == []


def test_close_tag_skipping_open_record_reports_it_at_open_position() -> None:
    diagnostics = check("<div><span>text</div>")

    assert len(diagnostics) == 1
    assert diagnostics[0].message == "Open tag `span` is missing close tag"
    assert diagnostics[0].start == Position(0, 5)
    assert diagnostics[0].code == "mismatched_nesting"


def test_stray_close_tag_leaves_stack_unchanged() -> None:
    diagnostics = check("<div></span>")

    assert [(d.code, d.message) for d in diagnostics] == [
        ("missing_close_tag", "Open tag `div` is missing close tag"),
        ("unexpected_close_tag", "Close tag `span` is missing open tag"),
    ]
    assert diagnostics[1].range == TextRange(5, 12)


def test_remaining_records_reported_bottom_to_top_across_lines() -> None:
    diagnostics = check("<html>\n  <body>\n    <main>\n")

    assert [(d.message, d.start) for d in diagnostics] == [
        ("Open tag `html` is missing close tag", Position(0, 0)),
        ("Open tag `body` is missing close tag", Position(1, 2)),
        ("Open tag `main` is missing close tag", Position(2, 4)),
    ]


def test_stack_depth_matches_missing_close_count() -> None:
    source = "<ul><li>one<li>two</ul><section><div>"
    ruleset = default_ruleset()
    lexer = Lexer(source, LexerOptions.from_ruleset(ruleset))
    matcher = TagBalanceMatcher(ruleset, lexer.line_index, "test.html")
    for token in lexer:
        matcher.feed(token)
    open_records = [record.name for record in matcher.stack]

    diagnostics = matcher.finish()

    assert open_records == ["section", "div"]
    assert sum(1 for d in diagnostics if d.code == "missing_close_tag") == len(open_records)
    assert sum(1 for d in diagnostics if d.code == "mismatched_nesting") == 2
    assert matcher.stack == ()


def test_feed_after_finish_raises() -> None:
    ruleset = default_ruleset()
    lexer = Lexer("<p>")
    matcher = TagBalanceMatcher(ruleset, lexer.line_index, "test.html")
    token = lexer.next_token()
    assert token is not None
    matcher.finish()

    with pytest.raises(RuntimeError):
        matcher.feed(token)


def test_void_elements_follow_ruleset() -> None:
    ruleset = resolve_ruleset({"void_elements": ["my-icon"]})

    assert check("<my-icon><br>", ruleset)[0].message == "Open tag `br` is missing close tag"
    assert [d.code for d in check("<my-icon><br>", ruleset)] == ["missing_close_tag"]


def test_disabled_rule_keeps_bookkeeping() -> None:
    ruleset = resolve_ruleset({"mismatched_nesting": False})

    # `span` is still popped by `</div>`, so nothing is left open at the end.
    assert check("<div><span></div>", ruleset) == []


def test_except_tags_suppress_only_listed_tags() -> None:
    ruleset = resolve_ruleset({"missing_close_tag": {"except_tags": ["P", "li"]}})

    diagnostics = check("<p>one<p>two<div>", ruleset)

    assert [d.message for d in diagnostics] == ["Open tag `div` is missing close tag"]


def test_custom_message_and_severity() -> None:
    ruleset = resolve_ruleset({"unexpected_close_tag": {"message": "Stray `{name}` found", "severity": "warning"}})

    diagnostics = check("</b>", ruleset)

    assert [(d.message, d.severity) for d in diagnostics] == [("Stray `b` found", "warning")]


def test_missing_end_bracket_messages() -> None:
    diagnostics = check("<div <p></p></div </section>")

    messages = [d.message for d in diagnostics if d.code == "missing_end_bracket"]
    assert messages == ["Open tag `div` is missing end bracket", "Close tag `div` is missing end bracket"]
    assert all(d.severity == "warning" for d in diagnostics if d.code == "missing_end_bracket")


def test_unterminated_comment_and_doctype() -> None:
    assert [d.message for d in check("<!DOCTYPE html")] == ["Doctype is missing end bracket"]
    assert [d.message for d in check("<!-- note")] == ["Comment is missing end bracket"]


def test_ignore_region_suppresses_enclosed_diagnostics() -> None:
    source = "<!-- htmlsnob ignore below --><div><!-- htmlsnob ignore above --><p>"

    diagnostics = check(source)

    assert [d.message for d in diagnostics] == ["Open tag `p` is missing close tag"]


def test_ignore_below_without_above_runs_to_end() -> None:
    source = "<p>\n<!-- htmlsnob ignore below -->\n<span>\n</b>"

    diagnostics = check(source)

    assert [d.message for d in diagnostics] == ["Open tag `p` is missing close tag"]


def test_escaped_directive_opener_exposes_markup() -> None:
    assert [d.code for d in check("\\{{ <p> }}")] == ["missing_close_tag"]


def test_template_tolerance_off_treats_directives_as_markup() -> None:
    ruleset = resolve_ruleset({"template_tolerance": False})

    assert [d.code for d in check("{{ '</p>' }}", ruleset)] == ["unexpected_close_tag"]
    assert check("{{ '</p>' }}") == []


def test_match_tokens_accepts_line_index() -> None:
    source = "<p>"
    ruleset = default_ruleset()

    from_text = match_tokens(tokenize(source), ruleset, source)
    from_index = match_tokens(tokenize(source), ruleset, LineIndex(source))

    assert from_text == from_index
    assert from_text[0].path == "<memory>"


def test_skipped_records_need_mismatched_nesting_disabled_too() -> None:
    source = "<div><span>text</div>"
    only_missing = resolve_ruleset({"missing_close_tag": False})
    both = resolve_ruleset({"missing_close_tag": False, "mismatched_nesting": False})

    assert [d.code for d in check(source, only_missing)] == ["mismatched_nesting"]
    assert check(source, both) == []
