from htmlsnob.config import default_ruleset, resolve_ruleset
from htmlsnob.lint import FileLintResult, FileReadFailure, LintResult, lint_text
from htmlsnob.report import (
    EXIT_ISSUES,
    EXIT_OK,
    EXIT_TOOL_FAILURE,
    SUCCESS_MESSAGE,
    document_diagnostics,
    exit_code_for,
    render_batch_report,
)


def batch(*files: FileLintResult) -> LintResult:
    return LintResult(files=list(files))


def test_report_for_unclosed_paragraph_is_byte_exact() -> None:
    result = batch(lint_text("<p>Hello World!", default_ruleset(), "index.html"))

    assert render_batch_report(result) == "index.html:\n0: <p>Hello World!\n   --- Open tag `p` is missing close tag\n\n"


def test_success_report() -> None:
    result = batch(lint_text("<p>Hello World!</p>", default_ruleset(), "index.html"))

    assert render_batch_report(result) == SUCCESS_MESSAGE == "Success: No issues found\n"


def test_underline_is_right_aligned_to_end_column() -> None:
    result = batch(lint_text("<div><span>text</div>", default_ruleset(), "a.html"))

    assert render_batch_report(result) == (
        "a.html:\n0: <div><span>text</div>\n        ------ Open tag `span` is missing close tag\n\n"
    )


def test_padding_follows_line_number_width() -> None:
    result = batch(lint_text("\n" * 10 + "<p>", default_ruleset(), "a.html"))

    assert render_batch_report(result) == "a.html:\n10: <p>\n    --- Open tag `p` is missing close tag\n\n"


def test_only_files_with_issues_are_listed() -> None:
    ruleset = default_ruleset()
    result = batch(
        lint_text("<b></b>", ruleset, "clean.html"),
        lint_text("</i>", ruleset, "stray.html"),
    )

    assert render_batch_report(result) == "stray.html:\n0: </i>\n   ---- Close tag `i` is missing open tag\n\n"


def test_long_messages_are_truncated() -> None:
    ruleset = resolve_ruleset({"missing_close_tag": {"message": "x" * 100}})
    result = batch(lint_text("<p>", ruleset, "a.html"))

    report = render_batch_report(result)

    assert report.splitlines()[2] == "   --- " + "x" * 80 + "..."


def test_read_failure_is_reported() -> None:
    failed = FileLintResult(
        path="missing.html",
        source_text="",
        failure=FileReadFailure(path="missing.html", reason="No such file or directory"),
    )

    assert render_batch_report(batch(failed)) == "missing.html:\n  Failed to read file: No such file or directory\n\n"


def test_document_diagnostics_shape() -> None:
    result = lint_text("<p>\n<div", default_ruleset(), "file:///a.html")

    assert document_diagnostics(result) == [
        {
            "range": {"start": {"line": 0, "character": 0}, "end": {"line": 0, "character": 3}},
            "severity": 1,
            "code": "missing_close_tag",
            "source": "htmlsnob",
            "message": "Open tag `p` is missing close tag",
        }
    ]


def test_document_diagnostics_counts_utf16_units_by_default() -> None:
    result = lint_text("\U0001f600<p>", default_ruleset(), "a.html")

    utf16 = document_diagnostics(result)[0]["range"]
    utf32 = document_diagnostics(result, "utf-32")[0]["range"]

    assert utf16 == {"start": {"line": 0, "character": 2}, "end": {"line": 0, "character": 5}}
    assert utf32 == {"start": {"line": 0, "character": 1}, "end": {"line": 0, "character": 4}}


def test_document_diagnostics_severity_mapping() -> None:
    ruleset = resolve_ruleset({"missing_close_tag": {"severity": "info"}})
    result = lint_text("<p></p <br><div>", ruleset)

    assert [d["severity"] for d in document_diagnostics(result)] == [2, 3]
    assert document_diagnostics(lint_text("", ruleset)) == []


def test_exit_codes() -> None:
    ruleset = default_ruleset()
    clean = lint_text("<p></p>", ruleset, "clean.html")
    dirty = lint_text("<p>", ruleset, "dirty.html")
    failed = FileLintResult(path="gone.html", source_text="", failure=FileReadFailure("gone.html", "gone"))

    assert exit_code_for(batch(clean)) == EXIT_OK
    assert exit_code_for(batch(clean, dirty)) == EXIT_ISSUES
    assert exit_code_for(batch(clean, failed)) == EXIT_ISSUES
    assert exit_code_for(batch(failed)) == EXIT_TOOL_FAILURE
    assert exit_code_for(batch()) == EXIT_OK
