from pathlib import Path

from tests._shared_cases import get_case_source

from htmlsnob.config import default_ruleset, resolve_ruleset
from htmlsnob.lint import FileReadFailure, lint, lint_files, lint_text


def test_lint_text_defaults_to_memory_path() -> None:
    result = lint_text("<p>Hello World!", default_ruleset())

    assert result.path == "<memory>"
    assert result.source_text == "<p>Hello World!"
    assert [d.code for d in result.diagnostics] == ["missing_close_tag"]
    assert result.issue_count == 1
    assert not result.success
    assert result.has_errors


def test_lint_text_is_idempotent() -> None:
    ruleset = default_ruleset()
    source = get_case_source("close_skips_open_span")

    assert lint_text(source, ruleset) == lint_text(source, ruleset)


def test_warnings_only_is_not_has_errors() -> None:
    result = lint_text("<p></p <br>", default_ruleset())

    assert [d.severity for d in result.diagnostics] == ["warning"]
    assert not result.has_errors
    assert not result.success


def test_lint_text_picks_dialect_from_path() -> None:
    source = "<div>{{ '</div>' }}</div>"
    ruleset = default_ruleset()

    assert lint_text(source, ruleset, "card.hbs").diagnostics == []
    # ERB has no `{{`, so the quoted `</div>` closes the div and the real one is stray.
    assert [d.code for d in lint_text(source, ruleset, "card.html.erb").diagnostics] == ["unexpected_close_tag"]


def test_lint_files_keeps_input_order_and_isolates_read_failures(tmp_path: Path) -> None:
    clean = tmp_path / "clean.html"
    clean.write_text("<p>ok</p>", encoding="utf-8")
    broken = tmp_path / "broken.html"
    broken.write_text("<div>", encoding="utf-8")
    binary = tmp_path / "binary.html"
    binary.write_bytes(b"\xff\xfe<p>")
    missing = tmp_path / "missing.html"

    result = lint_files([missing, clean, binary, broken], default_ruleset(), max_workers=2)

    assert [file.path for file in result.files] == [str(missing), str(clean), str(binary), str(broken)]
    assert result.file_count == 4
    assert result.files[0].failure is not None
    assert isinstance(result.files[2].failure, FileReadFailure)
    assert result.files[1].success
    assert [d.code for d in result.files[3].diagnostics] == ["missing_close_tag"]
    assert [failure.path for failure in result.failures] == [str(missing), str(binary)]
    assert result.issue_count == 3
    assert len(result.diagnostics) == 1
    assert not result.success


def test_lint_files_uses_shared_ruleset(tmp_path: Path) -> None:
    page = tmp_path / "page.html"
    page.write_text("<p>Hello World!", encoding="utf-8")
    ruleset = resolve_ruleset({"missing_close_tag": {"enabled": False}})

    result = lint_files([page], ruleset)

    assert result.success
    assert result.issue_count == 0


def test_lint_files_with_no_paths() -> None:
    result = lint_files([], default_ruleset())

    assert result.files == []
    assert result.success


def test_lint_wraps_single_document_as_batch() -> None:
    result = lint("index.html", "<p>Hello World!", default_ruleset())

    assert result.file_count == 1
    assert result.issue_count == 1
    assert result.diagnostics[0].path == "index.html"


def test_plain_html_file_has_no_template_delimiters() -> None:
    source = "<div>{{ '</div>' }}</div>"

    assert [d.code for d in lint_text(source, default_ruleset(), "index.html").diagnostics] == ["unexpected_close_tag"]

    ruleset = resolve_ruleset({"delimiters": [{"open": "{{", "close": "}}", "quoting": True}]})
    assert lint_text(source, ruleset, "index.html").diagnostics == []


def test_unclosed_openers_in_plain_html_are_text() -> None:
    ruleset = default_ruleset()

    assert lint_text("<p>Color {#fff</p>\n<p>ok</p>\n", ruleset, "index.html").diagnostics == []
    assert lint_text(get_case_source("unclosed_erb_opener_is_text"), ruleset, "page.html").diagnostics == []
    assert lint_text(get_case_source("unclosed_erb_opener_is_text"), ruleset, "page.ejs").diagnostics == []
