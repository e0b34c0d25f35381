"""Structural linter for HTML and HTML template files."""

__version__ = "0.1.0"

from htmlsnob.config import ConfigError, RuleSet, RuleSetting, default_ruleset, load_ruleset, resolve_ruleset
from htmlsnob.diagnostics import Diagnostic
from htmlsnob.errors import HtmlsnobError
from htmlsnob.lint import FileLintResult, LintResult, lint, lint_files, lint_text
from htmlsnob.report import document_diagnostics, exit_code_for, render_batch_report

__all__ = [
    "ConfigError",
    "Diagnostic",
    "FileLintResult",
    "HtmlsnobError",
    "LintResult",
    "RuleSet",
    "RuleSetting",
    "__version__",
    "default_ruleset",
    "document_diagnostics",
    "exit_code_for",
    "lint",
    "lint_files",
    "lint_text",
    "load_ruleset",
    "render_batch_report",
    "resolve_ruleset",
]
