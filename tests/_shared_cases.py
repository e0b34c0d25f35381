"""Centralized markup cases used across lexer/matcher/runner tests."""

from __future__ import annotations

from dataclasses import dataclass
import textwrap


@dataclass(frozen=True, slots=True)
class MarkupCase:
    name: str
    source: str
    expected_codes: tuple[str, ...] = ()


def _dedent(text: str) -> str:
    return textwrap.dedent(text).lstrip()


BALANCE_CASES: tuple[MarkupCase, ...] = (
    MarkupCase(name="unclosed_paragraph", source="<p>Hello World!", expected_codes=("missing_close_tag",)),
    MarkupCase(name="balanced_paragraph", source="<p>Hello World!</p>"),
    MarkupCase(
        name="close_skips_open_span",
        source="<div><span>text</div>",
        expected_codes=("mismatched_nesting",),
    ),
    MarkupCase(name="stray_close_tag", source="<div></span></div>", expected_codes=("unexpected_close_tag",)),
    MarkupCase(name="void_elements", source='<br><img src="a.png"><input type="text">'),
    MarkupCase(name="self_closing_tags", source="<div/><my-icon />"),
    MarkupCase(name="case_insensitive_names", source="<DIV></div>"),
    MarkupCase(name="close_tag_for_void_element", source="<br></br>", expected_codes=("unexpected_close_tag",)),
    MarkupCase(name="script_content_is_opaque", source="<script>if (a < b) { x = '</div>'; }</script>"),
    MarkupCase(name="comment_hides_tags", source="<!-- <div> --><p></p>"),
    MarkupCase(name="doctype_document", source="<!DOCTYPE html><html><body></body></html>"),
    MarkupCase(
        name="directives_in_attribute_values",
        source='<div class="{{ cls }}"><a href="<%= url %>">x</a></div>',
    ),
    MarkupCase(name="directive_hides_close_tag", source="{% if x %}<p>{{ '</p>' }}</p>{% endif %}"),
    MarkupCase(name="unclosed_hash_opener_is_text", source="<p>Color {#fff</p>\n<p>ok</p>\n"),
    MarkupCase(name="unclosed_erb_opener_is_text", source="<div>\n<p>50<%</p>\n<span>x</span>\n</div>\n"),
    MarkupCase(
        name="unterminated_open_tag",
        source="<div <p></p></div>",
        expected_codes=("missing_end_bracket",),
    ),
    MarkupCase(
        name="tag_running_off_the_end_is_text",
        source="<p>text<div",
        expected_codes=("missing_close_tag",),
    ),
    MarkupCase(
        name="nested_template_page",
        source=_dedent(
            """
            <!DOCTYPE html>
            <html>
              <head>
                <meta charset="utf-8">
                <title>{{ title }}</title>
                <style>p > a { color: red; }</style>
              </head>
              <body>
                {% for item in items %}
                  <li class="{{ item.cls }}">{{ item.name }}</li>
                {% endfor %}
                <br/>
              </body>
            </html>
            """
        ),
    ),
)

BALANCE_CASES_BY_NAME: dict[str, MarkupCase] = {case.name: case for case in BALANCE_CASES}


def get_case_source(name: str) -> str:
    return BALANCE_CASES_BY_NAME[name].source
