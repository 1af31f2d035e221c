"""
Unit tests for the allow-list sanitizer.

Both profiles parse with html.parser, so fragments come back without any
html/head/body wrappers.
"""

from html_compactor.transforms.sanitizer import (
    LENIENT,
    STRICT,
    sanitize,
    sanitize_lenient,
    sanitize_strict,
)


class TestLenientProfile:
    def test_drops_event_handlers_and_unsafe_schemes(self):
        html = (
            '<div onclick="x()" data-id="7" aria-label="l">'
            '<a href="javascript:alert(1)" target="_blank">go</a></div>'
        )
        assert sanitize_lenient(html) == (
            '<div data-id="7" aria-label="l"><a target="_blank">go</a></div>'
        )

    def test_keeps_data_uri_on_img_only(self):
        out = sanitize_lenient(
            '<img src="data:image/png;base64,AAA" alt="x" onerror="y()">'
            '<a href="data:text/html,hi">link</a>'
        )
        assert 'src="data:image/png;base64,AAA"' in out
        assert 'alt="x"' in out
        assert "onerror" not in out
        assert "<a>link</a>" in out

    def test_keeps_mailto_and_relative_links(self):
        out = sanitize_lenient('<a href="mailto:a@example.com">m</a><a href="/about">r</a>')
        assert 'href="mailto:a@example.com"' in out
        assert 'href="/about"' in out

    def test_unwraps_unknown_tags(self):
        html = "<custom-tag><b>bold</b> text</custom-tag>"
        assert sanitize_lenient(html) == "<b>bold</b> text"

    def test_drops_scripts_and_comments_with_their_content(self):
        html = "<!-- hidden --><p>a</p><script>evil()</script><style>p{}</style>"
        assert sanitize_lenient(html) == "<p>a</p>"

    def test_keeps_form_controls(self):
        out = sanitize_lenient('<form action="/search" method="get"><input name="q" type="text"></form>')
        assert 'action="/search"' in out
        assert 'name="q"' in out


class TestStrictProfile:
    def test_script_removed_class_kept(self):
        out = sanitize_strict('<script>alert(1)</script><p class="x">hi</p>')
        assert out == '<p class="x">hi</p>'
        assert "<script" not in out

    def test_forms_and_media_are_unwrapped(self):
        out = sanitize_strict(
            '<form action="/x"><label>Search</label><input name="q"></form>'
            '<img src="https://example.com/a.png">'
        )
        assert "<form" not in out
        assert "<input" not in out
        assert "<img" not in out
        assert "Search" in out

    def test_only_http_links(self):
        out = sanitize_strict(
            '<a href="mailto:a@example.com" title="t">m</a><a href="https://example.com">w</a>'
        )
        assert "<a>m</a>" in out
        assert '<a href="https://example.com">w</a>' in out

    def test_wildcard_attributes_are_narrow(self):
        out = sanitize_strict('<div id="a" class="b" role="main" data-x="1">t</div>')
        assert out == '<div id="a" class="b">t</div>'


class TestProfiles:
    def test_strict_is_subset_of_lenient(self):
        assert STRICT.allowed_tags <= LENIENT.allowed_tags

    def test_attribute_globs(self):
        assert LENIENT.attribute_allowed("span", "aria-hidden")
        assert LENIENT.attribute_allowed("span", "data-anything")
        assert not STRICT.attribute_allowed("span", "aria-hidden")
        assert STRICT.attribute_allowed("a", "href")

    def test_malformed_markup_does_not_raise(self):
        out = sanitize("<div><p>unclosed <b>bold", STRICT)
        assert "bold" in out

    def test_deeply_nested_markup(self):
        html = (
            "<div>" * 1500
            + '<b onclick="x()">deep</b><custom-tag>t</custom-tag>'
            + "</div>" * 1500
        )
        assert sanitize_lenient(html) == "<div>" * 1500 + "<b>deep</b>t" + "</div>" * 1500
