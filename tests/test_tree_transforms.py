"""
Unit tests for the tree-walking transforms.
"""

import pytest

from html_compactor.config import settings
from html_compactor.errors import MarkupParseError
from html_compactor.transforms import tree
from html_compactor.transforms.tree import extract_structure, extract_text

_PRE_OPEN = '<!DOCTYPE html><html><head><meta charset="UTF-8"></head><body><pre>'
_PRE_CLOSE = "</pre></body></html>"


def _pre_content(out: str) -> str:
    assert out.startswith(_PRE_OPEN)
    assert out.endswith(_PRE_CLOSE)
    return out[len(_PRE_OPEN):-len(_PRE_CLOSE)]


class TestExtractText:
    def test_structure_markers(self):
        html = (
            "<html><body><h1>Title</h1>"
            '<p>Hello <a href="/x">world</a></p>'
            "<ul><li>One</li><li>Two</li></ul>"
            "<script>x()</script></body></html>"
        )
        assert _pre_content(extract_text(html)) == (
            "\n## Title\nHello\n[world](/x)\n- One\n- Two"
        )

    def test_link_without_href(self):
        assert "[anchor](#)" in extract_text("<body><a>anchor</a></body>")

    def test_drops_noise_elements(self):
        html = (
            "<html><head><style>p{}</style><link rel='x'></head>"
            "<body><noscript>enable js</noscript><div><span>kept</span></div></body></html>"
        )
        assert _pre_content(extract_text(html)) == "kept"

    def test_text_is_escaped(self):
        assert "a &lt; b" in extract_text("<body><p>a &lt; b</p></body>")

    def test_nested_lists_are_not_indented(self):
        html = "<body><ul><li>a</li><li>b</li></ul><ol><li><ul><li>c</li></ul></li></ol></body>"
        assert _pre_content(extract_text(html)) == "- a\n- b\n- c"

    def test_deeply_nested_document(self, monkeypatch):
        monkeypatch.setattr(settings, "tree_parser", "html.parser")
        html = "<div>" * 1500 + "<p>deep</p>" + "</div>" * 1500
        assert _pre_content(extract_text(html)) == "deep"

    def test_parse_failure_raises_markup_error(self, monkeypatch):
        def boom(*args, **kwargs):
            raise ValueError("parser exploded")

        monkeypatch.setattr(tree, "parse_document", boom)
        with pytest.raises(MarkupParseError, match="parser exploded"):
            extract_text("<p>x</p>")


class TestExtractStructure:
    def test_strips_attributes_and_noise(self):
        html = (
            '<html><head><meta charset="utf-8"><style>p{}</style></head><body>'
            '<div id="main" style="color:red" data-foo="1" aria-label="Main">'
            '<img src="data:image/png;base64,AAA" alt="pic" width="10">'
            '<svg><circle r="1"></circle></svg>'
            '<a href="/a" target="_blank">A</a></div></body></html>'
        )
        out = extract_structure(html)
        assert out.startswith("<html>")
        assert 'id="main"' in out
        assert 'aria-label="Main"' in out
        assert 'src="[IMG]"' in out
        assert 'alt="pic"' in out
        assert 'href="/a"' in out
        for gone in ("style=", "data-foo", "width=", "target=", "<svg", "<meta", "<style"):
            assert gone not in out

    def test_keeps_regular_src(self):
        out = extract_structure('<body><img src="https://example.com/a.png"></body>')
        assert 'src="https://example.com/a.png"' in out

    def test_empty_input_gets_document_shell(self):
        assert extract_structure("") == "<html><head></head><body></body></html>"

    def test_fragment_is_wrapped_in_body(self, monkeypatch):
        monkeypatch.setattr(settings, "tree_parser", "html.parser")
        out = extract_structure('<p id="a" style="x">hi</p>')
        assert out == '<html><head></head><body><p id="a">hi</p></body></html>'

    def test_deeply_nested_document(self, monkeypatch):
        monkeypatch.setattr(settings, "tree_parser", "html.parser")
        html = '<div style="color:red">' * 1500 + "<script>x()</script><p>deep</p>" + "</div>" * 1500
        assert extract_structure(html) == (
            "<html><head></head><body>"
            + "<div>" * 1500 + "<p>deep</p>" + "</div>" * 1500
            + "</body></html>"
        )

    def test_parse_failure_raises_markup_error(self, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError("no tree")

        monkeypatch.setattr(tree, "parse_document", boom)
        with pytest.raises(MarkupParseError):
            extract_structure("<p>x</p>")
