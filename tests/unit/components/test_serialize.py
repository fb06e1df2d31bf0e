"""
Unit tests for serialization.
"""

from pathlib import Path

from tagtree.builder import build_tree
from tagtree.dom import TagNode
from tagtree.serialize import get_html, iter_lines


FIXTURES = Path(__file__).parent.parent.parent / "fixtures"


class TestGetHtml:
    def test_empty_tree(self):
        assert get_html(None) == ""

    def test_single_leaf(self):
        assert get_html(TagNode("html")) == "html\n"

    def test_build_serialize_shape(self):
        root = build_tree(["<html>", "<body>", "<p>", "hello world", "</p>", "</body>", "</html>"])
        assert get_html(root) == "<html>\n<body>\n<p>\nhello world\n</p>\n</body>\n</html>\n"

    def test_siblings_follow_closing_tag(self):
        p2 = TagNode("p", first_child=TagNode("two"))
        p1 = TagNode("p", first_child=TagNode("one"), next_sibling=p2)
        root = TagNode("body", first_child=p1)
        assert list(iter_lines(root)) == ["<body>", "<p>", "one", "</p>", "<p>", "two", "</p>", "</body>"]

    def test_empty_element_written_as_bare_label(self):
        root = build_tree(["<html>", "<p>", "</p>"])
        assert get_html(root) == "<html>\np\n</html>\n"

    def test_root_sibling_chain_is_written(self):
        root = TagNode("html", first_child=TagNode("x"), next_sibling=TagNode("after"))
        assert get_html(root) == "<html>\nx\n</html>\nafter\n"

    def test_fixture_round_trip(self):
        text = (FIXTURES / "sample.html").read_text()
        root = build_tree(text.splitlines())
        assert get_html(root) == text

    def test_serialize_is_read_only(self):
        text = (FIXTURES / "sample.html").read_text()
        root = build_tree(text.splitlines())
        assert get_html(root) == get_html(root)
