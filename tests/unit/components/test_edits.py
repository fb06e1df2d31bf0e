"""
Unit tests for replace_tag, bold_row and remove_tag.
"""

from pathlib import Path

from tagtree.builder import build_tree
from tagtree.dom import TagNode, count_label
from tagtree.edits import bold_row, remove_tag, replace_tag
from tagtree.serialize import get_html


FIXTURES = Path(__file__).parent.parent.parent / "fixtures"


def build(text: str) -> TagNode:
    return build_tree(text.strip().splitlines())


TABLE = """
<html>
<table>
<tr>
<td>
a1
</td>
<td>
a2
</td>
</tr>
<tr>
<td>
b1
</td>
<td>
b2
</td>
</tr>
</table>
</html>
"""

LIST = """
<html>
<body>
<ul>
<li>
one
</li>
<li>
two
</li>
</ul>
</body>
</html>
"""


class TestReplaceTag:
    def test_renames_every_occurrence(self):
        root = build(TABLE)
        assert replace_tag(root, "td", "th") == 4
        assert count_label(root, "td") == 0
        assert count_label(root, "th") == 4

    def test_renames_root(self):
        root = build(TABLE)
        replace_tag(root, "html", "doc")
        assert root.label == "doc"

    def test_no_structural_change(self):
        root = build(TABLE)
        before = get_html(root)
        replace_tag(root, "td", "th")
        assert get_html(root) == before.replace("<td>", "<th>").replace("</td>", "</th>")

    def test_idempotent(self):
        once = build(TABLE)
        twice = build(TABLE)
        replace_tag(once, "tr", "row")
        replace_tag(twice, "tr", "row")
        replace_tag(twice, "tr", "row")
        assert get_html(once) == get_html(twice)

    def test_missing_label_is_noop(self):
        root = build(TABLE)
        before = get_html(root)
        assert replace_tag(root, "em", "b") == 0
        assert get_html(root) == before

    def test_matches_text_runs_with_same_label(self):
        root = build("<html>\n<p>\nem\n</p>")
        replace_tag(root, "em", "i")
        assert root.first_child.first_child.label == "i"

    def test_none_root(self):
        assert replace_tag(None, "a", "b") == 0


class TestBoldRow:
    def test_wraps_cells_of_row(self):
        root = build(TABLE)
        assert bold_row(root, 2) == 2
        html = get_html(root)
        assert "<td>\n<b>\nb1\n</b>\n</td>" in html
        assert "<td>\n<b>\nb2\n</b>\n</td>" in html
        assert "<b>\na1" not in html

    def test_first_row_is_one(self):
        root = build(TABLE)
        bold_row(root, 1)
        html = get_html(root)
        assert "<td>\n<b>\na1\n</b>\n</td>" in html
        assert "<b>\nb1" not in html

    def test_bold_holds_whole_child_chain(self):
        root = build("<html>\n<table>\n<tr>\n<td>\n<em>\nx\n</em>\ny\n</td>\n</tr>\n</table>")
        bold_row(root, 1)
        td = root.first_child.first_child.first_child
        bold = td.first_child
        assert bold.label == "b"
        assert bold.next_sibling is None
        assert [n.label for n in bold.children()] == ["em", "y"]

    def test_row_beyond_count_is_noop(self):
        root = build(TABLE)
        before = get_html(root)
        assert bold_row(root, 3) == 0
        assert get_html(root) == before

    def test_row_below_one_is_noop(self):
        root = build(TABLE)
        before = get_html(root)
        assert bold_row(root, 0) == 0
        assert bold_row(root, -1) == 0
        assert get_html(root) == before

    def test_rows_counted_across_tables(self):
        second = TABLE.replace("a1", "c1").replace("a2", "c2").replace("b1", "d1").replace("b2", "d2")
        body = TABLE.strip().splitlines()[1:-1] + second.strip().splitlines()[1:-1]
        root = build_tree(["<html>"] + body + ["</html>"])
        bold_row(root, 3)
        html = get_html(root)
        assert "<b>\nc1\n</b>" in html
        assert "<b>\nc2\n</b>" in html
        assert html.count("<b>") == 2

    def test_nested_rows_share_counter(self):
        root = build("""
<html>
<table>
<tr>
<td>
<table>
<tr>
<td>
inner
</td>
</tr>
</table>
</td>
</tr>
<tr>
<td>
outer
</td>
</tr>
</table>
""")
        bold_row(root, 3)
        html = get_html(root)
        assert "<b>\nouter\n</b>" in html
        assert "<b>\ninner" not in html

    def test_none_root(self):
        assert bold_row(None, 1) == 0


class TestRemoveTag:
    def test_list_promotion(self):
        root = build(LIST)
        assert remove_tag(root, "ul") == 1
        assert get_html(root) == (
            "<html>\n<body>\n<p>\none\n</p>\n<p>\ntwo\n</p>\n</body>\n</html>\n"
        )
        assert count_label(root, "ul") == 0
        assert count_label(root, "li") == 0

    def test_ordered_list_promotion(self):
        root = build(LIST.replace("ul>", "ol>"))
        remove_tag(root, "ol")
        assert count_label(root, "p") == 2
        assert count_label(root, "li") == 0

    def test_only_immediate_items_promoted(self):
        root = build("""
<html>
<ul>
<li>
<ol>
<li>
deep
</li>
</ol>
</li>
</ul>
""")
        remove_tag(root, "ul")
        p = root.first_child
        assert p.label == "p"
        assert p.first_child.label == "ol"
        assert p.first_child.first_child.label == "li"

    def test_children_take_position_between_siblings(self):
        em = TagNode("em", first_child=TagNode("x", next_sibling=TagNode("y")))
        first = TagNode("p", first_child=TagNode("before"), next_sibling=em)
        em.next_sibling = TagNode("p", first_child=TagNode("after"))
        root = TagNode("html", first_child=first)
        remove_tag(root, "em")
        assert [n.label for n in root.children()] == ["p", "x", "y", "p"]

    def test_removed_first_child(self):
        root = build("<html>\n<body>\n<b>\nbold\n</b>\n<p>\nplain\n</p>\n</body>")
        remove_tag(root, "b")
        body = root.first_child
        assert [n.label for n in body.children()] == ["bold", "p"]

    def test_childless_node_collapses(self):
        root = TagNode("html", first_child=TagNode("b", next_sibling=TagNode("tail")))
        remove_tag(root, "b")
        assert [n.label for n in root.children()] == ["tail"]

    def test_nested_occurrences(self):
        root = build("<html>\n<em>\n<em>\n<em>\nx\n</em>\n</em>\n</em>")
        assert remove_tag(root, "em") == 3
        assert get_html(root) == "<html>\nx\n</html>\n"

    def test_all_occurrences_removed(self):
        root = build((FIXTURES / "sample.html").read_text())
        remove_tag(root, "td")
        assert count_label(root, "td") == 0
        assert "Ann" in get_html(root)

    def test_missing_label_is_noop(self):
        root = build(LIST)
        before = get_html(root)
        assert remove_tag(root, "table") == 0
        assert get_html(root) == before

    def test_root_is_never_removed(self):
        root = build(LIST)
        assert remove_tag(root, "html") == 0
        assert root.label == "html"

    def test_root_siblings_are_searched(self):
        root = TagNode("html", next_sibling=TagNode("em", first_child=TagNode("x")))
        remove_tag(root, "em")
        assert root.next_sibling.label == "x"

    def test_removed_node_is_detached(self):
        em = TagNode("em", first_child=TagNode("x"), next_sibling=TagNode("y"))
        root = TagNode("html", first_child=em)
        remove_tag(root, "em")
        assert em.first_child is None
        assert em.next_sibling is None

    def test_none_root(self):
        assert remove_tag(None, "p") == 0
