from content_tree.models.page import Page
from content_tree.models.section import Section
from content_tree.tree.assembler import TreeNode
from content_tree.normalizers.page import normalize_page


def _section(id, zone, sort):
    section = Section()
    section.id = id
    section.zone = zone
    section.sort = sort
    return TreeNode(section)


def test_blank_and_missing_zones_share_one_group():
    page = Page()
    page.id = "p1"
    page.title = "Home"
    sections = [_section("s1", None, 1), _section("s2", "", 2), _section("s3", "main", 1)]

    data = normalize_page(page, sections=sections)

    assert data["zones"] == {"": ["s1", "s2"], "main": ["s3"]}
    assert [s["id"] for s in data["sections"]] == ["s1", "s2", "s3"]
