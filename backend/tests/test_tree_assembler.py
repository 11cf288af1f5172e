import pytest
from content_tree.models.element import Element
from content_tree.domain.invariants.exceptions import InvariantViolation
from content_tree.tree.assembler import build_tree, flatten, iter_tree, get_child_elements


def _element(id, parent_id=None, sort=1, section_id="s1"):
    element = Element()
    element.id = id
    element.section_id = section_id
    element.parent_id = parent_id
    element.sort = sort
    element.element_type = "text"
    return element


def test_build_tree_nests_and_orders_siblings(section):
    rows = [
        _element("b", sort=2, section_id=section.id),
        _element("a", sort=1, section_id=section.id),
        _element("a2", parent_id="a", sort=2, section_id=section.id),
        _element("a1", parent_id="a", sort=1, section_id=section.id),
    ]

    tree = build_tree([section], rows)[0]

    assert [c.id for c in tree.children] == ["a", "b"]
    assert [c.id for c in tree.children[0].children] == ["a1", "a2"]
    assert tree.children[1].children == []


def test_flatten_round_trip(section):
    rows = [
        _element("a", sort=1, section_id=section.id),
        _element("a1", parent_id="a", sort=1, section_id=section.id),
        _element("b", sort=2, section_id=section.id),
    ]

    tree = build_tree([section], rows)
    flat = flatten(tree)

    assert [n.id for n in flat] == [section.id, "a", "a1", "b"]
    assert {n.id for n in flat[1:]} == {r.id for r in rows}
    # Rebuilding from the flattened rows gives the same shape
    rebuilt = build_tree([section], flat[1:])
    assert [n.id for n in flatten(rebuilt)] == [n.id for n in flat]


def test_iter_tree_restarts_on_each_call():
    root = _element("r")
    tree = build_tree([root], [_element("c", parent_id="r")])

    assert [n.id for n in iter_tree(tree)] == ["r", "c"]
    assert [n.id for n in iter_tree(tree)] == ["r", "c"]


def test_unreachable_rows_are_ignored():
    root = _element("r")
    stray = _element("x", parent_id="missing")

    assert [n.id for n in flatten(build_tree([root], [stray]))] == ["r"]


def test_cycle_raises():
    a = _element("a", parent_id="b")
    b = _element("b", parent_id="a")

    with pytest.raises(InvariantViolation):
        get_child_elements(a, [a, b])


def test_get_child_elements_returns_subtree():
    rows = [
        _element("row"),
        _element("col", parent_id="row"),
        _element("text", parent_id="col"),
        _element("other"),
    ]

    subtree = get_child_elements(rows[0], rows)

    assert [n.id for n in flatten([subtree])] == ["row", "col", "text"]
