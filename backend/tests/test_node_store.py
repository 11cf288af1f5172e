import pytest
from content_tree.extensions import db
from content_tree.models.element import Element
from content_tree.domain.invariants.exceptions import NodeNotFound
from content_tree.tree.store import NodeStore


def test_loads_are_scoped_to_tenant(app, section, other_tenant, make_element):
    element = make_element("text", section=section)
    foreign = NodeStore(other_tenant.id)

    with pytest.raises(NodeNotFound):
        foreign.load_element(element.id)
    with pytest.raises(NodeNotFound):
        foreign.load_section(section.id)


def test_store_requires_tenant():
    with pytest.raises(ValueError):
        NodeStore("")


def test_children_come_back_in_sort_order(app, store, section, make_element):
    row = make_element("row", section=section)
    late = make_element("column", parent=row, sort=2)
    early = make_element("column", parent=row, sort=1)

    assert [c.id for c in store.load_children(row.id)] == [early.id, late.id]


def test_delete_element_tree_is_leaf_first(app, store, section, make_element):
    row = make_element("row", section=section)
    column = make_element("column", parent=row)
    text = make_element("text", parent=column)
    sibling = make_element("text", section=section, sort=2)
    expected = [text.id, column.id, row.id]

    deleted = store.delete_element_tree(row)

    assert deleted == expected
    assert [e.id for e in Element.query.all()] == [sibling.id]


def test_delete_section_tree(app, store, section, make_element):
    row = make_element("row", section=section)
    column = make_element("column", parent=row)
    make_element("text", parent=column)

    section_id, row_id, column_id = section.id, row.id, column.id

    deleted = store.delete_section_tree(section)
    db.session.commit()

    assert deleted[-1] == section_id
    assert deleted.index(column_id) < deleted.index(row_id)
    assert Element.query.count() == 0


def test_block_elements_exclude_section_rows(app, store, section, element_block, make_element):
    on_block = make_element("text", block=element_block)
    make_element("text", section=section)

    assert [e.id for e in store.load_elements_for_block(element_block.id)] == [on_block.id]
