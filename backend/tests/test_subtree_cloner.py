from content_tree.extensions import db
from content_tree.models.section import Section
from content_tree.tree.assembler import build_tree, flatten, get_child_elements
from content_tree.tree.cloner import duplicate_element, duplicate_section, convert_to_block
from content_tree.tree.reconciler import reconcile_layout


def _shape(tree_node):
    node = tree_node.node
    return (
        getattr(node, "element_type", None),
        node.sort,
        getattr(node, "answers_json", None),
        [_shape(child) for child in tree_node.children],
    )


def _section_with_content(store, section, make_element):
    row = make_element("row", section=section, sort=1, answers={"columns": "4,8"})
    reconcile_layout(store, row)
    left, right = store.load_children(row.id)
    make_element("text", parent=left, answers={"text": "Welcome"})
    make_element("image", parent=right, answers={"photo": "a.png"})
    make_element("text", section=section, sort=2, answers={"text": "Footer"})
    db.session.commit()
    return build_tree([section], store.load_elements_for_section(section.id))[0]


def test_duplicate_element_is_isomorphic_with_fresh_ids(app, store, section, make_element):
    tree = _section_with_content(store, section, make_element)
    row = tree.children[0]

    clone = duplicate_element(store, row, section_id=section.id, sort=2)

    assert _shape(clone)[2:] == _shape(row)[2:]
    assert clone.node.sort == 2
    source_ids = {n.id for n in flatten([row])}
    clone_ids = {n.id for n in flatten([clone])}
    assert len(clone_ids) == len(source_ids)
    assert source_ids.isdisjoint(clone_ids)
    for column in clone.children:
        assert column.node.parent_id == clone.id


def test_duplicate_element_leaves_source_untouched(app, store, section, make_element):
    tree = _section_with_content(store, section, make_element)
    before = [(e.id, e.parent_id, e.sort) for e in store.load_elements_for_section(section.id)]

    duplicate_element(store, tree.children[0], section_id=section.id, sort=3)

    after = {(e.id, e.parent_id, e.sort) for e in store.load_elements_for_section(section.id)}
    assert set(before) <= after
    assert len(after) == 2 * len(before) - 1  # the footer text was not copied


def test_duplicate_section_goes_last_in_zone(app, store, page, section, make_element):
    tree = _section_with_content(store, section, make_element)
    other = Section()
    other.page_id = page.id
    other.zone = "main"
    other.sort = 2
    store.save(other)

    clone = duplicate_section(store, tree)

    assert clone.node.id != section.id
    assert clone.node.zone == "main"
    assert clone.node.sort == 3
    assert [_shape(c) for c in clone.children] == [_shape(c) for c in tree.children]
    assert all(e.section_id == clone.id for e in flatten(clone.children))


def test_convert_to_block_creates_element_block(app, store, section, make_element):
    tree = _section_with_content(store, section, make_element)
    source_count = len(store.load_elements_for_section(section.id))

    result = convert_to_block(store, tree, name="Hero")

    block = result.node
    assert block.is_element_block
    assert block.name == "Hero"
    elements = store.load_elements_for_block(block.id)
    assert len(elements) == source_count
    assert all(e.section_id is None and e.block_id == block.id for e in elements)
    assert [c.node.sort for c in result.children] == [1, 2]
    # The section keeps its own elements
    assert len(store.load_elements_for_section(section.id)) == source_count


def test_convert_to_block_appends_to_existing_block(app, store, section, element_block, make_element):
    existing = make_element("text", block=element_block, sort=1)
    tree = _section_with_content(store, section, make_element)

    result = convert_to_block(store, tree, element_block.id)

    roots = store.load_root_elements(block_id=element_block.id)
    assert roots[0].id == existing.id
    assert [r.sort for r in roots] == [1, 2, 3]
    assert [c.id for c in result.children] == [r.id for r in roots[1:]]


def test_subtree_helper_matches_flat_rows(app, store, section, make_element):
    _section_with_content(store, section, make_element)
    row = store.load_root_elements(section_id=section.id)[0]

    subtree = get_child_elements(row, store.load_elements_for_section(section.id))

    assert len(flatten([subtree])) == 5
