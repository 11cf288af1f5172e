"""
Subtree Cloner.

Copies a materialized subtree (see ``assembler.build_tree``) into a new owner.
Every clone is flushed before its children are created, so each child is
written with its new parent's id. Source rows are never modified.
"""
from typing import Optional
from flask import current_app
from content_tree.models.block import Block, ELEMENT_BLOCK
from content_tree.models.section import Section
from content_tree.models.element import Element
from content_tree.tree.assembler import TreeNode, flatten
from content_tree.tree.sequencer import update_element_sort, update_section_sort


def duplicate_element(
    store,
    source: TreeNode,
    *,
    section_id: Optional[str],
    block_id: Optional[str] = None,
    parent_id: Optional[str] = None,
    sort: Optional[int] = None,
) -> TreeNode:
    original = source.node

    clone = Element()
    for field_name in Element.COPY_FIELDS:
        setattr(clone, field_name, getattr(original, field_name))
    clone.section_id = section_id
    clone.block_id = block_id
    clone.parent_id = parent_id
    if sort is not None:
        clone.sort = sort

    store.save(clone)  # assigns the fresh id the children point at

    children = [
        duplicate_element(
            store,
            child,
            section_id=section_id,
            block_id=block_id,
            parent_id=clone.id,
        )
        for child in source.children
    ]
    return TreeNode(clone, children)


def duplicate_section(store, source: TreeNode) -> TreeNode:
    """Copy a section and its element tree; the copy goes last in its zone."""
    section = source.node

    clone = Section()
    for field_name in Section.COPY_FIELDS:
        setattr(clone, field_name, getattr(section, field_name))
    clone.page_id = section.page_id
    clone.block_id = section.block_id

    if section.block_id:
        siblings = store.load_sections_for_block(section.block_id)
    else:
        siblings = store.load_sections_for_zone(section.page_id, section.zone)
    clone.sort = max((s.sort or 0 for s in siblings), default=0) + 1

    store.save(clone)
    update_section_sort(
        store,
        page_id=clone.page_id,
        zone=clone.zone,
        block_id=clone.block_id,
        preferred=(clone.id,),
    )

    elements = [
        duplicate_element(store, root, section_id=clone.id, block_id=None, parent_id=None)
        for root in source.children
    ]
    update_element_sort(store, section_id=clone.id)
    result = TreeNode(clone, elements)

    current_app.logger.info(
        f"Duplicated section {section.id} as {clone.id} "
        f"({len(flatten(elements))} element(s))"
    )
    return result


def convert_to_block(
    store,
    source: TreeNode,
    target_block_id: Optional[str] = None,
    *,
    name: Optional[str] = None,
) -> TreeNode:
    """
    Copy a section's elements straight under a block, dropping the section layer.

    The target block is loaded when an id is given, otherwise a new element
    block is created. The source section is left as it is.
    """
    if target_block_id:
        block = store.load_block(target_block_id)
    else:
        block = Block()
        block.block_type = ELEMENT_BLOCK
        block.name = name or "Converted section"
        store.save(block)

    existing = store.load_root_elements(block_id=block.id)
    offset = max((e.sort or 0 for e in existing), default=0)

    roots = [
        duplicate_element(
            store,
            root,
            section_id=None,
            block_id=block.id,
            parent_id=None,
            sort=offset + position,
        )
        for position, root in enumerate(source.children, start=1)
    ]
    update_element_sort(store, block_id=block.id)

    current_app.logger.info(
        f"Converted section {source.node.id} into block {block.id} "
        f"({len(flatten(roots))} element(s))"
    )
    return TreeNode(block, roots)
