from typing import List, Tuple
from content_tree.models.page import Page
from content_tree.models.block import Block
from content_tree.models.element import Element
from content_tree.tree.store import NodeStore
from content_tree.tree.assembler import TreeNode, build_tree


def load_element(*, tenant_id: str, element_id: str) -> Element:
    return NodeStore(tenant_id).load_element(element_id)


def load_section_tree(*, tenant_id: str, section_id: str) -> TreeNode:
    store = NodeStore(tenant_id)
    section = store.load_section(section_id)
    return build_tree([section], store.load_elements_for_section(section.id))[0]


def load_page_tree(*, tenant_id: str, page_id: str) -> Tuple[Page, List[TreeNode]]:
    """
    A page with every section of every zone, each holding its element tree.
    Sections come back grouped by zone, in sort order within each zone.
    """
    store = NodeStore(tenant_id)
    page = store.load_page(page_id)

    sections = store.load_sections_for_page(page.id)
    sections.sort(key=lambda s: (s.zone or "", s.sort or 0))
    elements = store.load_elements_for_sections([s.id for s in sections])

    return page, build_tree(sections, elements)


def load_block_tree(*, tenant_id: str, block_id: str) -> TreeNode:
    """
    Element blocks hold their elements directly; other blocks hold sections,
    which hold elements.
    """
    store = NodeStore(tenant_id)
    block = store.load_block(block_id)

    if block.is_element_block:
        descendants = store.load_elements_for_block(block.id)
    else:
        sections = store.load_sections_for_block(block.id)
        descendants = sections + store.load_elements_for_sections([s.id for s in sections])

    return build_tree([block], descendants)[0]


def list_blocks_by_type(*, tenant_id: str, block_type: str) -> List[Block]:
    return NodeStore(tenant_id).load_blocks_by_type(block_type)
