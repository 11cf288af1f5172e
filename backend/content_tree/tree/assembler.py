"""
Tree Assembler.

Rows are stored flat: an element points at its parent element, or at its
section/block when it is a root; a section points at its page or block.
``build_tree`` groups rows by the node they hang off and nests them;
``flatten`` walks the result back into a flat list.
"""
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional
from content_tree.models.page import Page
from content_tree.models.block import Block
from content_tree.models.section import Section
from content_tree.models.element import Element
from content_tree.domain.invariants.exceptions import InvariantViolation


@dataclass
class TreeNode:
    node: Any
    children: list["TreeNode"] = field(default_factory=list)

    @property
    def id(self):
        return self.node.id


NodeKey = tuple[str, Optional[str]]


def node_key(row) -> NodeKey:
    """Identity of a row as a potential parent."""
    if isinstance(row, Element):
        return ("element", row.id)
    if isinstance(row, Section):
        return ("section", row.id)
    if isinstance(row, Block):
        return ("block", row.id)
    if isinstance(row, Page):
        return ("page", row.id)
    raise TypeError(f"Cannot place {type(row).__name__} in a content tree")


def parent_key(row) -> NodeKey:
    """The node a row hangs off."""
    if isinstance(row, Element):
        if row.parent_id is not None:
            return ("element", row.parent_id)
        if row.section_id:
            return ("section", row.section_id)
        return ("block", row.block_id)
    if isinstance(row, Section):
        if row.block_id:
            return ("block", row.block_id)
        return ("page", row.page_id)
    raise TypeError(f"{type(row).__name__} cannot be a descendant in a content tree")


def _sort_key(row):
    sort = getattr(row, "sort", None)
    return (sort is None, sort if sort is not None else 0)


def build_tree(roots, all_descendants) -> list[TreeNode]:
    """
    Nest ``all_descendants`` under ``roots``.

    Siblings come back in sort order. Descendants that cannot be reached from
    any root are ignored. Raises InvariantViolation if a parent chain loops.
    """
    arena: dict[NodeKey, list] = {}
    for row in all_descendants:
        arena.setdefault(parent_key(row), []).append(row)
    for siblings in arena.values():
        siblings.sort(key=_sort_key)

    def assemble(row, path: frozenset) -> TreeNode:
        key = node_key(row)
        if key in path:
            raise InvariantViolation(f"Cycle detected in content tree at {key[0]} {key[1]}")
        path = path | {key}
        return TreeNode(row, [assemble(child, path) for child in arena.get(key, [])])

    return [assemble(root, frozenset()) for root in roots]


def iter_tree(tree) -> Iterator[Any]:
    """Depth-first, parent before children. Each call starts a fresh walk."""
    for tree_node in tree:
        yield tree_node.node
        yield from iter_tree(tree_node.children)


def flatten(tree) -> list:
    return list(iter_tree(tree))


def get_child_elements(element: Element, all_elements) -> TreeNode:
    """Materialize the subtree rooted at ``element`` out of its owner's rows."""
    return build_tree([element], all_elements)[0]
