"""
Sort Sequencer.

Keeps every sibling group numbered 1..n without gaps or duplicates, writing
only the rows whose position actually moved.
"""
from typing import Iterable, Mapping, Optional
from flask import current_app


def order_siblings(
    members,
    preferred: Iterable[str] = (),
    previous_sorts: Optional[Mapping[str, int]] = None,
):
    """
    Order a sibling group by stored sort.

    ``preferred`` ids are rows just saved or cloned at a target slot. On a
    tie they take that slot: a new row or a row moved up goes before the
    rows already there, a row moved down (its entry in ``previous_sorts`` is
    lower than its new sort) goes after them. Other ties keep their loaded
    order. Rows without a sort go last.
    """
    preferred = set(preferred)
    previous_sorts = previous_sorts or {}

    def tie_rank(member):
        if member.id not in preferred:
            return 1
        before = previous_sorts.get(member.id)
        if before is not None and member.sort is not None and before < member.sort:
            return 2
        return 0

    indexed = list(enumerate(members))
    indexed.sort(
        key=lambda pair: (
            pair[1].sort is None,
            pair[1].sort if pair[1].sort is not None else 0,
            tie_rank(pair[1]),
            pair[0],
        )
    )
    return [member for _, member in indexed]


def resequence(store, members) -> list:
    """
    Give each member its 1-based position in ``members``.

    ``members`` must already be in the intended order. Returns the members
    whose sort changed; untouched rows are not written.
    """
    changed = []
    for position, member in enumerate(members, start=1):
        if member.sort != position:
            member.sort = position
            store.save(member)
            changed.append(member)
    return changed


def update_element_sort(
    store,
    *,
    section_id: Optional[str] = None,
    block_id: Optional[str] = None,
    parent_id: Optional[str] = None,
    preferred: Iterable[str] = (),
    previous_sorts: Optional[Mapping[str, int]] = None,
) -> list:
    """
    Renumber an owner's root elements and, when ``parent_id`` is given, the
    children of that parent. The two groups never mix.
    """
    preferred = list(preferred)
    changed = []

    if section_id or block_id:
        roots = store.load_root_elements(section_id=section_id, block_id=block_id)
        changed.extend(resequence(store, order_siblings(roots, preferred, previous_sorts)))

    if parent_id is not None:
        children = store.load_children(parent_id)
        changed.extend(resequence(store, order_siblings(children, preferred, previous_sorts)))

    if changed:
        current_app.logger.debug(
            f"Resequenced {len(changed)} element(s) "
            f"(section={section_id}, block={block_id}, parent={parent_id})"
        )
    return changed


def update_section_sort(
    store,
    *,
    page_id: Optional[str] = None,
    zone: Optional[str] = None,
    block_id: Optional[str] = None,
    preferred: Iterable[str] = (),
    previous_sorts: Optional[Mapping[str, int]] = None,
) -> list:
    """Renumber the sections of one page zone, or of one block."""
    if block_id:
        sections = store.load_sections_for_block(block_id)
    elif page_id:
        sections = store.load_sections_for_zone(page_id, zone)
    else:
        raise ValueError("page_id or block_id is required")

    return resequence(store, order_siblings(sections, preferred, previous_sorts))
