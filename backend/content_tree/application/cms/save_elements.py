from typing import Any, Dict, List, Optional
from flask import current_app
from content_tree.models.element import Element
from content_tree.domain.answers import parse_int
from content_tree.domain.element_types import Row, classify_element_type, is_layout
from content_tree.domain.invariants.element import (
    assert_sibling_order,
    assert_element_owner,
    assert_carousel_converged,
    assert_row_converged,
)
from content_tree.domain.invariants.exceptions import InvariantViolation
from content_tree.tree.store import NodeStore
from content_tree.tree.sequencer import update_element_sort
from content_tree.tree.reconciler import reconcile_layout
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional
from ._common import serialized_payload, strict_layout_specs


ALLOWED_ELEMENT_FIELDS = {
    "section_id",
    "block_id",
    "parent_id",
    "element_type",
    "sort",
}

PAYLOAD_FIELDS = {
    "answers": "answers_json",
    "styles": "styles_json",
    "animations": "animations_json",
}


def save_elements(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    nodes: List[Dict[str, Any]],
    strict: Optional[bool] = None,
) -> List[Element]:
    """
    Create or update a batch of elements.

    Responsibilities:
    - Reference checks before each node is written (parent, section, block)
    - Dense ordering of the first node's sibling group
    - Reconciliation of every saved row / carousel (once each)
    - Single transaction + audit logging

    Returns the saved elements as written, before reconciliation added or
    removed any children.
    """
    if not isinstance(nodes, list):
        raise ValueError("Expected a list of elements")

    store = NodeStore(tenant_id)
    strict = strict_layout_specs(strict)

    with transactional("element save"):
        previous_sorts = {}
        saved = [_save_element(store, data, previous_sorts) for data in nodes]

        if saved:
            first = saved[0]
            update_element_sort(
                store,
                section_id=first.section_id,
                block_id=None if first.section_id else first.block_id,
                parent_id=first.parent_id,
                preferred=[e.id for e in saved],
                previous_sorts=previous_sorts,
            )
            if first.parent_id:
                assert_sibling_order(store.load_children(first.parent_id))
            else:
                assert_sibling_order(store.load_root_elements(
                    section_id=first.section_id,
                    block_id=first.block_id,
                ))

        reconciled = []
        for element in saved:
            if element.id in reconciled:
                continue
            if not is_layout(classify_element_type(element.element_type)):
                continue
            reconciled.append(element.id)

            # Re-read under a row lock so concurrent saves of the same layout serialize
            layout = store.load_element(element.id, for_update=True)
            result = reconcile_layout(store, layout, strict=strict)

            children = store.load_children(layout.id)
            if isinstance(classify_element_type(layout.element_type), Row):
                assert_row_converged(layout, children)
            else:
                assert_carousel_converged(layout, children)

            if result.writes:
                log_action(
                    tenant_id=tenant_id,
                    actor_id=actor_id,
                    action="element.reconcile",
                    entity_type="element",
                    entity_id=layout.id,
                    payload=result.as_dict(),
                )

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="element.save",
            entity_type="element",
            entity_id=saved[0].id if len(saved) == 1 else "*",
            payload={"ids": [e.id for e in saved], "reconciled": reconciled},
        )

    current_app.logger.debug(f"Saved {len(saved)} element(s), reconciled {len(reconciled)}")
    return saved


def _save_element(
    store: NodeStore,
    data: Dict[str, Any],
    previous_sorts: Dict[str, int],
) -> Element:
    if not isinstance(data, dict):
        raise ValueError("Each element must be an object")

    element_id = data.get("id")
    element = store.load_element(element_id) if element_id else Element()

    # Resolve target values first; nothing is assigned until every reference checks out
    values = {
        field: getattr(element, field)
        for field in ALLOWED_ELEMENT_FIELDS
    }
    for field in ALLOWED_ELEMENT_FIELDS:
        if field in data:
            values[field] = data[field]

    if not values["element_type"]:
        raise InvariantViolation("element_type is required")
    classify_element_type(values["element_type"])

    if values["parent_id"]:
        parent = store.load_element(values["parent_id"])
        if element_id:
            _assert_not_own_ancestor(store, element_id, parent)
        # Children always live with their parent's owner
        if "section_id" not in data and "block_id" not in data:
            values["section_id"] = parent.section_id
            values["block_id"] = parent.block_id
        elif parent.section_id != values["section_id"] or (
            not parent.section_id and parent.block_id != values["block_id"]
        ):
            raise InvariantViolation(
                f"Element parent {parent.id} belongs to a different owner."
            )

    if values["section_id"]:
        store.load_section(values["section_id"])
    if values["block_id"]:
        store.load_block(values["block_id"])

    if not values["section_id"] and not values["block_id"]:
        raise InvariantViolation("Element must belong to a section or a block.")

    values["sort"] = _parse_sort(values["sort"])
    if values["sort"] is None:
        values["sort"] = _next_sort(store, values)

    # A move within the same sibling group remembers where it came from
    if element_id and all(
        values[field] == getattr(element, field)
        for field in ("section_id", "block_id", "parent_id")
    ):
        previous_sorts[element.id] = element.sort

    for field, value in values.items():
        setattr(element, field, value)
    for key, column in PAYLOAD_FIELDS.items():
        if key in data:
            setattr(element, column, serialized_payload(data[key]))

    assert_element_owner(element)
    return store.save(element)


def _parse_sort(value: Any) -> Optional[int]:
    if value is None:
        return None
    sort = parse_int(value)
    if sort is None:
        raise ValueError(f"sort must be an integer, got {value!r}")
    return sort


def _next_sort(store: NodeStore, values: Dict[str, Any]) -> int:
    if values["parent_id"]:
        siblings = store.load_children(values["parent_id"])
    else:
        siblings = store.load_root_elements(
            section_id=values["section_id"],
            block_id=values["block_id"],
        )
    return max((s.sort or 0 for s in siblings), default=0) + 1


def _assert_not_own_ancestor(store: NodeStore, element_id: str, parent: Element) -> None:
    seen = set()
    current = parent
    while current is not None:
        if current.id == element_id:
            raise InvariantViolation(
                f"Element {element_id} cannot be moved beneath its own descendant."
            )
        if current.id in seen:
            raise InvariantViolation(f"Cycle detected above element {current.id}")
        seen.add(current.id)
        current = store.load_element(current.parent_id) if current.parent_id else None
