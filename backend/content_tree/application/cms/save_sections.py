from typing import Any, Dict, List, Optional
from content_tree.models.section import Section
from content_tree.domain.answers import parse_int
from content_tree.domain.invariants.section import assert_section_owner, assert_section_order
from content_tree.tree.store import NodeStore
from content_tree.tree.sequencer import update_section_sort
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional
from ._common import serialized_payload


ALLOWED_SECTION_FIELDS = {
    "page_id",
    "block_id",
    "zone",
    "sort",
    "background",
    "text_color",
    "heading_color",
    "link_color",
    "target_block_id",
}

PAYLOAD_FIELDS = {
    "answers": "answers_json",
    "styles": "styles_json",
    "animations": "animations_json",
}


def save_sections(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    sections: List[Dict[str, Any]],
) -> List[Section]:
    """
    Create or update a batch of sections, then renumber the first section's
    zone (or block) so its sort values stay dense.
    """
    if not isinstance(sections, list):
        raise ValueError("Expected a list of sections")

    store = NodeStore(tenant_id)

    with transactional("section save"):
        previous_sorts = {}
        saved = [_save_section(store, data, previous_sorts) for data in sections]

        if saved:
            first = saved[0]
            update_section_sort(
                store,
                page_id=first.page_id,
                zone=first.zone,
                block_id=first.block_id,
                preferred=[s.id for s in saved],
                previous_sorts=previous_sorts,
            )
            if first.block_id:
                assert_section_order(store.load_sections_for_block(first.block_id))
            else:
                assert_section_order(store.load_sections_for_zone(first.page_id, first.zone))

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="section.save",
            entity_type="section",
            entity_id=saved[0].id if len(saved) == 1 else "*",
            payload={"ids": [s.id for s in saved]},
        )

    return saved


def _save_section(
    store: NodeStore,
    data: Dict[str, Any],
    previous_sorts: Dict[str, int],
) -> Section:
    if not isinstance(data, dict):
        raise ValueError("Each section must be an object")

    section_id = data.get("id")
    section = store.load_section(section_id) if section_id else Section()

    values = {field: getattr(section, field) for field in ALLOWED_SECTION_FIELDS}
    for field in ALLOWED_SECTION_FIELDS:
        if field in data:
            values[field] = data[field]

    if values["page_id"]:
        store.load_page(values["page_id"])
    if values["block_id"]:
        store.load_block(values["block_id"])

    if values["sort"] is not None:
        sort = parse_int(values["sort"])
        if sort is None:
            raise ValueError(f"sort must be an integer, got {values['sort']!r}")
        values["sort"] = sort

    if values["sort"] is None:
        if values["block_id"]:
            siblings = store.load_sections_for_block(values["block_id"])
        elif values["page_id"]:
            siblings = store.load_sections_for_zone(values["page_id"], values["zone"])
        else:
            siblings = []
        values["sort"] = max((s.sort or 0 for s in siblings), default=0) + 1

    if section_id and all(
        values[field] == getattr(section, field)
        for field in ("page_id", "block_id", "zone")
    ):
        previous_sorts[section.id] = section.sort

    for field, value in values.items():
        setattr(section, field, value)
    for key, column in PAYLOAD_FIELDS.items():
        if key in data:
            setattr(section, column, serialized_payload(data[key]))

    assert_section_owner(section)
    return store.save(section)
