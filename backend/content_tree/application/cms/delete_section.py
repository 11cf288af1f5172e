from typing import Dict, List, Optional
from content_tree.tree.store import NodeStore
from content_tree.tree.sequencer import update_section_sort
from content_tree.domain.invariants.section import assert_section_order
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional


def delete_section(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    section_id: str,
) -> Dict[str, List[str]]:
    """
    Hard-delete a section with its whole element tree.

    Elements go first, deepest rows before their parents, then the section;
    the remaining sections of the zone (or block) are renumbered.
    """
    store = NodeStore(tenant_id)

    with transactional("section delete"):
        section = store.load_section(section_id)
        page_id, zone, block_id = section.page_id, section.zone, section.block_id

        deleted = store.delete_section_tree(section)

        update_section_sort(store, page_id=page_id, zone=zone, block_id=block_id)
        if block_id:
            assert_section_order(store.load_sections_for_block(block_id))
        else:
            assert_section_order(store.load_sections_for_zone(page_id, zone))

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="section.delete",
            entity_type="section",
            entity_id=section_id,
            payload={"page_id": page_id, "block_id": block_id, "deleted": len(deleted)},
        )

    return {"deleted": deleted}
