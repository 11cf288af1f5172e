from typing import Dict, List, Optional
from content_tree.tree.store import NodeStore
from content_tree.tree.sequencer import update_element_sort
from content_tree.domain.invariants.element import assert_sibling_order
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional


def delete_element(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    element_id: str,
) -> Dict[str, List[str]]:
    """
    Hard-delete an element and its descendants (leaf-first), then close the
    gap it left in its sibling group.
    """
    store = NodeStore(tenant_id)

    with transactional("element delete"):
        element = store.load_element(element_id)
        section_id = element.section_id
        block_id = None if section_id else element.block_id
        parent_id = element.parent_id

        deleted = store.delete_element_tree(element)

        update_element_sort(
            store,
            section_id=section_id,
            block_id=block_id,
            parent_id=parent_id,
        )
        if parent_id:
            assert_sibling_order(store.load_children(parent_id))

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="element.delete",
            entity_type="element",
            entity_id=element_id,
            payload={"deleted": deleted},
        )

    return {"deleted": deleted}
