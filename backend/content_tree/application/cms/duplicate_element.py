from typing import Optional
from content_tree.tree.store import NodeStore
from content_tree.tree.assembler import TreeNode, get_child_elements
from content_tree.tree.cloner import duplicate_element as clone_element
from content_tree.tree.sequencer import update_element_sort
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional


def duplicate_element(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    element_id: str,
) -> TreeNode:
    """
    Copy an element and everything beneath it into the same parent, placed
    directly after the original.
    """
    store = NodeStore(tenant_id)

    with transactional("element duplicate"):
        element = store.load_element(element_id)
        if element.section_id:
            all_elements = store.load_elements_for_section(element.section_id)
        else:
            all_elements = store.load_elements_for_block(element.block_id)

        source = get_child_elements(element, all_elements)
        block_id = None if element.section_id else element.block_id

        clone = clone_element(
            store,
            source,
            section_id=element.section_id,
            block_id=block_id,
            parent_id=element.parent_id,
            sort=(element.sort or 0) + 1,
        )

        update_element_sort(
            store,
            section_id=element.section_id,
            block_id=block_id,
            parent_id=element.parent_id,
            preferred=(clone.id,),
        )

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="element.duplicate",
            entity_type="element",
            entity_id=clone.id,
            payload={"source_id": element.id},
        )

    return clone
