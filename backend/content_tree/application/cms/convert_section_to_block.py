from typing import Optional
from content_tree.tree.store import NodeStore
from content_tree.tree.assembler import TreeNode, build_tree
from content_tree.tree.cloner import convert_to_block
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional


def convert_section_to_block(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    section_id: str,
    target_block_id: Optional[str] = None,
    name: Optional[str] = None,
) -> TreeNode:
    """
    Promote a section's content to a reusable block.

    The elements are copied, not moved: the section stays on its page and
    remains editable.
    """
    store = NodeStore(tenant_id)

    with transactional("section convert"):
        section = store.load_section(section_id)
        source = build_tree([section], store.load_elements_for_section(section.id))[0]

        result = convert_to_block(store, source, target_block_id, name=name)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="section.convert_to_block",
            entity_type="block",
            entity_id=result.id,
            payload={"source_id": section.id, "created": not target_block_id},
        )

    return result
