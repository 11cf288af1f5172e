from typing import Optional
from content_tree.tree.store import NodeStore
from content_tree.tree.assembler import TreeNode, build_tree, flatten
from content_tree.domain.invariants.section import assert_section_elements
from content_tree.tree.cloner import duplicate_section as clone_section
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional


def duplicate_section(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    section_id: str,
) -> TreeNode:
    """Copy a section with all of its elements to the end of its zone."""
    store = NodeStore(tenant_id)

    with transactional("section duplicate"):
        section = store.load_section(section_id)
        source = build_tree([section], store.load_elements_for_section(section.id))[0]

        clone = clone_section(store, source)
        assert_section_elements(clone.node, flatten(clone.children))

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="section.duplicate",
            entity_type="section",
            entity_id=clone.id,
            payload={"source_id": section.id},
        )

    return clone
