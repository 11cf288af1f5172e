from typing import Any, Dict, Optional
from content_tree.models.block import Block, SECTION_BLOCK
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional
from content_tree.tree.store import NodeStore


def create_block(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> Block:
    name: str | None = data.get("name")
    if not name:
        raise ValueError("Block name is required")

    block = Block()
    block.name = name
    block.block_type = data.get("block_type") or SECTION_BLOCK

    with transactional("block create"):
        NodeStore(tenant_id).save(block)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="block.create",
            entity_type="block",
            entity_id=block.id,
            payload={"name": block.name, "block_type": block.block_type},
        )

    return block
