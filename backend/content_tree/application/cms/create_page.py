from typing import Any, Dict, Optional
from content_tree.models.page import Page
from content_tree.utils.audit import log_action
from content_tree.utils.transaction import transactional
from content_tree.tree.store import NodeStore


def create_page(
    *,
    tenant_id: str,
    actor_id: Optional[str],
    data: Dict[str, Any],
) -> Page:
    """
    Create a page that sections can be attached to.

    Edge cases handled:
    - Missing title
    - Duplicate url per tenant
    """
    title: str | None = data.get("title")
    url: str | None = data.get("url")

    if not title:
        raise ValueError("Title is required")

    if url and Page.query.filter_by(tenant_id=tenant_id, url=url).first():
        raise ValueError("A page with this url already exists")

    page = Page()
    page.title = title
    page.url = url
    page.layout = data.get("layout")

    with transactional("page create"):
        NodeStore(tenant_id).save(page)

        log_action(
            tenant_id=tenant_id,
            actor_id=actor_id,
            action="page.create",
            entity_type="page",
            entity_id=page.id,
            payload={"title": page.title, "url": page.url},
        )

    return page
