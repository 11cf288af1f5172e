"""
Node Store: tenant-scoped persistence for pages, blocks, sections and elements.

Every read is filtered by the tenant the store was opened for. Writes go
through the shared SQLAlchemy session and are flushed immediately so that
new rows have ids before anything references them. Committing is the
caller's job (see ``utils.transaction.transactional``).
"""
from typing import Iterable, Optional
from sqlalchemy import select
from content_tree.extensions import db
from content_tree.models.page import Page
from content_tree.models.block import Block
from content_tree.models.section import Section
from content_tree.models.element import Element
from content_tree.domain.invariants.exceptions import NodeNotFound


class NodeStore:
    def __init__(self, tenant_id: str):
        if not tenant_id:
            raise ValueError("tenant_id is required")
        self.tenant_id = tenant_id

    # ------------------------
    # Single-row loads
    # ------------------------
    def _load(self, model, entity_type: str, entity_id, for_update: bool = False):
        if not entity_id:
            raise NodeNotFound(entity_type, entity_id)

        stmt = select(model).where(model.id == entity_id, model.tenant_id == self.tenant_id)
        if for_update:
            stmt = stmt.with_for_update()

        row = db.session.execute(stmt).scalar_one_or_none()
        if row is None:
            raise NodeNotFound(entity_type, entity_id)
        return row

    def load_page(self, page_id) -> Page:
        return self._load(Page, "page", page_id)

    def load_block(self, block_id) -> Block:
        return self._load(Block, "block", block_id)

    def load_section(self, section_id, for_update: bool = False) -> Section:
        return self._load(Section, "section", section_id, for_update=for_update)

    def load_element(self, element_id, for_update: bool = False) -> Element:
        return self._load(Element, "element", element_id, for_update=for_update)

    # ------------------------
    # Element lists (always in sort order)
    # ------------------------
    def _elements(self, *criteria) -> list[Element]:
        return (
            Element.query
            .filter(Element.tenant_id == self.tenant_id, *criteria)
            .order_by(Element.sort.asc(), Element.created_at.asc(), Element.id.asc())
            .all()
        )

    def load_children(self, parent_id) -> list[Element]:
        return self._elements(Element.parent_id == parent_id)

    def load_elements_for_section(self, section_id) -> list[Element]:
        return self._elements(Element.section_id == section_id)

    def load_elements_for_sections(self, section_ids: Iterable[str]) -> list[Element]:
        section_ids = list(section_ids)
        if not section_ids:
            return []
        return self._elements(Element.section_id.in_(section_ids))

    def load_elements_for_block(self, block_id) -> list[Element]:
        """Elements attached straight to a block, without a section."""
        return self._elements(Element.block_id == block_id, Element.section_id.is_(None))

    def load_root_elements(self, *, section_id=None, block_id=None) -> list[Element]:
        if section_id:
            return self._elements(Element.section_id == section_id, Element.parent_id.is_(None))
        if block_id:
            return self._elements(
                Element.block_id == block_id,
                Element.section_id.is_(None),
                Element.parent_id.is_(None),
            )
        raise ValueError("section_id or block_id is required")

    # ------------------------
    # Section / block lists
    # ------------------------
    def _sections(self, *criteria) -> list[Section]:
        return (
            Section.query
            .filter(Section.tenant_id == self.tenant_id, *criteria)
            .order_by(Section.sort.asc(), Section.created_at.asc(), Section.id.asc())
            .all()
        )

    def load_sections_for_page(self, page_id) -> list[Section]:
        return self._sections(Section.page_id == page_id)

    def load_sections_for_zone(self, page_id, zone: Optional[str]) -> list[Section]:
        zone_filter = Section.zone.is_(None) if zone is None else Section.zone == zone
        return self._sections(Section.page_id == page_id, zone_filter)

    def load_sections_for_block(self, block_id) -> list[Section]:
        return self._sections(Section.block_id == block_id)

    def load_blocks_by_type(self, block_type: str) -> list[Block]:
        return (
            Block.query
            .filter_by(tenant_id=self.tenant_id, block_type=block_type)
            .order_by(Block.name.asc())
            .all()
        )

    # ------------------------
    # Writes
    # ------------------------
    def save(self, row):
        row.tenant_id = self.tenant_id
        db.session.add(row)
        db.session.flush()  # ensures row.id is available
        return row

    def delete(self, row) -> None:
        db.session.delete(row)
        db.session.flush()

    def delete_element_tree(self, element: Element) -> list[str]:
        """
        Delete an element and everything beneath it, leaf-first.

        Returns the deleted ids in deletion order.
        """
        pending = [element]
        collected: list[Element] = []
        seen = set()
        while pending:
            current = pending.pop(0)
            if current.id in seen:
                continue
            seen.add(current.id)
            collected.append(current)
            pending.extend(self.load_children(current.id))

        deleted = []
        for row in reversed(collected):
            deleted.append(row.id)
            db.session.delete(row)
            db.session.flush()
        return deleted

    def delete_section_tree(self, section: Section) -> list[str]:
        """Delete every element of a section leaf-first, then the section itself."""
        deleted = []
        remaining = self.load_elements_for_section(section.id)
        while remaining:
            parent_ids = {e.parent_id for e in remaining}
            leaves = [e for e in remaining if e.id not in parent_ids] or remaining
            for leaf in leaves:
                deleted.append(leaf.id)
                db.session.delete(leaf)
            db.session.flush()
            leaf_ids = {leaf.id for leaf in leaves}
            remaining = [e for e in remaining if e.id not in leaf_ids]

        deleted.append(section.id)
        self.delete(section)
        return deleted
