from content_tree.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Element(BaseModel, TenantMixin):
    __tablename__ = "elements"

    section_id = db.Column(db.String(36), db.ForeignKey("sections.id"), nullable=True, index=True)
    block_id = db.Column(db.String(36), db.ForeignKey("blocks.id"), nullable=True, index=True)
    parent_id = db.Column(db.String(36), db.ForeignKey("elements.id"), nullable=True, index=True)

    element_type = db.Column(db.String(50), nullable=False)  # row, column, carousel, text, image, ...
    sort = db.Column(db.Integer, nullable=False, default=1)

    answers_json = db.Column(db.Text, nullable=True)
    styles_json = db.Column(db.Text, nullable=True)
    animations_json = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.Index("idx_element_section_parent_sort", "section_id", "parent_id", "sort"),
        db.Index("idx_element_block_parent_sort", "block_id", "parent_id", "sort"),
    )

    COPY_FIELDS = (
        "element_type",
        "sort",
        "answers_json",
        "styles_json",
        "animations_json",
    )
