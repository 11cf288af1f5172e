from content_tree.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Section(BaseModel, TenantMixin):
    __tablename__ = "sections"

    # Owned by exactly one of page_id / block_id
    page_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True, index=True)
    block_id = db.Column(db.String(36), db.ForeignKey("blocks.id"), nullable=True, index=True)
    zone = db.Column(db.String(50), nullable=True)  # header, main, footer
    sort = db.Column(db.Integer, nullable=False, default=1)

    background = db.Column(db.String(255), nullable=True)
    text_color = db.Column(db.String(50), nullable=True)
    heading_color = db.Column(db.String(50), nullable=True)
    link_color = db.Column(db.String(50), nullable=True)
    target_block_id = db.Column(db.String(36), nullable=True)

    # Opaque serialized payloads
    answers_json = db.Column(db.Text, nullable=True)
    styles_json = db.Column(db.Text, nullable=True)
    animations_json = db.Column(db.Text, nullable=True)

    __table_args__ = (
        db.Index("idx_section_page_zone_sort", "page_id", "zone", "sort"),
        db.Index("idx_section_block_sort", "block_id", "sort"),
    )

    # Scalar columns carried over when a section is cloned
    COPY_FIELDS = (
        "zone",
        "background",
        "text_color",
        "heading_color",
        "link_color",
        "target_block_id",
        "answers_json",
        "styles_json",
        "animations_json",
    )