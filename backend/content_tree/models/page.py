from content_tree.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

class Page(BaseModel, TenantMixin):
    __tablename__ = 'pages'

    url = db.Column(db.String(255), nullable=True, index=True)
    title = db.Column(db.String(200), nullable=False)
    layout = db.Column(db.String(100), nullable=True)  # layout name, e.g. headerFooter

    __table_args__ = (
        db.Index("idx_page_tenant_url", "tenant_id", "url"),
    )
