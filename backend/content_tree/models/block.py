from content_tree.extensions import db
from .base import BaseModel
from .tenant_mixin import TenantMixin

# Blocks of this type own their elements directly, without a section layer
ELEMENT_BLOCK = "elementBlock"
SECTION_BLOCK = "sectionBlock"

class Block(BaseModel, TenantMixin):
    __tablename__ = "blocks"

    block_type = db.Column(db.String(50), nullable=False, default=SECTION_BLOCK, index=True)
    name = db.Column(db.String(255), nullable=False)

    @property
    def is_element_block(self) -> bool:
        return self.block_type == ELEMENT_BLOCK
