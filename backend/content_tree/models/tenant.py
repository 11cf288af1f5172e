from content_tree.extensions import db
from .base import BaseModel

class Tenant(BaseModel):
    __tablename__ = "tenants"

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), unique=True, nullable=False, index=True)
    is_active = db.Column(db.Boolean, default=True)

    # Feature toggles
    enable_cms = db.Column(db.Boolean, default=True)

    # JSON field for future toggles (flexible)
    features = db.Column(db.JSON, default=dict)

    def has_feature(self, feature_name: str) -> bool:
        """
        Check if a feature is enabled for this tenant.
        """
        # Check JSON overrides first
        overrides = self.features or {}
        if overrides.get(feature_name) is not None:
            return overrides.get(feature_name)

        # Fallback to attribute toggles
        attr_name = f"enable_{feature_name}"
        return getattr(self, attr_name, False)
