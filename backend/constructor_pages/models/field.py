from constructor_pages.extensions import db
from .base import BaseModel
from .types import FieldType, TYPE_MODELS


class Field(BaseModel):
    __tablename__ = "fields"

    template_id = db.Column(db.String(36), db.ForeignKey("templates.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    code_name = db.Column(db.String(255), nullable=False)
    type_value = db.Column(db.String(20), nullable=False)  # see FieldType
    position = db.Column(db.Integer, nullable=False, default=1)

    template = db.relationship("Template", back_populates="fields")

    __table_args__ = (
        db.UniqueConstraint("template_id", "code_name", name="uq_field_code_name_per_template"),
        db.Index("idx_field_template_position", "template_id", "position"),
    )

    @property
    def type(self) -> FieldType:
        return FieldType(self.type_value)

    @property
    def type_model(self):
        """Value-store model backing this field."""
        return TYPE_MODELS[self.type]
