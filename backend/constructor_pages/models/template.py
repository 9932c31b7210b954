from constructor_pages.extensions import db
from .base import BaseModel


class Template(BaseModel):
    __tablename__ = "templates"

    name = db.Column(db.String(255), nullable=False)
    code_name = db.Column(db.String(255), unique=True, nullable=False, index=True)

    # Ordered field list ("acts as list" on position)
    fields = db.relationship(
        "Field",
        back_populates="template",
        order_by="Field.position",
        cascade="all, delete-orphan"
    )

    pages = db.relationship(
        "Page",
        back_populates="template",
        order_by="Page.lft"
    )

    def field(self, code_name):
        for field in self.fields:
            if field.code_name == code_name:
                return field
        return None
