from constructor_pages.extensions import db
from .base import BaseModel


class Page(BaseModel):
    __tablename__ = "pages"

    name = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(255), nullable=False, default="")
    keywords = db.Column(db.Text, nullable=False, default="")
    description = db.Column(db.Text, nullable=False, default="")

    url = db.Column(db.String(255), nullable=False, default="")  # local slug
    full_url = db.Column(db.String(2048), nullable=False, default="/", index=True)
    auto_url = db.Column(db.Boolean, nullable=False, default=True)
    link = db.Column(db.String(2048), nullable=False, default="")

    active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    in_menu = db.Column(db.Boolean, nullable=False, default=True)
    in_map = db.Column(db.Boolean, nullable=False, default=True)
    in_nav = db.Column(db.Boolean, nullable=False, default=True)

    template_id = db.Column(db.String(36), db.ForeignKey("templates.id"), nullable=False, index=True)
    parent_id = db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=True, index=True)

    # Nested set bounds
    lft = db.Column(db.Integer, nullable=False, index=True)
    rgt = db.Column(db.Integer, nullable=False, index=True)
    depth = db.Column(db.Integer, nullable=False, default=0)

    template = db.relationship("Template", back_populates="pages")

    __table_args__ = (
        db.CheckConstraint("lft < rgt", name="ck_page_bounds"),
    )

    # -------------------------------------------------
    # Tree
    # -------------------------------------------------
    @property
    def parent(self):
        return db.session.get(Page, self.parent_id) if self.parent_id else None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @property
    def is_leaf(self) -> bool:
        return self.rgt - self.lft == 1

    def ancestors(self):
        from constructor_pages.utils.page_query import PageQuery
        return PageQuery().enclosing(self).all()

    def self_and_ancestors(self):
        return self.ancestors() + [self]

    def descendants(self):
        from constructor_pages.utils.page_query import PageQuery
        return PageQuery().within(self).all()

    def self_and_descendants(self):
        return [self] + self.descendants()

    def children(self):
        from constructor_pages.utils.page_query import PageQuery
        return PageQuery().children_of(self).all()

    # -------------------------------------------------
    # Fields
    # -------------------------------------------------
    @property
    def fields(self):
        return self.template.fields

    def field(self, code_name):
        """Value of the field ``code_name``, or None if the template has no such field."""
        from constructor_pages.store.values import get_field_value
        return get_field_value(self, code_name)

    get_field_value = field

    def lookup(self, name):
        from constructor_pages.domain.lookup import dynamic_lookup
        return dynamic_lookup(self, name)

    @property
    def redirect(self) -> bool:
        return bool(self.link) and self.link != self.url

    def __repr__(self):
        return f"<Page {self.full_url!r} [{self.lft}, {self.rgt}]>"
