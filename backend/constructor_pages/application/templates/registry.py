from typing import Optional
from constructor_pages.models.template import Template


def find_template(code_name: str) -> Optional[Template]:
    return Template.query.filter_by(code_name=code_name).first()


def first_template() -> Optional[Template]:
    return Template.query.order_by(Template.created_at.asc(), Template.id.asc()).first()


def template_count() -> int:
    return Template.query.count()
