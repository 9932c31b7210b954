from typing import Any, Dict
from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.page import Page
from constructor_pages.models.template import Template
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.application.templates.registry import first_template
from constructor_pages.store.values import create_page_values
from constructor_pages.utils.nested_set import append_child
from constructor_pages.utils.slug import friendly_url, full_url_for
from constructor_pages.utils.transaction import transactional


PAGE_ATTRIBUTES = (
    "name", "title", "keywords", "description", "url", "active",
    "auto_url", "link", "in_menu", "in_map", "in_nav",
)


def resolve_template(template_id) -> Template:
    """The requested template, or the first one when none is requested."""
    if template_id:
        template = db.session.get(Template, template_id)
        if not template:
            raise NotFoundError("Template not found")
        return template

    template = first_template()
    if template is None:
        raise ValidationError("No template available")
    return template


def create_page(*, data: Dict[str, Any]) -> Page:
    """
    Create a page as the last child of ``data["parent_id"]`` (or a new root).

    Steps, in one transaction:
    - template assignment (falls back to the first template)
    - slug and full_url derivation
    - nested set insertion
    - one defaulted value row per field of the template
    """

    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Page name is required")

    template = resolve_template(data.get("template_id"))

    parent = None
    if data.get("parent_id"):
        parent = db.session.get(Page, data["parent_id"])
        if not parent:
            raise NotFoundError("Parent page not found")

    page = Page()
    for attribute in PAGE_ATTRIBUTES:
        if data.get(attribute) is not None:
            setattr(page, attribute, data[attribute])
    page.name = name
    page.template_id = template.id

    auto_url = page.auto_url if page.auto_url is not None else True
    page.url = friendly_url(name, page.url or "", auto_url)

    with transactional():
        append_child(page, parent)
        page.full_url = full_url_for(page)

        db.session.add(page)
        db.session.flush()  # ensures page.id is available

        create_page_values(page)

    current_app.logger.info("Created page %s at %s", page.id, page.full_url)
    return page
