from typing import Any, Dict
from flask import current_app
from sqlalchemy import select
from constructor_pages.extensions import db
from constructor_pages.models.page import Page
from constructor_pages.models.template import Template
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.domain.invariants.tree import assert_nested_set
from constructor_pages.store.values import create_page_values, remove_page_values
from constructor_pages.utils.nested_set import move_to
from constructor_pages.utils.slug import friendly_url, full_url_for, refresh_descendant_urls
from constructor_pages.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = {
    "name", "title", "keywords", "description", "url", "active", "auto_url",
    "link", "in_menu", "in_map", "in_nav", "template_id", "parent_id",
}


def update_page(*, page_id: str, data: Dict[str, Any]) -> Page:
    """
    Update a page.

    Design rules:
    - Only whitelisted fields are mutable
    - slug and full_url are always re-derived
    - a changed full_url is propagated to every descendant
    - a parent change moves the whole subtree; a template change swaps
      the page's value rows
    """

    if not ALLOWED_UPDATE_FIELDS & data.keys():
        raise ValidationError("No valid fields provided for update")

    # Fetch page with row-level lock
    page = (
        db.session.execute(
            select(Page).where(Page.id == page_id).with_for_update()
        )
        .scalar_one_or_none()
    )

    if not page:
        raise NotFoundError("Page not found")

    with transactional():
        changed_fields: list[str] = []
        previous_full_url = page.full_url

        for field in ALLOWED_UPDATE_FIELDS - {"template_id", "parent_id"}:
            if field in data and getattr(page, field) != data[field]:
                setattr(page, field, data[field])
                changed_fields.append(field)

        if not (page.name or "").strip():
            raise ValidationError("Page name is required")

        if "template_id" in data and data["template_id"] != page.template_id:
            template = db.session.get(Template, data["template_id"])
            if not template:
                raise NotFoundError("Template not found")

            remove_page_values([page.id])
            page.template_id = template.id
            db.session.flush()
            db.session.refresh(page)
            create_page_values(page)
            changed_fields.append("template_id")

        if "parent_id" in data and data["parent_id"] != page.parent_id:
            parent = None
            if data["parent_id"]:
                parent = db.session.get(Page, data["parent_id"])
                if not parent:
                    raise NotFoundError("Parent page not found")

            move_to(page, parent)
            assert_nested_set(Page.query.all())
            changed_fields.append("parent_id")

        page.url = friendly_url(page.name, page.url, page.auto_url)
        page.full_url = full_url_for(page)

        descendants_updated = 0
        if page.full_url != previous_full_url:
            descendants_updated = refresh_descendant_urls(page)

    current_app.logger.info(
        "Updated page %s (%s); %d descendant url(s) refreshed",
        page.id, ", ".join(sorted(changed_fields)) or "no changes", descendants_updated,
    )
    return page
