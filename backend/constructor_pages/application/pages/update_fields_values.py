from typing import Any, Dict
from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.page import Page
from constructor_pages.domain.exceptions import NotFoundError
from constructor_pages.store.values import (
    find_field,
    remove_page_values,
    reset_all_booleans,
    set_value,
)
from constructor_pages.utils.transaction import transactional


def _get_page(page_id) -> Page:
    page = db.session.get(Page, page_id)
    if not page:
        raise NotFoundError("Page not found")
    return page


def update_fields_values(
    *,
    page_id: str,
    data: Dict[str, Any],
    reset_booleans: bool = True,
) -> Dict[str, Any]:
    """
    Write a payload of field values keyed by code name.

    With ``reset_booleans`` every boolean field is cleared first, so a
    checkbox missing from a submitted form reads as unchecked. Keys that
    are not fields of the page's template are ignored. All values are
    written or none (TypeMismatchError rolls the whole payload back).
    """

    page = _get_page(page_id)
    written: Dict[str, Any] = {}

    with transactional():
        if reset_booleans:
            reset_all_booleans(page)

        for field in page.fields:
            if field.code_name in data:
                written[field.code_name] = set_value(page, field, data[field.code_name])

    current_app.logger.info(
        "Updated %d field value(s) on page %s", len(written), page.id
    )
    return written


def set_field_value(*, page_id: str, code_name: str, value: Any) -> Any:
    page = _get_page(page_id)

    field = find_field(page.template_id, code_name)
    if not field:
        raise NotFoundError(f"Page has no field '{code_name}'")

    with transactional():
        stored = set_value(page, field, value)

    return stored


def remove_fields_values(*, page_id: str) -> int:
    """Drop every value row of a page (they are re-created on demand by set_field_value)."""
    page = _get_page(page_id)

    with transactional():
        removed = remove_page_values([page.id])

    current_app.logger.info("Removed %d field value(s) from page %s", removed, page.id)
    return removed
