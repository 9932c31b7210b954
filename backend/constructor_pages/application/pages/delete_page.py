from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.page import Page
from constructor_pages.domain.exceptions import NotFoundError
from constructor_pages.store.values import remove_page_values
from constructor_pages.utils.nested_set import close_gap
from constructor_pages.utils.page_query import PageQuery
from constructor_pages.utils.transaction import transactional


def delete_page(*, page_id: str) -> int:
    """
    Hard-delete a page and all its descendants.

    Notes:
    - Value rows → Pages (bottom-up)
    - The nested set gap left by the subtree is closed
    Returns the number of pages deleted.
    """

    page = db.session.get(Page, page_id)
    if not page:
        raise NotFoundError("Page not found")

    lft, rgt = page.lft, page.rgt

    with transactional():
        subtree = [page] + PageQuery().within(page).all()
        page_ids = [p.id for p in subtree]

        # Delete value rows first
        remove_page_values(page_ids)

        # Delete the whole subtree in one statement
        Page.query.filter(Page.id.in_(page_ids)).delete(synchronize_session="fetch")

        close_gap(lft, rgt)

    current_app.logger.info("Deleted page %s and %d descendant(s)", page_id, len(page_ids) - 1)
    return len(page_ids)
