from typing import Optional
from constructor_pages.models.page import Page
from constructor_pages.utils.page_query import PageQuery


def resolve_by_path(path: Optional[str]) -> Optional[Page]:
    """
    Page whose full_url equals ``path``.

    An empty path or "/" gives the first page in tree order.
    """
    if not path or path.strip("/") == "":
        return PageQuery().first()

    full_url = "/" + path.strip("/")
    return Page.query.filter_by(full_url=full_url).first()


def ancestors_of(page: Page):
    return PageQuery().enclosing(page).all()


def descendants_of(page: Page):
    return PageQuery().within(page).all()
