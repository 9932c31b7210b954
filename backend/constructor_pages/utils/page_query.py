# constructor_pages/utils/page_query.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Optional, Tuple

from constructor_pages.models.page import Page

NAVIGATION_FLAGS = {"in_menu", "in_map", "in_nav"}


@dataclass(frozen=True)
class PageQuery:
    """
    Immutable filter over the page tree.

    Every builder method returns a new PageQuery, so a query value can be
    shared and extended freely. Results are always in tree (pre-) order.
    """

    criteria: Tuple[Any, ...] = ()

    def _where(self, *clauses) -> PageQuery:
        return replace(self, criteria=self.criteria + clauses)

    def within(self, page: Page) -> PageQuery:
        """Strict descendants of ``page``."""
        return self._where(Page.lft > page.lft, Page.rgt < page.rgt)

    def enclosing(self, page: Page) -> PageQuery:
        """Strict ancestors of ``page``."""
        return self._where(Page.lft < page.lft, Page.rgt > page.rgt)

    def children_of(self, page: Optional[Page]) -> PageQuery:
        parent_id = page.id if page is not None else None
        return self._where(Page.parent_id == parent_id if parent_id else Page.parent_id.is_(None))

    def with_template(self, template) -> PageQuery:
        template_id = getattr(template, "id", template)
        return self._where(Page.template_id == template_id)

    def active_only(self) -> PageQuery:
        return self._where(Page.active.is_(True))

    def flagged(self, flag: str) -> PageQuery:
        if flag not in NAVIGATION_FLAGS:
            raise ValueError(f"Unknown navigation flag: {flag}")
        return self._where(getattr(Page, flag).is_(True))

    # -------------------------------
    # Execution
    # -------------------------------
    def build(self):
        return Page.query.filter(*self.criteria).order_by(Page.lft.asc())

    def all(self) -> List[Page]:
        return self.build().all()

    def first(self) -> Optional[Page]:
        return self.build().first()

    def last(self) -> Optional[Page]:
        return Page.query.filter(*self.criteria).order_by(Page.lft.desc()).first()

    def count(self) -> int:
        return self.build().count()
