# constructor_pages/utils/nested_set.py
"""
Nested set maintenance for the page tree.

Bounds are global: every root and its subtree occupy a contiguous
[lft, rgt] range, and siblings are ordered by lft. Inserts and deletes
shift bounds with bulk UPDATEs; moves renumber the whole arena.
"""
from collections import defaultdict

from sqlalchemy import func

from constructor_pages.extensions import db
from constructor_pages.domain.exceptions import ValidationError
from constructor_pages.models.page import Page


def append_child(page, parent=None):
    """
    Reserves bounds for a new ``page`` as the last child of ``parent``
    (or as the last root). Must run before ``page`` joins the session.
    """
    if parent is None:
        last_rgt = db.session.query(func.max(Page.rgt)).scalar() or 0
        page.parent_id = None
        page.lft = last_rgt + 1
        page.rgt = last_rgt + 2
        page.depth = 0
        return

    edge = parent.rgt

    Page.query.filter(Page.rgt >= edge).update(
        {Page.rgt: Page.rgt + 2}, synchronize_session="evaluate"
    )
    Page.query.filter(Page.lft > edge).update(
        {Page.lft: Page.lft + 2}, synchronize_session="evaluate"
    )

    page.parent_id = parent.id
    page.lft = edge
    page.rgt = edge + 1
    page.depth = parent.depth + 1


def close_gap(lft, rgt):
    """Shifts every bound right of a removed [lft, rgt] range back to the left."""
    width = rgt - lft + 1

    Page.query.filter(Page.lft > rgt).update(
        {Page.lft: Page.lft - width}, synchronize_session="evaluate"
    )
    Page.query.filter(Page.rgt > rgt).update(
        {Page.rgt: Page.rgt - width}, synchronize_session="evaluate"
    )


def move_to(page, parent=None):
    """Re-parents ``page`` (with its subtree) as the last child of ``parent``."""
    if parent is not None and page.lft <= parent.lft and parent.rgt <= page.rgt:
        raise ValidationError("A page cannot be moved under itself or one of its descendants")

    page.parent_id = parent.id if parent is not None else None
    rebuild(last=page)


def rebuild(last=None):
    """
    Renumbers lft/rgt/depth for every page from parent_id links.

    Sibling order follows the current lft order; ``last`` (if given) is
    placed after its new siblings.
    """
    pages = Page.query.order_by(Page.lft.asc()).all()

    children = defaultdict(list)
    for page in pages:
        children[page.parent_id].append(page)

    if last is not None:
        siblings = children[last.parent_id]
        siblings.remove(last)
        siblings.append(last)

    counter = 0
    # (page, depth, entered); a page is pushed again to close its rgt
    stack = [(root, 0, False) for root in reversed(children[None])]

    while stack:
        node, depth, entered = stack.pop()
        counter += 1
        if entered:
            node.rgt = counter
            continue

        node.lft = counter
        node.depth = depth
        stack.append((node, depth, True))
        for child in reversed(children[node.id]):
            stack.append((child, depth + 1, False))

    db.session.flush()
