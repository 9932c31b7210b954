from .exceptions import InvariantViolation

def assert_nested_set(pages):
    """
    Checks global nested set consistency for ``pages`` (all pages, any order):
    bounds form a gapless 1..2N sequence and every node sits strictly inside
    its parent with depth = parent depth + 1.
    """
    by_id = {page.id: page for page in pages}

    bounds = sorted([p.lft for p in pages] + [p.rgt for p in pages])
    if bounds != list(range(1, 2 * len(pages) + 1)):
        raise InvariantViolation(f"Nested set bounds are not contiguous: {bounds}")

    for page in pages:
        if page.lft >= page.rgt:
            raise InvariantViolation(f"Page {page.id} has lft >= rgt")

        if page.parent_id is None:
            if page.depth != 0:
                raise InvariantViolation(f"Root page {page.id} has depth {page.depth}")
            continue

        parent = by_id.get(page.parent_id)
        if parent is None:
            raise InvariantViolation(f"Page {page.id} has an unknown parent")
        if not (parent.lft < page.lft and page.rgt < parent.rgt):
            raise InvariantViolation(f"Page {page.id} lies outside its parent's bounds")
        if page.depth != parent.depth + 1:
            raise InvariantViolation(f"Page {page.id} has depth {page.depth}, expected {parent.depth + 1}")
