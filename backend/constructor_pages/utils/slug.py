from slugify import slugify


def friendly_url(name, url="", auto_url=True):
    """
    Derives a page slug: transliterated, lowercased, hyphen separated.

    An explicitly authored ``url`` is kept (normalized) unless ``auto_url``
    is set or it is empty, in which case the slug comes from ``name``.
    """
    source = name if (auto_url or not url) else url
    return slugify(source or "")


def join_url(slugs):
    return "/" + "/".join(slugs)


def url_path(page):
    """Root-to-page list of slugs."""
    parent = page.parent
    ancestors = parent.self_and_ancestors() if parent is not None else []
    return [p.url for p in ancestors] + [page.url]


def full_url_for(page):
    return join_url(url_path(page))


def refresh_descendant_urls(page):
    """Recomputes full_url for every descendant of ``page`` (pre-order)."""
    paths = {page.id: url_path(page)}
    updated = 0

    for descendant in page.descendants():
        path = paths[descendant.parent_id] + [descendant.url]
        paths[descendant.id] = path

        full_url = join_url(path)
        if descendant.full_url != full_url:
            descendant.full_url = full_url
            updated += 1

    return updated
