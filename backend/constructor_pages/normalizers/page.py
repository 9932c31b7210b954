from datetime import date
from constructor_pages.store.values import get_value


def _serialize(value):
    if isinstance(value, date):
        return value.isoformat()
    return value


def normalize_page(page, admin=False):
    """
    Page attributes merged with its field values (by code name) in
    template field order. Page attributes win on a name collision.
    """
    data = {
        "id": page.id,
        "name": page.name,
        "title": page.title,
        "keywords": page.keywords,
        "description": page.description,
        "url": page.url,
        "full_url": page.full_url,
        "link": page.link,
        "redirect": page.redirect,
        "template": page.template.code_name,
    }

    if admin:
        data.update({
            "parent_id": page.parent_id,
            "active": page.active,
            "auto_url": page.auto_url,
            "in_menu": page.in_menu,
            "in_map": page.in_map,
            "in_nav": page.in_nav,
            "depth": page.depth,
        })

    for field in page.fields:
        data.setdefault(field.code_name, _serialize(get_value(page, field)))

    return data
