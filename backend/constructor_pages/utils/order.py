from constructor_pages.extensions import db

def compact_order(query, order_field="position"):
    """
    Re-assigns sequential order values (1..N) for a scoped query.
    """
    entity = query.column_descriptions[0]["entity"]
    items = query.order_by(getattr(entity, order_field).asc()).all()

    for index, item in enumerate(items, start=1):
        setattr(item, order_field, index)

    db.session.flush()
    return items


def move_item(items, item, position, order_field="position"):
    """
    Moves ``item`` to 1-based ``position`` within ``items`` (clamped),
    shifting the others, and re-assigns sequential order values.
    """
    ordered = [i for i in items if i is not item]
    index = min(max(int(position), 1), len(ordered) + 1) - 1
    ordered.insert(index, item)

    for number, entry in enumerate(ordered, start=1):
        setattr(entry, order_field, number)

    db.session.flush()
    return ordered
