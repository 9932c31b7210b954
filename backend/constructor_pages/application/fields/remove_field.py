from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.field import Field
from constructor_pages.domain.exceptions import NotFoundError
from constructor_pages.domain.invariants.field import assert_field_positions
from constructor_pages.store.values import remove_field_values
from constructor_pages.utils.order import compact_order
from constructor_pages.utils.transaction import transactional


def remove_field(*, field_id: str) -> int:
    """
    Remove a field from its template.

    Deletes the field's value row on every page of the template, then
    compacts the positions of the remaining fields. Returns the number of
    value rows deleted.
    """

    field = db.session.get(Field, field_id)
    if not field:
        raise NotFoundError("Field not found")

    template_id = field.template_id
    code_name = field.code_name

    with transactional():
        removed = remove_field_values(field)

        field.template.fields.remove(field)
        db.session.delete(field)
        db.session.flush()

        remaining = compact_order(Field.query.filter_by(template_id=template_id))
        assert_field_positions(remaining)

    current_app.logger.info(
        "Removed field '%s' from template %s (%d value row(s))", code_name, template_id, removed
    )
    return removed
