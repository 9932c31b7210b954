# constructor_pages/store/values.py
"""
Typed field value store.

Uniform get/set/create_default/remove over the per-type value tables.
These functions only stage changes on the session; the calling use case
owns the transaction.
"""
from werkzeug.datastructures import FileStorage

from constructor_pages.extensions import db
from constructor_pages.domain.exceptions import TypeMismatchError
from constructor_pages.models.field import Field
from constructor_pages.models.types import FieldType, TYPE_MODELS, ImageType
from constructor_pages.utils.media import save_file, delete_file


def find_field(template_id, code_name):
    return Field.query.filter_by(template_id=template_id, code_name=code_name).first()


def _row(page, field):
    return field.type_model.query.filter_by(page_id=page.id, field_id=field.id).first()


def get_value(page, field):
    """Stored value, or the type's zero value when the row is missing."""
    row = _row(page, field)
    if row is None:
        return field.type_model.zero
    return row.value


def set_value(page, field, value):
    model = field.type_model

    if model is ImageType and isinstance(value, FileStorage):
        try:
            value = save_file(value)
        except ValueError as exc:
            raise TypeMismatchError(str(exc)) from exc

    coerced = model.coerce(value)

    row = _row(page, field)
    if row is None:
        row = model(page_id=page.id, field_id=field.id)
        db.session.add(row)
    elif model is ImageType and row.value and row.value != coerced:
        # removed from disk only once the transaction commits
        delete_file(row.value)

    row.value = coerced
    return coerced


def create_default(page, field):
    """Inserts a zero-valued row unless one already exists for (page, field)."""
    row = _row(page, field)
    if row is not None:
        return row

    model = field.type_model
    row = model(page_id=page.id, field_id=field.id, value=model.zero)
    db.session.add(row)
    db.session.flush()
    return row


def remove(page, field):
    row = _row(page, field)
    if row is None:
        return False

    if field.type is FieldType.IMAGE:
        delete_file(row.value)
    db.session.delete(row)
    return True


def reset_all_booleans(page):
    """
    Sets every boolean field of ``page`` to False, so an update payload
    that omits a checkbox reads as unchecked.
    """
    field_ids = [f.id for f in page.fields if f.type is FieldType.BOOLEAN]
    if not field_ids:
        return 0

    model = TYPE_MODELS[FieldType.BOOLEAN]
    return model.query.filter(
        model.page_id == page.id,
        model.field_id.in_(field_ids),
    ).update({model.value: False}, synchronize_session="fetch")


# -------------------------------
# Page / field level helpers
# -------------------------------
def get_field_value(page, code_name):
    field = find_field(page.template_id, code_name)
    if field is None:
        return None
    return get_value(page, field)


def create_page_values(page):
    for field in page.fields:
        create_default(page, field)


def remove_page_values(page_ids, field_ids=None):
    """Bulk-deletes value rows owned by ``page_ids`` (optionally only for ``field_ids``)."""
    removed = 0
    for field_type, model in TYPE_MODELS.items():
        query = model.query.filter(model.page_id.in_(page_ids))
        if field_ids is not None:
            query = query.filter(model.field_id.in_(field_ids))

        if field_type is FieldType.IMAGE:
            for row in query.all():
                delete_file(row.value)

        removed += query.delete(synchronize_session=False)
    return removed


def remove_field_values(field):
    """Bulk-deletes every value row of ``field`` across all pages."""
    model = field.type_model
    query = model.query.filter_by(field_id=field.id)

    if field.type is FieldType.IMAGE:
        for row in query.all():
            delete_file(row.value)

    return query.delete(synchronize_session=False)
