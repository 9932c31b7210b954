from typing import Any, Dict
from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.field import Field
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.domain.naming import assert_field_code_name
from constructor_pages.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = {"name", "code_name"}


def update_field(*, field_id: str, data: Dict[str, Any]) -> Field:
    """
    Rename a field or change its code name.

    The type tag is fixed at creation; stored values live in the table of
    that type.
    """

    field = db.session.get(Field, field_id)
    if not field:
        raise NotFoundError("Field not found")

    if "type_value" in data and data["type_value"] != field.type_value:
        raise ValidationError("The type of an existing field cannot be changed")

    if not ALLOWED_UPDATE_FIELDS & data.keys():
        raise ValidationError("No valid fields provided for update")

    with transactional():
        if "name" in data:
            name = (data["name"] or "").strip()
            if not name:
                raise ValidationError("Field name is required")
            field.name = name

        if "code_name" in data and data["code_name"] != field.code_name:
            code_name = (data["code_name"] or "").strip()
            assert_field_code_name(field.template, code_name, exclude_field_id=field.id)
            field.code_name = code_name

    current_app.logger.info("Updated field %s", field.id)
    return field
