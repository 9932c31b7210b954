from typing import Any, Dict
from flask import current_app
from sqlalchemy import func
from constructor_pages.extensions import db
from constructor_pages.models.field import Field
from constructor_pages.models.template import Template
from constructor_pages.models.types import FieldType
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.domain.naming import assert_field_code_name
from constructor_pages.domain.invariants.field import assert_field_positions
from constructor_pages.store.values import create_default
from constructor_pages.utils.transaction import transactional


def parse_field_type(type_value) -> FieldType:
    try:
        return FieldType(type_value)
    except ValueError as exc:
        allowed = ", ".join(t.value for t in FieldType)
        raise ValidationError(f"Unknown field type '{type_value}' (expected one of: {allowed})") from exc


def add_field(*, template_id: str, data: Dict[str, Any]) -> Field:
    """
    Append a typed field to a template.

    Every page already bound to the template gets one defaulted value row
    for the new field, in the same transaction.
    """

    template = db.session.get(Template, template_id)
    if not template:
        raise NotFoundError("Template not found")

    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Field name is required")

    code_name = (data.get("code_name") or "").strip()
    field_type = parse_field_type(data.get("type_value"))

    assert_field_code_name(template, code_name)

    last_position = (
        db.session.query(func.max(Field.position))
        .filter(Field.template_id == template.id)
        .scalar()
    ) or 0

    field = Field()
    field.template_id = template.id
    field.name = name
    field.code_name = code_name
    field.type_value = field_type.value
    field.position = last_position + 1

    with transactional():
        db.session.add(field)
        db.session.flush()  # ensures field.id is available

        for page in template.pages:
            create_default(page, field)

        db.session.refresh(template)
        assert_field_positions(template.fields)

    current_app.logger.info(
        "Added %s field '%s' to template %s (%d page(s))",
        field.type_value, field.code_name, template.code_name, len(template.pages),
    )
    return field
