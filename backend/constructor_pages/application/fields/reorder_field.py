from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.field import Field
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.domain.invariants.field import assert_field_positions
from constructor_pages.utils.order import move_item
from constructor_pages.utils.transaction import transactional


def reorder_field(*, field_id: str, position: int) -> Field:
    """
    Move a field to ``position`` (1-based, clamped) within its template,
    shifting siblings. Stored values are untouched.
    """

    field = db.session.get(Field, field_id)
    if not field:
        raise NotFoundError("Field not found")

    try:
        position = int(position)
    except (TypeError, ValueError) as exc:
        raise ValidationError("Position must be an integer") from exc

    with transactional():
        siblings = (
            Field.query.filter_by(template_id=field.template_id)
            .order_by(Field.position.asc())
            .all()
        )
        ordered = move_item(siblings, field, position)
        assert_field_positions(ordered)

    current_app.logger.info("Moved field %s to position %d", field.id, field.position)
    return field
