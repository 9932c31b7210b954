# constructor_pages/domain/naming.py
import re

import inflection
from flask import current_app

from constructor_pages.models.field import Field
from constructor_pages.models.page import Page
from constructor_pages.models.template import Template
from .exceptions import ValidationError

CODE_NAME_PATTERN = re.compile(r"^[a-z_][a-z0-9_]*$")


def reserved_page_names():
    """Every public attribute and method reachable on a Page."""
    return frozenset(name for name in dir(Page) if not name.startswith("_"))


def inflected_forms(code_name):
    forms = {code_name}
    if current_app.config.get("FIELD_NAME_INFLECTION_CHECK", True):
        forms.add(inflection.singularize(code_name))
        forms.add(inflection.pluralize(code_name))
    return forms


def assert_code_name_format(code_name, kind="Field"):
    if not code_name:
        raise ValidationError(f"{kind} code_name is required")
    if not CODE_NAME_PATTERN.match(code_name):
        raise ValidationError(
            f"{kind} code_name '{code_name}' must be lowercase letters, digits and underscores"
        )


def assert_field_code_name(template, code_name, *, exclude_field_id=None):
    """
    Validates a field code_name for ``template``:
    - identifier format
    - unique within the template
    - not (in any inflected form) an accessor already reachable on pages
    - ambiguity with template code_names is flagged per AMBIGUOUS_FIELD_NAMES
    """
    assert_code_name_format(code_name)

    duplicate = Field.query.filter_by(template_id=template.id, code_name=code_name)
    if exclude_field_id is not None:
        duplicate = duplicate.filter(Field.id != exclude_field_id)
    if duplicate.first() is not None:
        raise ValidationError(f"Code name '{code_name}' is already used in this template")

    forms = inflected_forms(code_name)

    collisions = sorted(forms & reserved_page_names())
    if collisions:
        raise ValidationError(
            f"Code name '{code_name}' collides with page attribute '{collisions[0]}'"
        )

    shadowed = Template.query.filter(Template.code_name.in_(sorted(forms))).all()
    if shadowed:
        message = (
            f"Code name '{code_name}' shadows navigation to template "
            f"'{shadowed[0].code_name}' and needs review"
        )
        if current_app.config.get("AMBIGUOUS_FIELD_NAMES", "warn") == "reject":
            raise ValidationError(message)
        current_app.logger.warning(message)
