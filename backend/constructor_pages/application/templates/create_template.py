from typing import Any, Dict
import inflection
from flask import current_app
from slugify import slugify
from constructor_pages.extensions import db
from constructor_pages.models.template import Template
from constructor_pages.domain.exceptions import ValidationError
from constructor_pages.domain.naming import assert_code_name_format
from constructor_pages.utils.transaction import transactional


def create_template(*, data: Dict[str, Any]) -> Template:
    """
    Register a new template.

    - name is required
    - code_name defaults to the underscored slug of the name
    - code_name must be unique; a plural code_name is accepted but logged,
      since dynamic lookup resolves templates by the singular form
    """

    name = (data.get("name") or "").strip()
    if not name:
        raise ValidationError("Template name is required")

    code_name = (data.get("code_name") or slugify(name, separator="_")).strip()
    assert_code_name_format(code_name, kind="Template")

    if Template.query.filter_by(code_name=code_name).first():
        raise ValidationError(f"A template with code name '{code_name}' already exists")

    if inflection.singularize(code_name) != code_name:
        current_app.logger.warning(
            "Template code name '%s' is not singular; lookups use '%s'",
            code_name,
            inflection.singularize(code_name),
        )

    template = Template()
    template.name = name
    template.code_name = code_name

    with transactional():
        db.session.add(template)

    current_app.logger.info("Created template %s (%s)", template.code_name, template.id)
    return template
