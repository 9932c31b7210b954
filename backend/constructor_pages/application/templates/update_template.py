from typing import Any, Dict
from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.template import Template
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.domain.naming import assert_code_name_format
from constructor_pages.utils.transaction import transactional


def update_template(*, template_id: str, data: Dict[str, Any]) -> Template:
    """Rename a template and/or change its code name."""

    template = db.session.get(Template, template_id)
    if not template:
        raise NotFoundError("Template not found")

    with transactional():
        if "name" in data:
            name = (data["name"] or "").strip()
            if not name:
                raise ValidationError("Template name is required")
            template.name = name

        if "code_name" in data and data["code_name"] != template.code_name:
            code_name = (data["code_name"] or "").strip()
            assert_code_name_format(code_name, kind="Template")

            taken = Template.query.filter(
                Template.code_name == code_name,
                Template.id != template.id,
            ).first()
            if taken:
                raise ValidationError(f"A template with code name '{code_name}' already exists")
            template.code_name = code_name

    current_app.logger.info("Updated template %s", template.id)
    return template
