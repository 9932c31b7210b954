from flask import current_app
from constructor_pages.extensions import db
from constructor_pages.models.page import Page
from constructor_pages.models.template import Template
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.store.values import remove_field_values
from constructor_pages.utils.transaction import transactional


def delete_template(*, template_id: str) -> None:
    """
    Delete a template and its fields.

    Pages must always reference a template, so deletion is refused while
    any page is still bound to it.
    """

    template = db.session.get(Template, template_id)
    if not template:
        raise NotFoundError("Template not found")

    bound = Page.query.filter_by(template_id=template.id).count()
    if bound:
        raise ValidationError(
            f"Template '{template.code_name}' is still used by {bound} page(s)"
        )

    with transactional():
        for field in template.fields:
            remove_field_values(field)

        # Fields go with the template (delete-orphan)
        db.session.delete(template)

    current_app.logger.info("Deleted template %s", template_id)
