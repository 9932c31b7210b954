"""Shared test fixtures."""

from pathlib import Path

import pytest

from constructor_pages import create_app
from constructor_pages.extensions import db
from constructor_pages.application.fields.add_field import add_field
from constructor_pages.application.pages.create_page import create_page
from constructor_pages.application.templates.create_template import create_template


@pytest.fixture
def app(tmp_path: Path):
    """Application bound to a fresh in-memory database."""
    app = create_app("testing", UPLOAD_FOLDER=str(tmp_path / "uploads"))

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_template(app):
    def _make_template(name="Page", code_name=None):
        data = {"name": name}
        if code_name:
            data["code_name"] = code_name
        return create_template(data=data)
    return _make_template


@pytest.fixture
def make_field(app):
    def _make_field(template, code_name, type_value="string", name=None):
        return add_field(
            template_id=template.id,
            data={
                "name": name or code_name.replace("_", " ").title(),
                "code_name": code_name,
                "type_value": type_value,
            },
        )
    return _make_field


@pytest.fixture
def make_page(app):
    def _make_page(name, template=None, parent=None, **attrs):
        data = {"name": name, **attrs}
        if template is not None:
            data["template_id"] = template.id
        if parent is not None:
            data["parent_id"] = parent.id
        return create_page(data=data)
    return _make_page
