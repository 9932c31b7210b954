"""Tests for transactions and error handlers."""

import pytest

from constructor_pages.domain.exceptions import (
    NotFoundError,
    TransactionError,
    TypeMismatchError,
    ValidationError,
)
from constructor_pages.extensions import db
from constructor_pages.models.template import Template
from constructor_pages.utils.transaction import transactional


class TestTransactional:
    """Tests for transactional()."""

    def test_commits_on_success(self, app) -> None:
        with transactional():
            db.session.add(Template(name="Page", code_name="page"))

        db.session.rollback()
        assert Template.query.count() == 1

    def test_storage_errors_become_transaction_errors(self, make_template) -> None:
        make_template("Page")

        with pytest.raises(TransactionError):
            with transactional():
                db.session.add(Template(name="Duplicate", code_name="page"))

        assert Template.query.count() == 1

    def test_other_errors_roll_back_and_propagate(self, app) -> None:
        with pytest.raises(ValidationError):
            with transactional():
                db.session.add(Template(name="Page", code_name="page"))
                db.session.flush()
                raise ValidationError("stop")

        assert Template.query.count() == 0


@pytest.mark.parametrize(
    ("error", "status"),
    [
        (ValidationError("bad"), 400),
        (NotFoundError("missing"), 404),
        (TransactionError("conflict"), 409),
        (TypeMismatchError("not a number"), 422),
    ],
)
def test_error_handlers(app, error, status) -> None:
    @app.route(f"/boom-{status}")
    def boom():
        raise error

    response = app.test_client().get(f"/boom-{status}")

    assert response.status_code == status
    assert response.get_json() == {"error": type(error).__name__, "message": str(error)}
