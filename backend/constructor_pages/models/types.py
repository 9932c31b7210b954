# constructor_pages/models/types.py
"""
Typed field value rows.

One table per field type; every row holds the value of one field for one
page, keyed by (page_id, field_id). Rows are created and destroyed only
through the field catalog and page use cases, never directly.
"""
from datetime import date, datetime
from enum import Enum
import numbers

from dateutil.parser import parse
from sqlalchemy.orm import declared_attr

from constructor_pages.extensions import db
from constructor_pages.domain.exceptions import TypeMismatchError
from .base import BaseModel


class FieldType(str, Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TEXT = "text"
    DATE = "date"
    HTML = "html"
    IMAGE = "image"


TRUE_STRINGS = {"1", "true", "t", "yes", "y", "on"}
FALSE_STRINGS = {"0", "false", "f", "no", "n", "off", ""}


def _is_number(value):
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


class TypeValueMixin:
    type_tag = None
    zero = None

    @declared_attr
    def page_id(cls):
        return db.Column(db.String(36), db.ForeignKey("pages.id"), nullable=False, index=True)

    @declared_attr
    def field_id(cls):
        return db.Column(db.String(36), db.ForeignKey("fields.id"), nullable=False, index=True)

    @declared_attr.directive
    def __table_args__(cls):
        return (
            db.UniqueConstraint("page_id", "field_id", name=f"uq_{cls.__tablename__}_page_field"),
        )

    @classmethod
    def coerce(cls, value):
        """Convert ``value`` to the column's native type or raise TypeMismatchError."""
        if value is None:
            return cls.zero
        return cls.cast(value)

    @classmethod
    def cast(cls, value):
        raise NotImplementedError

    @classmethod
    def mismatch(cls, value):
        return TypeMismatchError(f"{value!r} is not a valid {cls.type_tag.value} value")


class _TextualMixin(TypeValueMixin):
    zero = ""
    max_length = None

    @classmethod
    def cast(cls, value):
        if isinstance(value, str):
            text = value
        elif _is_number(value):
            text = str(value)
        else:
            raise cls.mismatch(value)

        if cls.max_length is not None and len(text) > cls.max_length:
            raise TypeMismatchError(
                f"{cls.type_tag.value} values are limited to {cls.max_length} characters"
            )
        return text


class StringType(BaseModel, _TextualMixin):
    __tablename__ = "string_types"
    type_tag = FieldType.STRING
    max_length = 255

    value = db.Column(db.String(255), nullable=True, default="")


class TextType(BaseModel, _TextualMixin):
    __tablename__ = "text_types"
    type_tag = FieldType.TEXT

    value = db.Column(db.Text, nullable=True, default="")


class HtmlType(BaseModel, _TextualMixin):
    __tablename__ = "html_types"
    type_tag = FieldType.HTML

    value = db.Column(db.Text, nullable=True, default="")


class IntegerType(BaseModel, TypeValueMixin):
    __tablename__ = "integer_types"
    type_tag = FieldType.INTEGER
    zero = 0

    # signed 64-bit, the widest INTEGER the supported backends store
    MIN_VALUE = -2 ** 63
    MAX_VALUE = 2 ** 63 - 1

    value = db.Column(db.BigInteger, nullable=True, default=0)

    @classmethod
    def cast(cls, value):
        if isinstance(value, bool):
            raise cls.mismatch(value)
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return cls.zero
            try:
                value = int(text)
            except ValueError as exc:
                raise cls.mismatch(value) from exc
        if not isinstance(value, int):
            raise cls.mismatch(value)
        if not cls.MIN_VALUE <= value <= cls.MAX_VALUE:
            raise cls.mismatch(value)
        return value


class FloatType(BaseModel, TypeValueMixin):
    __tablename__ = "float_types"
    type_tag = FieldType.FLOAT
    zero = 0.0

    value = db.Column(db.Float, nullable=True, default=0.0)

    @classmethod
    def cast(cls, value):
        if _is_number(value):
            return float(value)
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return cls.zero
            try:
                return float(text)
            except ValueError as exc:
                raise cls.mismatch(value) from exc
        raise cls.mismatch(value)


class BooleanType(BaseModel, TypeValueMixin):
    __tablename__ = "boolean_types"
    type_tag = FieldType.BOOLEAN
    zero = False

    value = db.Column(db.Boolean, nullable=True, default=False)

    @classmethod
    def cast(cls, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in TRUE_STRINGS:
                return True
            if text in FALSE_STRINGS:
                return False
        raise cls.mismatch(value)


class DateType(BaseModel, TypeValueMixin):
    __tablename__ = "date_types"
    type_tag = FieldType.DATE

    value = db.Column(db.Date, nullable=True)

    @classmethod
    def cast(cls, value):
        # datetime is a subclass of date, check it first
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            if not value.strip():
                return cls.zero
            try:
                return parse(value).date()
            except (ValueError, OverflowError) as exc:
                raise cls.mismatch(value) from exc
        raise cls.mismatch(value)


class ImageType(BaseModel, TypeValueMixin):
    """Holds a reference (URL or path) to an image, never the bytes."""

    __tablename__ = "image_types"
    type_tag = FieldType.IMAGE

    value = db.Column(db.String(1024), nullable=True)

    @classmethod
    def cast(cls, value):
        if not isinstance(value, str) or len(value) > 1024:
            raise cls.mismatch(value)
        return value.strip() or cls.zero


# Static dispatch: type tag -> value store model
TYPE_MODELS = {
    FieldType.STRING: StringType,
    FieldType.INTEGER: IntegerType,
    FieldType.FLOAT: FloatType,
    FieldType.BOOLEAN: BooleanType,
    FieldType.TEXT: TextType,
    FieldType.DATE: DateType,
    FieldType.HTML: HtmlType,
    FieldType.IMAGE: ImageType,
}
