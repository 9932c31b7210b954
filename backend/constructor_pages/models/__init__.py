from .template import Template
from .field import Field
from .page import Page
from .types import FieldType, TYPE_MODELS

__all__ = ["Template", "Field", "Page", "FieldType", "TYPE_MODELS"]
