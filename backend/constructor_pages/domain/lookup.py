# constructor_pages/domain/lookup.py
"""
Dynamic lookup of a name on a page.

A name resolves, in order, to:
1. a field of the page's template (``price`` reads, ``price=`` writes);
2. a template code_name, singularized: the plural form lists the
   descendants bound to that template, the singular form (or an empty
   plural) gives the nearest ancestor bound to it.
Misses resolve to NotFound, never to an exception.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple, Union

import inflection

from constructor_pages.models.page import Page
from constructor_pages.models.template import Template
from constructor_pages.store.values import find_field, get_value, set_value
from constructor_pages.utils.page_query import PageQuery
from constructor_pages.utils.transaction import transactional

ASSIGNMENT_MARKER = "="
_UNSET = object()


@dataclass(frozen=True)
class FieldValue:
    code_name: str
    value: Any


@dataclass(frozen=True)
class PageList:
    pages: Tuple[Page, ...]


@dataclass(frozen=True)
class SinglePage:
    page: Page


@dataclass(frozen=True)
class NotFound:
    name: str

    def __bool__(self):
        return False


LookupResult = Union[FieldValue, PageList, SinglePage, NotFound]


def is_plural(name: str) -> bool:
    return inflection.pluralize(name) == name


def dynamic_lookup(page: Page, name: str, value: Any = _UNSET) -> LookupResult:
    code_name = name[:-len(ASSIGNMENT_MARKER)] if name.endswith(ASSIGNMENT_MARKER) else name

    field = find_field(page.template_id, code_name)
    if field is not None:
        if name.endswith(ASSIGNMENT_MARKER) and value is not _UNSET:
            with transactional():
                stored = set_value(page, field, value)
            return FieldValue(code_name, stored)
        return FieldValue(code_name, get_value(page, field))

    template = Template.query.filter_by(code_name=inflection.singularize(name)).first()
    if template is None:
        return NotFound(name)

    if is_plural(name):
        pages = PageQuery().within(page).with_template(template).all()
        if pages:
            return PageList(tuple(pages))

    ancestor = PageQuery().enclosing(page).with_template(template).last()
    if ancestor is not None:
        return SinglePage(ancestor)

    return NotFound(name)
