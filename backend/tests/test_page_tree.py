"""Tests for the page tree: creation, url derivation, moves and deletion."""

import uuid

import pytest

from constructor_pages.application.pages.delete_page import delete_page
from constructor_pages.application.pages.resolve_page import (
    ancestors_of,
    descendants_of,
    resolve_by_path,
)
from constructor_pages.application.pages.create_page import create_page
from constructor_pages.application.pages.update_page import update_page
from constructor_pages.domain.exceptions import NotFoundError, ValidationError
from constructor_pages.domain.invariants.tree import assert_nested_set
from constructor_pages.extensions import db
from constructor_pages.models.page import Page
from constructor_pages.models.types import StringType
from constructor_pages.utils.nested_set import move_to
from constructor_pages.utils.transaction import transactional


def bounds(page):
    db.session.refresh(page)
    return page.lft, page.rgt


@pytest.fixture
def site(make_template, make_page):
    """
    home
    ├── about
    │   └── team
    └── blog
    news (second root)
    """
    template = make_template("Page")
    home = make_page("Home", template)
    about = make_page("About", template, parent=home)
    team = make_page("Team", template, parent=about)
    blog = make_page("Blog", template, parent=home)
    news = make_page("News", template)
    return {"template": template, "home": home, "about": about, "team": team, "blog": blog, "news": news}


class TestCreatePage:
    """Tests for create_page()."""

    def test_builds_nested_set_in_pre_order(self, site) -> None:
        assert bounds(site["home"]) == (1, 8)
        assert bounds(site["about"]) == (2, 5)
        assert bounds(site["team"]) == (3, 4)
        assert bounds(site["blog"]) == (6, 7)
        assert bounds(site["news"]) == (9, 10)
        assert_nested_set(Page.query.all())

    def test_sets_depth(self, site) -> None:
        assert site["home"].depth == 0
        assert site["about"].depth == 1
        assert site["team"].depth == 2

    def test_full_url_concatenates_ancestor_slugs(self, site) -> None:
        assert site["home"].full_url == "/home"
        assert site["about"].full_url == "/home/about"
        assert site["team"].full_url == "/home/about/team"
        assert site["news"].full_url == "/news"

    def test_full_url_matches_ancestors_for_every_page(self, site) -> None:
        for page in Page.query.all():
            expected = "/" + "/".join(p.url for p in page.self_and_ancestors())
            assert page.full_url == expected

    def test_falls_back_to_first_template(self, make_template, make_page) -> None:
        first = make_template("Page")
        make_template("Article")

        page = make_page("Orphan")

        assert page.template_id == first.id

    def test_fails_without_any_template(self, app) -> None:
        with pytest.raises(ValidationError, match="No template available"):
            create_page(data={"name": "Home"})

    def test_requires_name(self, site) -> None:
        with pytest.raises(ValidationError):
            create_page(data={"name": "  ", "template_id": site["template"].id})

    def test_unknown_parent(self, site) -> None:
        with pytest.raises(NotFoundError):
            create_page(data={"name": "Lost", "parent_id": "missing"})

    def test_authored_url_is_normalized(self, site, make_page) -> None:
        page = make_page("Contacts", site["template"], url="Reach Us", auto_url=False)

        assert page.url == "reach-us"
        assert page.full_url == "/reach-us"

    def test_redirect_flag(self, site, make_page) -> None:
        page = make_page("Docs", site["template"], link="https://example.com/docs")

        assert page.redirect is True
        assert site["home"].redirect is False


class TestUpdatePage:
    """Tests for update_page()."""

    def test_url_change_cascades_to_all_descendants(self, site) -> None:
        update_page(page_id=site["home"].id, data={"url": "main", "auto_url": False})

        assert site["home"].full_url == "/main"
        assert site["about"].full_url == "/main/about"
        assert site["team"].full_url == "/main/about/team"
        assert site["blog"].full_url == "/main/blog"
        assert site["news"].full_url == "/news"

    def test_rename_with_auto_url_rederives_slug(self, site) -> None:
        update_page(page_id=site["about"].id, data={"name": "About Us"})

        assert site["about"].url == "about-us"
        assert site["team"].full_url == "/home/about-us/team"
        assert site["blog"].full_url == "/home/blog"

    def test_plain_attribute_change_keeps_urls(self, site) -> None:
        update_page(page_id=site["about"].id, data={"title": "Who we are"})

        assert site["about"].title == "Who we are"
        assert site["team"].full_url == "/home/about/team"

    def test_rejects_empty_payload(self, site) -> None:
        with pytest.raises(ValidationError):
            update_page(page_id=site["home"].id, data={"unknown": 1})

    def test_unknown_page(self, site) -> None:
        with pytest.raises(NotFoundError):
            update_page(page_id="missing", data={"title": "x"})

    def test_move_subtree_under_new_parent(self, site) -> None:
        update_page(page_id=site["about"].id, data={"parent_id": site["news"].id})

        assert_nested_set(Page.query.all())
        assert site["about"].parent_id == site["news"].id
        assert site["about"].full_url == "/news/about"
        assert site["team"].full_url == "/news/about/team"
        assert site["team"].depth == 2
        assert [p.id for p in site["home"].descendants()] == [site["blog"].id]
        assert [p.id for p in site["news"].descendants()] == [site["about"].id, site["team"].id]

    def test_move_to_root(self, site) -> None:
        update_page(page_id=site["blog"].id, data={"parent_id": None})

        assert_nested_set(Page.query.all())
        assert site["blog"].is_root
        assert site["blog"].full_url == "/blog"
        assert bounds(site["blog"]) == (9, 10)

    def test_cannot_move_under_own_descendant(self, site) -> None:
        with pytest.raises(ValidationError):
            update_page(page_id=site["about"].id, data={"parent_id": site["team"].id})

        assert site["about"].parent_id == site["home"].id
        assert_nested_set(Page.query.all())

    def test_template_switch_swaps_value_rows(self, site, make_template, make_field) -> None:
        make_field(site["template"], "subtitle")
        article = make_template("Article")
        make_field(article, "body", "text")

        update_page(page_id=site["blog"].id, data={"template_id": article.id})

        assert site["blog"].template_id == article.id
        assert StringType.query.filter_by(page_id=site["blog"].id).count() == 0
        assert site["blog"].field("body") == ""
        assert site["blog"].field("subtitle") is None


class TestDeletePage:
    """Tests for delete_page()."""

    def test_removes_subtree_and_closes_gap(self, site) -> None:
        team_id = site["team"].id

        deleted = delete_page(page_id=site["about"].id)

        assert deleted == 2
        assert db.session.get(Page, team_id) is None
        assert bounds(site["home"]) == (1, 4)
        assert bounds(site["blog"]) == (2, 3)
        assert bounds(site["news"]) == (5, 6)
        assert_nested_set(Page.query.all())

    def test_removes_owned_value_rows(self, site, make_field) -> None:
        make_field(site["template"], "subtitle")
        team_id = site["team"].id
        assert StringType.query.count() == 5

        delete_page(page_id=site["about"].id)

        assert StringType.query.count() == 3
        assert StringType.query.filter_by(page_id=team_id).count() == 0

    def test_unknown_page(self, app) -> None:
        with pytest.raises(NotFoundError):
            delete_page(page_id="missing")


class TestResolveByPath:
    """Tests for resolve_by_path()."""

    def test_root_and_empty_resolve_to_first_page(self, site) -> None:
        assert resolve_by_path("/").id == site["home"].id
        assert resolve_by_path(None).id == site["home"].id
        assert resolve_by_path("").id == site["home"].id

    def test_exact_full_url(self, site) -> None:
        assert resolve_by_path("/home/about/team").id == site["team"].id

    def test_tolerates_missing_or_trailing_slashes(self, site) -> None:
        assert resolve_by_path("home/about").id == site["about"].id
        assert resolve_by_path("/home/about/").id == site["about"].id

    def test_unknown_path(self, site) -> None:
        assert resolve_by_path("/home/missing") is None

    def test_empty_tree(self, app) -> None:
        assert resolve_by_path("/") is None


class TestTraversal:
    """Tests for ancestor and descendant queries."""

    def test_ancestors_root_first(self, site) -> None:
        assert [p.id for p in ancestors_of(site["team"])] == [site["home"].id, site["about"].id]

    def test_descendants_in_pre_order(self, site) -> None:
        assert [p.id for p in descendants_of(site["home"])] == [
            site["about"].id,
            site["team"].id,
            site["blog"].id,
        ]

    def test_children(self, site) -> None:
        assert [p.id for p in site["home"].children()] == [site["about"].id, site["blog"].id]

    def test_leaf_and_root(self, site) -> None:
        assert site["team"].is_leaf
        assert not site["home"].is_leaf
        assert site["news"].is_root
        assert site["about"].parent.id == site["home"].id


class TestRebuild:
    """Tests for the nested set renumbering pass."""

    def test_move_renumbers_very_deep_subtree(self, site) -> None:
        template_id = site["template"].id
        parent_id = site["news"].id
        chain = []
        for level in range(1500):
            page = Page(
                id=str(uuid.uuid4()),
                name=f"Level {level}",
                url=f"level-{level}",
                template_id=template_id,
                parent_id=parent_id,
                lft=10_000 + level,
                rgt=20_000 - level,
            )
            db.session.add(page)
            chain.append(page)
            parent_id = page.id

        with transactional():
            move_to(chain[0], site["home"])

        assert_nested_set(Page.query.all())
        assert chain[0].parent_id == site["home"].id
        assert chain[-1].depth == 1500
        assert bounds(site["home"]) == (1, 3008)
        assert bounds(site["news"]) == (3009, 3010)
