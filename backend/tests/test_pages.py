import pytest
from pagetree.application.pages.queries import fetch_menu_pages, find_page_by_path
from pagetree.application.pages.update_page import update_page
from pagetree.domain.invariants.exceptions import InvariantViolation, PageNotFound, SlugConflict


def test_create_page_derives_slug_and_position(make_page) -> None:
    home = make_page("Home", link_url="/")
    about = make_page("About Us")

    assert about.slug == "about-us"
    assert (home.position, about.position) == (0, 1)
    assert about.show_in_menu is True
    assert about.draft is False


def test_create_page_appends_within_parent(make_page) -> None:
    about = make_page("About")
    team = make_page("Team", parent_id=about.id)
    history = make_page("History", parent_id=about.id)

    assert (team.position, history.position) == (0, 1)


@pytest.mark.parametrize("title", [None, "", "   "])
def test_create_page_requires_title(make_page, title) -> None:
    with pytest.raises(InvariantViolation):
        make_page(title)


def test_create_page_rejects_unknown_parent(make_page) -> None:
    with pytest.raises(InvariantViolation):
        make_page("Orphan", parent_id="missing")


def test_create_page_rejects_unsafe_custom_slug(make_page) -> None:
    with pytest.raises(InvariantViolation):
        make_page("About", custom_slug="about us")


def test_duplicate_titles_get_suffixed_slugs(make_page) -> None:
    first = make_page("About")
    second = make_page("About")
    third = make_page("About")

    assert [first.slug, second.slug, third.slug] == ["about", "about--2", "about--3"]


def test_slugs_are_unique_across_parents(make_page) -> None:
    about = make_page("About")
    services = make_page("Services")
    about_team = make_page("Team", parent_id=about.id)
    services_team = make_page("Team", parent_id=services.id)

    assert (about_team.slug, services_team.slug) == ("team", "team--2")


def test_namespaced_lookup_after_switching_url_mode(app, make_page) -> None:
    about = make_page("About")
    services = make_page("Services")
    about_team = make_page("Team", parent_id=about.id)
    services_team = make_page("Team", parent_id=services.id)

    app.config["MARKETABLE_URLS"] = False

    assert find_page_by_path("/pages/team", marketable_urls=False).id == about_team.id
    assert find_page_by_path("/pages/team--2", marketable_urls=False).id == services_team.id


def test_namespace_segment_is_reserved(make_page) -> None:
    page = make_page("Pages")
    child = make_page("Team", parent_id=page.id)

    assert page.slug == "pages--2"
    assert find_page_by_path("/pages--2/team", marketable_urls=True).id == child.id
    with pytest.raises(SlugConflict):
        make_page("Other", custom_slug="pages")


def test_conflicting_custom_slug_is_rejected(make_page) -> None:
    make_page("About", custom_slug="about-custom")
    with pytest.raises(SlugConflict):
        make_page("Other", custom_slug="about-custom")


def test_custom_slug_set_and_cleared(make_page) -> None:
    page = make_page("Company News")

    page = update_page(page_id=page.id, data={"custom_slug": "about-custom"})
    assert page.slug == "about-custom"

    page = update_page(page_id=page.id, data={"custom_slug": ""})
    assert page.custom_slug is None
    assert page.slug == "company-news"


def test_title_change_regenerates_slug(make_page) -> None:
    page = make_page("About")
    page = update_page(page_id=page.id, data={"title": "About Us"})
    assert page.slug == "about-us"


def test_title_change_keeps_custom_slug(make_page) -> None:
    page = make_page("About", custom_slug="who-we-are")
    page = update_page(page_id=page.id, data={"title": "About Us"})
    assert page.slug == "who-we-are"


def test_menu_title_does_not_change_slug(make_page) -> None:
    page = make_page("Company News")
    page = update_page(page_id=page.id, data={"menu_title": "News"})

    assert page.menu_title == "News"
    assert page.slug == "company-news"

    page = update_page(page_id=page.id, data={"menu_title": ""})
    assert page.menu_title is None


def test_update_without_changes_fails(make_page) -> None:
    page = make_page("About")
    with pytest.raises(ValueError):
        update_page(page_id=page.id, data={"title": "About", "unknown": 1})


def test_update_blank_title_is_rejected(make_page) -> None:
    page = make_page("About")
    with pytest.raises(InvariantViolation):
        update_page(page_id=page.id, data={"title": ""})


def test_update_rejects_parent_cycle(make_page) -> None:
    about = make_page("About")
    team = make_page("Team", parent_id=about.id)

    with pytest.raises(InvariantViolation):
        update_page(page_id=about.id, data={"parent_id": team.id})
    with pytest.raises(InvariantViolation):
        update_page(page_id=about.id, data={"parent_id": about.id})


def test_update_unknown_page(app) -> None:
    with pytest.raises(PageNotFound):
        update_page(page_id="missing", data={"title": "x"})


def test_fetch_menu_pages_returns_whole_tree_in_order(site, make_page) -> None:
    make_page("Team", parent_id=site["about"].id)
    pages = fetch_menu_pages()

    assert [page.title for page in pages] == ["Home", "Team", "About", "Draft"]
    assert [page.draft for page in pages] == [False, False, False, True]


def test_child_of_draft_page_keeps_nested_path(make_page) -> None:
    secret = make_page("Secret", draft=True)
    secret_team = make_page("Team", parent_id=secret.id)
    team = make_page("Team")

    assert team.slug == "team--2"
    assert find_page_by_path("/secret/team", marketable_urls=True).id == secret_team.id
    assert find_page_by_path("/team--2", marketable_urls=True).id == team.id
    for path in ("/team", "/secret"):
        with pytest.raises(PageNotFound):
            find_page_by_path(path, marketable_urls=True)


def test_find_page_by_path(site, make_page) -> None:
    hidden = make_page("Hidden", show_in_menu=False)
    team = make_page("Team", parent_id=site["about"].id)

    assert find_page_by_path("/", marketable_urls=True).id == site["home"].id
    assert find_page_by_path("/about", marketable_urls=True).id == site["about"].id
    assert find_page_by_path("/about/team", marketable_urls=True).id == team.id
    assert find_page_by_path("/hidden", marketable_urls=True).id == hidden.id
    assert find_page_by_path("/pages/team", marketable_urls=False).id == team.id
    assert find_page_by_path("/pages/about", marketable_urls=True).id == site["about"].id


@pytest.mark.parametrize(
    "path, marketable",
    [
        ("/draft", True),
        ("/pages/draft", False),
        ("/about", False),
        ("/team", True),
        ("/nope", True),
    ],
)
def test_find_page_by_path_not_found(site, make_page, path, marketable) -> None:
    make_page("Team", parent_id=site["about"].id)
    with pytest.raises(PageNotFound):
        find_page_by_path(path, marketable_urls=marketable)


def test_home_falls_back_to_first_root(make_page) -> None:
    make_page("Welcome")
    make_page("About")
    assert find_page_by_path("/", marketable_urls=True).title == "Welcome"


@pytest.mark.parametrize(
    "fields",
    [
        {"draft": "false"},
        {"show_in_menu": 0},
        {"position": None, "parent_id": None, "draft": None},
        {"position": "1"},
        {"position": True},
        {"menu_title": 5},
        {"parent_id": 7},
    ],
)
def test_create_page_rejects_malformed_fields(make_page, fields) -> None:
    with pytest.raises(InvariantViolation):
        make_page("About", **fields)


def test_create_page_rejects_non_string_title(make_page) -> None:
    with pytest.raises(InvariantViolation):
        make_page(123)


@pytest.mark.parametrize(
    "data",
    [
        {"position": None},
        {"position": 1.5},
        {"draft": "false"},
        {"skip_to_first_child": "yes"},
        {"title": 123},
        {"browser_title": ["About"]},
    ],
)
def test_update_page_rejects_malformed_fields(make_page, data) -> None:
    page = make_page("About")
    with pytest.raises(InvariantViolation):
        update_page(page_id=page.id, data=data)

    page = update_page(page_id=page.id, data={"draft": True})
    assert (page.title, page.position, page.draft) == ("About", 0, True)
