import pytest
from pagetree import create_app
from pagetree.extensions import db
from pagetree.application.pages.create_page import create_page
from pagetree.domain.slug import slugify_title
from pagetree.domain.snapshot import PageSnapshot


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_page(app):
    def _make_page(title, **fields):
        return create_page(data={"title": title, **fields})
    return _make_page


@pytest.fixture
def site(make_page):
    """Home, About and a draft page, as most frontend scenarios expect."""
    home = make_page("Home", link_url="/")
    about = make_page("About")
    draft = make_page("Draft", draft=True)
    return {"home": home, "about": about, "draft": draft}


def snapshot(page_id, title, **fields) -> PageSnapshot:
    fields.setdefault("slug", fields.get("custom_slug") or slugify_title(title))
    return PageSnapshot(id=page_id, title=title, **fields)


def menu_labels(items):
    labels = []
    for item in items:
        labels.append(item["label"])
        labels.extend(menu_labels(item["children"]))
    return labels


def selected_labels(items):
    labels = []
    for item in items:
        if item["selected"]:
            labels.append(item["label"])
        labels.extend(selected_labels(item["children"]))
    return labels
