from typing import Dict, List, Optional
from urllib.parse import quote
from flask import current_app
from sqlalchemy import select
from pagetree.extensions import db
from pagetree.models.page import Page
from pagetree.domain.menu import page_paths
from pagetree.domain.paths import DEFAULT_PATH_PREFIX, HOME_PATH, split_path
from pagetree.domain.snapshot import PageSnapshot, snapshot_page
from pagetree.domain.invariants.exceptions import PageNotFound


def parent_map() -> Dict[str, Optional[str]]:
    with db.session.no_autoflush:
        rows = db.session.execute(select(Page.id, Page.parent_id)).all()
    return {page_id: parent_id for page_id, parent_id in rows}


def fetch_menu_pages() -> List[PageSnapshot]:
    """
    The fast menu snapshot: the whole tree ordered by position.

    Drafts are kept because paths nest through draft parents;
    build_menu and find_page_by_path filter them out again.
    """
    pages = db.session.execute(
        select(Page).order_by(Page.position.asc(), Page.created_at.asc())
    ).scalars()
    return [snapshot_page(page) for page in pages]


def get_page(page_id: str) -> Page:
    page = db.session.get(Page, page_id)
    if page is None:
        raise PageNotFound(page_id)
    return page


def find_home_page(pages: List[PageSnapshot]) -> PageSnapshot:
    live = [page for page in pages if not page.draft]
    for page in live:
        if page.link_url == HOME_PATH:
            return page

    roots = [page for page in live if page.parent_id is None]
    if not roots:
        raise PageNotFound(HOME_PATH)
    return min(roots, key=lambda p: p.position)


def find_page_by_path(
    path: str,
    *,
    marketable_urls: bool,
    path_prefix: str = DEFAULT_PATH_PREFIX,
    pages: Optional[List[PageSnapshot]] = None,
) -> PageSnapshot:
    """
    Resolves a request path to a live page, hidden pages included.

    - "/" is the home page
    - "<prefix>/<slug>" resolves by slug in both URL modes
    - any other path only resolves when marketable URLs are enabled

    pages should be the whole tree, drafts included; drafts are
    never returned.
    """
    if pages is None:
        pages = fetch_menu_pages()

    # Flask hands over decoded segments; slugs are stored percent-encoded
    segments = [quote(segment, safe="-._~") for segment in split_path(path)]
    if not segments:
        return find_home_page(pages)

    prefix = split_path(path_prefix)
    if prefix and segments[:len(prefix)] == prefix and len(segments) == len(prefix) + 1:
        slug = segments[-1]
        for page in pages:
            if page.slug == slug and not page.draft:
                return page

    if marketable_urls:
        wanted = HOME_PATH + "/".join(segments)
        paths = page_paths(pages, marketable_urls=True, path_prefix=path_prefix)
        for page in pages:
            if paths[page.id] == wanted and not page.draft:
                return page

    current_app.logger.info("No page found for path %s", path)
    raise PageNotFound(path)
