from typing import Any, Dict
from flask import current_app
from pagetree.domain.menu import build_menu, mark_active, page_paths
from pagetree.domain.titles import project_titles
from pagetree.normalizers.menu import normalize_menu
from pagetree.normalizers.page import normalize_page
from .queries import fetch_menu_pages, find_page_by_path


def render_page(path: str) -> Dict[str, Any]:
    """
    Builds everything a template needs for one request.

    Responsibilities:
    - resolve the requested path (hidden pages included)
    - build the menu from a fresh fast-menu snapshot
    - highlight the active branch
    - project heading / browser title / menu label
    """
    marketable_urls = current_app.config.get("MARKETABLE_URLS", True)
    path_prefix = current_app.config.get("PAGES_PATH_PREFIX", "/pages")

    pages = fetch_menu_pages()
    page = find_page_by_path(
        path,
        marketable_urls=marketable_urls,
        path_prefix=path_prefix,
        pages=pages,
    )

    menu = build_menu(pages, marketable_urls=marketable_urls, path_prefix=path_prefix)
    active = mark_active(menu, page)
    paths = page_paths(pages, marketable_urls=marketable_urls, path_prefix=path_prefix)

    return {
        "page": normalize_page(page, path=paths[page.id]),
        "titles": project_titles(page)._asdict(),
        "active_page_id": active.id if active else None,
        "menu": normalize_menu(menu),
    }
