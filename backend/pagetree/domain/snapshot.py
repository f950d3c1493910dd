from dataclasses import dataclass
from typing import Optional

from .slug import clean_override, resolve_slug


@dataclass(frozen=True)
class PageSnapshot:
    """
    Detached, read-only copy of a page.
    Menu building and rendering work on these, never on ORM rows.
    """
    id: str
    title: str
    slug: str
    parent_id: Optional[str] = None
    position: int = 0
    menu_title: Optional[str] = None
    browser_title: Optional[str] = None
    custom_slug: Optional[str] = None
    draft: bool = False
    show_in_menu: bool = True
    skip_to_first_child: bool = False
    link_url: Optional[str] = None


def snapshot_page(page) -> PageSnapshot:
    return PageSnapshot(
        id=page.id,
        title=page.title,
        slug=page.slug or resolve_slug(page),
        parent_id=page.parent_id,
        position=page.position or 0,
        menu_title=clean_override(page.menu_title),
        browser_title=clean_override(page.browser_title),
        custom_slug=clean_override(page.custom_slug),
        draft=bool(page.draft),
        show_in_menu=page.show_in_menu is not False,
        skip_to_first_child=bool(page.skip_to_first_child),
        link_url=clean_override(page.link_url),
    )
