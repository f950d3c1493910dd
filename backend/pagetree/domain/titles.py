from typing import NamedTuple

from .slug import clean_override


class TitleProjection(NamedTuple):
    heading: str
    browser_title: str
    menu_label: str


def menu_label(page) -> str:
    return clean_override(page.menu_title) or page.title


def project_titles(page) -> TitleProjection:
    """
    Each display context has exactly one override.
    The heading is always the title; overrides never leak across contexts.
    """
    return TitleProjection(
        heading=page.title,
        browser_title=clean_override(page.browser_title) or page.title,
        menu_label=menu_label(page),
    )
