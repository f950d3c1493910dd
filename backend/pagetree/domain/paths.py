from typing import Iterable

from .slug import clean_override

HOME_PATH = "/"
DEFAULT_PATH_PREFIX = "/pages"


def is_home(page) -> bool:
    return clean_override(page.link_url) == HOME_PATH


def resolve_path_mode(
    marketable_urls_enabled: bool,
    page,
    ancestors: Iterable = (),
    *,
    path_prefix: str = DEFAULT_PATH_PREFIX,
) -> str:
    """
    Resolves the public path of a page.

    - The home page is always "/"
    - link_url replaces the derived path
    - Marketable URLs nest ancestor slugs: /about/team
    - Otherwise the slug sits under a fixed namespace: /pages/team
    """
    if is_home(page):
        return HOME_PATH

    link_url = clean_override(page.link_url)
    if link_url:
        return link_url

    if marketable_urls_enabled:
        segments = [ancestor.slug for ancestor in ancestors]
        segments.append(page.slug)
        return HOME_PATH + "/".join(segments)

    return f"{path_prefix.rstrip('/')}/{page.slug}"


def split_path(path: str) -> list[str]:
    return [segment for segment in (path or "").split("/") if segment]
