from typing import Optional, Set
from flask import current_app
from sqlalchemy import select
from pagetree.extensions import db
from pagetree.models.page import Page
from pagetree.domain.paths import DEFAULT_PATH_PREFIX, split_path
from pagetree.domain.slug import clean_override, resolve_slug, unique_slug
from pagetree.domain.invariants.exceptions import SlugConflict


def reserved_slugs() -> Set[str]:
    """
    The first namespace segment ("pages") is routed before page paths,
    so a root page with that slug would shadow its own children.
    """
    prefix = split_path(current_app.config.get("PAGES_PATH_PREFIX", DEFAULT_PATH_PREFIX))
    return set(prefix[:1])


def taken_slugs(*, exclude_id: Optional[str]) -> Set[str]:
    """
    Slugs already used by other pages.

    Slugs are unique across the whole tree, so "/pages/<slug>" stays
    unambiguous whichever URL mode is active when it is resolved.
    """
    query = select(Page.slug)
    if exclude_id is not None:
        query = query.where(Page.id != exclude_id)

    with db.session.no_autoflush:
        return set(db.session.execute(query).scalars())


def assign_slug(page: Page) -> str:
    """
    Regenerates page.slug from custom_slug or title.

    A derived slug that collides gets a --N suffix.
    A custom slug is taken verbatim, so a collision is an error.
    """
    base = resolve_slug(page)
    taken = taken_slugs(exclude_id=page.id) | reserved_slugs()

    if clean_override(page.custom_slug):
        if base in taken:
            raise SlugConflict(base)
        slug = base
    else:
        slug = unique_slug(base, taken)

    if slug != page.slug:
        current_app.logger.debug("Page %s slug %r -> %r", page.id, page.slug, slug)
    page.slug = slug
    return slug
