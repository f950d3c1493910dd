from typing import Any, Dict
from flask import current_app
from sqlalchemy import func, select
from pagetree.extensions import db
from pagetree.models.page import Page
from pagetree.domain.invariants.page import assert_page
from pagetree.utils.transaction import transactional
from .fields import FLAG_FIELDS, OVERRIDE_FIELDS, coerce_field
from .queries import parent_map
from .slugs import assign_slug

FLAG_DEFAULTS = {"draft": False, "show_in_menu": True, "skip_to_first_child": False}


def next_position(parent_id) -> int:
    """Position just after the last sibling under parent_id."""
    query = select(func.max(Page.position))
    if parent_id is None:
        query = query.where(Page.parent_id.is_(None))
    else:
        query = query.where(Page.parent_id == parent_id)

    last = db.session.execute(query).scalar()
    return 0 if last is None else last + 1


def create_page(*, data: Dict[str, Any]) -> Page:
    """
    Create a new page.

    Edge cases handled:
    - Missing, blank or non-string title
    - Malformed flags, overrides or position
    - Unknown parent
    - Slug collisions (derived slugs get a suffix, custom slugs fail)
    """
    page = Page()
    page.title = data.get("title")
    page.parent_id = coerce_field("parent_id", data.get("parent_id"))

    for field in OVERRIDE_FIELDS:
        setattr(page, field, coerce_field(field, data.get(field)))

    for field in FLAG_FIELDS:
        setattr(page, field, coerce_field(field, data.get(field, FLAG_DEFAULTS[field])))

    position = data.get("position")
    page.position = next_position(page.parent_id) if position is None else coerce_field("position", position)

    with transactional():
        assert_page(page, parents=parent_map())
        assign_slug(page)

        db.session.add(page)
        db.session.flush()  # ensures page.id is available

        current_app.logger.info(
            "Page created id=%s slug=%s parent=%s", page.id, page.slug, page.parent_id
        )

    return page
