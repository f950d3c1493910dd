from typing import Any, Dict
from flask import current_app
from pagetree.domain.invariants.page import assert_page
from pagetree.utils.transaction import transactional
from .fields import FLAG_FIELDS, OVERRIDE_FIELDS, coerce_field
from .queries import get_page, parent_map
from .slugs import assign_slug


ALLOWED_UPDATE_FIELDS = (
    "title",
    "parent_id",
    "position",
    *OVERRIDE_FIELDS,
    *FLAG_FIELDS,
)

# The slug is a function of these two fields only
SLUG_FIELDS = {"title", "custom_slug"}


def update_page(*, page_id: str, data: Dict[str, Any]):
    """
    Update mutable fields on a page.

    Design rules:
    - Only whitelisted fields are mutable
    - Malformed values are rejected, never coerced
    - No silent no-op updates
    - Invariants always revalidated
    - Slug regenerated when title or custom_slug change
    """
    page = get_page(page_id)

    changed_fields: list[str] = []

    with transactional():
        for field in ALLOWED_UPDATE_FIELDS:
            if field not in data:
                continue
            value = coerce_field(field, data[field])
            if getattr(page, field) != value:
                setattr(page, field, value)
                changed_fields.append(field)

        if not changed_fields:
            # Explicitly fail instead of silently succeeding
            raise ValueError("No valid fields provided for update")

        assert_page(page, parents=parent_map())

        if SLUG_FIELDS.intersection(changed_fields):
            assign_slug(page)

        current_app.logger.info(
            "Page updated id=%s fields=%s", page.id, ",".join(changed_fields)
        )

    return page
