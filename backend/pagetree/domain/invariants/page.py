from pagetree.domain.slug import clean_override, is_url_safe
from .exceptions import InvariantViolation


def assert_page(page, parents=None):
    """
    Validates a page before it is written.

    parents maps page id -> parent_id for the stored tree and is used
    to reject parent assignments that would create a cycle.
    """
    if not isinstance(page.title, str) or not page.title.strip():
        raise InvariantViolation("Page title is required.")

    custom_slug = clean_override(page.custom_slug)
    if custom_slug and not is_url_safe(custom_slug):
        raise InvariantViolation(
            f"Custom slug is not URL-safe: {custom_slug!r}"
        )

    if page.position is not None and page.position < 0:
        raise InvariantViolation(
            f"Page position must not be negative: {page.position}"
        )

    assert_parent(page, parents or {})


def assert_parent(page, parents):
    parent_id = page.parent_id
    if parent_id is None:
        return

    if page.id is not None and parent_id == page.id:
        raise InvariantViolation("A page cannot be its own parent.")

    if parent_id not in parents:
        raise InvariantViolation(f"Parent page does not exist: {parent_id}")

    seen = set()
    while parent_id is not None and parent_id not in seen:
        if parent_id == page.id:
            raise InvariantViolation(
                "A page cannot be moved under one of its own descendants."
            )
        seen.add(parent_id)
        parent_id = parents.get(parent_id)
