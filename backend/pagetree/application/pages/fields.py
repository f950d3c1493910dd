from typing import Any
from pagetree.domain.invariants.exceptions import InvariantViolation
from pagetree.domain.slug import clean_override

OVERRIDE_FIELDS = ("menu_title", "browser_title", "custom_slug", "link_url")
FLAG_FIELDS = ("draft", "show_in_menu", "skip_to_first_child")


def coerce_override(field: str, value: Any):
    if value is not None and not isinstance(value, str):
        raise InvariantViolation(f"{field} must be a string or null")
    return clean_override(value)


def coerce_flag(field: str, value: Any) -> bool:
    # JSON booleans only; bool("false") would be True
    if not isinstance(value, bool):
        raise InvariantViolation(f"{field} must be true or false")
    return value


def coerce_position(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvariantViolation("position must be an integer")
    return value


def coerce_parent_id(value: Any):
    if value is not None and not isinstance(value, str):
        raise InvariantViolation("parent_id must be a string or null")
    return value or None


def coerce_field(field: str, value: Any) -> Any:
    if field in OVERRIDE_FIELDS:
        return coerce_override(field, value)
    if field in FLAG_FIELDS:
        return coerce_flag(field, value)
    if field == "position":
        return coerce_position(value)
    if field == "parent_id":
        return coerce_parent_id(value)
    return value
