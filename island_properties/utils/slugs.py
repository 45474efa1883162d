import re

from island_properties.core.errors import ValidationError

_WHITESPACE = re.compile(r"\s+")
_NOT_SLUG_CHAR = re.compile(r"[^a-z0-9-]")


def slugify(title: str) -> str:
    """
    "Market Update: Q3!!" -> "market-update-q3"

    Lowercase, whitespace runs become a hyphen, anything that is not
    a-z, 0-9 or a hyphen is dropped.
    """
    slug = _WHITESPACE.sub("-", title.strip().lower())
    return _NOT_SLUG_CHAR.sub("", slug)


def slug_for_title(title: str) -> str:
    """slugify(), refusing titles that leave nothing usable in the URL."""
    slug = slugify(title)
    if not slug.strip("-"):
        raise ValidationError("Title must contain at least one letter or digit")
    return slug
