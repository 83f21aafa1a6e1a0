"""Inline style cleaning for pasted markup."""

import logging
from dataclasses import dataclass, field

from bs4 import Tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StyleRules:
    """Denylist of inline style properties, compared case-insensitively."""
    denied_prefixes: tuple[str, ...] = ("mso-",)
    denied_properties: frozenset[str] = field(
        default_factory=lambda: frozenset({"tab-stops", "font-family"})
    )

    def denies(self, declaration: str) -> bool:
        """Return True if the declaration's property is on the denylist."""
        prop = declaration.split(":", 1)[0].strip().lower()
        return prop.startswith(self.denied_prefixes) or prop in self.denied_properties


DEFAULT_RULES = StyleRules()


def clean_style_attribute(value: str, rules: StyleRules = DEFAULT_RULES) -> str:
    """Remove unwanted declarations from a style attribute value.

    Every surviving declaration is trimmed and terminated with ';'.
    Returns an empty string when nothing survives.
    """
    kept = []
    for declaration in value.split(";"):
        declaration = declaration.strip()
        if not declaration or rules.denies(declaration):
            continue
        kept.append(declaration + ";")
    return "".join(kept)


class StyleCleaner:
    """Applies clean_style_attribute to elements of a fragment."""

    def __init__(self, rules: StyleRules = DEFAULT_RULES):
        self.rules = rules

    def clean_element(self, tag: Tag) -> bool:
        """Clean one element's style in place.

        Returns True if the style attribute was removed entirely.
        """
        value = tag.get("style")
        if value is None:
            return False
        if isinstance(value, list):
            value = " ".join(value)

        cleaned = clean_style_attribute(value, self.rules)
        if cleaned:
            tag["style"] = cleaned
            return False
        del tag["style"]
        return True

    def clean_tree(self, fragment: Tag) -> int:
        """Clean every styled element below fragment.

        Returns the number of style attributes removed.
        """
        removed = 0
        for tag in fragment.find_all(style=True):
            if self.clean_element(tag):
                removed += 1
        logger.debug("Removed %d empty style attributes", removed)
        return removed
