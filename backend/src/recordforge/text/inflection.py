"""Inflection helpers for class, table and column names."""

import re

_IRREGULAR_PLURALS = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
}


def underscorize(name: str) -> str:
    """Convert ``CamelCase`` or ``camelCase`` to ``snake_case``."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def humanize(name: str) -> str:
    """Convert a column name to a display label, e.g. ``email_address`` -> ``Email Address``."""
    words = underscorize(name).split("_")
    return " ".join(w.capitalize() for w in words if w)


def pluralize(word: str) -> str:
    """Return the English plural of a single lower-case word."""
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if re.search(r"[^aeiou]y$", word):
        return word[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", word):
        return word + "es"
    return word + "s"


def tablize(class_name: str) -> str:
    """Convert a class name to its table name, e.g. ``UserAccount`` -> ``user_accounts``."""
    words = underscorize(class_name).split("_")
    words[-1] = pluralize(words[-1])
    return "_".join(words)


def inflect_on_quantity(quantity: int | float, singular: str, plural: str) -> str:
    """Pick the singular form for a quantity of exactly one, the plural otherwise."""
    if abs(quantity) == 1:
        return singular
    return plural
