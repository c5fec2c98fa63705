"""Minimal English inflection for GraphQL root field names."""

import re

from strawberry.utils.str_converters import to_camel_case

_IRREGULAR = {
    "person": "people",
    "child": "children",
}
_UNCOUNTABLE = {"information", "inventory", "metadata", "series"}


def pluralize(word: str) -> str:
    """Pluralize the last word of a camelCase identifier.

    >>> pluralize("product")
    'products'
    >>> pluralize("deliveryAddress")
    'deliveryAddresses'
    """
    head, last = _split_last_word(word)
    lowered = last.lower()

    if lowered in _UNCOUNTABLE:
        return word
    if lowered in _IRREGULAR:
        plural = _IRREGULAR[lowered]
        return head + last[0] + plural[1:]
    if re.search(r"[^aeiou]y$", lowered):
        return head + last[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", lowered):
        return head + last + "es"

    return head + last + "s"


def singularize(word: str) -> str:
    head, last = _split_last_word(word)
    lowered = last.lower()

    for singular, plural in _IRREGULAR.items():
        if lowered == plural:
            return head + last[0] + singular[1:]
    if lowered in _UNCOUNTABLE:
        return word
    if lowered.endswith("ies"):
        return head + last[:-3] + "y"
    if re.search(r"(ss|x|z|ch|sh)es$", lowered) or lowered.endswith("sses"):
        return head + last[:-2]
    if lowered.endswith("s") and not lowered.endswith("ss"):
        return head + last[:-1]

    return word


def to_pascal_case(name: str) -> str:
    camel = to_camel_case(name)
    return camel[:1].upper() + camel[1:]


def to_lower_camel_case(name: str) -> str:
    camel = to_camel_case(name)
    return camel[:1].lower() + camel[1:]


def _split_last_word(word: str) -> "tuple[str, str]":
    match = re.search(r"[A-Z][^A-Z]*$", word)
    if match is None or match.start() == 0:
        return "", word

    return word[: match.start()], word[match.start() :]
