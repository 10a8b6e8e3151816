"""Identifier casing helpers used by every template.

Three pure transforms turn a user-supplied feature name into the forms the
generated Dart code needs:

* ``to_snake``  -- file and directory names (``user_profile``)
* ``to_pascal`` -- class names (``UserProfile``)
* ``to_camel``  -- variables and fields (``userProfile``)

``to_pascal``/``to_camel`` work on words split at runs of ``_``, ``-`` or
whitespace.  ``to_snake`` works on the raw input instead, so the two can
disagree for mixed inputs such as ``"My-Name_Thing"``.
"""

from __future__ import annotations

import re

_WORD_SEPARATORS = re.compile(r"[_\-\s]+")
_UPPERCASE = re.compile(r"[A-Z]")
_DASH_OR_SPACE_RUN = re.compile(r"[-\s]+")
_LEADING_UNDERSCORE = re.compile(r"^_")


def capitalize_word(word: str) -> str:
    """Uppercase the first character and lowercase the rest (``XML`` -> ``Xml``)."""
    if not word:
        return word
    return word[0].upper() + word[1:].lower()


def split_words(text: str) -> list[str]:
    """Split *text* at runs of ``_``, ``-`` or whitespace.

    Leading or trailing separators yield empty words, which capitalize to
    empty strings and therefore vanish from the joined result.
    """
    return _WORD_SEPARATORS.split(text)


def to_pascal(text: str) -> str:
    """Convert ``user_profile`` / ``user-profile`` / ``user profile`` to ``UserProfile``."""
    if not text:
        return text
    return "".join(capitalize_word(word) for word in split_words(text))


def to_camel(text: str) -> str:
    """Convert ``user_profile`` / ``user-profile`` / ``user profile`` to ``userProfile``."""
    if not text:
        return text
    first, *rest = split_words(text)
    return first.lower() + "".join(capitalize_word(word) for word in rest)


def to_snake(text: str) -> str:
    """Convert ``UserProfile`` or ``user profile`` to ``user_profile``.

    An underscore is inserted before every uppercase letter of the raw input,
    runs of hyphens/whitespace collapse to one underscore, the result is
    lowercased and a single leading underscore is dropped.  Underscores that
    were already present are kept as they are.

    Examples::

        to_snake("UserProfile")   -> "user_profile"
        to_snake("user profile")  -> "user_profile"
        to_snake("user_profile")  -> "user_profile"
        to_snake("My-Name_Thing") -> "my__name__thing"
    """
    result = _UPPERCASE.sub(lambda match: "_" + match.group(0), text)
    result = _DASH_OR_SPACE_RUN.sub("_", result)
    return _LEADING_UNDERSCORE.sub("", result.lower())
