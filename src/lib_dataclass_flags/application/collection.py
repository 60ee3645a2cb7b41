"""Element-wise flag-value adapter for list fields.

Purpose
-------
Give every list of singly-adaptable elements a flag without registering one
adapter per list type. :class:`ListValue` keeps one element adapter purely for
its parse/format behaviour and stores the decoded elements.

Text format
-----------
One line of comma-separated element texts. Elements containing a comma, a
double quote or a line break, or with surrounding whitespace, are wrapped in
double quotes with embedded quotes doubled. An empty text is an empty list.
"""

from __future__ import annotations

import copy
import csv
from typing import Any, Iterable

from ..domain.errors import ConversionError
from ..domain.shapes import type_of_value
from .ports import FlagValue


def split_list(text: str) -> list[str]:
    """Split a quote-aware comma-separated line.

    Examples
    --------
    >>> split_list('a,"b,c","say ""hi"" now"')
    ['a', 'b,c', 'say "hi" now']
    >>> split_list("")
    []
    """

    if not text:
        return []
    try:
        rows = list(csv.reader([text], strict=True))
    except csv.Error as exc:
        raise ConversionError(f'parsing list "{text}": {exc}') from exc
    if len(rows) != 1:
        raise ConversionError(f'parsing list "{text}": expected a single line')
    return rows[0]


def join_list(items: Iterable[str]) -> str:
    """Inverse of :func:`split_list`.

    Examples
    --------
    >>> join_list(["a", "b,c", ' padded', 'say "hi" now'])
    'a,"b,c"," padded","say ""hi"" now"'
    >>> join_list([""])
    '""'
    """

    texts = list(items)
    if texts == [""]:
        return '""'
    return ",".join(_quote(text) for text in texts)


def _quote(text: str) -> str:
    if text and (text != text.strip() or any(char in text for char in ',"\r\n')):
        return '"' + text.replace('"', '""') + '"'
    return text


class ListValue:
    """Flag value holding an ordered list decoded through an element adapter.

    Why
    ----
    Lists reuse the scalar adapters: each token is fed to the element
    adapter's ``set`` and the decoded value copied out.

    What
    ----
    ``set`` builds a complete new list before replacing the stored one, so a
    bad token leaves the previous contents untouched. Repeated occurrences of
    the flag overwrite rather than append.

    Examples
    --------
    >>> from lib_dataclass_flags.adapters.values.scalars import IntValue
    >>> values = ListValue(IntValue(0))
    >>> values.set("100,15,20")
    >>> values.get(), str(values)
    ([100, 15, 20], '100,15,20')
    """

    def __init__(self, element: FlagValue, values: Iterable[Any] = (), texts: Iterable[str] = ()) -> None:
        self._element = element
        self._values = list(values)
        self._texts = list(texts)

    @property
    def element(self) -> FlagValue:
        """The adapter used to parse and format single elements."""

        return self._element

    @property
    def element_type(self) -> Any:
        """Annotation of the decoded elements, ``None`` when it must be inferred per value."""

        return getattr(self._element, "value_type", None)

    def set(self, text: str) -> None:
        values: list[Any] = []
        texts: list[str] = []
        for token in split_list(text):
            try:
                self._element.set(token)
            except ConversionError as exc:
                raise type(exc)(f'invalid list element "{token}": {exc}') from exc
            except ValueError as exc:
                raise ConversionError(f'invalid list element "{token}": {exc}') from exc
            # element adapters may hand out their live storage
            values.append(copy.copy(self._element.get()))
            texts.append(str(self._element))
        self._values, self._texts = values, texts

    def get(self) -> list[Any]:
        return list(self._values)

    def value_type_of(self, item: Any) -> Any:
        """Return the annotation to convert *item* from when loading."""

        return self.element_type or type_of_value(item)

    def __str__(self) -> str:
        return join_list(self._texts)

    def __repr__(self) -> str:
        return f"ListValue({self._values!r})"
