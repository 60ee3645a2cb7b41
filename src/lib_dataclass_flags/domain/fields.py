"""Per-dataclass field tables.

The registrar and the loader never hold references into a dataclass's
``__dict__``: they serialise the field list once into :class:`FieldSlot`
records and read/assign through ``getattr``/``setattr`` by slot name.
"""

from __future__ import annotations

import dataclasses
import functools
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, get_type_hints

from .errors import UnresolvedAnnotationError


@dataclass(frozen=True, slots=True)
class FieldSlot:
    """One dataclass field as seen by the walkers.

    Attributes
    ----------
    name:
        Attribute name on the dataclass.
    annotation:
        Resolved type annotation (string annotations already evaluated).
    metadata:
        The field's ``metadata`` mapping; tags are looked up here.
    exported:
        ``False`` for underscore-prefixed fields, which are never inspected.
    """

    name: str
    annotation: Any
    metadata: Mapping[str, Any]
    exported: bool

    def tag(self, key: str) -> str | None:
        """Return the flag name stored under *key*, treating ``""`` as absent.

        Examples
        --------
        >>> slot = FieldSlot("msg", str, {"flag": "msg"}, True)
        >>> slot.tag("flag"), slot.tag("flagname")
        ('msg', None)
        """

        value = self.metadata.get(key)
        if not value:
            return None
        return str(value)


def is_struct_type(annotation: Any) -> bool:
    """Return ``True`` when *annotation* is a dataclass class."""

    return isinstance(annotation, type) and dataclasses.is_dataclass(annotation)


@functools.lru_cache(maxsize=None)
def field_table(struct_type: type) -> tuple[FieldSlot, ...]:
    """Return the cached :class:`FieldSlot` table of *struct_type* in declaration order."""

    hints = _resolved_hints(struct_type)
    return tuple(
        FieldSlot(
            name=item.name,
            annotation=hints.get(item.name, item.type),
            metadata=item.metadata,
            exported=not item.name.startswith("_"),
        )
        for item in dataclasses.fields(struct_type)
    )


def _resolved_hints(struct_type: type) -> dict[str, Any]:
    try:
        return get_type_hints(struct_type)
    except (NameError, TypeError) as exc:
        raise UnresolvedAnnotationError(
            f'unable to resolve field annotations of "{struct_type.__name__}": {exc}'
        ) from exc


def exported_fields(struct_type: type) -> tuple[FieldSlot, ...]:
    """Return only the public slots of *struct_type*."""

    return tuple(slot for slot in field_table(struct_type) if slot.exported)


def is_frozen(struct_type: type) -> bool:
    """Return ``True`` when *struct_type* was declared with ``frozen=True``."""

    params = getattr(struct_type, "__dataclass_params__", None)
    return bool(params is not None and params.frozen)
