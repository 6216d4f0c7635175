"""Enum value tables.

An enum can declare which literals map to which members with the
``map_values`` decorator::

    @map_values(ACTIVE="A", INACTIVE=("I", "X"), default="UNKNOWN")
    class Status(Enum):
        ACTIVE = 1
        INACTIVE = 2
        UNKNOWN = 3

Reading ``"A"`` yields ``Status.ACTIVE``; writing ``Status.INACTIVE`` yields
``"I"`` (the first literal declared for a member). A literal matching no
declaration maps to the default member, or fails when there is none.

Enums without declarations map by member value, then by member name.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from row_map.core.cache import BuildOnceCache
from row_map.core.exceptions import SchemaError, ValueNotMappableError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=type[Enum])

_DECLARATIONS_ATTR = "__row_map_values__"


@dataclass(frozen=True)
class EnumValueTable:
    """Ordered ``(member, literal)`` associations for one enum type."""

    enum_type: type[Enum]
    pairs: tuple[tuple[Enum, Any], ...] = ()
    default: Enum | None = None
    declared: bool = False
    _literals: dict[Enum, Any] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        for member, literal in self.pairs:
            self._literals.setdefault(member, literal)

    def to_member(self, value: Any) -> Enum | None:
        """Member associated with literal *value*.

        Raises:
            ValueNotMappableError: If no association matches and there is no
                default member.
        """
        if value is None:
            return self.default
        if isinstance(value, self.enum_type):
            return value
        if self.declared:
            for member, literal in self.pairs:
                if _literal_equals(literal, value):
                    return member
        else:
            try:
                return self.enum_type(value)
            except ValueError:
                pass
            if isinstance(value, str) and value in self.enum_type.__members__:
                return self.enum_type.__members__[value]
        if self.default is not None:
            return self.default
        raise ValueNotMappableError(self.enum_type.__name__, value)

    def to_literal(self, member: Enum) -> Any:
        """Literal written for *member*; its value when undeclared."""
        if member in self._literals:
            return self._literals[member]
        return member.value


def _literal_equals(literal: Any, value: Any) -> bool:
    if isinstance(literal, bool) is not isinstance(value, bool):
        return False
    try:
        return bool(literal == value)
    except TypeError:
        return False


def map_values(default: str | None = None, **members: Any):  # type: ignore[no-untyped-def]
    """Declare literal associations for the decorated enum.

    Args:
        default: Name of the member used for unmatched literals.
        **members: Member name to one literal, or a tuple/list of literals.
    """

    def decorate(enum_type: E) -> E:
        pairs: list[tuple[str, Any]] = []
        for name, literals in members.items():
            if not isinstance(literals, (tuple, list)):
                literals = (literals,)
            pairs.extend((name, literal) for literal in literals)
        setattr(enum_type, _DECLARATIONS_ATTR, (tuple(pairs), default))
        return enum_type

    return decorate


def _build_table(enum_type: type[Enum]) -> EnumValueTable:
    declarations = getattr(enum_type, _DECLARATIONS_ATTR, None)
    if declarations is None:
        return EnumValueTable(enum_type=enum_type)

    named_pairs, default_name = declarations
    members = enum_type.__members__
    pairs: list[tuple[Enum, Any]] = []
    for name, literal in named_pairs:
        if name not in members:
            raise SchemaError(enum_type.__name__, f"no member named '{name}'")
        pairs.append((members[name], literal))
    if default_name is not None and default_name not in members:
        raise SchemaError(enum_type.__name__, f"default member '{default_name}' does not exist")

    logger.debug("Built value table for %s with %d literals", enum_type.__name__, len(pairs))
    return EnumValueTable(
        enum_type=enum_type,
        pairs=tuple(pairs),
        default=members[default_name] if default_name is not None else None,
        declared=True,
    )


_tables: BuildOnceCache[type[Enum], EnumValueTable] = BuildOnceCache(_build_table)


def get_value_table(enum_type: type[Enum]) -> EnumValueTable:
    """Return the cached value table for *enum_type*."""
    return _tables.get(enum_type)
