"""Declarative field metadata.

Mapping metadata is declared with ``typing.Annotated`` markers::

    @dataclass
    class Category:
        id: Annotated[int, MapField("CategoryID")] = 0
        name: str = ""
        description: Annotated[str, MapField(nullable=True)] = ""
        item_count: Annotated[int, MapIgnore()] = 0

A MetadataResolver turns a class into an ordered list of FieldMeta. The
descriptor builder only consumes FieldMeta and never looks at annotations
itself, so alternative declaration styles plug in as resolvers.
"""

from __future__ import annotations

import dataclasses
import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Protocol, Union

from pydantic import BaseModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MapField:
    """Field-level mapping options.

    Args:
        name: Name matched against source fields; defaults to the attribute name.
        nullable: Write logically-null values as null.
        wrapper: Nullable wrapper type to store in the attribute.
    """

    name: str | None = None
    nullable: bool = False
    wrapper: type | None = None


@dataclass(frozen=True)
class MapIgnore:
    """Exclude the annotated member from mapping."""


@dataclass(frozen=True)
class FieldMeta:
    """Resolved metadata for one mappable member."""

    name: str
    attr_name: str
    slot_index: int = -1
    declared_type: Any = Any
    wrapper: type | None = None
    ignored: bool = False
    nullable: bool = False
    readonly: bool = False
    optional: bool = False
    null_value: Any = None


class MetadataResolver(Protocol):
    """Produces FieldMeta entries for a class, in declaration order."""

    def resolve(self, cls: type) -> list[FieldMeta]: ...


def is_pydantic_model(cls: type) -> bool:
    """Check if a class is a Pydantic BaseModel."""
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _split_annotation(annotation: Any) -> tuple[Any, tuple[Any, ...], bool]:
    """Return ``(base_type, markers, optional)`` for an annotation."""
    markers: tuple[Any, ...] = ()
    if typing.get_origin(annotation) is Annotated:
        markers = annotation.__metadata__
        annotation = annotation.__origin__

    optional = False
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) < len(typing.get_args(annotation)):
            optional = True
            if len(args) == 1:
                annotation = args[0]
            else:
                annotation = Union[tuple(args)]  # noqa: UP007
    if not markers and typing.get_origin(annotation) is Annotated:
        markers = annotation.__metadata__
        annotation = annotation.__origin__
    if annotation is None or annotation is type(None):
        annotation = Any
    return annotation, markers, optional


def _type_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except (NameError, TypeError, AttributeError) as e:  # unresolvable forward references
        logger.debug("Cannot resolve type hints of %r: %s", obj, e)
        return {}


def _pydantic_hints(cls: type) -> dict[str, Any]:
    """Field annotations of a Pydantic model, markers re-attached."""
    hints: dict[str, Any] = {}
    for name, info in cls.model_fields.items():  # type: ignore[attr-defined]
        if info.metadata:
            hints[name] = Annotated[(info.annotation, *info.metadata)]  # type: ignore[valid-type]
        else:
            hints[name] = info.annotation
    return hints


def _init_parameters(cls: type) -> list[str]:
    """Names of the explicit ``__init__`` parameters of a plain class."""
    if cls.__init__ is object.__init__:
        return []
    try:
        sig = inspect.signature(cls.__init__)
    except (ValueError, TypeError):
        return []
    return [
        name
        for name, param in sig.parameters.items()
        if name != "self"
        and param.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    ]


class AnnotationResolver:
    """Resolve members from annotations, dataclass fields or Pydantic fields.

    Members come first in attribute declaration order (base classes first),
    followed by public properties. Plain classes without annotations fall
    back to their ``__init__`` parameters.
    """

    def resolve(self, cls: type) -> list[FieldMeta]:
        hints = _pydantic_hints(cls) if is_pydantic_model(cls) else _type_hints(cls)
        members: list[FieldMeta] = []
        seen: set[str] = set()

        for attr_name in self._attribute_names(cls, hints):
            if attr_name.startswith("_") or attr_name in seen:
                continue
            annotation = hints.get(attr_name, Any)
            if typing.get_origin(annotation) is ClassVar:
                continue
            seen.add(attr_name)
            members.append(self._meta(attr_name, annotation, readonly=False))

        for klass in reversed(cls.__mro__):
            if klass is object or klass.__module__.startswith("pydantic"):
                continue
            for attr_name, attr in vars(klass).items():
                if not isinstance(attr, property) or attr_name.startswith("_"):
                    continue
                if attr_name in seen:
                    continue
                seen.add(attr_name)
                annotation = _type_hints(attr.fget).get("return", Any) if attr.fget else Any
                members.append(self._meta(attr_name, annotation, readonly=attr.fset is None))

        return members

    def _attribute_names(self, cls: type, hints: dict[str, Any]) -> list[str]:
        if is_pydantic_model(cls):
            return list(cls.model_fields.keys())  # type: ignore[attr-defined]
        if dataclasses.is_dataclass(cls):
            return [f.name for f in dataclasses.fields(cls)]

        names: list[str] = []
        for klass in reversed(cls.__mro__):
            if klass is object:
                continue
            names.extend(inspect.get_annotations(klass))
        if names:
            return names

        init_hints = _type_hints(cls.__init__)
        params = _init_parameters(cls)
        for name in params:
            if name in init_hints:
                hints.setdefault(name, init_hints[name])
        return params

    def _meta(self, attr_name: str, annotation: Any, *, readonly: bool) -> FieldMeta:
        declared, markers, optional = _split_annotation(annotation)
        name = attr_name
        nullable = False
        wrapper = None
        ignored = False
        for marker in markers:
            if marker is MapIgnore or isinstance(marker, MapIgnore):
                ignored = True
            elif isinstance(marker, MapField):
                name = marker.name or attr_name
                nullable = marker.nullable
                wrapper = marker.wrapper
        return FieldMeta(
            name=name,
            attr_name=attr_name,
            declared_type=declared,
            wrapper=wrapper,
            ignored=ignored,
            nullable=nullable,
            readonly=readonly,
            optional=optional,
        )
