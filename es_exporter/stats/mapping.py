"""Build statistics dataclasses from decoded Elasticsearch JSON.

Dataclass field names follow the JSON keys. A field may override its key
(``key``) or supply a custom loader (``load``) through field metadata; nested
dataclass fields are built recursively. Absent or null keys keep the field
default, which is how an unreported value stays ``None``.
"""
from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable, Mapping
from functools import lru_cache
from typing import Any, TypeVar

from ..utils.exceptions import SnapshotError

T = TypeVar("T")


def stat(key: str | None = None, *, load: Callable[[Any], Any] | None = None, default: Any = None) -> Any:
    """Optional scalar / sub-structure field (default ``None``)."""
    metadata: dict[str, Any] = {}
    if key is not None:
        metadata["key"] = key
    if load is not None:
        metadata["load"] = load
    return dataclasses.field(default=default, metadata=metadata)


def section(factory: Callable[[], Any], key: str | None = None) -> Any:
    """Nested block that is always present; missing JSON leaves every leaf unreported."""
    metadata = {"key": key} if key is not None else {}
    return dataclasses.field(default_factory=factory, metadata=metadata)


def collection(load: Callable[[Any], list], key: str | None = None) -> Any:
    metadata: dict[str, Any] = {"load": load}
    if key is not None:
        metadata["key"] = key
    return dataclasses.field(default_factory=list, metadata=metadata)


@lru_cache(maxsize=None)
def _hints(cls: type) -> dict[str, Any]:
    return typing.get_type_hints(cls)


def _nested_dataclass(hint: Any) -> type | None:
    for candidate in typing.get_args(hint) or (hint,):
        if isinstance(candidate, type) and dataclasses.is_dataclass(candidate):
            return candidate
    return None


def _require_mapping(cls: type, data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise SnapshotError(f"{cls.__name__}: expected a JSON object, got {type(data).__name__}")
    return data


def from_mapping(cls: type[T], data: Any) -> T:
    """Instantiate ``cls`` from ``data``."""
    data = _require_mapping(cls, data)
    hints = _hints(cls)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(cls):  # type: ignore[arg-type]
        key = f.metadata.get("key", f.name)
        raw = data.get(key)
        if raw is None:
            continue
        loader = f.metadata.get("load")
        if loader is not None:
            kwargs[f.name] = loader(raw)
            continue
        nested = _nested_dataclass(hints[f.name])
        kwargs[f.name] = from_mapping(nested, raw) if nested is not None else raw
    return cls(**kwargs)


def optional(cls: type[T], data: Any) -> T | None:
    return None if data is None else from_mapping(cls, data)


def named_entries(cls: type[T], name_field: str = "name") -> Callable[[Any], list[T]]:
    """Loader for ``{name: {...}}`` objects; the key becomes ``name_field``."""

    def _load(raw: Any) -> list[T]:
        entries = _require_mapping(cls, raw)
        out = []
        for name, body in entries.items():
            item = dict(_require_mapping(cls, body or {}))
            item[name_field] = name
            out.append(from_mapping(cls, item))
        return out

    return _load


def listed_entries(cls: type[T]) -> Callable[[Any], list[T]]:
    """Loader for JSON arrays of objects."""

    def _load(raw: Any) -> list[T]:
        if not isinstance(raw, list):
            raise SnapshotError(f"{cls.__name__}: expected a JSON array, got {type(raw).__name__}")
        return [from_mapping(cls, item) for item in raw]

    return _load


__all__ = [
    "stat",
    "section",
    "collection",
    "from_mapping",
    "optional",
    "named_entries",
    "listed_entries",
]
