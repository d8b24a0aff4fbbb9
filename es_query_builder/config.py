"""Builder configuration, validated once at construction."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from .constants import DEFAULT_WILDCARD_FIELD, ENV_PREFIX


class BuilderConfigError(ValueError):
    """Raised when the query builder configuration has an invalid shape."""


def field_set(name: str, value: Any) -> frozenset[str]:
    """Validate a collection of field names, a bare string is rejected."""
    if isinstance(value, str) or not _is_iterable(value):
        raise BuilderConfigError(f"{name} must be a collection of field names")
    fields = frozenset(value)
    if not all(isinstance(each, str) for each in fields):
        raise BuilderConfigError(f"{name} must only contain strings")
    return fields


def field_list(name: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, (str, Mapping)) or not _is_iterable(value):
        raise BuilderConfigError(f"{name} must be a list of field names")
    fields = tuple(value)
    if not fields or not all(isinstance(each, str) and each for each in fields):
        raise BuilderConfigError(f"{name} must be a non-empty list of field names")
    return fields


def wildcard_field_names(value: Any) -> Union[str, tuple[str, ...]]:
    """Validate a single wildcard field name or a list of them."""
    if isinstance(value, str):
        if not value:
            raise BuilderConfigError("wildcard_fields must not be empty")
        return value
    return field_list("wildcard_fields", value)


def nested_field_map(value: Any) -> dict[str, tuple[str, ...]]:
    """Validate a mapping of nested path to its list of field names."""
    if not isinstance(value, Mapping):
        raise BuilderConfigError("nested_fields must be a mapping")
    nested = {}
    for path, fields in value.items():
        if not isinstance(path, str) or not path:
            raise BuilderConfigError("nested_fields keys must be field names")
        nested[path] = field_list(f"nested_fields[{path!r}]", fields)
    return nested


def _is_iterable(value: Any) -> bool:
    try:
        iter(value)
    except TypeError:
        return False
    return True


def _split_env(value: str | None) -> list[str]:
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class BuilderConfig:
    query_fields: frozenset[str] = frozenset()
    filter_fields: frozenset[str] = frozenset()
    wildcard_fields: Union[str, tuple[str, ...]] = DEFAULT_WILDCARD_FIELD
    hierarchy_fields: frozenset[str] = frozenset()
    nested_fields: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize the collections and reject invalid shapes eagerly."""
        object.__setattr__(
            self, "query_fields", field_set("query_fields", self.query_fields)
        )
        object.__setattr__(
            self, "filter_fields", field_set("filter_fields", self.filter_fields)
        )
        object.__setattr__(
            self,
            "hierarchy_fields",
            field_set("hierarchy_fields", self.hierarchy_fields),
        )

        object.__setattr__(
            self, "wildcard_fields", wildcard_field_names(self.wildcard_fields)
        )
        object.__setattr__(
            self, "nested_fields", nested_field_map(self.nested_fields)
        )

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None):
        """Factory method to build a configuration from environment variables.

        Field sets are comma-separated. QUERY_BUILDER_WILDCARD_FIELDS is a
        single field unless it contains a comma, and QUERY_BUILDER_NESTED_FIELDS
        is a JSON object mapping each nested path to its list of fields.
        """
        if environ is None:
            environ = os.environ

        def getenv(name):
            return environ.get(ENV_PREFIX + name)

        wildcard_env = getenv("WILDCARD_FIELDS")
        if wildcard_env and "," in wildcard_env:
            wildcard_fields = _split_env(wildcard_env)
        else:
            wildcard_fields = (wildcard_env or "").strip() or DEFAULT_WILDCARD_FIELD

        nested_env = getenv("NESTED_FIELDS")
        nested_fields = {}
        if nested_env:
            try:
                nested_fields = json.loads(nested_env)
            except ValueError as e:
                raise BuilderConfigError(
                    f"{ENV_PREFIX}NESTED_FIELDS is not valid JSON: {e}"
                ) from e

        return cls(
            query_fields=_split_env(getenv("QUERY_FIELDS")),
            filter_fields=_split_env(getenv("FILTER_FIELDS")),
            wildcard_fields=wildcard_fields,
            hierarchy_fields=_split_env(getenv("HIERARCHY_FIELDS")),
            nested_fields=nested_fields,
        )
