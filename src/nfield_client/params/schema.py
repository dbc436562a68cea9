# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Parameter schemas and the registry that holds them.

A parameter schema maps every field an operation accepts to either:

* ``REQUIRED`` - the caller must supply a usable value
* ``OPTIONAL`` - the field may be omitted and resolves to ``""``
* any other value - a literal default used when the caller omits the field

Schemas are process-wide and read-only. They are validated once when
registered, which is also when the scalar shorthand field is computed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class _Marker:
    """Sentinel used as a schema default."""

    __slots__ = ("_name",)

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __copy__(self) -> _Marker:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> _Marker:
        return self


REQUIRED = _Marker("REQUIRED")
"""The caller must supply a usable value for this field."""

OPTIONAL = _Marker("OPTIONAL")
"""The field may be omitted; it then resolves to an empty string."""


@dataclass(frozen=True)
class ParameterSchema:
    """
    Named set of fields accepted by one kind of operation.

    Attributes:
        name: Operation kind, e.g. ``StopSurveyFieldwork``
        fields: Read-only mapping of field name to default or marker
        shorthand_field: The single REQUIRED field when there is exactly one,
            otherwise None. Only schemas with a shorthand field accept a bare
            scalar in place of a mapping.
    """

    name: str
    fields: Mapping[str, Any]
    shorthand_field: str | None = field(init=False)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ConfigurationError("Schema name must be a non-empty string")
        if not isinstance(self.fields, Mapping) or not self.fields:
            raise ConfigurationError(
                f"Schema '{self.name}' must define at least one field"
            )
        for key in self.fields:
            if not isinstance(key, str) or not key:
                raise ConfigurationError(
                    f"Schema '{self.name}' has an invalid field name: {key!r}"
                )

        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

        required = self.required_fields
        object.__setattr__(
            self, "shorthand_field", required[0] if len(required) == 1 else None
        )

    @property
    def required_fields(self) -> tuple[str, ...]:
        """Names of fields whose default is ``REQUIRED``, in definition order."""
        return tuple(k for k, v in self.fields.items() if v is REQUIRED)

    @property
    def accepts_shorthand(self) -> bool:
        return self.shorthand_field is not None


class SchemaRegistry:
    """
    Lookup table of parameter schemas by name.

    Registration is the only write operation and is expected to happen at
    import time. Registering a second, different schema under an existing
    name is a configuration error.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, ParameterSchema] = {}

    def register(self, schema: ParameterSchema) -> ParameterSchema:
        existing = self._schemas.get(schema.name)
        if existing is not None:
            if dict(existing.fields) == dict(schema.fields):
                return existing
            raise ConfigurationError(
                f"A different schema is already registered as '{schema.name}'"
            )
        self._schemas[schema.name] = schema
        logger.debug(
            f"Registered parameter schema {schema.name} "
            f"(shorthand: {schema.shorthand_field})"
        )
        return schema

    def define(self, name: str, fields: Mapping[str, Any]) -> ParameterSchema:
        """Create a schema and register it in one step."""
        return self.register(ParameterSchema(name, fields))

    def get(self, name: str) -> ParameterSchema:
        """
        Return the schema registered as ``name``.

        Raises:
            ConfigurationError: If no schema is registered for this operation.
        """
        try:
            return self._schemas[name]
        except KeyError:
            raise ConfigurationError(
                f"No default parameters registered for '{name}'"
            ) from None

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[ParameterSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def names(self) -> list[str]:
        return sorted(self._schemas)


default_registry = SchemaRegistry()
"""Registry holding the built-in Nfield operation schemas."""


def define_schema(
    name: str,
    fields: Mapping[str, Any],
    registry: SchemaRegistry | None = None,
) -> ParameterSchema:
    """Define and register a schema (in the default registry unless given)."""
    if registry is None:
        registry = default_registry
    return registry.define(name, fields)


__all__ = [
    "OPTIONAL",
    "REQUIRED",
    "ParameterSchema",
    "SchemaRegistry",
    "default_registry",
    "define_schema",
]
