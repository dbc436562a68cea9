# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request parameter normalization.

Every operation that takes structured parameters goes through
:func:`normalize`, which merges caller-supplied values over a registered
schema and rejects calls with missing required fields before any network
I/O happens.
"""

from __future__ import annotations

import copy
import dataclasses
import math
from collections.abc import Mapping
from typing import Any

from ..exceptions import ConfigurationError, MissingParameterError
from .schema import OPTIONAL, REQUIRED, ParameterSchema, SchemaRegistry, default_registry

REQUEST_PARAMS_FIELD = "requestParams"
"""Pseudo-field named when the whole input is unusable."""


def is_usable(value: Any) -> bool:
    """
    Check whether a caller-supplied value can override a schema default.

    ``None``, callables, NaN and the empty string are not usable. ``False``
    and ``0`` are.
    """
    if value is None or value == "" or callable(value):
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return True


def _is_scalar(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, str):
        return True
    if isinstance(value, (int, float)):
        return not (isinstance(value, float) and math.isnan(value))
    return False


def resolve_schema(
    schema: ParameterSchema | str, registry: SchemaRegistry | None = None
) -> ParameterSchema:
    """Look up ``schema`` by name unless a schema object was passed."""
    if isinstance(schema, ParameterSchema):
        return schema
    if not isinstance(schema, str):
        raise ConfigurationError(f"Invalid parameter schema reference: {schema!r}")
    return (registry if registry is not None else default_registry).get(schema)


def _as_mapping(schema: ParameterSchema, raw_input: Any) -> Mapping[str, Any]:
    if isinstance(raw_input, Mapping):
        return raw_input
    if dataclasses.is_dataclass(raw_input) and not isinstance(raw_input, type):
        return dataclasses.asdict(raw_input)
    if schema.shorthand_field is not None and _is_scalar(raw_input):
        return {schema.shorthand_field: raw_input}
    raise MissingParameterError(
        f"No request parameters provided for '{schema.name}'",
        REQUEST_PARAMS_FIELD,
        raw_input,
    )


def normalize(
    schema: ParameterSchema | str,
    raw_input: Any,
    registry: SchemaRegistry | None = None,
) -> dict[str, Any]:
    """
    Reconcile caller input with a parameter schema.

    Args:
        schema: A ParameterSchema or the name of a registered one
        raw_input: A mapping, a dataclass instance, or (for schemas with a
            single required field) a bare string or number
        registry: Registry to resolve schema names in (default registry
            when omitted)

    Returns:
        A new dict whose keys are exactly the schema's fields. Absent
        optional fields are ``""``; absent fields with a literal default
        take that default.

    Raises:
        ConfigurationError: If the schema name is not registered.
        MissingParameterError: If the input is not usable, or a required
            field has no usable value.

    Example:
        >>> normalize("StopSurveyFieldwork", "12345")
        {'SurveyId': '12345', 'TerminateRunningInterviews': ''}
    """
    resolved = resolve_schema(schema, registry)
    supplied = _as_mapping(resolved, raw_input)

    params: dict[str, Any] = {}
    for key, default in resolved.fields.items():
        value = supplied.get(key)
        if is_usable(value):
            params[key] = value
        elif default is REQUIRED:
            raise MissingParameterError(
                f"Missing required parameter '{key}'", key, value
            )
        else:
            params[key] = copy.deepcopy(default)

        if params[key] is OPTIONAL:
            params[key] = ""

    return params


__all__ = [
    "REQUEST_PARAMS_FIELD",
    "is_usable",
    "normalize",
    "resolve_schema",
]
