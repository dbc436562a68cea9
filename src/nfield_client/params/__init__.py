# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request parameter schemas and normalization.

Importing this package registers the built-in Nfield operation schemas in
``default_registry``.
"""

from . import definitions
from .normalizer import REQUEST_PARAMS_FIELD, is_usable, normalize, resolve_schema
from .schema import (
    OPTIONAL,
    REQUIRED,
    ParameterSchema,
    SchemaRegistry,
    default_registry,
    define_schema,
)

__all__ = [
    "OPTIONAL",
    "REQUEST_PARAMS_FIELD",
    "REQUIRED",
    "ParameterSchema",
    "SchemaRegistry",
    "default_registry",
    "define_schema",
    "definitions",
    "is_usable",
    "normalize",
    "resolve_schema",
]
