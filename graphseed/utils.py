# -*- coding: utf-8 -*-
"""Location: ./graphseed/utils.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Utility module for the seeding engine.
This module implements name handling, module imports and field
population helpers shared by the resolver, the cache and the loader.
"""

# Standard
import dataclasses
from functools import cache
import importlib
import logging
from types import ModuleType
from typing import Any, Mapping

# First-Party
from graphseed.errors import ConstructionError

logger = logging.getLogger(__name__)


@cache  # noqa
def import_module(mod_name: str) -> ModuleType:
    """Import a module.

    Args:
        mod_name: fully qualified module name

    Returns:
        A module.

    Examples:
        >>> import sys
        >>> import_module('sys') is sys
        True
    """
    return importlib.import_module(mod_name)


def qualify(namespace: str, name: str) -> str:
    """Prefix a name with a namespace.

    No validation of the result is performed; that belongs to the type loader.

    Args:
        namespace: the namespace, possibly empty.
        name: the short name.

    Returns:
        The qualified name.

    Examples:
        >>> qualify('app.models', 'Widget')
        'app.models.Widget'
        >>> qualify('', 'Widget')
        'Widget'
    """
    return f"{namespace}.{name}" if namespace else name


def qualified_name(cls: type) -> str:
    """Get the dotted import path of a class.

    Args:
        cls: the class.

    Returns:
        The module and qualified class name joined by a dot.

    Examples:
        >>> from collections import OrderedDict
        >>> qualified_name(OrderedDict)
        'collections.OrderedDict'
    """
    return f"{cls.__module__}.{cls.__qualname__}"


def declares_field(instance: Any, field: str) -> bool:
    """Check whether an instance declares a field.

    Plain attributes, class attributes, dataclass fields and pydantic
    model fields all count.

    Args:
        instance: the constructed instance.
        field: the field name.

    Returns:
        True if the instance declares the field.

    Examples:
        >>> from types import SimpleNamespace
        >>> declares_field(SimpleNamespace(name="x"), "name")
        True
        >>> declares_field(SimpleNamespace(), "name")
        False
    """
    if hasattr(instance, field):
        return True
    if dataclasses.is_dataclass(instance) and field in {f.name for f in dataclasses.fields(instance)}:
        return True
    model_fields = getattr(type(instance), "model_fields", None)
    return isinstance(model_fields, Mapping) and field in model_fields


def populate_fields(instance: Any, fields: Mapping[str, Any], strict: bool = False, key: Any = None) -> Any:
    """Set declared field values on a constructed instance.

    Args:
        instance: the instance to populate.
        fields: field names mapped to their constructed values.
        strict: reject fields the instance does not declare.
        key: the entity key, used in error messages.

    Returns:
        The populated instance.

    Raises:
        ConstructionError: If a field is rejected or cannot be set.

    Examples:
        >>> from types import SimpleNamespace
        >>> populate_fields(SimpleNamespace(), {"name": "bob"}).name
        'bob'
        >>> populate_fields(SimpleNamespace(), {"name": "bob"}, strict=True)
        Traceback (most recent call last):
        ...
        graphseed.errors.ConstructionError: SimpleNamespace has no field 'name'
    """
    type_name = type(instance).__name__
    for field, value in fields.items():
        if not isinstance(field, str):
            raise ConstructionError(f"Field names must be strings, got {field!r}", key=key, type_name=type_name)
        if strict and not declares_field(instance, field):
            raise ConstructionError(f"{type_name} has no field '{field}'", key=key, type_name=type_name)
        try:
            setattr(instance, field, value)
        except Exception as e:
            raise ConstructionError(f"Cannot set {type_name}.{field}: {e}", key=key, type_name=type_name) from e
    return instance
