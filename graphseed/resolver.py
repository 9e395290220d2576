# -*- coding: utf-8 -*-
"""Location: ./graphseed/resolver.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Type resolution.
This module turns the short type names written in seed documents into
classes, honoring the current namespace scope and a prioritized fallback
chain across an explicit override loader and the ambient import loader.

Examples:
    >>> from collections import OrderedDict
    >>> resolver = ScopeResolver()
    >>> resolver.resolve("OrderedDict", "collections") is OrderedDict
    True
    >>> resolver.resolve("int") is int
    True
"""

# Standard
import logging
from typing import Callable, Iterator, Optional, Union

# First-Party
from graphseed.errors import TypeNotFoundError
from graphseed.protocols import TypeLoader
from graphseed.utils import import_module, qualified_name, qualify

logger = logging.getLogger(__name__)

BUILTIN_NAMESPACE = "builtins"


class ImportTypeLoader:
    """Ambient loader resolving dotted names through the import system.

    The longest importable module prefix of the name is imported and the
    remaining parts are looked up as attributes, so nested classes resolve
    too. Only classes are returned.

    Examples:
        >>> loader = ImportTypeLoader()
        >>> loader.load_type("collections.OrderedDict").__name__
        'OrderedDict'
        >>> loader.load_type("Widget")
        Traceback (most recent call last):
        ...
        graphseed.errors.TypeNotFoundError: 'Widget' is not an importable class name
    """

    def load_type(self, name: str) -> type:
        """Look up a class by its dotted import path.

        Args:
            name: the qualified type name.

        Returns:
            The class.

        Raises:
            TypeNotFoundError: If no module prefix imports or the target is not a class.
        """
        parts = name.split(".")
        for split in range(len(parts) - 1, 0, -1):
            module_name = ".".join(parts[:split])
            try:
                target = import_module(module_name)
            except ModuleNotFoundError as e:
                # only the module being tried, or a parent package of it, is a miss
                if e.name and e.name != module_name and not module_name.startswith(e.name + "."):
                    raise
                continue
            except (TypeError, ValueError) as e:
                raise TypeNotFoundError(name, f"'{name}' is not an importable class name") from e
            try:
                for attr in parts[split:]:
                    target = getattr(target, attr)
            except AttributeError as e:
                raise TypeNotFoundError(name, f"No class '{'.'.join(parts[split:])}' in module '{module_name}'") from e
            if not isinstance(target, type):
                raise TypeNotFoundError(name, f"'{name}' is not a class")
            return target
        raise TypeNotFoundError(name, f"'{name}' is not an importable class name")


class RegistryTypeLoader:
    """Explicit registration table mapping qualified names to classes.

    Used as the explicit override loader. Classes register under their
    import path by default, or under any name given.

    Examples:
        >>> registry = RegistryTypeLoader()
        >>> @registry.register
        ... class Widget:
        ...     pass
        >>> registry.register(Widget, name="shop.Widget") is Widget
        True
        >>> registry.load_type("shop.Widget") is Widget
        True
        >>> "shop.Widget" in registry
        True
    """

    def __init__(self, types: Optional[dict[str, type]] = None):
        """Initialize the registry.

        Args:
            types: initial qualified names mapped to classes.
        """
        self._types: dict[str, type] = dict(types or {})

    def register(self, cls: Optional[type] = None, *, name: Optional[str] = None) -> Union[type, Callable[[type], type]]:
        """Register a class, directly or as a decorator.

        Args:
            cls: the class to register.
            name: the qualified name to register it under; defaults to its import path.

        Returns:
            The class, or a decorator when called without one.
        """

        def _register(target: type) -> type:
            registered_name = name or qualified_name(target)
            self._types[registered_name] = target
            logger.debug("Registered type %s as %s", target.__name__, registered_name)
            return target

        if cls is None:
            return _register
        return _register(cls)

    def load_type(self, name: str) -> type:
        """Look up a registered class.

        Args:
            name: the qualified type name.

        Returns:
            The class.

        Raises:
            TypeNotFoundError: If nothing is registered under the name.
        """
        try:
            return self._types[name]
        except KeyError as e:
            raise TypeNotFoundError(name, f"No type registered as '{name}'") from e

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)


class ScopeResolver:
    """Resolve short type names under the current namespace scope.

    Resolution order, first success wins:

    1. override loader, namespace-scoped name
    2. override loader, unscoped name
    3. override loader, name under the fallback namespace
    4. ambient loader, namespace-scoped name
    5. ambient loader, unscoped name
    6. ambient loader, name under the fallback namespace

    Scoped steps are skipped for an empty namespace and override steps when no
    override is configured. When every step fails, the error raised is the one
    from step 5.

    Examples:
        >>> registry = RegistryTypeLoader({"app.Widget": dict})
        >>> resolver = ScopeResolver(override=registry)
        >>> resolver.resolve("Widget", "app") is dict
        True
        >>> resolver.candidates("Widget", "app")[:3]
        ['app.Widget', 'Widget', 'builtins.Widget']
    """

    def __init__(
        self,
        ambient: Optional[TypeLoader] = None,
        override: Optional[TypeLoader] = None,
        fallback_namespace: str = BUILTIN_NAMESPACE,
    ):
        """Initialize the resolver.

        Args:
            ambient: the default loader; an :class:`ImportTypeLoader` when omitted.
            override: an explicit loader consulted before the ambient one.
            fallback_namespace: the built-in namespace tried last for each loader.
        """
        self.ambient: TypeLoader = ambient if ambient is not None else ImportTypeLoader()
        self.override = override
        self.fallback_namespace = fallback_namespace

    def _steps(self, name: str, namespace: str) -> list[tuple[TypeLoader, str, bool]]:
        """Build the ordered lookup steps.

        Args:
            name: the short type name.
            namespace: the current namespace.

        Returns:
            Triples of loader, qualified name and whether the step is the ambient unscoped one.
        """
        steps: list[tuple[TypeLoader, str, bool]] = []
        for loader in (self.override, self.ambient):
            if loader is None:
                continue
            ambient = loader is self.ambient
            if namespace:
                steps.append((loader, qualify(namespace, name), False))
            steps.append((loader, name, ambient))
            steps.append((loader, qualify(self.fallback_namespace, name), False))
        return steps

    def candidates(self, name: str, namespace: str = "") -> list[str]:
        """List the qualified names tried for a type name, in order.

        Args:
            name: the short type name.
            namespace: the current namespace.

        Returns:
            The qualified names.
        """
        return [qualified for _, qualified, _ in self._steps(name, namespace)]

    def resolve(self, name: str, namespace: str = "") -> type:
        """Resolve a type name to a class.

        Args:
            name: the short type name.
            namespace: the current namespace.

        Returns:
            The class.

        Raises:
            TypeNotFoundError: If every lookup step fails.
        """
        reported: Optional[TypeNotFoundError] = None
        attempted = []
        for loader, qualified, ambient_unscoped in self._steps(name, namespace):
            attempted.append(qualified)
            try:
                cls = loader.load_type(qualified)
            except TypeNotFoundError as e:
                if ambient_unscoped:
                    reported = e
                continue
            logger.debug("Resolved type %s as %s", name, qualified)
            return cls
        raise TypeNotFoundError(name, str(reported) if reported else None, attempted=attempted) from reported
