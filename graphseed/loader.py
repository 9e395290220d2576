# -*- coding: utf-8 -*-
"""Location: ./graphseed/loader.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Seed document loader.

Walks the node tree PyYAML composes for each document and dispatches every
node by its tag:

- ``!import location`` loads another document into the same cache, once.
- ``!namespace name`` (or ``!package name``) sets the namespace used to resolve
  unqualified type names for the rest of the current document.
- ``key: !TypeName {field: value}`` declares the entity ``key``.
- ``!TypeName key`` in a field references (or first constructs) ``key``.
- Anything untagged is plain YAML data.

A document looks like::

    - !import common/people.yaml
    - !namespace app.models
    - bob: !Person {name: Bob, pet: !Pet fido}
    - fido: !Pet
        name: Fido

Every document, top-level or imported, is walked under its own
:class:`LoadScope`, so a namespace set in one document never affects another.
"""

# Standard
from dataclasses import dataclass
import logging
from typing import Any, Optional

# Third-Party
import yaml
from yaml.constructor import SafeConstructor
from yaml.nodes import MappingNode, Node, ScalarNode, SequenceNode

# First-Party
from graphseed.cache import EntityCache
from graphseed.errors import DocumentError
from graphseed.protocols import ResourceLoader
from graphseed.utils import populate_fields

logger = logging.getLogger(__name__)

IMPORT_TAG = "!import"
NAMESPACE_TAGS = frozenset({"!namespace", "!package"})
DIRECTIVE_TAGS = NAMESPACE_TAGS | {IMPORT_TAG}
MAP_TAG = "tag:yaml.org,2002:map"
SEQ_TAG = "tag:yaml.org,2002:seq"


@dataclass
class LoadScope:
    """Per-document resolution scope.

    Attributes:
        location: the document being walked.
        namespace: the namespace unqualified type names resolve under.
    """

    location: str
    namespace: str = ""


def is_directive(node: Node) -> bool:
    """Check whether a node is an engine directive.

    Args:
        node: the YAML node.

    Returns:
        True for import and namespace nodes.

    Examples:
        >>> is_directive(yaml.compose("!import people.yaml"))
        True
        >>> is_directive(yaml.compose("people.yaml"))
        False
    """
    return node.tag in DIRECTIVE_TAGS


def is_entity(node: Node) -> bool:
    """Check whether a node carries an entity type tag.

    Args:
        node: the YAML node.

    Returns:
        True for nodes tagged with a local ``!TypeName`` tag that is not a directive.

    Examples:
        >>> is_entity(yaml.compose("!Person bob"))
        True
        >>> is_entity(yaml.compose("!!str bob"))
        False
        >>> is_entity(yaml.compose("!import people.yaml"))
        False
    """
    return node.tag.startswith("!") and not is_directive(node)


class DocumentLoader:
    """Load seed documents into an entity cache.

    Attributes:
        cache: the entity cache populated by loads.
        resources: opens document locations.
        default_namespace: the namespace every document starts in.
        strict_fields: reject fields an entity does not declare.
    """

    def __init__(self, cache: EntityCache, resources: ResourceLoader, default_namespace: str = "", strict_fields: bool = False):
        """Initialize the loader.

        Args:
            cache: the entity cache.
            resources: the resource loader.
            default_namespace: the namespace every document starts in.
            strict_fields: reject fields an entity does not declare.
        """
        self.cache = cache
        self.resources = resources
        self.default_namespace = default_namespace
        self.strict_fields = strict_fields
        self._imported: dict[str, None] = {}
        self._constructor = SafeConstructor()
        self._walking: set[Node] = set()

    @property
    def imported(self) -> list[str]:
        """Locations loaded through import directives, in import order.

        Returns:
            The imported locations.
        """
        return list(self._imported)

    def load_entities(self, *locations: str) -> None:
        """Load documents in order, each under a fresh scope.

        Args:
            locations: the document locations.
        """
        try:
            for location in locations:
                self.load_document(location)
        finally:
            self._constructor.constructed_objects.clear()

    def load_document(self, location: str) -> None:
        """Load a single document.

        Args:
            location: the document location.

        Raises:
            DocumentError: If the document is not valid YAML.
        """
        scope = LoadScope(location=location, namespace=self.default_namespace)
        logger.info("Loading seed document %s", location)
        with self.resources.open(location) as stream:
            try:
                roots = list(yaml.compose_all(stream, Loader=yaml.SafeLoader))
            except yaml.YAMLError as e:
                raise DocumentError(f"Invalid YAML: {e}", location) from e
        for root in roots:
            self._walk_root(root, scope)

    def import_document(self, location: str) -> None:
        """Load a document unless it was imported before.

        Args:
            location: the document location.
        """
        if location in self._imported:
            logger.debug("Skipping already imported document %s", location)
            return
        self._imported[location] = None
        self.load_document(location)

    def _walk_root(self, node: Node, scope: LoadScope) -> None:
        """Walk the root node of a document.

        Args:
            node: the root node.
            scope: the document scope.
        """
        if isinstance(node, SequenceNode) and node.tag == SEQ_TAG:
            for item in node.value:
                if isinstance(item, MappingNode) and item.tag == MAP_TAG:
                    self._declarations(item, scope)
                else:
                    self._value(item, scope)
        elif isinstance(node, MappingNode) and node.tag == MAP_TAG:
            self._declarations(node, scope)
        else:
            self._value(node, scope)

    def _declarations(self, node: MappingNode, scope: LoadScope) -> None:
        """Walk a mapping whose keys identify the entities declared as values.

        Args:
            node: the mapping node.
            scope: the document scope.
        """
        self._flatten(node, scope)
        for key_node, value_node in node.value:
            if is_entity(value_node):
                self.declare(self._label(key_node, scope), value_node, scope)
            else:
                # plain data is constructed for its references and directives, then dropped
                self._value(key_node, scope)
                self._value(value_node, scope)

    def declare(self, key: str, node: Node, scope: LoadScope) -> Any:
        """Construct or reuse the entity declared by a tagged node.

        Field values are constructed before the entity itself, so any entity
        they reference is cached first.

        Args:
            key: the entity identifier.
            node: the tagged node.
            scope: the document scope.

        Returns:
            The entity.
        """
        type_name = node.tag[1:]
        if isinstance(node, MappingNode):
            fields = self._fields(node, scope)
            entity = self.cache.obtain(key, type_name, namespace=scope.namespace)
            return populate_fields(entity, fields, strict=self.strict_fields, key=key)
        if isinstance(node, SequenceNode):
            return self.cache.obtain(key, type_name, node.value, namespace=scope.namespace)
        args = [node.value] if node.value else []
        return self.cache.obtain(key, type_name, args, namespace=scope.namespace)

    def _fields(self, node: MappingNode, scope: LoadScope) -> dict[str, Any]:
        """Construct the field values of a declaration.

        Directives among the fields take effect but set no field.

        Args:
            node: the field mapping.
            scope: the document scope.

        Returns:
            Field names mapped to values.
        """
        self._flatten(node, scope)
        fields = {}
        for key_node, value_node in node.value:
            name = self._value(key_node, scope)
            if is_directive(value_node):
                self._directive(value_node, scope)
                continue
            fields[name] = self._value(value_node, scope)
        return fields

    def _value(self, node: Node, scope: LoadScope) -> Any:
        """Construct the value of a node in field context.

        Args:
            node: the node.
            scope: the document scope.

        Returns:
            The constructed value.

        Raises:
            DocumentError: On an inline declaration, a recursive alias or data PyYAML cannot construct.
        """
        if is_directive(node):
            return self._directive(node, scope)
        if is_entity(node):
            if not isinstance(node, ScalarNode):
                raise DocumentError(f"Inline {node.tag} declaration has no identifier; declare it as 'key: {node.tag}' and reference it as '{node.tag} key'", scope.location)
            if not node.value:
                raise DocumentError(f"{node.tag} reference has no identifier", scope.location)
            return self.cache.obtain(node.value, node.tag[1:], namespace=scope.namespace)
        if (isinstance(node, MappingNode) and node.tag == MAP_TAG) or (isinstance(node, SequenceNode) and node.tag == SEQ_TAG):
            # an alias to an enclosing collection
            if node in self._walking:
                raise DocumentError(f"Recursive alias at line {node.start_mark.line + 1}", scope.location)
            self._walking.add(node)
            try:
                return self._collection(node, scope)
            finally:
                self._walking.discard(node)
        try:
            return self._constructor.construct_object(node, deep=True)
        except yaml.YAMLError as e:
            raise DocumentError(str(e), scope.location) from e

    def _collection(self, node: Node, scope: LoadScope) -> Any:
        if isinstance(node, MappingNode):
            self._flatten(node, scope)
            data = {}
            for key_node, value_node in node.value:
                key = self._value(key_node, scope)
                value = self._value(value_node, scope)
                try:
                    data[key] = value
                except TypeError as e:
                    raise DocumentError(f"Unhashable mapping key {key!r}", scope.location) from e
            return data
        return [self._value(item, scope) for item in node.value]

    def _directive(self, node: Node, scope: LoadScope) -> Optional[str]:
        """Apply an import or namespace directive.

        Args:
            node: the directive node.
            scope: the scope of the document containing it.

        Returns:
            None for imports, an empty string for namespace changes.

        Raises:
            DocumentError: If the directive value is not a scalar, or an import has no location.
        """
        if not isinstance(node, ScalarNode):
            raise DocumentError(f"{node.tag} expects a scalar value", scope.location)
        if node.tag == IMPORT_TAG:
            if not node.value:
                raise DocumentError(f"{IMPORT_TAG} has no location", scope.location)
            self.import_document(node.value)
            return None
        logger.debug("Namespace for %s is now '%s'", scope.location, node.value)
        scope.namespace = node.value
        return ""

    def _label(self, node: Node, scope: LoadScope) -> str:
        """Read an entity identifier from a mapping key.

        Args:
            node: the key node.
            scope: the document scope.

        Returns:
            The identifier, verbatim as written.

        Raises:
            DocumentError: If the key is not a scalar.
        """
        if not isinstance(node, ScalarNode) or not node.value:
            raise DocumentError("Entity identifiers must be non-empty scalars", scope.location)
        return node.value

    def _flatten(self, node: MappingNode, scope: LoadScope) -> None:
        """Apply ``<<`` merge keys to a mapping node in place.

        Args:
            node: the mapping node.
            scope: the document scope.

        Raises:
            DocumentError: If a merge key does not hold mappings.
        """
        try:
            self._constructor.flatten_mapping(node)
        except yaml.YAMLError as e:
            raise DocumentError(str(e), scope.location) from e
