# -*- coding: utf-8 -*-
"""Location: ./graphseed/resources.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Resource loaders.
This module implements the loaders that open seed document locations:
from a filesystem root, from a Python package, from in-memory strings, or
from the first of several loaders that can open the location.

Locations are always relative to the loader's root. A leading slash is
accepted and ignored, so ``/people.yaml`` and ``people.yaml`` name the same
document.

Examples:
    >>> loader = MemoryResourceLoader({"people.yaml": "- bob: !Person"})
    >>> with loader.open("/people.yaml") as stream:
    ...     stream.read()
    '- bob: !Person'
"""

# Standard
from contextlib import contextmanager, ExitStack
import importlib.resources
import io
import logging
from pathlib import Path
from typing import Iterator, Mapping, Optional, TextIO, Union

# First-Party
from graphseed.errors import ResourceUnavailableError
from graphseed.protocols import ResourceLoader

logger = logging.getLogger(__name__)


def normalize_location(location: str) -> str:
    """Normalize a document location.

    Args:
        location: the location as written.

    Returns:
        The location without leading slashes.

    Examples:
        >>> normalize_location("/fixtures/people.yaml")
        'fixtures/people.yaml'
        >>> normalize_location("people.yaml")
        'people.yaml'
    """
    return location.lstrip("/")


class FileResourceLoader:
    """Open locations relative to a filesystem directory."""

    def __init__(self, root: Union[str, Path, None] = None, encoding: str = "utf-8"):
        """Initialize the loader.

        Args:
            root: the directory locations are resolved against; the working directory when omitted.
            encoding: the text encoding of documents.
        """
        self.root = Path(root) if root is not None else Path(".")
        self.encoding = encoding

    def path_for(self, location: str) -> Path:
        """Resolve a location to a path.

        Args:
            location: the document location.

        Returns:
            The path under the root.
        """
        return self.root / normalize_location(location)

    @contextmanager
    def open(self, location: str) -> Iterator[TextIO]:
        """Open a document.

        Args:
            location: the document location.

        Yields:
            The document text stream.

        Raises:
            ResourceUnavailableError: If the file cannot be opened.
        """
        path = self.path_for(location)
        try:
            stream = open(path, encoding=self.encoding)
        except OSError as e:
            raise ResourceUnavailableError(location, e.strerror or str(e)) from e
        with stream:
            yield stream

    def __repr__(self) -> str:
        return f"FileResourceLoader(root={str(self.root)!r})"


class PackageResourceLoader:
    """Open locations inside an importable Python package."""

    def __init__(self, package: str, encoding: str = "utf-8"):
        """Initialize the loader.

        Args:
            package: the dotted package name holding the documents.
            encoding: the text encoding of documents.
        """
        self.package = package
        self.encoding = encoding

    @contextmanager
    def open(self, location: str) -> Iterator[TextIO]:
        """Open a document.

        Args:
            location: the document location inside the package.

        Yields:
            The document text stream.

        Raises:
            ResourceUnavailableError: If the package or the resource cannot be opened.
        """
        try:
            resource = importlib.resources.files(self.package).joinpath(normalize_location(location))
            stream = resource.open("r", encoding=self.encoding)
        except (ModuleNotFoundError, OSError, TypeError) as e:
            raise ResourceUnavailableError(location, f"not found in package '{self.package}'") from e
        with stream:
            yield stream

    def __repr__(self) -> str:
        return f"PackageResourceLoader(package={self.package!r})"


class MemoryResourceLoader:
    """Serve documents held in memory, keyed by location."""

    def __init__(self, documents: Optional[Mapping[str, str]] = None):
        """Initialize the loader.

        Args:
            documents: locations mapped to document text.
        """
        self.documents: dict[str, str] = {normalize_location(k): v for k, v in (documents or {}).items()}

    def add(self, location: str, text: str) -> None:
        """Add or replace a document.

        Args:
            location: the document location.
            text: the document text.
        """
        self.documents[normalize_location(location)] = text

    @contextmanager
    def open(self, location: str) -> Iterator[TextIO]:
        """Open a document.

        Args:
            location: the document location.

        Yields:
            The document text stream.

        Raises:
            ResourceUnavailableError: If no document is held for the location.
        """
        try:
            text = self.documents[normalize_location(location)]
        except KeyError as e:
            raise ResourceUnavailableError(location) from e
        with io.StringIO(text) as stream:
            yield stream


class ChainResourceLoader:
    """Open each location with the first loader that can.

    Examples:
        >>> chain = ChainResourceLoader(MemoryResourceLoader(), MemoryResourceLoader({"a.yaml": "[]"}))
        >>> with chain.open("a.yaml") as stream:
        ...     stream.read()
        '[]'
    """

    def __init__(self, *loaders: ResourceLoader):
        """Initialize the chain.

        Args:
            loaders: the loaders, in priority order.
        """
        self.loaders = list(loaders)

    @contextmanager
    def open(self, location: str) -> Iterator[TextIO]:
        """Open a document.

        Args:
            location: the document location.

        Yields:
            The document text stream.

        Raises:
            ResourceUnavailableError: If no loader can open the location.
        """
        failures = []
        for loader in self.loaders:
            with ExitStack() as stack:
                try:
                    stream = stack.enter_context(loader.open(location))
                except ResourceUnavailableError as e:
                    logger.debug("%r cannot open %s: %s", loader, location, e.reason)
                    failures.append(e.reason)
                    continue
                yield stream
                return
        raise ResourceUnavailableError(location, "; ".join(failures) or "no resource loaders configured")
