# -*- coding: utf-8 -*-
"""Location: ./graphseed/__init__.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

graphseed - build object graphs from declarative YAML seed documents and
persist them through a processor-aware dispatch queue.
"""

__copyright__ = "Copyright 2025"
__license__ = "Apache 2.0"
__version__ = "0.1.0"
__description__ = "Declarative YAML seed data loader for object graphs"
__packages__ = ["graphseed"]

# First-Party
from graphseed.cache import EntityCache
from graphseed.dispatcher import PersistenceDispatcher
from graphseed.engine import SeedEngine
from graphseed.errors import ConstructionError, DocumentError, PersistenceError, ProcessorError, ResourceUnavailableError, SeedError, TypeNotFoundError
from graphseed.loader import DocumentLoader, LoadScope
from graphseed.models import EngineConfig, KeyMode, LoadReport, MatchMode
from graphseed.persisters import CollectingPersister, SQLAlchemyPersister
from graphseed.processors import FunctionProcessor, Processor, ProcessorRegistry, WorkQueue
from graphseed.resolver import ImportTypeLoader, RegistryTypeLoader, ScopeResolver
from graphseed.resources import ChainResourceLoader, FileResourceLoader, MemoryResourceLoader, PackageResourceLoader

__all__ = [
    "ChainResourceLoader",
    "CollectingPersister",
    "ConstructionError",
    "DocumentError",
    "DocumentLoader",
    "EngineConfig",
    "EntityCache",
    "FileResourceLoader",
    "FunctionProcessor",
    "ImportTypeLoader",
    "KeyMode",
    "LoadReport",
    "LoadScope",
    "MatchMode",
    "MemoryResourceLoader",
    "PackageResourceLoader",
    "PersistenceDispatcher",
    "PersistenceError",
    "Processor",
    "ProcessorError",
    "ProcessorRegistry",
    "RegistryTypeLoader",
    "ResourceUnavailableError",
    "ScopeResolver",
    "SeedEngine",
    "SeedError",
    "SQLAlchemyPersister",
    "TypeNotFoundError",
    "WorkQueue",
]
