"""Synthetic data layer: generators, generation cache, query emulation and client.

Public exports:
- MockClient (service facade) and QueryBuilder / QueryResult
- GenerationCache, GeneratorError, CircularDependencyError
- TableRegistry, TableSpec, default_registry
"""
from .cache import CircularDependencyError, GenerationCache, GeneratorError
from .client import MockClient
from .query import APIError, QueryBuilder, QueryDescriptor, QueryResult
from .registry import TableRegistry, TableSpec, default_registry

__all__ = [
    "MockClient",
    "QueryBuilder",
    "QueryDescriptor",
    "QueryResult",
    "APIError",
    "GenerationCache",
    "GeneratorError",
    "CircularDependencyError",
    "TableRegistry",
    "TableSpec",
    "default_registry",
]
