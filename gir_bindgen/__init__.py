from .config import GeneratorConfig
from .errors import (BindgenError, ConfigurationError, GirParseError,
                     RepositoryNotResolvedError, UnknownNamespaceError)
from .generators import NamespaceGenerator
from .gir import Repository
from .loader import load_repository

__version__: str = "0.1.0"

__all__ = [
    "BindgenError",
    "ConfigurationError",
    "GeneratorConfig",
    "GirParseError",
    "NamespaceGenerator",
    "Repository",
    "RepositoryNotResolvedError",
    "UnknownNamespaceError",
    "load_repository",
]
