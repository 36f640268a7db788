from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .errors import ConfigurationError, UnknownNamespaceError

if TYPE_CHECKING:
    from .gir.repository import Repository


@dataclass(frozen=True)
class GeneratorConfig:
    namespace: str
    shared_library: str
    glib_library: Optional[str] = None
    gobject_library: Optional[str] = None

    @classmethod
    def for_namespace(cls, repository: Repository, namespace: str) -> GeneratorConfig:
        ns = repository.get_namespace(namespace)
        if ns is None:
            raise UnknownNamespaceError(namespace)
        shared_library = first_library(ns.shared_library)
        if shared_library is None:
            raise ConfigurationError(f"No shared library found for namespace: {namespace}")
        return cls(
            namespace=namespace,
            shared_library=shared_library,
            glib_library=_library_of(repository, "GLib"),
            gobject_library=_library_of(repository, "GObject"),
        )


def first_library(shared_library: Optional[str]) -> Optional[str]:
    if not shared_library:
        return None
    first = shared_library.split(",")[0].strip()
    return first or None


def _library_of(repository: Repository, namespace: str) -> Optional[str]:
    ns = repository.get_namespace(namespace)
    if ns is None:
        return None
    return first_library(ns.shared_library)
