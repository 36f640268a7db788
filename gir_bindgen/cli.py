from __future__ import annotations

import argparse
import logging
from io import StringIO
from pathlib import Path
from typing import List, Optional, Sequence

from .config import GeneratorConfig
from .errors import UnknownNamespaceError
from .generators import NamespaceGenerator
from .gir.repository import Repository
from .loader import load_repository

logger = logging.getLogger(__name__)


def main(argv: Optional[Sequence[str]] = None):
    run(build_arguments(argv))


def build_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Generate TypeScript FFI bindings from GObject-Introspection data."
    )
    p.add_argument(
        "gir_files",
        nargs="+",
        type=Path,
        metavar="GIR",
        help="Path to a .gir file. Dependencies must be passed as well.",
    )
    p.add_argument(
        "--namespace",
        dest="namespaces",
        action="append",
        help="Namespace to generate. May be repeated; defaults to every loaded namespace.",
    )
    p.add_argument(
        "--output-dir",
        type=Path,
        default=Path("generated"),
        help="Directory receiving one subdirectory per namespace.",
    )
    p.add_argument(
        "--verbose",
        action="store_true",
        help="Log every written file.",
    )
    return p.parse_args(argv)


def run(args: argparse.Namespace) -> None:
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    repository = load_repository(args.gir_files)
    for namespace in selected_namespaces(repository, args.namespaces):
        generate_namespace(repository, namespace, args.output_dir)


def selected_namespaces(repository: Repository, requested: Optional[List[str]]) -> List[str]:
    available = repository.get_namespace_names()
    if not requested:
        return available
    for name in requested:
        if name not in available:
            raise UnknownNamespaceError(name)
    return list(requested)


def generate_namespace(repository: Repository, namespace: str, output_dir: Path) -> NamespaceGenerator:
    generator = NamespaceGenerator(repository, GeneratorConfig.for_namespace(repository, namespace))
    files = generator.generate()

    namespace_dir = output_dir / namespace.lower()
    namespace_dir.mkdir(parents=True, exist_ok=True)
    for name, text in files.items():
        with OutputFile(namespace_dir / name) as f:
            f.write(text)
    return generator


class OutputFile:
    def __init__(self, output_path: Path):
        self._output_path = output_path
        self._io = StringIO()

    def __enter__(self):
        return self._io

    def __exit__(self, *exc):
        result = self._io.getvalue()
        if self._output_path.exists():
            existing_contents = self._output_path.read_text(encoding="utf-8")
            if existing_contents == result:
                logger.debug("unchanged %s", self._output_path)
                return False
        self._output_path.write_text(result, encoding="utf-8")
        logger.debug("wrote %s", self._output_path)
        return False
