from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from .gir.repository import Repository

logger = logging.getLogger(__name__)


def load_repository(gir_paths: Iterable[Path]) -> Repository:
    repository = Repository()
    for path in gir_paths:
        logger.debug("reading %s", path)
        repository.load_from_xml(Path(path).read_text(encoding="utf-8"))
    repository.resolve()
    return repository
