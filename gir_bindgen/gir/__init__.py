from .parser import RawNamespace, parse_gir
from .repository import Repository

__all__ = [
    "RawNamespace",
    "Repository",
    "parse_gir",
]
