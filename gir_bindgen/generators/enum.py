from __future__ import annotations

from typing import Iterable, List

from ..gir.model import NormalizedEnumeration
from ..naming import to_macro_case, to_pascal_case, to_valid_identifier
from ..structures import CodeWriter, SourceFile


def enum_member_name(name: str) -> str:
    return to_valid_identifier(to_macro_case(name))


class EnumGenerator:
    def __init__(self, enums: Iterable[NormalizedEnumeration]):
        self.enums = list(enums)

    def generate(self) -> SourceFile:
        source_file = SourceFile()
        for enum in self.enums:
            source_file.add_statement("\n".join(self.build_enum(enum)))
        return source_file

    def build_enum(self, enum: NormalizedEnumeration) -> List[str]:
        w = CodeWriter()
        seen = set()
        with w.block(f"export enum {to_pascal_case(enum.name)}"):
            for member in enum.members:
                name = enum_member_name(member.name)
                if name in seen:
                    continue
                seen.add(name)
                w.line(f"{name} = {member.value},")
        return w.lines
