from __future__ import annotations

import json
from typing import Iterable, Optional

from ..gir.model import NormalizedConstant
from ..structures import SourceFile


def format_constant_value(constant: NormalizedConstant) -> Optional[str]:
    t = constant.type
    if t.is_string():
        return json.dumps(constant.value)
    if t.is_boolean():
        return "true" if constant.value.lower() in ("true", "1") else "false"
    if t.is_numeric():
        return constant.value
    return None


class ConstantGenerator:
    def __init__(self, constants: Iterable[NormalizedConstant]):
        self.constants = list(constants)

    def generate(self) -> SourceFile:
        lines = []
        for constant in self.constants:
            value = format_constant_value(constant)
            if value is not None:
                lines.append(f"export const {constant.name} = {value};")
        source_file = SourceFile()
        if lines:
            source_file.add_statement("\n".join(lines))
        return source_file
