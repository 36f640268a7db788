from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from ..ffi_types import FfiType, MappedType, OBJECT_FFI_TYPES
from ..structures import CodeWriter
from .ffi_type_writer import FfiTypeWriter


@dataclass
class CallArgument:
    type: Union[FfiType, str]
    value: str
    optional: Optional[bool] = None


class CallExpressionBuilder:
    """
    Emits `call(lib, symbol, [args], returnType)` expressions against the
    batched FFI runtime. Argument types may be descriptors or literals that
    were already rendered (the self argument).
    """

    def __init__(self, ffi_type_writer: FfiTypeWriter):
        self.ffi_type_writer = ffi_type_writer

    def build(
        self,
        shared_library: str,
        c_identifier: str,
        args: Sequence[CallArgument],
        return_type: Union[FfiType, str],
        self_arg: Optional[CallArgument] = None,
        always_emit_optional: bool = False,
    ) -> List[str]:
        all_args = list(args)
        if self_arg is not None:
            all_args.insert(0, self_arg)

        w = CodeWriter()
        w.line("call(")
        with w.indented():
            w.line(f'"{shared_library}",')
            w.line(f'"{c_identifier}",')
            if all_args:
                w.line("[")
                with w.indented():
                    for arg in all_args:
                        w.line(self.build_argument(arg, always_emit_optional) + ",")
                w.line("],")
            else:
                w.line("[],")
            w.line(self._literal(return_type))
        w.line(")")
        return w.lines

    def build_argument(self, arg: CallArgument, always_emit_optional: bool = False) -> str:
        text = f"{{ type: {self._literal(arg.type)}, value: {arg.value}"
        if always_emit_optional:
            text += f", optional: {'true' if arg.optional else 'false'}"
        elif arg.optional:
            text += ", optional: true"
        return text + " }"

    def build_value_expression(self, value_name: str, mapped: MappedType) -> str:
        if mapped.ffi.type in OBJECT_FFI_TYPES:
            return f"({value_name} as any)?.id ?? {value_name}"
        return value_name

    def error_argument(self) -> CallArgument:
        return CallArgument(self.ffi_type_writer.create_gerror_ref_type_descriptor(), "error")

    def error_check_lines(self) -> List[str]:
        return [
            "if (error.value !== null) {",
            "    throw new NativeError(error.value);",
            "}",
        ]

    def _literal(self, t: Union[FfiType, str]) -> str:
        if isinstance(t, str):
            return t
        return self.ffi_type_writer.to_literal(t)


def assign(lines: List[str], prefix: str, suffix: str = ";") -> List[str]:
    if not lines:
        return lines
    result = list(lines)
    result[0] = prefix + result[0]
    result[-1] = result[-1] + suffix
    return result
