from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..context import GenerationContext
from ..type_mapper import TypeMapper
from .call_expression import CallArgument, CallExpressionBuilder
from .ffi_type_writer import FfiTypeWriter
from .imports import ImportsBuilder, ImportsOptions
from .method_body import MethodBodyWriter


@dataclass
class Writers:
    ffi_type_writer: FfiTypeWriter
    call_expression: CallExpressionBuilder
    method_body: MethodBodyWriter


def create_writers(
    mapper: TypeMapper,
    ctx: GenerationContext,
    shared_library: Optional[str] = None,
    glib_library: Optional[str] = None,
) -> Writers:
    ffi_type_writer = FfiTypeWriter(shared_library=shared_library, glib_library=glib_library)
    method_body = MethodBodyWriter(mapper, ctx, ffi_type_writer)
    return Writers(ffi_type_writer, method_body.call_expression, method_body)


__all__ = [
    "CallArgument",
    "CallExpressionBuilder",
    "FfiTypeWriter",
    "ImportsBuilder",
    "ImportsOptions",
    "MethodBodyWriter",
    "Writers",
    "create_writers",
]
