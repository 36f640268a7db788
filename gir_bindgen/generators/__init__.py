from .class_generator import ClassGenerationResult, ClassGenerator
from .constant import ConstantGenerator
from .constructor import ConstructorBuilder
from .enum import EnumGenerator
from .function import FunctionGenerator
from .interface import InterfaceGenerator
from .method import MethodBuilder
from .namespace import NamespaceGenerator
from .record import RecordGenerator
from .signal import SignalBuilder
from .static_function import StaticFunctionBuilder
from .widget_meta import (ClassMetaBuilder, CodegenControllerMeta,
                          CodegenWidgetMeta, WidgetMetaBuilder)

__all__ = [
    "ClassGenerationResult",
    "ClassGenerator",
    "ClassMetaBuilder",
    "CodegenControllerMeta",
    "CodegenWidgetMeta",
    "ConstantGenerator",
    "ConstructorBuilder",
    "EnumGenerator",
    "FunctionGenerator",
    "InterfaceGenerator",
    "MethodBuilder",
    "NamespaceGenerator",
    "RecordGenerator",
    "SignalBuilder",
    "StaticFunctionBuilder",
    "WidgetMetaBuilder",
]
