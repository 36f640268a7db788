from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from ..context import GenerationContext
from ..naming import normalize_class_name, to_kebab_case
from ..structures import ImportDeclaration

NATIVE_MODULE = "@gtkx/native"
BATCH_MODULE = "../../batch.js"
NATIVE_ERROR_MODULE = "../../native/error.js"
NATIVE_OBJECT_MODULE = "../../native/object.js"
NATIVE_BASE_MODULE = "../../native/base.js"
REGISTRY_MODULE = "../../registry.js"
TYPES_MODULE = "../../types.js"
ENUMS_MODULE = "./enums.js"


def module_path(original_name: str) -> str:
    return f"./{to_kebab_case(original_name)}.js"


def namespace_module_path(namespace: str) -> str:
    return f"../{namespace.lower()}/index.js"


@dataclass
class ImportsOptions:
    namespace: str
    current_class_name: Optional[str] = None
    parent_class_name: Optional[str] = None
    parent_original_name: Optional[str] = None
    parent_namespace: Optional[str] = None


class ImportsBuilder:
    """
    Turns a fully populated GenerationContext into the import declarations
    of one generated file. Nothing the context did not record is imported,
    and the file's own class never is.
    """

    def __init__(self, ctx: GenerationContext, options: ImportsOptions):
        self.ctx = ctx
        self.options = options

    def collect_imports(self) -> List[ImportDeclaration]:
        ctx = self.ctx
        imports = []

        native = []
        if ctx.uses_alloc:
            native.append("alloc")
        if ctx.uses_read:
            native.append("read")
        if ctx.uses_write:
            native.append("write")
        if ctx.uses_ref:
            native.append("Ref")
        if ctx.uses_type:
            native.append("Type")
        if ctx.uses_object_id:
            native.append("type ObjectId")
        if native:
            imports.append(ImportDeclaration(NATIVE_MODULE, native))

        if ctx.uses_call:
            imports.append(ImportDeclaration(BATCH_MODULE, ["call"]))

        if ctx.uses_native_error:
            imports.append(ImportDeclaration(NATIVE_ERROR_MODULE, ["NativeError"]))

        if ctx.uses_get_native_object:
            imports.append(ImportDeclaration(NATIVE_OBJECT_MODULE, ["getNativeObject"]))

        base = []
        if ctx.uses_instantiating:
            base += ["isInstantiating", "setInstantiating"]
        if ctx.uses_native_object:
            base.append("NativeObject")
        if base:
            imports.append(ImportDeclaration(NATIVE_BASE_MODULE, base))

        registry = []
        if ctx.uses_register_native_class:
            registry.append("registerNativeClass")
        if ctx.uses_get_class_by_type_name:
            registry.append("getNativeClass")
        if registry:
            imports.append(ImportDeclaration(REGISTRY_MODULE, registry))

        types = []
        if ctx.uses_resolve_signal_meta:
            types.append("resolveSignalMeta")
        if ctx.uses_runtime_widget_meta:
            types.append("type RuntimeWidgetMeta")
        if types:
            imports.append(ImportDeclaration(TYPES_MODULE, types))

        current = self._normalized(self.options.current_class_name)
        parent = self._normalized(self.options.parent_class_name)

        enums = sorted(e for e in ctx.used_enums if e != current)
        if enums:
            imports.append(ImportDeclaration(ENUMS_MODULE, enums))

        for record in sorted(ctx.used_records):
            if record in (current, parent):
                continue
            original = ctx.record_name_to_file.get(record, record)
            imports.append(ImportDeclaration(module_path(original), [record]))

        for name, original in sorted(ctx.used_interfaces.items()):
            if name == current:
                continue
            original = ctx.interface_name_to_file.get(name, original)
            imports.append(ImportDeclaration(module_path(original), [name]))

        if (
            self.options.parent_class_name
            and self.options.parent_original_name
            and self.options.parent_namespace is None
            and self.options.parent_class_name != current
        ):
            imports.append(
                ImportDeclaration(module_path(self.options.parent_original_name), [self.options.parent_class_name])
            )

        for name, original in sorted(ctx.used_same_namespace_classes.items()):
            if name in (current, parent) or name in ctx.signal_classes or name in ctx.used_interfaces:
                continue
            imports.append(ImportDeclaration(module_path(original), [name]))

        for name, original in sorted(ctx.signal_classes.items()):
            if name in (current, parent):
                continue
            imports.append(ImportDeclaration(module_path(original), [name]))

        for namespace in sorted(self._external_namespaces()):
            imports.append(ImportDeclaration(namespace_module_path(namespace), namespace_import=namespace))

        return imports

    def _external_namespaces(self):
        namespace = self.options.namespace
        result = {usage.namespace for usage in self.ctx.used_external_types.values() if usage.namespace != namespace}
        if self.ctx.add_gio_import and namespace != "Gio":
            result.add("Gio")
        if self.ctx.uses_gobject_namespace and namespace != "GObject":
            result.add("GObject")
        parent_namespace = self.options.parent_namespace
        if parent_namespace is not None and parent_namespace != namespace:
            result.add(parent_namespace)
        return result

    def _normalized(self, name: Optional[str]) -> str:
        if not name:
            return ""
        return normalize_class_name(name, self.options.namespace)
