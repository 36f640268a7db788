from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..context import GenerationContext
from ..gir.model import (NormalizedClass, NormalizedProperty,
                         parse_qualified_name, qualified_name)
from ..gir.repository import Repository
from ..naming import normalize_class_name, to_camel_case, to_kebab_case
from ..structures import (ClassStructure, PropertyStructure, indent_ts_code,
                          write_const_string_array, write_object_or_empty)
from .signal import SignalMetaEntry

WIDGET_TYPE = qualified_name("Gtk", "Widget")
EVENT_CONTROLLER_TYPE = qualified_name("Gtk", "EventController")

CONTAINER_METHODS = ("append", "set_child")


@dataclass
class CodegenWidgetMeta:
    class_name: str
    namespace: str
    jsx_name: str
    module_path: str
    slots: List[str] = field(default_factory=list)
    prop_names: List[str] = field(default_factory=list)
    signal_names: List[str] = field(default_factory=list)
    parent_class_name: Optional[str] = None
    parent_namespace: Optional[str] = None
    is_container: bool = False


@dataclass
class CodegenControllerMeta:
    class_name: str
    namespace: str
    jsx_name: str
    prop_names: List[str] = field(default_factory=list)
    signal_names: List[str] = field(default_factory=list)
    parent_class_name: Optional[str] = None
    parent_namespace: Optional[str] = None
    abstract: bool = False


def is_widget_type(type_name: str, repository: Repository, namespace: str) -> bool:
    name = type_name if "." in type_name else qualified_name(namespace, type_name)
    if name == WIDGET_TYPE:
        return True
    cls = repository.resolve_class(name)
    return cls is not None and cls.is_subclass_of(WIDGET_TYPE)


def is_container_method(name: str) -> bool:
    return name in CONTAINER_METHODS


class ClassMetaBuilder:
    """
    Classifies a class for the UI-binding layer and computes the metadata
    it needs: container-ness, widget slots, settable properties.
    """

    def __init__(self, cls: NormalizedClass, repository: Repository, namespace: str):
        self.cls = cls
        self.repository = repository
        self.namespace = namespace

    def is_widget(self) -> bool:
        return self.cls.is_subclass_of(WIDGET_TYPE)

    def is_event_controller(self) -> bool:
        return self.cls.is_subclass_of(EVENT_CONTROLLER_TYPE)

    def is_container(self) -> bool:
        if any(is_container_method(m.name) for m in self.cls.get_all_methods()):
            return True
        return any(
            p.writable and self._is_widget_property(p) for p in self.cls.get_all_properties()
        )

    def slots(self) -> List[str]:
        return [to_camel_case(p.name) for p in self.cls.properties if p.writable and self._is_widget_property(p)]

    def prop_names(self) -> List[str]:
        return [to_camel_case(p.name) for p in self.direct_properties() if p.writable]

    def signal_names(self) -> List[str]:
        return [s.name for s in self.cls.signals]

    def direct_properties(self) -> List[NormalizedProperty]:
        """
        Own properties plus those of directly implemented interfaces that no
        ancestor already exposes.
        """
        parent = self.cls.get_parent()
        inherited = {p.name for p in parent.get_all_properties()} if parent is not None else set()
        if parent is not None:
            for iface_name in parent.get_all_implemented_interfaces():
                iface = self.repository.resolve_interface(iface_name)
                if iface is not None:
                    inherited.update(p.name for p in iface.properties)

        result = []
        seen = set()
        candidates = list(self.cls.properties)
        for iface_name in self.cls.implements:
            iface = self.repository.resolve_interface(iface_name)
            if iface is not None:
                candidates.extend(iface.properties)
        for prop in candidates:
            if prop.name in seen or prop.name in inherited:
                continue
            seen.add(prop.name)
            result.append(prop)
        return result

    def parent_info(self) -> Tuple[Optional[str], Optional[str]]:
        parent = self.cls.parent
        if not parent:
            return None, None
        if "." in parent:
            parent_namespace, name = parse_qualified_name(parent)
        else:
            parent_namespace, name = self.namespace, parent
        return normalize_class_name(name, parent_namespace), parent_namespace

    def build_codegen_widget_meta(self) -> Optional[CodegenWidgetMeta]:
        if not self.is_widget():
            return None

        class_name = normalize_class_name(self.cls.name, self.namespace)
        parent_class_name, parent_namespace = self.parent_info()
        return CodegenWidgetMeta(
            class_name=class_name,
            namespace=self.namespace,
            jsx_name=f"{self.namespace}{class_name}",
            module_path=f"./{to_kebab_case(self.cls.name)}.js",
            slots=self.slots(),
            prop_names=self.prop_names(),
            signal_names=self.signal_names(),
            parent_class_name=parent_class_name,
            parent_namespace=parent_namespace,
            is_container=self.is_container(),
        )

    def build_codegen_controller_meta(self) -> Optional[CodegenControllerMeta]:
        if not self.is_event_controller():
            return None

        class_name = normalize_class_name(self.cls.name, self.namespace)
        parent_class_name, parent_namespace = self.parent_info()
        return CodegenControllerMeta(
            class_name=class_name,
            namespace=self.namespace,
            jsx_name=f"{self.namespace}{class_name}",
            prop_names=self.prop_names(),
            signal_names=self.signal_names(),
            parent_class_name=parent_class_name,
            parent_namespace=parent_namespace,
            abstract=self.cls.abstract,
        )

    def _is_widget_property(self, prop: NormalizedProperty) -> bool:
        return is_widget_type(prop.type.name, self.repository, self.namespace)


class WidgetMetaBuilder:
    def __init__(self, cls: NormalizedClass, repository: Repository, ctx: GenerationContext, namespace: str):
        self.ctx = ctx
        self.meta = ClassMetaBuilder(cls, repository, namespace)
        self.signal_entries: List[SignalMetaEntry] = []

    def set_signal_entries(self, entries: Sequence[SignalMetaEntry]) -> None:
        self.signal_entries = list(entries)

    def is_widget(self) -> bool:
        return self.meta.is_widget()

    def add_to_class(self, class_structure: ClassStructure) -> bool:
        if not self.is_widget():
            return False

        self.ctx.uses_runtime_widget_meta = True
        class_structure.members.insert(
            0,
            PropertyStructure(
                name="WIDGET_META",
                type="RuntimeWidgetMeta",
                initializer=self.write_initializer(),
                is_static=True,
                is_readonly=True,
            ),
        )
        return True

    def write_initializer(self) -> str:
        signals = write_object_or_empty(
            [
                (entry.name, f"{{ params: [{', '.join(entry.params)}], returnType: {entry.return_type} }}")
                for entry in self.signal_entries
            ]
        )
        entries = [
            f"isContainer: {'true' if self.meta.is_container() else 'false'},",
            f"slots: {write_const_string_array(self.meta.slots())},",
            f"propNames: {write_const_string_array(self.meta.prop_names())},",
            f"signals: {signals},",
        ]
        return "{\n" + indent_ts_code("\n".join(entries), 1) + "\n}"

    def build_codegen_widget_meta(self) -> Optional[CodegenWidgetMeta]:
        return self.meta.build_codegen_widget_meta()
