from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import List, Optional

from ..errors import GirParseError

CORE_NAMESPACE = "http://www.gtk.org/introspection/core/1.0"
C_NAMESPACE = "http://www.gtk.org/introspection/c/1.0"
GLIB_NAMESPACE = "http://www.gtk.org/introspection/glib/1.0"
GIR_NAMESPACES = {"": CORE_NAMESPACE, "c": C_NAMESPACE, "glib": GLIB_NAMESPACE}

CONTAINER_TYPES = {
    "GLib.List": "glist",
    "GLib.SList": "gslist",
    "GLib.HashTable": "hashtable",
    "GLib.PtrArray": "ptrarray",
    "GLib.Array": "garray",
}


@dataclass
class RawType:
    name: str
    c_type: Optional[str] = None
    is_array: bool = False
    element_type: Optional[RawType] = None
    container_type: Optional[str] = None
    type_parameters: List[RawType] = field(default_factory=list)
    length: Optional[int] = None
    zero_terminated: Optional[bool] = None
    fixed_size: Optional[int] = None
    transfer_ownership: Optional[str] = None
    nullable: bool = False


@dataclass
class RawParameter:
    name: str
    type: RawType
    direction: str = "in"
    caller_allocates: bool = False
    nullable: bool = False
    optional: bool = False
    scope: Optional[str] = None
    closure: Optional[int] = None
    destroy: Optional[int] = None
    transfer_ownership: Optional[str] = None


@dataclass
class RawCallable:
    name: str
    c_identifier: str
    return_type: RawType
    parameters: List[RawParameter] = field(default_factory=list)
    throws: bool = False
    finish_func: Optional[str] = None
    shadows: Optional[str] = None
    shadowed_by: Optional[str] = None


@dataclass
class RawCallback:
    name: str
    c_type: Optional[str]
    return_type: RawType
    parameters: List[RawParameter] = field(default_factory=list)
    throws: bool = False


@dataclass
class RawProperty:
    name: str
    type: RawType
    readable: bool = True
    writable: bool = False
    construct_only: bool = False
    getter: Optional[str] = None
    setter: Optional[str] = None


@dataclass
class RawSignal:
    name: str
    when: str = "last"
    return_type: Optional[RawType] = None
    parameters: List[RawParameter] = field(default_factory=list)


@dataclass
class RawField:
    name: str
    type: RawType
    writable: bool = False
    readable: bool = True
    private: bool = False


@dataclass
class RawClass:
    name: str
    c_type: Optional[str]
    parent: Optional[str] = None
    abstract: bool = False
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    c_symbol_prefix: Optional[str] = None
    fundamental: bool = False
    ref_func: Optional[str] = None
    unref_func: Optional[str] = None
    implements: List[str] = field(default_factory=list)
    methods: List[RawCallable] = field(default_factory=list)
    constructors: List[RawCallable] = field(default_factory=list)
    functions: List[RawCallable] = field(default_factory=list)
    properties: List[RawProperty] = field(default_factory=list)
    signals: List[RawSignal] = field(default_factory=list)
    fields: List[RawField] = field(default_factory=list)


@dataclass
class RawInterface:
    name: str
    c_type: Optional[str]
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    prerequisites: List[str] = field(default_factory=list)
    methods: List[RawCallable] = field(default_factory=list)
    functions: List[RawCallable] = field(default_factory=list)
    properties: List[RawProperty] = field(default_factory=list)
    signals: List[RawSignal] = field(default_factory=list)


@dataclass
class RawRecord:
    name: str
    c_type: Optional[str]
    opaque: bool = False
    disguised: bool = False
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    is_gtype_struct_for: Optional[str] = None
    copy_function: Optional[str] = None
    free_function: Optional[str] = None
    fields: List[RawField] = field(default_factory=list)
    methods: List[RawCallable] = field(default_factory=list)
    constructors: List[RawCallable] = field(default_factory=list)
    functions: List[RawCallable] = field(default_factory=list)


@dataclass
class RawEnumerationMember:
    name: str
    value: str
    c_identifier: Optional[str] = None


@dataclass
class RawEnumeration:
    name: str
    c_type: Optional[str]
    glib_type_name: Optional[str] = None
    glib_get_type: Optional[str] = None
    members: List[RawEnumerationMember] = field(default_factory=list)


@dataclass
class RawConstant:
    name: str
    c_type: Optional[str]
    value: str
    type: RawType


@dataclass
class RawNamespace:
    name: str
    version: str
    shared_library: str = ""
    c_prefix: str = ""
    classes: List[RawClass] = field(default_factory=list)
    interfaces: List[RawInterface] = field(default_factory=list)
    records: List[RawRecord] = field(default_factory=list)
    enumerations: List[RawEnumeration] = field(default_factory=list)
    bitfields: List[RawEnumeration] = field(default_factory=list)
    callbacks: List[RawCallback] = field(default_factory=list)
    functions: List[RawCallable] = field(default_factory=list)
    constants: List[RawConstant] = field(default_factory=list)


def parse_gir(xml_text: str) -> RawNamespace:
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise GirParseError(f"Failed to parse GIR file: {e}") from e

    if root.tag != f"{{{CORE_NAMESPACE}}}repository":
        raise GirParseError("Failed to parse GIR file: missing repository or namespace element")
    element = root.find("./namespace", GIR_NAMESPACES)
    if element is None:
        raise GirParseError("Failed to parse GIR file: missing repository or namespace element")

    c_prefix = element.get(c_attr("identifier-prefixes"))
    if c_prefix is None:
        c_prefix = element.get(c_attr("prefix"), "")

    return RawNamespace(
        name=element.get("name"),
        version=element.get("version", ""),
        shared_library=element.get("shared-library", ""),
        c_prefix=c_prefix,
        classes=[parse_class(e) for e in element.findall("./class", GIR_NAMESPACES)],
        interfaces=[parse_interface(e) for e in element.findall("./interface", GIR_NAMESPACES)],
        records=[parse_record(e) for e in element.findall("./record", GIR_NAMESPACES)],
        enumerations=[parse_enumeration(e) for e in element.findall("./enumeration", GIR_NAMESPACES)],
        bitfields=[parse_enumeration(e) for e in element.findall("./bitfield", GIR_NAMESPACES)],
        callbacks=[parse_callback(e) for e in introspectable(element, "./callback")],
        functions=[parse_callable(e) for e in introspectable(element, "./function")],
        constants=[parse_constant(e) for e in element.findall("./constant", GIR_NAMESPACES)],
    )


def c_attr(name: str) -> str:
    return f"{{{C_NAMESPACE}}}{name}"


def glib_attr(name: str) -> str:
    return f"{{{GLIB_NAMESPACE}}}{name}"


def introspectable(element: ET.Element, path: str) -> List[ET.Element]:
    return [e for e in element.findall(path, GIR_NAMESPACES) if e.get("introspectable") != "0"]


def parse_class(element: ET.Element) -> RawClass:
    return RawClass(
        name=element.get("name"),
        c_type=element.get(c_attr("type"), element.get(glib_attr("type-name"))),
        parent=element.get("parent"),
        abstract=element.get("abstract") == "1",
        glib_type_name=element.get(glib_attr("type-name")),
        glib_get_type=element.get(glib_attr("get-type")),
        c_symbol_prefix=element.get(c_attr("symbol-prefix")),
        fundamental=element.get(glib_attr("fundamental")) == "1",
        ref_func=element.get(glib_attr("ref-func")),
        unref_func=element.get(glib_attr("unref-func")),
        implements=[e.get("name") for e in element.findall("./implements", GIR_NAMESPACES)],
        methods=[parse_callable(e) for e in introspectable(element, "./method")],
        constructors=[parse_callable(e) for e in introspectable(element, "./constructor")],
        functions=[parse_callable(e) for e in introspectable(element, "./function")],
        properties=[parse_property(e) for e in element.findall("./property", GIR_NAMESPACES)],
        signals=[parse_signal(e) for e in element.findall("./glib:signal", GIR_NAMESPACES)],
        fields=parse_fields(element),
    )


def parse_interface(element: ET.Element) -> RawInterface:
    return RawInterface(
        name=element.get("name"),
        c_type=element.get(c_attr("type"), element.get(glib_attr("type-name"))),
        glib_type_name=element.get(glib_attr("type-name")),
        glib_get_type=element.get(glib_attr("get-type")),
        prerequisites=[e.get("name") for e in element.findall("./prerequisite", GIR_NAMESPACES)],
        methods=[parse_callable(e) for e in introspectable(element, "./method")],
        functions=[parse_callable(e) for e in introspectable(element, "./function")],
        properties=[parse_property(e) for e in element.findall("./property", GIR_NAMESPACES)],
        signals=[parse_signal(e) for e in element.findall("./glib:signal", GIR_NAMESPACES)],
    )


def parse_record(element: ET.Element) -> RawRecord:
    return RawRecord(
        name=element.get("name"),
        c_type=element.get(c_attr("type")),
        opaque=element.get("opaque") == "1",
        disguised=element.get("disguised") == "1",
        glib_type_name=element.get(glib_attr("type-name")),
        glib_get_type=element.get(glib_attr("get-type")),
        is_gtype_struct_for=element.get(glib_attr("is-gtype-struct-for")),
        copy_function=element.get("copy-function"),
        free_function=element.get("free-function"),
        fields=parse_fields(element),
        methods=[parse_callable(e) for e in introspectable(element, "./method")],
        constructors=[parse_callable(e) for e in introspectable(element, "./constructor")],
        functions=[parse_callable(e) for e in introspectable(element, "./function")],
    )


def parse_fields(element: ET.Element) -> List[RawField]:
    fields = []
    for e in element.findall("./field", GIR_NAMESPACES):
        if e.find("./callback", GIR_NAMESPACES) is not None:
            continue
        fields.append(
            RawField(
                name=e.get("name"),
                type=parse_type_of(e),
                writable=e.get("writable") == "1",
                readable=e.get("readable") != "0",
                private=e.get("private") == "1",
            )
        )
    return fields


def parse_enumeration(element: ET.Element) -> RawEnumeration:
    return RawEnumeration(
        name=element.get("name"),
        c_type=element.get(c_attr("type")),
        glib_type_name=element.get(glib_attr("type-name")),
        glib_get_type=element.get(glib_attr("get-type")),
        members=[
            RawEnumerationMember(
                name=m.get("name"),
                value=m.get("value"),
                c_identifier=m.get(c_attr("identifier")),
            )
            for m in element.findall("./member", GIR_NAMESPACES)
        ],
    )


def parse_callable(element: ET.Element) -> RawCallable:
    return RawCallable(
        name=element.get("name"),
        c_identifier=element.get(c_attr("identifier"), ""),
        return_type=parse_return_type(element),
        parameters=parse_parameters(element),
        throws=element.get("throws") == "1",
        finish_func=element.get(glib_attr("finish-func")),
        shadows=element.get("shadows"),
        shadowed_by=element.get("shadowed-by"),
    )


def parse_callback(element: ET.Element) -> RawCallback:
    return RawCallback(
        name=element.get("name"),
        c_type=element.get(c_attr("type")),
        return_type=parse_return_type(element),
        parameters=parse_parameters(element),
        throws=element.get("throws") == "1",
    )


def parse_return_type(element: ET.Element) -> RawType:
    retval = element.find("./return-value", GIR_NAMESPACES)
    if retval is None:
        return RawType("void")
    t = parse_type_of(retval)
    t.transfer_ownership = retval.get("transfer-ownership")
    t.nullable = retval.get("nullable") == "1"
    return t


def parse_parameters(element: ET.Element) -> List[RawParameter]:
    return [parse_parameter(e) for e in element.findall("./parameters/parameter", GIR_NAMESPACES)]


def parse_parameter(element: ET.Element) -> RawParameter:
    if element.find("./varargs", GIR_NAMESPACES) is not None:
        return RawParameter(name="...", type=RawType("none"))
    return RawParameter(
        name=element.get("name", ""),
        type=parse_type_of(element),
        direction=element.get("direction", "in"),
        caller_allocates=element.get("caller-allocates") == "1",
        nullable=element.get("nullable") == "1",
        optional=element.get("allow-none") == "1" or element.get("optional") == "1",
        scope=element.get("scope"),
        closure=parse_int(element.get("closure")),
        destroy=parse_int(element.get("destroy")),
        transfer_ownership=element.get("transfer-ownership"),
    )


def parse_property(element: ET.Element) -> RawProperty:
    getter = element.get("getter")
    setter = element.get("setter")
    for attr in element.findall("./attribute", GIR_NAMESPACES):
        if attr.get("name") == "org.gtk.Property.get" and getter is None:
            getter = attr.get("value")
        elif attr.get("name") == "org.gtk.Property.set" and setter is None:
            setter = attr.get("value")
    return RawProperty(
        name=element.get("name"),
        type=parse_type_of(element),
        readable=element.get("readable") != "0",
        writable=element.get("writable") == "1",
        construct_only=element.get("construct-only") == "1",
        getter=getter,
        setter=setter,
    )


def parse_signal(element: ET.Element) -> RawSignal:
    retval = element.find("./return-value", GIR_NAMESPACES)
    return RawSignal(
        name=element.get("name"),
        when=element.get("when", "last"),
        return_type=parse_return_type(element) if retval is not None else None,
        parameters=parse_parameters(element),
    )


def parse_constant(element: ET.Element) -> RawConstant:
    return RawConstant(
        name=element.get("name"),
        c_type=element.get(c_attr("type")),
        value=element.get("value", ""),
        type=parse_type_of(element),
    )


def parse_type_of(parent: ET.Element) -> RawType:
    child = parent.find("./type", GIR_NAMESPACES)
    if child is not None:
        return parse_type(child)
    child = parent.find("./array", GIR_NAMESPACES)
    if child is not None:
        return parse_array(child)
    return RawType("none")


def parse_type(element: ET.Element) -> RawType:
    name = element.get("name", "none")
    c_type = element.get(c_attr("type"))
    type_parameters = [parse_type_of_element(e) for e in element if e.tag in TYPE_TAGS]

    container = CONTAINER_TYPES.get(name)
    if container in ("glist", "gslist"):
        return RawType(
            "array",
            c_type=c_type,
            is_array=True,
            element_type=type_parameters[0] if type_parameters else None,
            container_type=container,
        )
    if container is not None:
        return RawType(
            name,
            c_type=c_type,
            element_type=type_parameters[0] if container != "hashtable" and type_parameters else None,
            container_type=container,
            type_parameters=type_parameters,
        )
    return RawType(name, c_type=c_type, type_parameters=type_parameters)


def parse_array(element: ET.Element) -> RawType:
    name = element.get("name")
    element_type = parse_type_of(element)
    if name in CONTAINER_TYPES:
        return RawType(
            name,
            c_type=element.get(c_attr("type")),
            element_type=element_type,
            container_type=CONTAINER_TYPES[name],
            type_parameters=[element_type],
        )
    zero_terminated = element.get("zero-terminated")
    return RawType(
        "array",
        c_type=element.get(c_attr("type")),
        is_array=True,
        element_type=element_type,
        length=parse_int(element.get("length")),
        zero_terminated=None if zero_terminated is None else zero_terminated == "1",
        fixed_size=parse_int(element.get("fixed-size")),
    )


def parse_type_of_element(element: ET.Element) -> RawType:
    if element.tag == f"{{{CORE_NAMESPACE}}}array":
        return parse_array(element)
    return parse_type(element)


TYPE_TAGS = {f"{{{CORE_NAMESPACE}}}type", f"{{{CORE_NAMESPACE}}}array"}


def parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    return int(value)
