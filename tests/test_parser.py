import unittest

from gir_bindgen.errors import GirParseError
from gir_bindgen.gir import parse_gir

from .data import GIR_FOOTER, GIR_HEADER, GLIB_GIR, GOBJECT_GIR, GTK_GIR


def wrap_namespace(body, name="Test"):
    return (
        GIR_HEADER
        + f'<namespace name="{name}" version="1.0" shared-library="libtest.so.1" c:identifier-prefixes="Test">'
        + body
        + "</namespace>"
        + GIR_FOOTER
    )


class TestParser(unittest.TestCase):
    def test_namespace_attributes(self):
        ns = parse_gir(GTK_GIR)
        self.assertEqual(ns.name, "Gtk")
        self.assertEqual(ns.version, "4.0")
        self.assertEqual(ns.shared_library, "libgtk-4.so.1")
        self.assertEqual(ns.c_prefix, "Gtk")

    def test_declarations(self):
        ns = parse_gir(GTK_GIR)
        self.assertEqual(
            [c.name for c in ns.classes],
            ["Widget", "Button", "Box", "ClosureExpression", "EventController", "GestureClick", "FileDialog"],
        )
        self.assertEqual([i.name for i in ns.interfaces], ["Buildable", "Orientable"])
        self.assertEqual([e.name for e in ns.enumerations], ["Align", "Orientation"])
        self.assertEqual([b.name for b in ns.bitfields], ["StateFlags"])
        self.assertEqual([c.name for c in ns.constants], ["MAJOR_VERSION", "PRINT_SETTINGS_PRINTER"])

    def test_non_introspectable_elements_are_skipped(self):
        gtk = parse_gir(GTK_GIR)
        self.assertEqual([f.name for f in gtk.functions], ["get_major_version", "init"])

        gobject = parse_gir(GOBJECT_GIR)
        self.assertEqual([m.name for m in gobject.classes[0].methods], ["notify"])

    def test_class_attributes(self):
        button = next(c for c in parse_gir(GTK_GIR).classes if c.name == "Button")
        self.assertEqual(button.parent, "Widget")
        self.assertEqual(button.glib_type_name, "GtkButton")
        self.assertEqual(button.glib_get_type, "gtk_button_get_type")
        self.assertFalse(button.abstract)
        self.assertEqual([c.name for c in button.constructors], ["new", "new_with_label"])
        self.assertEqual([s.name for s in button.signals], ["clicked"])

        label = button.methods[0].parameters[0]
        self.assertEqual(label.name, "label")
        self.assertEqual(label.type.name, "utf8")
        self.assertEqual(label.transfer_ownership, "none")

    def test_instance_parameter_is_not_a_parameter(self):
        notify = parse_gir(GOBJECT_GIR).classes[0].methods[0]
        self.assertEqual([p.name for p in notify.parameters], ["property_name"])

    def test_async_method_attributes(self):
        dialog = next(c for c in parse_gir(GTK_GIR).classes if c.name == "FileDialog")
        open_method, open_finish = dialog.methods
        self.assertEqual(open_method.finish_func, "open_finish")
        self.assertEqual(open_method.parameters[2].scope, "async")
        self.assertEqual(open_method.parameters[2].closure, 3)
        self.assertTrue(open_finish.throws)
        self.assertTrue(open_finish.return_type.nullable)
        self.assertEqual(open_finish.return_type.transfer_ownership, "full")

    def test_record_fields(self):
        error = parse_gir(GLIB_GIR).records[0]
        self.assertEqual(error.glib_type_name, "GError")
        self.assertEqual([f.name for f in error.fields], ["domain", "code", "message"])
        self.assertTrue(all(f.writable for f in error.fields))

        closure = next(r for r in parse_gir(GOBJECT_GIR).records if r.name == "Closure")
        self.assertTrue(closure.fields[0].private)

    def test_callback_fields_are_skipped(self):
        ns = parse_gir(
            wrap_namespace(
                """
                <record name="Funcs">
                  <field name="size" writable="1"><type name="gint"/></field>
                  <field name="func">
                    <callback name="func">
                      <return-value><type name="none"/></return-value>
                    </callback>
                  </field>
                </record>
                """
            )
        )
        self.assertEqual([f.name for f in ns.records[0].fields], ["size"])

    def test_enumeration_members(self):
        align = parse_gir(GTK_GIR).enumerations[0]
        self.assertEqual(align.glib_type_name, "GtkAlign")
        self.assertEqual([(m.name, m.value) for m in align.members], [("fill", "0"), ("start", "1"), ("end", "2")])

    def test_varargs(self):
        ns = parse_gir(
            wrap_namespace(
                """
                <function name="printf" c:identifier="test_printf">
                  <return-value transfer-ownership="none"><type name="none"/></return-value>
                  <parameters>
                    <parameter name="format" transfer-ownership="none"><type name="utf8"/></parameter>
                    <parameter name="..." transfer-ownership="none"><varargs/></parameter>
                  </parameters>
                </function>
                """
            )
        )
        params = ns.functions[0].parameters
        self.assertEqual([p.name for p in params], ["format", "..."])
        self.assertEqual(params[1].type.name, "none")

    def test_list_types_become_arrays(self):
        ns = parse_gir(
            wrap_namespace(
                """
                <function name="list_toplevels" c:identifier="test_list_toplevels">
                  <return-value transfer-ownership="container">
                    <type name="GLib.List" c:type="GList*"><type name="Widget"/></type>
                  </return-value>
                </function>
                """
            )
        )
        t = ns.functions[0].return_type
        self.assertTrue(t.is_array)
        self.assertEqual(t.container_type, "glist")
        self.assertEqual(t.element_type.name, "Widget")
        self.assertEqual(t.transfer_ownership, "container")

    def test_c_arrays(self):
        ns = parse_gir(
            wrap_namespace(
                """
                <function name="get_names" c:identifier="test_get_names">
                  <return-value transfer-ownership="full">
                    <array c:type="char**" zero-terminated="1"><type name="utf8"/></array>
                  </return-value>
                </function>
                """
            )
        )
        t = ns.functions[0].return_type
        self.assertTrue(t.is_array)
        self.assertTrue(t.zero_terminated)
        self.assertEqual(t.element_type.name, "utf8")

    def test_property_accessor_attributes(self):
        ns = parse_gir(
            wrap_namespace(
                """
                <class name="Label" parent="Widget" glib:type-name="TestLabel">
                  <property name="text" writable="1">
                    <attribute name="org.gtk.Property.get" value="test_label_get_text"/>
                    <attribute name="org.gtk.Property.set" value="test_label_set_text"/>
                    <type name="utf8"/>
                  </property>
                  <property name="width" readable="0" writable="1" construct-only="1"><type name="gint"/></property>
                </class>
                """
            )
        )
        text, width = ns.classes[0].properties
        self.assertEqual(text.getter, "test_label_get_text")
        self.assertEqual(text.setter, "test_label_set_text")
        self.assertFalse(width.readable)
        self.assertTrue(width.construct_only)

    def test_malformed_xml(self):
        with self.assertRaises(GirParseError):
            parse_gir("<repository>")

    def test_missing_namespace(self):
        with self.assertRaisesRegex(GirParseError, "missing repository or namespace element"):
            parse_gir(GIR_HEADER + GIR_FOOTER)
        with self.assertRaisesRegex(GirParseError, "missing repository or namespace element"):
            parse_gir("<foo/>")


if __name__ == "__main__":
    unittest.main()
