import unittest

from gir_bindgen.ffi_types import TypeImport
from gir_bindgen.gir.model import NormalizedParameter, NormalizedType
from gir_bindgen.type_mapper import (UNSUPPORTED_CALLBACK_TS, TypeMapper,
                                     compute_transfer_full)
from gir_bindgen.writers import FfiTypeWriter

from .data import GIR_FOOTER, GIR_HEADER, GLIB_GIR, GOBJECT_GIR, make_repository


class TestTypeMapper(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.repository = make_repository()

    def setUp(self):
        self.mapper = TypeMapper(self.repository, "Gtk", "libgtk-4.so.1")
        self.writer = FfiTypeWriter(shared_library="libgtk-4.so.1", glib_library="libglib-2.0.so.0")

    def literal(self, mapped):
        return self.writer.to_literal(mapped.ffi)

    def map(self, name, is_return=False, transfer=None):
        return self.mapper.map_type(NormalizedType(name, transfer_ownership=transfer), is_return)

    def test_registered_enum(self):
        self.mapper.register_enum("Align")
        mapped = self.map("Gtk.Align")
        self.assertEqual(mapped.ts, "Align")
        self.assertEqual(self.literal(mapped), '{ type: "int", size: 32, unsigned: false }')
        self.assertEqual(mapped.imports, (TypeImport("enum", "Align", "Gtk", "Align", False),))

    def test_enum_from_registry(self):
        mapped = self.map("Gtk.Align")
        self.assertEqual(mapped.ts, "Align")
        self.assertEqual(mapped.kind, "enum")
        self.assertEqual(self.literal(mapped), '{ type: "int", size: 32, unsigned: false }')

    def test_flags_are_unsigned(self):
        self.mapper.register_enum("StateFlags", is_flags=True)
        mapped = self.map("StateFlags")
        self.assertEqual(mapped.kind, "flags")
        self.assertEqual(self.literal(mapped), '{ type: "int", size: 32, unsigned: true }')

    def test_primitives(self):
        self.assertEqual(self.map("gboolean").ts, "boolean")
        self.assertEqual(self.literal(self.map("gboolean")), '{ type: "boolean" }')
        self.assertEqual(self.literal(self.map("gdouble")), '{ type: "float", size: 64 }')
        self.assertEqual(self.literal(self.map("guint64")), '{ type: "int", size: 64, unsigned: true }')
        self.assertEqual(self.literal(self.map("GLib.Quark")), '{ type: "int", size: 32, unsigned: true }')
        self.assertEqual(self.map("none").ts, "void")
        self.assertEqual(self.literal(self.map("none")), '{ type: "undefined" }')

    def test_strings(self):
        self.assertEqual(self.literal(self.map("utf8", True, "none")), '{ type: "string", ownership: "none" }')
        self.assertEqual(self.literal(self.map("utf8", True, "full")), '{ type: "string", ownership: "full" }')
        self.assertEqual(self.literal(self.map("utf8")), '{ type: "string", ownership: "full" }')
        self.assertEqual(self.map("filename").ts, "string")

    def test_same_namespace_class(self):
        mapped = self.map("Gtk.Widget", True, "none")
        self.assertEqual(mapped.ts, "Widget")
        self.assertEqual(mapped.kind, "class")
        self.assertEqual(self.literal(mapped), '{ type: "gobject", ownership: "none" }')
        self.assertFalse(mapped.external_type.is_external)

    def test_foreign_classes_are_qualified(self):
        mapped = self.map("GObject.Object", True, "full")
        self.assertEqual(mapped.ts, "GObject.GObject")
        self.assertTrue(mapped.external_type.is_external)
        self.assertEqual(mapped.external_type.namespace, "GObject")
        self.assertEqual(self.map("Gio.Cancellable").ts, "Gio.Cancellable")
        self.assertEqual(self.map("Gio.AsyncResult").kind, "interface")

    def test_boxed_records(self):
        mapped = self.map("Gtk.Border")
        self.assertEqual(mapped.ts, "Border")
        self.assertEqual(
            self.literal(mapped),
            '{ type: "boxed", ownership: "full", innerType: "GtkBorder", lib: "libgtk-4.so.1", '
            'getTypeFn: "gtk_border_get_type" }',
        )

        error = self.map("GLib.Error", True, "full")
        self.assertEqual(error.ts, "GLib.GError")
        self.assertEqual(
            self.literal(error),
            '{ type: "boxed", ownership: "full", innerType: "GError", lib: "libglib-2.0.so.0", '
            'getTypeFn: "g_error_get_type" }',
        )

    def test_registered_records(self):
        self.mapper.register_record("Border", "Border", "GtkBorder")
        self.mapper.register_record("Requisition", "Requisition")
        border = self.map("Gtk.Border", True, "full")
        self.assertEqual(
            self.literal(border), '{ type: "boxed", ownership: "full", innerType: "GtkBorder", lib: "libgtk-4.so.1" }'
        )
        self.assertEqual(border.imports, (TypeImport("record", "Border", "Gtk", "Border", False),))

        requisition = self.map("Gtk.Requisition", True, "none")
        self.assertEqual(requisition.ts, "Requisition")
        self.assertEqual(self.literal(requisition), '{ type: "struct", ownership: "none", innerType: "Requisition" }')

    def test_variant_and_param_spec(self):
        variant = self.map("GLib.Variant", True, "full")
        self.assertEqual(variant.ts, "GLib.Variant")
        self.assertEqual(self.literal(variant), '{ type: "gvariant", ownership: "full" }')

        pspec = self.map("GObject.ParamSpec", True, "none")
        self.assertEqual(pspec.ts, "GObject.ParamSpec")
        self.assertEqual(self.literal(pspec), '{ type: "gparam", ownership: "none" }')

    def test_unknown_types(self):
        mapped = self.map("Gtk.Nope")
        self.assertEqual(mapped.ts, "unknown")
        self.assertTrue(mapped.is_unknown)
        self.assertEqual(self.literal(mapped), '{ type: "gobject", ownership: "full" }')

    def test_skipped_classes_map_to_unknown(self):
        self.mapper.register_skipped_class("ClosureExpression")
        mapped = self.map("Gtk.ClosureExpression")
        self.assertEqual(mapped.ts, "unknown")
        self.assertEqual(mapped.imports, ())

    def test_arrays(self):
        t = NormalizedType(
            "array",
            is_array=True,
            element_type=NormalizedType("Gtk.Widget"),
            container_type="glist",
            transfer_ownership="container",
        )
        mapped = self.mapper.map_type(t, True)
        self.assertEqual(mapped.ts, "Widget[]")
        self.assertEqual(
            self.literal(mapped),
            '{ type: "array", itemType: { type: "gobject", ownership: "full" }, listType: "glist", ownership: "full" }',
        )

        strings = self.mapper.map_type(
            NormalizedType("array", is_array=True, element_type=NormalizedType("utf8"), transfer_ownership="none"),
            True,
        )
        self.assertEqual(strings.ts, "string[]")
        self.assertEqual(
            self.literal(strings),
            '{ type: "array", itemType: { type: "string", ownership: "none" }, listType: "array", ownership: "none" }',
        )

    def test_out_parameters(self):
        param = NormalizedParameter("spacing", NormalizedType("gint"), direction="out", transfer_ownership="full")
        mapped = self.mapper.map_parameter(param)
        self.assertEqual(mapped.ts, "Ref<number>")
        self.assertEqual(self.literal(mapped), '{ type: "ref", innerType: { type: "int", size: 32, unsigned: false } }')

    def test_caller_allocated_out_parameters(self):
        self.mapper.register_record("Requisition", "Requisition")
        param = NormalizedParameter(
            "size", NormalizedType("Gtk.Requisition"), direction="out", caller_allocates=True, transfer_ownership="full"
        )
        mapped = self.mapper.map_parameter(param)
        self.assertEqual(mapped.ts, "Requisition")
        self.assertEqual(self.literal(mapped), '{ type: "struct", ownership: "none", innerType: "Requisition" }')

    def test_object_parameter_ownership(self):
        borrowed = NormalizedParameter("child", NormalizedType("Gtk.Widget"), transfer_ownership="none")
        owned = NormalizedParameter("child", NormalizedType("Gtk.Widget"), transfer_ownership="full")
        self.assertEqual(self.literal(self.mapper.map_parameter(borrowed)), '{ type: "gobject", ownership: "none" }')
        self.assertEqual(self.literal(self.mapper.map_parameter(owned)), '{ type: "gobject", ownership: "full" }')

    def test_string_parameter(self):
        param = NormalizedParameter("label", NormalizedType("utf8"), transfer_ownership="none")
        self.assertEqual(self.literal(self.mapper.map_parameter(param)), '{ type: "string", ownership: "none" }')

    def test_async_ready_callback(self):
        param = NormalizedParameter("callback", NormalizedType("Gio.AsyncReadyCallback"), scope="async", closure=3)
        mapped = self.mapper.map_parameter(param)
        self.assertEqual(mapped.kind, "callback")
        self.assertEqual(
            self.literal(mapped),
            '{ type: "callback", trampoline: "asyncReady", sourceType: { type: "gobject", ownership: "none" }, '
            'resultType: { type: "gobject", ownership: "none" } }',
        )
        self.assertFalse(self.mapper.has_unsupported_callback(param))

    def test_supported_callback(self):
        param = NormalizedParameter("notify", NormalizedType("GLib.DestroyNotify"), scope="async")
        mapped = self.mapper.map_parameter(param)
        self.assertEqual(mapped.ts, "() => void")
        self.assertEqual(self.literal(mapped), '{ type: "callback", trampoline: "destroy" }')

    def test_unsupported_callbacks(self):
        closure = NormalizedParameter("closure", NormalizedType("GObject.Closure"))
        mapped = self.mapper.map_parameter(closure)
        self.assertEqual(mapped.ts, UNSUPPORTED_CALLBACK_TS)
        self.assertEqual(self.literal(mapped), '{ type: "callback", trampoline: "closure" }')
        self.assertTrue(self.mapper.has_unsupported_callback(closure))

        callback = NormalizedParameter("handler", NormalizedType("GObject.Callback"), scope="call")
        self.assertTrue(self.mapper.has_unsupported_callback(callback))
        self.assertEqual(self.mapper.map_parameter(callback).ts, UNSUPPORTED_CALLBACK_TS)

    def test_closure_targets(self):
        params = self.repository.resolve_class("Gtk.FileDialog").get_method("open").parameters
        self.assertTrue(self.mapper.is_closure_target(3, params))
        self.assertFalse(self.mapper.is_closure_target(0, params))
        self.assertTrue(self.mapper.is_nullable(params[1]))

    def test_callback_queries(self):
        self.assertTrue(self.mapper.is_callback("Gio.AsyncReadyCallback"))
        self.assertFalse(self.mapper.is_callback("Gtk.Button"))
        self.assertTrue(self.mapper.is_supported_callback("Gio.AsyncReadyCallback"))
        mappings = self.mapper.callback_parameter_mappings("Gio.AsyncReadyCallback")
        names = [p.name for p, _ in mappings]
        self.assertEqual(names, ["source_object", "res"])

    def test_supported_callback_signature(self):
        gtk = (
            GIR_HEADER
            + """  <namespace name="Gtk" version="4.0" shared-library="libgtk-4.so.1" c:identifier-prefixes="Gtk">
    <callback name="ScaleFormatValueFunc" c:type="GtkScaleFormatValueFunc">
      <return-value transfer-ownership="full"><type name="utf8" c:type="char*"/></return-value>
      <parameters>
        <parameter name="value" transfer-ownership="none"><type name="gdouble" c:type="double"/></parameter>
        <parameter name="user_data" transfer-ownership="none" closure="1"><type name="gpointer" c:type="gpointer"/></parameter>
      </parameters>
    </callback>
  </namespace>
"""
            + GIR_FOOTER
        )
        mapper = TypeMapper(make_repository(GLIB_GIR, GOBJECT_GIR, gtk), "Gtk", "libgtk-4.so.1")
        self.assertEqual(
            [(p.name, m.ts) for p, m in mapper.callback_parameter_mappings("ScaleFormatValueFunc")], [("value", "number")]
        )

        mapped = mapper.map_parameter(NormalizedParameter("func", NormalizedType("Gtk.ScaleFormatValueFunc")))
        self.assertEqual(mapped.ts, "(value: number) => string")
        self.assertEqual(
            self.literal(mapped),
            '{ type: "callback", trampoline: "scaleFormatValueFunc", argTypes: [{ type: "float", size: 64 }], '
            'returnType: { type: "string", ownership: "full" } }',
        )
        self.assertIsNone(mapper.callback_parameter_mappings("Gtk.Button"))

    def test_compute_transfer_full(self):
        self.assertTrue(compute_transfer_full(True, "full"))
        self.assertTrue(compute_transfer_full(False, "container"))
        self.assertFalse(compute_transfer_full(False, "none"))
        self.assertFalse(compute_transfer_full(True, None))
        self.assertTrue(compute_transfer_full(False, None))


if __name__ == "__main__":
    unittest.main()
