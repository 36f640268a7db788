import unittest

from gir_bindgen.errors import ConfigurationError
from gir_bindgen.ffi_types import (FFI_NULL, array_type, boxed_type,
                                   callback_type, float_type, gobject_type,
                                   int_type, ref_type, string_type,
                                   struct_type)
from gir_bindgen.writers import FfiTypeWriter


class TestFfiTypeWriter(unittest.TestCase):
    def test_boxed_type_takes_shared_library(self):
        writer = FfiTypeWriter(shared_library="libgtk-4.so.1")
        self.assertEqual(
            writer.to_literal(boxed_type("GdkRGBA")),
            '{ type: "boxed", ownership: "full", innerType: "GdkRGBA", lib: "libgtk-4.so.1" }',
        )

    def test_boxed_type_without_shared_library(self):
        writer = FfiTypeWriter()
        self.assertEqual(
            writer.to_literal(boxed_type("GdkRGBA")),
            '{ type: "boxed", ownership: "full", innerType: "GdkRGBA", lib: "" }',
        )

    def test_boxed_type_keeps_explicit_library(self):
        writer = FfiTypeWriter(shared_library="libgtk-4.so.1")
        self.assertEqual(
            writer.to_literal(boxed_type("PangoFontDescription", "none", "libpango-1.0.so.0", "pango_font_description_get_type")),
            '{ type: "boxed", ownership: "none", innerType: "PangoFontDescription", lib: "libpango-1.0.so.0", '
            'getTypeFn: "pango_font_description_get_type" }',
        )

    def test_boxed_variant_is_gvariant(self):
        writer = FfiTypeWriter(shared_library="libglib-2.0.so.0")
        self.assertEqual(writer.to_literal(boxed_type("GVariant", "none")), '{ type: "gvariant", ownership: "none" }')

    def test_scalars(self):
        writer = FfiTypeWriter()
        self.assertEqual(writer.to_literal(int_type(8, True)), '{ type: "int", size: 8, unsigned: true }')
        self.assertEqual(writer.to_literal(float_type(32)), '{ type: "float", size: 32 }')
        self.assertEqual(writer.to_literal(string_type("none")), '{ type: "string", ownership: "none" }')
        self.assertEqual(writer.to_literal(gobject_type()), '{ type: "gobject", ownership: "full" }')
        self.assertEqual(writer.to_literal(FFI_NULL), '{ type: "null" }')

    def test_nested_types(self):
        writer = FfiTypeWriter()
        self.assertEqual(
            writer.to_literal(struct_type("Requisition", "none")),
            '{ type: "struct", ownership: "none", innerType: "Requisition" }',
        )
        self.assertEqual(
            writer.to_literal(ref_type(gobject_type("none"))),
            '{ type: "ref", innerType: { type: "gobject", ownership: "none" } }',
        )
        self.assertEqual(
            writer.to_literal(array_type(int_type(), "gslist", "container")),
            '{ type: "array", itemType: { type: "int", size: 32, unsigned: false }, listType: "gslist", '
            'ownership: "container" }',
        )

    def test_callback_argument_types(self):
        writer = FfiTypeWriter()
        t = callback_type("drawFunc", (gobject_type("none"), int_type()), return_type=string_type())
        self.assertEqual(
            writer.to_literal(t),
            '{ type: "callback", trampoline: "drawFunc", argTypes: [{ type: "gobject", ownership: "none" }, '
            '{ type: "int", size: 32, unsigned: false }], returnType: { type: "string", ownership: "full" } }',
        )

    def test_error_descriptor_requires_glib_library(self):
        writer = FfiTypeWriter(shared_library="libgtk-4.so.1")
        with self.assertRaisesRegex(ConfigurationError, "glibLibrary must be set"):
            writer.create_gerror_ref_type_descriptor()

        writer = FfiTypeWriter(shared_library="libgtk-4.so.1", glib_library="libglib-2.0.so.0")
        self.assertEqual(
            writer.error_argument_literal(),
            '{ type: "ref", innerType: { type: "boxed", ownership: "full", innerType: "GError", '
            'lib: "libglib-2.0.so.0" } }',
        )

    def test_self_argument(self):
        writer = FfiTypeWriter(shared_library="libgtk-4.so.1")
        self.assertEqual(writer.self_argument(), '{ type: "gobject", ownership: "none" }')
        self.assertEqual(writer.self_argument(is_param_spec=True), '{ type: "gparam", ownership: "none" }')
        self.assertEqual(
            writer.self_argument(is_record=True, record_name="GtkBorder"),
            '{ type: "boxed", ownership: "none", innerType: "GtkBorder", lib: "libgtk-4.so.1" }',
        )


if __name__ == "__main__":
    unittest.main()
