from gir_bindgen.gir.repository import Repository

GIR_HEADER = """<?xml version="1.0"?>
<repository version="1.2"
            xmlns="http://www.gtk.org/introspection/core/1.0"
            xmlns:c="http://www.gtk.org/introspection/c/1.0"
            xmlns:glib="http://www.gtk.org/introspection/glib/1.0">
"""

GIR_FOOTER = """</repository>
"""

GLIB_GIR = (
    GIR_HEADER
    + """
  <namespace name="GLib" version="2.0" shared-library="libglib-2.0.so.0" c:identifier-prefixes="G" c:symbol-prefixes="g">
    <record name="Error" c:type="GError" glib:type-name="GError" glib:get-type="g_error_get_type">
      <field name="domain" writable="1"><type name="Quark" c:type="GQuark"/></field>
      <field name="code" writable="1"><type name="gint" c:type="gint"/></field>
      <field name="message" writable="1"><type name="utf8" c:type="gchar*"/></field>
    </record>
    <record name="Variant" c:type="GVariant" glib:type-name="GVariant" glib:get-type="intern" opaque="1"/>
    <callback name="DestroyNotify" c:type="GDestroyNotify">
      <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      <parameters>
        <parameter name="data" transfer-ownership="none" nullable="1"><type name="gpointer" c:type="gpointer"/></parameter>
      </parameters>
    </callback>
    <constant name="MAJOR_VERSION" value="2" c:type="GLIB_MAJOR_VERSION"><type name="gint" c:type="gint"/></constant>
  </namespace>
"""
    + GIR_FOOTER
)

GOBJECT_GIR = (
    GIR_HEADER
    + """
  <include name="GLib" version="2.0"/>
  <namespace name="GObject" version="2.0" shared-library="libgobject-2.0.so.0" c:identifier-prefixes="G" c:symbol-prefixes="g">
    <class name="Object" c:type="GObject" glib:type-name="GObject" glib:get-type="g_object_get_type" c:symbol-prefix="object">
      <method name="notify" c:identifier="g_object_notify">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <instance-parameter name="object" transfer-ownership="none"><type name="Object" c:type="GObject*"/></instance-parameter>
          <parameter name="property_name" transfer-ownership="none"><type name="utf8" c:type="const gchar*"/></parameter>
        </parameters>
      </method>
      <method name="get_data" c:identifier="g_object_get_data" introspectable="0">
        <return-value transfer-ownership="none" nullable="1"><type name="gpointer" c:type="gpointer"/></return-value>
      </method>
      <glib:signal name="notify" when="first">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="pspec" transfer-ownership="none"><type name="ParamSpec"/></parameter>
        </parameters>
      </glib:signal>
    </class>
    <class name="InitiallyUnowned" c:type="GInitiallyUnowned" parent="Object" abstract="1" glib:type-name="GInitiallyUnowned" glib:get-type="g_initially_unowned_get_type"/>
    <class name="ParamSpec" c:type="GParamSpec" abstract="1" glib:type-name="GParam" glib:get-type="intern" glib:fundamental="1">
      <method name="get_name" c:identifier="g_param_spec_get_name">
        <return-value transfer-ownership="none"><type name="utf8" c:type="const gchar*"/></return-value>
      </method>
    </class>
    <record name="ObjectClass" c:type="GObjectClass" glib:is-gtype-struct-for="Object">
      <field name="g_type_class"><type name="gpointer"/></field>
    </record>
    <record name="Closure" c:type="GClosure" glib:type-name="GClosure" glib:get-type="g_closure_get_type">
      <field name="ref_count" private="1"><type name="guint" c:type="guint"/></field>
    </record>
    <callback name="Callback" c:type="GCallback">
      <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
    </callback>
  </namespace>
"""
    + GIR_FOOTER
)

GIO_GIR = (
    GIR_HEADER
    + """
  <include name="GObject" version="2.0"/>
  <namespace name="Gio" version="2.0" shared-library="libgio-2.0.so.0" c:identifier-prefixes="G" c:symbol-prefixes="g">
    <callback name="AsyncReadyCallback" c:type="GAsyncReadyCallback">
      <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      <parameters>
        <parameter name="source_object" transfer-ownership="none" nullable="1"><type name="GObject.Object" c:type="GObject*"/></parameter>
        <parameter name="res" transfer-ownership="none"><type name="AsyncResult" c:type="GAsyncResult*"/></parameter>
        <parameter name="data" transfer-ownership="none" nullable="1" closure="2"><type name="gpointer" c:type="gpointer"/></parameter>
      </parameters>
    </callback>
    <interface name="AsyncResult" c:type="GAsyncResult" glib:type-name="GAsyncResult" glib:get-type="g_async_result_get_type">
      <prerequisite name="GObject.Object"/>
      <method name="get_source_object" c:identifier="g_async_result_get_source_object">
        <return-value transfer-ownership="full" nullable="1"><type name="GObject.Object" c:type="GObject*"/></return-value>
      </method>
    </interface>
    <class name="Cancellable" c:type="GCancellable" parent="GObject.Object" glib:type-name="GCancellable" glib:get-type="g_cancellable_get_type">
      <constructor name="new" c:identifier="g_cancellable_new">
        <return-value transfer-ownership="full"><type name="Cancellable" c:type="GCancellable*"/></return-value>
      </constructor>
      <method name="cancel" c:identifier="g_cancellable_cancel">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      </method>
      <glib:signal name="cancelled" when="last">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      </glib:signal>
    </class>
  </namespace>
"""
    + GIR_FOOTER
)

GTK_GIR = (
    GIR_HEADER
    + """
  <include name="Gio" version="2.0"/>
  <namespace name="Gtk" version="4.0" shared-library="libgtk-4.so.1" c:identifier-prefixes="Gtk" c:symbol-prefixes="gtk">
    <enumeration name="Align" c:type="GtkAlign" glib:type-name="GtkAlign" glib:get-type="gtk_align_get_type">
      <member name="fill" value="0" c:identifier="GTK_ALIGN_FILL"/>
      <member name="start" value="1" c:identifier="GTK_ALIGN_START"/>
      <member name="end" value="2" c:identifier="GTK_ALIGN_END"/>
    </enumeration>
    <enumeration name="Orientation" c:type="GtkOrientation" glib:type-name="GtkOrientation" glib:get-type="gtk_orientation_get_type">
      <member name="horizontal" value="0" c:identifier="GTK_ORIENTATION_HORIZONTAL"/>
      <member name="vertical" value="1" c:identifier="GTK_ORIENTATION_VERTICAL"/>
    </enumeration>
    <bitfield name="StateFlags" c:type="GtkStateFlags" glib:type-name="GtkStateFlags" glib:get-type="gtk_state_flags_get_type">
      <member name="normal" value="0" c:identifier="GTK_STATE_FLAG_NORMAL"/>
      <member name="active" value="1" c:identifier="GTK_STATE_FLAG_ACTIVE"/>
      <member name="prelight" value="2" c:identifier="GTK_STATE_FLAG_PRELIGHT"/>
    </bitfield>
    <record name="Border" c:type="GtkBorder" glib:type-name="GtkBorder" glib:get-type="gtk_border_get_type">
      <field name="left" writable="1"><type name="gint16" c:type="gint16"/></field>
      <field name="right" writable="1"><type name="gint16" c:type="gint16"/></field>
      <field name="top" writable="1"><type name="gint16" c:type="gint16"/></field>
      <field name="bottom" writable="1"><type name="gint16" c:type="gint16"/></field>
      <constructor name="new" c:identifier="gtk_border_new">
        <return-value transfer-ownership="full"><type name="Border" c:type="GtkBorder*"/></return-value>
      </constructor>
      <method name="copy" c:identifier="gtk_border_copy">
        <return-value transfer-ownership="full"><type name="Border" c:type="GtkBorder*"/></return-value>
      </method>
    </record>
    <record name="Requisition" c:type="GtkRequisition">
      <field name="width" writable="1"><type name="gint" c:type="int"/></field>
      <field name="height" writable="1"><type name="gint" c:type="int"/></field>
    </record>
    <record name="PrintBackend" c:type="GtkPrintBackend" opaque="1" disguised="1"/>
    <record name="WidgetClass" c:type="GtkWidgetClass" glib:is-gtype-struct-for="Widget">
      <field name="parent_class"><type name="GObject.InitiallyUnownedClass"/></field>
    </record>
    <record name="ButtonPrivate" c:type="GtkButtonPrivate" disguised="1"/>
    <interface name="Buildable" c:type="GtkBuildable" glib:type-name="GtkBuildable" glib:get-type="gtk_buildable_get_type">
      <prerequisite name="GObject.Object"/>
      <method name="get_buildable_id" c:identifier="gtk_buildable_get_buildable_id">
        <return-value transfer-ownership="none" nullable="1"><type name="utf8" c:type="const char*"/></return-value>
      </method>
    </interface>
    <interface name="Orientable" c:type="GtkOrientable" glib:type-name="GtkOrientable" glib:get-type="gtk_orientable_get_type">
      <prerequisite name="Buildable"/>
      <method name="get_orientation" c:identifier="gtk_orientable_get_orientation">
        <return-value transfer-ownership="none"><type name="Orientation" c:type="GtkOrientation"/></return-value>
      </method>
      <method name="set_orientation" c:identifier="gtk_orientable_set_orientation">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="orientation" transfer-ownership="none"><type name="Orientation" c:type="GtkOrientation"/></parameter>
        </parameters>
      </method>
      <property name="orientation" writable="1" transfer-ownership="none"><type name="Orientation"/></property>
    </interface>
    <class name="Widget" c:type="GtkWidget" parent="GObject.InitiallyUnowned" abstract="1" glib:type-name="GtkWidget" glib:get-type="gtk_widget_get_type">
      <implements name="Buildable"/>
      <method name="show" c:identifier="gtk_widget_show">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      </method>
      <method name="get_halign" c:identifier="gtk_widget_get_halign">
        <return-value transfer-ownership="none"><type name="Align" c:type="GtkAlign"/></return-value>
      </method>
      <method name="set_halign" c:identifier="gtk_widget_set_halign">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="align" transfer-ownership="none"><type name="Align" c:type="GtkAlign"/></parameter>
        </parameters>
      </method>
      <method name="get_parent" c:identifier="gtk_widget_get_parent">
        <return-value transfer-ownership="none" nullable="1"><type name="Widget" c:type="GtkWidget*"/></return-value>
      </method>
      <property name="halign" writable="1" transfer-ownership="none"><type name="Align"/></property>
      <property name="visible" writable="1" transfer-ownership="none"><type name="gboolean" c:type="gboolean"/></property>
      <property name="parent" transfer-ownership="none"><type name="Widget"/></property>
      <glib:signal name="destroy" when="cleanup">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      </glib:signal>
    </class>
    <class name="Button" c:type="GtkButton" parent="Widget" glib:type-name="GtkButton" glib:get-type="gtk_button_get_type">
      <constructor name="new" c:identifier="gtk_button_new">
        <return-value transfer-ownership="none"><type name="Widget" c:type="GtkWidget*"/></return-value>
      </constructor>
      <constructor name="new_with_label" c:identifier="gtk_button_new_with_label">
        <return-value transfer-ownership="none"><type name="Widget" c:type="GtkWidget*"/></return-value>
        <parameters>
          <parameter name="label" transfer-ownership="none"><type name="utf8" c:type="const char*"/></parameter>
        </parameters>
      </constructor>
      <method name="set_label" c:identifier="gtk_button_set_label">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="label" transfer-ownership="none"><type name="utf8" c:type="const char*"/></parameter>
        </parameters>
      </method>
      <method name="get_label" c:identifier="gtk_button_get_label">
        <return-value transfer-ownership="none" nullable="1"><type name="utf8" c:type="const char*"/></return-value>
      </method>
      <method name="set_child" c:identifier="gtk_button_set_child">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="child" transfer-ownership="none" nullable="1"><type name="Widget" c:type="GtkWidget*"/></parameter>
        </parameters>
      </method>
      <method name="show" c:identifier="gtk_button_show">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      </method>
      <property name="label" writable="1" transfer-ownership="none"><type name="utf8" c:type="gchar*"/></property>
      <property name="child" writable="1" transfer-ownership="none"><type name="Widget"/></property>
      <glib:signal name="clicked" when="first">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
      </glib:signal>
    </class>
    <class name="Box" c:type="GtkBox" parent="Widget" glib:type-name="GtkBox" glib:get-type="gtk_box_get_type">
      <implements name="Orientable"/>
      <constructor name="new" c:identifier="gtk_box_new">
        <return-value transfer-ownership="none"><type name="Widget" c:type="GtkWidget*"/></return-value>
        <parameters>
          <parameter name="orientation" transfer-ownership="none"><type name="Orientation" c:type="GtkOrientation"/></parameter>
          <parameter name="spacing" transfer-ownership="none"><type name="gint" c:type="int"/></parameter>
        </parameters>
      </constructor>
      <method name="append" c:identifier="gtk_box_append">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="child" transfer-ownership="none"><type name="Widget" c:type="GtkWidget*"/></parameter>
        </parameters>
      </method>
      <method name="get_preferred_size" c:identifier="gtk_box_get_preferred_size">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="minimum_size" direction="out" caller-allocates="1" transfer-ownership="none" optional="1"><type name="Requisition" c:type="GtkRequisition*"/></parameter>
          <parameter name="spacing" direction="out" caller-allocates="0" transfer-ownership="full"><type name="gint" c:type="int*"/></parameter>
        </parameters>
      </method>
      <property name="spacing" writable="1" transfer-ownership="none"><type name="gint" c:type="gint"/></property>
    </class>
    <class name="ClosureExpression" c:type="GtkClosureExpression" parent="GObject.Object" glib:type-name="GtkClosureExpression" glib:get-type="gtk_closure_expression_get_type">
      <constructor name="new" c:identifier="gtk_closure_expression_new">
        <return-value transfer-ownership="full"><type name="ClosureExpression" c:type="GtkExpression*"/></return-value>
        <parameters>
          <parameter name="closure" transfer-ownership="none"><type name="GObject.Closure" c:type="GClosure*"/></parameter>
        </parameters>
      </constructor>
    </class>
    <class name="EventController" c:type="GtkEventController" parent="GObject.Object" abstract="1" glib:type-name="GtkEventController" glib:get-type="gtk_event_controller_get_type">
      <property name="name" writable="1" transfer-ownership="none"><type name="utf8" c:type="gchar*"/></property>
    </class>
    <class name="GestureClick" c:type="GtkGestureClick" parent="EventController" glib:type-name="GtkGestureClick" glib:get-type="gtk_gesture_click_get_type">
      <constructor name="new" c:identifier="gtk_gesture_click_new">
        <return-value transfer-ownership="full"><type name="EventController" c:type="GtkEventController*"/></return-value>
      </constructor>
      <property name="button" writable="1" transfer-ownership="none"><type name="guint" c:type="guint"/></property>
      <glib:signal name="pressed" when="last">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="n_press" transfer-ownership="none"><type name="gint" c:type="gint"/></parameter>
          <parameter name="x" transfer-ownership="none"><type name="gdouble" c:type="gdouble"/></parameter>
          <parameter name="y" transfer-ownership="none"><type name="gdouble" c:type="gdouble"/></parameter>
        </parameters>
      </glib:signal>
    </class>
    <class name="FileDialog" c:type="GtkFileDialog" parent="GObject.Object" glib:type-name="GtkFileDialog" glib:get-type="gtk_file_dialog_get_type">
      <constructor name="new" c:identifier="gtk_file_dialog_new">
        <return-value transfer-ownership="full"><type name="FileDialog" c:type="GtkFileDialog*"/></return-value>
      </constructor>
      <method name="open" c:identifier="gtk_file_dialog_open" glib:finish-func="open_finish">
        <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
        <parameters>
          <parameter name="parent" transfer-ownership="none" nullable="1" allow-none="1"><type name="Widget" c:type="GtkWindow*"/></parameter>
          <parameter name="cancellable" transfer-ownership="none" nullable="1" allow-none="1"><type name="Gio.Cancellable" c:type="GCancellable*"/></parameter>
          <parameter name="callback" transfer-ownership="none" nullable="1" allow-none="1" scope="async" closure="3"><type name="Gio.AsyncReadyCallback" c:type="GAsyncReadyCallback"/></parameter>
          <parameter name="user_data" transfer-ownership="none" nullable="1" allow-none="1"><type name="gpointer" c:type="gpointer"/></parameter>
        </parameters>
      </method>
      <method name="open_finish" c:identifier="gtk_file_dialog_open_finish" throws="1">
        <return-value transfer-ownership="full" nullable="1"><type name="utf8" c:type="char*"/></return-value>
        <parameters>
          <parameter name="result" transfer-ownership="none"><type name="Gio.AsyncResult" c:type="GAsyncResult*"/></parameter>
        </parameters>
      </method>
      <function name="get_default_title" c:identifier="gtk_file_dialog_get_default_title">
        <return-value transfer-ownership="none"><type name="utf8" c:type="const char*"/></return-value>
      </function>
    </class>
    <function name="get_major_version" c:identifier="gtk_get_major_version">
      <return-value transfer-ownership="none"><type name="guint" c:type="guint"/></return-value>
    </function>
    <function name="init" c:identifier="gtk_init">
      <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
    </function>
    <function name="show_uri_full" c:identifier="gtk_show_uri_full" introspectable="0">
      <return-value transfer-ownership="none"><type name="none" c:type="void"/></return-value>
    </function>
    <constant name="MAJOR_VERSION" value="4" c:type="GTK_MAJOR_VERSION"><type name="gint" c:type="gint"/></constant>
    <constant name="PRINT_SETTINGS_PRINTER" value="printer" c:type="GTK_PRINT_SETTINGS_PRINTER"><type name="utf8" c:type="gchar*"/></constant>
  </namespace>
"""
    + GIR_FOOTER
)

ALL_GIRS = (GLIB_GIR, GOBJECT_GIR, GIO_GIR, GTK_GIR)


def make_repository(*girs: str) -> Repository:
    repository = Repository()
    for xml_text in girs or ALL_GIRS:
        repository.load_from_xml(xml_text)
    repository.resolve()
    return repository


__all__ = ["ALL_GIRS", "GIO_GIR", "GIR_FOOTER", "GIR_HEADER", "GLIB_GIR", "GOBJECT_GIR", "GTK_GIR", "make_repository"]
