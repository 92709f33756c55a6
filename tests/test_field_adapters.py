"""Tests for field adapters, markers, dispatch and scanning."""

import pytest
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QLineEdit, QVBoxLayout, QWidget

from pyqt_formbind.forms.field_dispatcher import FieldDispatcher
from pyqt_formbind.forms.field_scanner import FieldScanner
from pyqt_formbind.protocols import (
    BlobField, BoundField, Checkable, DisplayRenderable, FieldCheckBox, FieldComboBox,
    FieldLabel, FieldLineEdit, FieldPlainTextEdit, FieldRole, ImageLabel, LinkLabel,
    OptionSelectable, TextGettable, TextSettable, add_class, get_classes, is_invalid,
    mark_invalid, remove_class,
)
from pyqt_formbind.services import SignalService
from pyqt_formbind.widgets import CollectionContainer


def test_line_edit_adapter(qapp):
    """Test FieldLineEdit implements the text ABCs and carries its markers."""
    field = FieldLineEdit("data.price", kinds=["currency", "required"])
    assert isinstance(field, BoundField)
    assert isinstance(field, TextGettable)
    assert isinstance(field, TextSettable)
    assert field.field_name() == "data.price"
    assert field.field_kinds() == {"currency", "required"}
    assert field.field_role() == FieldRole.TEXT_INPUT

    field.write_text("12")
    assert field.read_text() == "12"


def test_plain_text_and_checkbox_adapters(qapp):
    """Test multiline and boolean adapters."""
    note = FieldPlainTextEdit("data.note")
    note.write_text("a\nb")
    assert note.read_text() == "a\nb"
    assert note.field_role() == FieldRole.MULTILINE_INPUT

    active = FieldCheckBox("data.active")
    assert isinstance(active, Checkable)
    active.write_checked(True)
    assert active.read_checked() is True


def test_combo_box_options(qapp):
    """Test option values and selection."""
    combo = FieldComboBox("data.kind")
    assert isinstance(combo, OptionSelectable)
    combo.add_option("-", "")
    combo.add_option("Alpha", "a")
    combo.add_option("Beta")

    assert combo.option_value(1) == "a"
    assert combo.option_value(2) == "Beta"
    assert combo.select_option("Beta")
    assert combo.read_text() == "Beta"
    assert not combo.select_option("missing")
    assert combo.read_text() == "Beta"

    combo.clear_selection()
    assert combo.currentIndex() == 0
    assert combo.read_text() == ""


def test_combo_box_clear_without_empty_option(qapp):
    """Test clearing a combo box that has no empty option."""
    combo = FieldComboBox("data.kind")
    combo.add_option("Alpha", "a")
    combo.clear_selection()
    assert combo.currentIndex() == -1
    assert combo.read_text() == ""


def test_blob_field(qapp):
    """Test depositing and discarding a payload."""
    blob = BlobField("data.file", kinds=["blob"])
    assert blob.read_blob() is None
    blob.deposit_blob(b"\x00\x01", "scan.pdf")
    assert blob.read_blob() == b"\x00\x01"
    assert blob.text() == "scan.pdf"
    blob.discard_blob()
    assert blob.read_blob() is None
    assert blob.text() == ""


def test_label_discovers_name_from_text(qapp):
    """Test that an unnamed label takes its name from its text."""
    parent = QWidget()
    label = FieldLabel("data.customer.name", parent=parent)
    label.hide()
    assert label.objectName() == ""
    assert label.field_name() == "data.customer.name"
    assert label.objectName() == "data.customer.name"
    assert not label.isHidden()

    label.render_display("Ann")
    assert label.text() == "Ann"
    assert label.field_name() == "data.customer.name"


def test_label_html_kind(qapp):
    """Test that only labels of the html kind render rich text."""
    rich = FieldLabel(name="data.note", kinds=[FieldLabel.HTML_KIND])
    plain = FieldLabel(name="data.note")
    rich.render_display("<b>x</b>")
    plain.render_display("<b>x</b>")
    assert rich.textFormat() == Qt.TextFormat.RichText
    assert plain.textFormat() == Qt.TextFormat.PlainText


def test_link_and_image_labels(qapp):
    """Test presentation-attribute display labels."""
    link = LinkLabel(href="data.homepage", caption="Home")
    assert isinstance(link, DisplayRenderable)
    assert link.field_name() == "data.homepage"
    link.render_display("https://example.org")
    assert link.href() == "https://example.org"
    assert "Home" in link.text()

    image = ImageLabel(source="#data.logo")
    assert image.field_name() == "data.logo"
    image.render_display("")
    assert image.source() == ""


def test_class_markers(qapp):
    """Test kind tag helpers and the invalid marker."""
    field = FieldLineEdit("data.name")
    add_class(field, "required")
    assert get_classes(field) == {"required"}
    mark_invalid(field)
    assert is_invalid(field)
    assert field.property("class") == "invalid required"
    mark_invalid(field, False)
    assert not is_invalid(field)
    remove_class(field, "required")
    assert get_classes(field) == frozenset()


def test_dispatcher_fails_loud(qapp):
    """Test that dispatch to a widget without the ABC raises TypeError."""
    plain = QLineEdit()
    with pytest.raises(TypeError, match="TextGettable"):
        FieldDispatcher.read_text(plain)
    with pytest.raises(TypeError, match="Checkable"):
        FieldDispatcher.write_checked(FieldLineEdit("data.x"), True)


def test_signal_service_restores_state(qapp):
    """Test that signal blocking is scoped."""
    field = FieldLineEdit("data.name")
    seen = []
    field.textChanged.connect(seen.append)
    with SignalService.block_signals(field, None):
        field.setText("quiet")
    field.setText("loud")
    assert seen == ["loud"]
    assert not field.signalsBlocked()


def test_scanner_order_prefix_and_roles(qapp):
    """Test document order, prefix filtering and role selection."""
    root = QWidget()
    layout = QVBoxLayout(root)
    name = FieldLineEdit("data.name")
    other = FieldLineEdit("other.name")
    label = FieldLabel("data.name")
    city = FieldLineEdit("data.address.city")
    for widget in (name, other, label, city):
        layout.addWidget(widget)

    paths = [f.path for f in FieldScanner.scan(root, "data")]
    assert paths == ["name", "address.city"]

    displays = list(FieldScanner.scan(root, "data", inputs=False, displays=True))
    assert [f.widget for f in displays] == [label]

    assert len(list(FieldScanner.scan(root, None))) == 3


def test_scanner_skips_collections_on_request(qapp):
    """Test that collection containers can be excluded from a traversal."""
    root = QWidget()
    layout = QVBoxLayout(root)
    layout.addWidget(FieldLineEdit("data.title"))
    container = CollectionContainer("data.items")
    container.layout().addWidget(FieldLineEdit("data.inside"))
    layout.addWidget(container)

    assert [f.path for f in FieldScanner.scan(root, "data")] == ["title", "inside"]
    assert [f.path for f in FieldScanner.scan(root, "data", descend_collections=False)] == ["title"]


def test_invalid_widgets_visibility(qapp):
    """Test the visible-only filter of the invalid query."""
    root = QWidget()
    layout = QVBoxLayout(root)
    shown = FieldLineEdit("data.a")
    hidden = FieldLineEdit("data.b")
    layout.addWidget(shown)
    layout.addWidget(hidden)
    hidden.hide()
    mark_invalid(shown)
    mark_invalid(hidden)

    assert FieldScanner.invalid_widgets(root) == [shown, hidden]
    assert FieldScanner.invalid_widgets(root, visible_only=True) == [shown]
