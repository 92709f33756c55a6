"""Tests for FormBinder get/fill/clear/equals on flat and nested fields."""

import pytest
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from pyqt_formbind.forms import FormBinder
from pyqt_formbind.protocols import (
    BlobField, FieldCheckBox, FieldComboBox, FieldLabel, FieldLineEdit, FieldPlainTextEdit,
    FormBindConfig, has_class, mark_invalid,
)


class OrderForm:
    """A flat form with one field of each input kind."""

    def __init__(self):
        self.root = QWidget()
        layout = QVBoxLayout(self.root)
        self.name = FieldLineEdit("data.name", kinds=["required"])
        self.price = FieldLineEdit("data.price", kinds=["currency"])
        self.count = FieldLineEdit("data.count", kinds=["number"])
        self.note = FieldPlainTextEdit("data.note")
        self.active = FieldCheckBox("data.active")
        self.city = FieldLineEdit("data.address.city")
        self.kind = FieldComboBox("data.kind")
        for text in ("", "a", "b"):
            self.kind.add_option(text)
        self.secret = FieldLineEdit("data.secret", kinds=["transient"])
        self.comment = FieldLineEdit("data.comment", kinds=["emptynull"])
        self.title = FieldLabel("data.name")
        self.other = FieldLineEdit("other.value")
        for widget in (self.name, self.price, self.count, self.note, self.active, self.city,
                       self.kind, self.secret, self.comment, self.title, self.other):
            layout.addWidget(widget)


def sample_model():
    return {
        "name": "Ann",
        "price": 1234.5,
        "count": 3,
        "note": "line1\nline2",
        "active": True,
        "address": {"city": "Bonn"},
        "kind": "b",
        "comment": "hi",
    }


@pytest.fixture
def form(qapp):
    return OrderForm()


def test_fill_renders_fields(form):
    """Test that fill writes formatted values into inputs and labels."""
    FormBinder(form.root, data=sample_model())
    assert form.name.text() == "Ann"
    assert form.price.text() == "1.234,50"
    assert form.count.text() == "3,00"
    assert form.note.toPlainText() == "line1\nline2"
    assert form.active.isChecked()
    assert form.city.text() == "Bonn"
    assert form.kind.read_text() == "b"
    assert form.title.text() == "Ann"


def test_fill_ignores_other_prefixes(form):
    """Test that fields of another prefix are untouched."""
    form.other.setText("keep")
    FormBinder(form.root, data=sample_model())
    assert form.other.text() == "keep"


def test_fill_then_get_round_trip(form):
    """Test that get returns the filled model."""
    model = sample_model()
    binder = FormBinder(form.root, data=model)
    assert binder.get(True) == model


def test_get_returns_copy_of_bound_model(form):
    """Test that get neither returns nor mutates the bound model."""
    model = sample_model()
    binder = FormBinder(form.root, data=model)
    form.name.setText("Bob")
    result = binder.get()
    assert result["name"] == "Bob"
    assert model["name"] == "Ann"
    assert result is not binder.get_data()


def test_get_keeps_unbound_model_keys(form):
    """Test merge semantics with keys that have no field."""
    binder = FormBinder(form.root, data=dict(sample_model(), id=17))
    assert binder.get()["id"] == 17


def test_transient_fields_are_rendered_but_not_extracted(form):
    """Test transient handling in fill, get and equals."""
    model = dict(sample_model(), secret="s3")
    binder = FormBinder(form.root, data=model)
    assert form.secret.text() == "s3"
    form.secret.setText("changed")
    assert binder.get()["secret"] == "s3"
    assert binder.equals(model)


def test_empty_and_invalid_numbers(form):
    """Test coercion of empty and non-numeric numeric text."""
    binder = FormBinder(form.root)
    form.count.setText("")
    form.price.setText("abc")
    form.comment.setText("  ")
    result = binder.get()
    assert result["count"] is None
    assert result["price"] == 0
    assert result["comment"] is None


def test_get_fails_on_invalid_field(form):
    """Test the fail signal and the ignore flag."""
    binder = FormBinder(form.root, data=sample_model())
    mark_invalid(form.city)
    assert binder.get() is None
    assert binder.get(ignore_invalid=True)["address"] == {"city": "Bonn"}


def test_hidden_invalid_field_respects_config(form):
    """Test that validate_hidden=False ignores invisible invalid fields."""
    form.city.hide()
    mark_invalid(form.city)
    strict = FormBinder(form.root, data=sample_model())
    lenient = FormBinder(form.root, data=sample_model(), config=FormBindConfig(validate_hidden=False))
    assert strict.get() is None
    assert lenient.get() is not None


def test_validation_hook_runs_during_get(form):
    """Test that validationRequested lets a validator mark fields in place."""
    binder = FormBinder(form.root, data=sample_model())
    requested = []

    def validator(widget):
        requested.append(widget)
        if widget is form.name:
            mark_invalid(widget, form.name.text() == "")

    binder.validationRequested.connect(validator)
    assert binder.get() is not None
    assert form.secret not in requested
    assert form.name in requested

    form.name.setText("")
    assert binder.get() is None
    assert has_class(form.name, "invalid")


def test_validate(form):
    """Test that validate requests validation of tagged fields only."""
    binder = FormBinder(form.root, data=sample_model())
    requested = []
    binder.validationRequested.connect(requested.append)
    assert binder.validate()
    assert requested == [form.name, form.count]

    binder.validationRequested.connect(lambda widget: mark_invalid(widget))
    assert not binder.validate()


def test_clear_is_idempotent(form):
    """Test that clear empties inputs and can be repeated."""
    binder = FormBinder(form.root, data=sample_model())
    binder.clear()
    first = binder.get(True)
    binder.clear()
    assert binder.get(True) == first
    assert form.name.text() == ""
    assert not form.active.isChecked()
    assert form.kind.currentIndex() == 0
    assert form.title.text() == "Ann"
    assert binder.get_data() == sample_model()


def test_equals(form):
    """Test comparison against the bound model."""
    model = sample_model()
    binder = FormBinder(form.root, data=model)
    assert binder.equals(model)
    assert not binder.equals(dict(model, name="Bob"))
    assert not binder.equals({k: v for k, v in model.items() if k != "address"})

    form.price.setText("1.234,51")
    assert not binder.equals(model)


def test_equals_is_strict_about_types(form):
    """Test that "true" does not equal True and 3 equals 3.0."""
    model = sample_model()
    binder = FormBinder(form.root, data=model)
    assert binder.equals(dict(model, count=3.0))
    assert not binder.equals(dict(model, active="true"))


def test_equals_fails_on_invalid_field(form):
    """Test that an invalid field makes the form unequal."""
    model = sample_model()
    binder = FormBinder(form.root, data=model)
    mark_invalid(form.note)
    assert not binder.equals(model)


def test_get_data_synthesizes_model(form):
    """Test that a binder without data reports an empty model."""
    binder = FormBinder(form.root)
    assert binder.get_data() == {}
    assert binder.get_data() is binder.get_data()


def test_prefix_resolution(qapp):
    """Test that the root's prefix property wins over the default prefix."""
    root = QWidget()
    layout = QVBoxLayout(root)
    name = FieldLineEdit("order.name")
    layout.addWidget(name)
    root.setProperty("prefix", "order")

    binder = FormBinder(root, data={"name": "Ann"})
    assert binder.prefix == "order"
    assert name.text() == "Ann"

    explicit = FormBinder(root, prefix="custom")
    assert explicit.prefix == "custom"


def test_prevent_editing_toggles(form):
    """Test locking and unlocking inputs."""
    binder = FormBinder(form.root)
    binder.prevent_editing()
    assert binder.is_edit_locked()
    assert form.name.isReadOnly()
    assert not form.active.isEnabled()

    binder.prevent_editing(True)
    assert form.name.isReadOnly()

    binder.prevent_editing()
    assert not form.name.isReadOnly()
    assert form.kind.isEnabled()


def test_label_without_data_renders_empty(qapp):
    """Test that a binder without data replaces the label's name text."""
    root = QWidget()
    label = FieldLabel("data.name")
    QVBoxLayout(root).addWidget(label)
    FormBinder(root)
    assert label.text() == ""
    assert label.field_name() == "data.name"


def test_choice_falls_back_to_id(qapp):
    """Test that an object value selects the option matching its id."""
    root = QWidget()
    unit = FieldComboBox("data.unit")
    unit.add_option("Piece", 7)
    unit.add_option("Box", 9)
    QVBoxLayout(root).addWidget(unit)
    FormBinder(root, data={"unit": {"id": 9, "name": "Box"}})
    assert unit.currentIndex() == 1
    assert unit.read_text() == "9"


def test_blob_field_through_binder(qapp):
    """Test that blob payloads are read, never prefilled, and discarded on clear."""
    root = QWidget()
    layout = QVBoxLayout(root)
    name = FieldLineEdit("data.name")
    upload = BlobField("data.file", kinds=["blob"])
    layout.addWidget(name)
    layout.addWidget(upload)
    binder = FormBinder(root)
    assert binder.get()["file"] is None

    upload.deposit_blob("data:xyz", "a.txt")
    assert upload.text() == "a.txt"
    assert binder.get()["file"] == "data:xyz"

    binder.fill({"name": "Ann", "file": "prefilled"})
    assert upload.read_blob() is None
    assert upload.text() == ""
    assert name.text() == "Ann"

    upload.deposit_blob("data:abc", "b.txt")
    binder.clear()
    assert upload.read_blob() is None
    assert binder.get()["file"] is None
