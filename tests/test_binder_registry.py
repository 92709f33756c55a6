"""Tests for the binder registry."""

import pytest
from PyQt6.QtWidgets import QVBoxLayout, QWidget

from pyqt_formbind.core import BindingError
from pyqt_formbind.forms import BinderRegistry, FormBinder
from pyqt_formbind.protocols import FieldLineEdit


class StubBinder:
    def __init__(self, value):
        self.value = value
        self.calls = []

    def report(self, suffix=""):
        return f"{self.value}{suffix}"


def test_register_and_lookup():
    """Test registration under a name."""
    registry = BinderRegistry()
    first, second = StubBinder(1), StubBinder(2)
    registry.register("order", first)
    registry.register("order", second)
    registry.register("order", first)
    assert registry.lookup("order") == [first, second]
    assert registry.lookup("missing") == []
    assert registry.names() == ["order"]


def test_empty_name_fails_loud():
    """Test that an empty name raises BindingError."""
    with pytest.raises(BindingError):
        BinderRegistry().register("", StubBinder(1))


def test_unregister():
    """Test removing one or all binders of a name."""
    registry = BinderRegistry()
    first, second = StubBinder(1), StubBinder(2)
    registry.register("order", first)
    registry.register("order", second)
    registry.unregister("order", first)
    assert registry.lookup("order") == [second]
    registry.unregister("order")
    assert registry.lookup("order") == []
    registry.unregister("never-registered")


def test_on_init_runs_for_current_and_future_binders():
    """Test init hooks."""
    registry = BinderRegistry()
    early = StubBinder("early")
    registry.register("order", early)
    registry.on_init("order", lambda binder: binder.calls.append("init"))
    late = StubBinder("late")
    registry.register("order", late)
    registry.register("other", StubBinder("other"))
    assert early.calls == ["init"]
    assert late.calls == ["init"]


def test_invoke():
    """Test calling a method on every binder of a name."""
    registry = BinderRegistry()
    registry.register("order", StubBinder("a"))
    registry.register("order", StubBinder("b"))
    assert registry.invoke("order", "report", suffix="!") == ["a!", "b!"]
    assert registry.invoke("missing", "report") == []
    with pytest.raises(AttributeError):
        registry.invoke("order", "nonexistent")


def test_form_binder_registers_and_destroys(qapp):
    """Test the FormBinder registry lifecycle."""
    root = QWidget()
    root.setObjectName("customer")
    QVBoxLayout(root).addWidget(FieldLineEdit("data.name"))
    registry = BinderRegistry()

    binder = FormBinder(root, registry=registry)
    assert binder.name == "customer"
    assert registry.lookup("customer") == [binder]
    assert registry.invoke("customer", "get") == [{"name": ""}]

    binder.destroy()
    assert registry.lookup("customer") == []
