"""
Field adapters that wrap Qt widgets to implement the field ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QComboBox.currentData() vs QPlainTextEdit.toPlainText()
- QLineEdit.setText() vs QComboBox.setCurrentIndex() vs QCheckBox.setChecked()
- QLabel text vs link target vs image source

Every adapter keeps its binding markers in Qt properties (objectName for the
name path, the ``class`` dynamic property for kind tags) so a plain structural
copy of the widget carries its binding along.
"""

from abc import ABCMeta
from typing import Any, FrozenSet, Iterable, Optional

from PyQt6.QtWidgets import QCheckBox, QComboBox, QLabel, QLineEdit, QPlainTextEdit
from PyQt6.QtCore import QObject, Qt
from PyQt6.QtGui import QPixmap

from .field_markers import get_classes, set_classes
from .field_protocols import (
    BoundField, TextGettable, TextSettable, Checkable, OptionSelectable,
    DisplayRenderable, BlobHolder, EditLockable, FieldRole,
)

# PyQt-specific metaclass that combines ABCMeta with Qt's metaclass
_QtMetaclass = type(QObject)


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class FieldBindingMixin:
    """Name/kind bookkeeping shared by all adapters."""

    def _init_binding(self, name: str, kinds: Iterable[str]) -> None:
        if name:
            self.setObjectName(name)
        kinds = tuple(kinds)
        if kinds:
            set_classes(self, kinds)

    def field_name(self) -> str:
        """Implement BoundField ABC."""
        return self.objectName()

    def field_kinds(self) -> FrozenSet[str]:
        """Implement BoundField ABC."""
        return get_classes(self)


class FieldLineEdit(QLineEdit, FieldBindingMixin, BoundField, TextGettable,
                    TextSettable, EditLockable, metaclass=PyQtWidgetMeta):
    """
    Single line text input.

    Example:
        price = FieldLineEdit("data.price", kinds=["currency"])
    """

    _field_role = FieldRole.TEXT_INPUT

    def __init__(self, name: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__(parent)
        self._init_binding(name, kinds)

    def read_text(self) -> str:
        """Implement TextGettable ABC."""
        return self.text()

    def write_text(self, text: str) -> None:
        """Implement TextSettable ABC."""
        self.setText(text)

    def set_edit_locked(self, locked: bool) -> None:
        """Implement EditLockable ABC."""
        self.setReadOnly(locked)


class FieldPlainTextEdit(QPlainTextEdit, FieldBindingMixin, BoundField, TextGettable,
                         TextSettable, EditLockable, metaclass=PyQtWidgetMeta):
    """Multiline text input."""

    _field_role = FieldRole.MULTILINE_INPUT

    def __init__(self, name: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__(parent)
        self._init_binding(name, kinds)

    def read_text(self) -> str:
        """Implement TextGettable ABC."""
        return self.toPlainText()

    def write_text(self, text: str) -> None:
        """Implement TextSettable ABC."""
        self.setPlainText(text)

    def set_edit_locked(self, locked: bool) -> None:
        """Implement EditLockable ABC."""
        self.setReadOnly(locked)


class FieldCheckBox(QCheckBox, FieldBindingMixin, BoundField, Checkable,
                    EditLockable, metaclass=PyQtWidgetMeta):
    """Boolean input."""

    _field_role = FieldRole.CHECK_INPUT

    def __init__(self, name: str = "", kinds: Iterable[str] = (), text: str = "", parent=None):
        super().__init__(text, parent)
        self._init_binding(name, kinds)

    def read_checked(self) -> bool:
        """Implement Checkable ABC."""
        return self.isChecked()

    def write_checked(self, checked: bool) -> None:
        """Implement Checkable ABC."""
        self.setChecked(bool(checked))

    def set_edit_locked(self, locked: bool) -> None:
        """Implement EditLockable ABC."""
        self.setEnabled(not locked)


class FieldComboBox(QComboBox, FieldBindingMixin, BoundField, TextGettable,
                    OptionSelectable, EditLockable, metaclass=PyQtWidgetMeta):
    """
    Choice input.

    Each option has a display text and a value (itemData); the value text of
    an option without data is its display text.
    """

    _field_role = FieldRole.CHOICE_INPUT

    def __init__(self, name: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__(parent)
        self._init_binding(name, kinds)

    def add_option(self, text: str, value: Any = None) -> None:
        self.addItem(text, value)

    def option_value(self, index: int) -> str:
        data = self.itemData(index)
        if data is None:
            return self.itemText(index)
        return str(data)

    def read_text(self) -> str:
        """Implement TextGettable ABC."""
        if self.currentIndex() < 0:
            return ""
        return self.option_value(self.currentIndex())

    def select_option(self, value: str) -> bool:
        """Implement OptionSelectable ABC."""
        for i in range(self.count()):
            if self.option_value(i) == value:
                self.setCurrentIndex(i)
                return True
        return False

    def clear_selection(self) -> None:
        """Implement OptionSelectable ABC."""
        if not self.select_option(""):
            self.setCurrentIndex(-1)

    def set_edit_locked(self, locked: bool) -> None:
        """Implement EditLockable ABC."""
        self.setEnabled(not locked)


class BlobField(QLineEdit, FieldBindingMixin, BoundField, BlobHolder,
                EditLockable, metaclass=PyQtWidgetMeta):
    """
    Holder for a payload read from a file by an external reader.

    Shows the file name; the payload itself is only reachable via read_blob().
    """

    _field_role = FieldRole.BLOB_INPUT

    def __init__(self, name: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__(parent)
        self._init_binding(name, kinds)
        self.setReadOnly(True)
        self._blob: Any = None

    def read_blob(self) -> Any:
        """Implement BlobHolder ABC."""
        return self._blob

    def deposit_blob(self, payload: Any, file_name: Optional[str] = None) -> None:
        """Implement BlobHolder ABC."""
        self._blob = payload
        self.setText(file_name or "")

    def discard_blob(self) -> None:
        """Implement BlobHolder ABC."""
        self._blob = None
        self.clear()

    def set_edit_locked(self, locked: bool) -> None:
        """Implement EditLockable ABC."""
        self.setEnabled(not locked)


class FieldLabel(QLabel, FieldBindingMixin, BoundField, DisplayRenderable,
                 metaclass=PyQtWidgetMeta):
    """
    Read-only display of a model value.

    An unnamed label takes its name from its initial text the first time the
    name is asked for:

        FieldLabel("data.customer.name")   # shows the name until filled
    """

    _field_role = FieldRole.DISPLAY_LABEL
    HTML_KIND = "html"

    def __init__(self, text: str = "", name: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__(text, parent)
        self._init_binding(name, kinds)

    def _discover_name(self) -> str:
        return self.text().strip()

    def field_name(self) -> str:
        """Implement BoundField ABC, discovering the name on first use."""
        name = self.objectName()
        if not name:
            name = self._discover_name()
            if name:
                self.setObjectName(name)
                if self.isHidden() and self.parentWidget() is not None:
                    self.setHidden(False)
        return name

    def render_display(self, text: str) -> None:
        """Implement DisplayRenderable ABC."""
        if self.HTML_KIND in self.field_kinds():
            self.setTextFormat(Qt.TextFormat.RichText)
        else:
            self.setTextFormat(Qt.TextFormat.PlainText)
        self.setText(text)


class LinkLabel(FieldLabel):
    """Display field rendering the value as link target."""

    HREF_PROPERTY = "href"
    CAPTION_PROPERTY = "caption"

    def __init__(self, href: str = "", caption: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__("", "", kinds, parent)
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setOpenExternalLinks(True)
        if href:
            self.setProperty(self.HREF_PROPERTY, href)
        if caption:
            self.setProperty(self.CAPTION_PROPERTY, caption)

    def href(self) -> str:
        return str(self.property(self.HREF_PROPERTY) or "")

    def _discover_name(self) -> str:
        name = self.href()
        self.setProperty(self.HREF_PROPERTY, "#")
        return name

    def render_display(self, text: str) -> None:
        """Implement DisplayRenderable ABC."""
        self.setProperty(self.HREF_PROPERTY, text)
        caption = self.property(self.CAPTION_PROPERTY) or text
        self.setText(f'<a href="{text}">{caption}</a>' if text else "")


class ImageLabel(FieldLabel):
    """Display field rendering the value as image source."""

    SOURCE_PROPERTY = "source"

    def __init__(self, source: str = "", kinds: Iterable[str] = (), parent=None):
        super().__init__("", "", kinds, parent)
        if source:
            self.setProperty(self.SOURCE_PROPERTY, source)

    def source(self) -> str:
        return str(self.property(self.SOURCE_PROPERTY) or "")

    def _discover_name(self) -> str:
        name = self.source()
        if name.startswith("#"):
            name = name[1:]
        self.setProperty(self.SOURCE_PROPERTY, "#")
        return name

    def render_display(self, text: str) -> None:
        """Implement DisplayRenderable ABC."""
        self.setProperty(self.SOURCE_PROPERTY, text)
        if text:
            self.setPixmap(QPixmap(text))
        else:
            self.clear()
