"""
pyqt-formbind: bidirectional binding between nested models and PyQt6 forms.

Binds an arbitrary JSON-like object to the named fields of a widget tree,
including repeatable line groups instantiated from a template.

Architecture:
- Tier 1 (Core): Pure Python path access, coercion, formatting, emptiness
- Tier 2 (Protocols): Field ABCs, adapters, binding markers and configuration
- Tier 3 (Services): Signal blocking while the engine writes fields
- Tier 4 (Forms): Extraction, rendering, comparison, collections, FormBinder
- Widgets: Collection containers, buttons and insert fields

Key Features:
- Dotted name paths into nested objects ("data.customer.name")
- Kind tags driving coercion ("number", "currency", "emptynull", "date")
- Collections bound to model arrays with add, delete and insert
- Change detection without re-rendering (FormBinder.equals)
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
