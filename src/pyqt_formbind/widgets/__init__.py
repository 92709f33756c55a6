"""
Collection widgets.

Containers, buttons and staging inputs used to bind repeatable line
groups to model arrays.
"""

from .collection_widgets import (
    ButtonRole,
    CollectionContainer,
    CollectionButton,
    InsertField,
)

__all__ = [
    "ButtonRole",
    "CollectionContainer",
    "CollectionButton",
    "InsertField",
]
