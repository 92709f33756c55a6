"""
Form binding constants for eliminating magic strings throughout the binder.

Centralizes the class tags and property names shared by the binder,
the collection manager and the collection widgets.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FormBindConstants:
    """
    Centralized constants for form binding.

    Categories:
    - Collection and button class tags
    - Line bookkeeping properties
    - Kind tag groups
    """

    # Collection and button class tags
    COLLECTION_CLASS: str = "collection"
    ADD_CLASS: str = "add"
    DELETE_CLASS: str = "delete"
    INSERT_CLASS: str = "insert"
    INSERT_ACTION_CLASS: str = "insertAction"
    EXTERNAL_LINE_CLASS: str = "POJO"

    # Dynamic properties
    DELETE_HOOK_PROPERTY: str = "deleteHook"
    WIRED_PROPERTY: str = "formbindWired"

    # Prefix handling
    DEFAULT_PREFIX: str = "data"
    DOT_SEPARATOR: str = "."

    TRANSIENT_CLASS: str = "transient"
    INVALID_CLASS: str = "invalid"


# Create a singleton instance for easy access throughout the codebase
CONSTANTS = FormBindConstants()
