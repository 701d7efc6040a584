"""Default class resolver based on naming conventions."""

from typing import Any

from recordforge.text.inflection import humanize, tablize


class DefaultClassResolver:
    """Resolves record classes by class name.

    Accepts a class, an instance, or an already-resolved class name.
    Tables default to the tablized class name (``UserAccount`` ->
    ``user_accounts``) and labels to the humanized column name; both can
    be overridden explicitly.
    """

    def __init__(self) -> None:
        self._tables: dict[str, str] = {}
        self._labels: dict[tuple[str, str], str] = {}

    def class_identity(self, cls_or_instance: Any) -> str:
        if isinstance(cls_or_instance, str):
            return cls_or_instance
        if isinstance(cls_or_instance, type):
            return cls_or_instance.__name__
        return type(cls_or_instance).__name__

    def table_for(self, class_id: str) -> str:
        return self._tables.get(class_id) or tablize(class_id)

    def column_label(self, class_id: str, column: str) -> str:
        return self._labels.get((class_id, column)) or humanize(column)

    def map_table(self, cls_or_instance: Any, table: str) -> None:
        """Store a record class in a table other than the conventional one."""
        self._tables[self.class_identity(cls_or_instance)] = table

    def map_column_label(self, cls_or_instance: Any, column: str, label: str) -> None:
        """Override the display label of a column."""
        self._labels[(self.class_identity(cls_or_instance), column)] = label
