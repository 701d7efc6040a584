"""Schema introspection from YAML entity metadata."""

from recordforge.errors import ConfigurationError
from recordforge.metadata.loader import EntityModel, MetadataLoader


class MetadataSchema:
    """SchemaIntrospector answering from loaded entity metadata.

    Useful where no database is reachable, e.g. when validating metadata
    from the command line.
    """

    def __init__(self, loader: MetadataLoader):
        self.loader = loader

    def column_type(self, table: str, column: str) -> str:
        entity = self._entity_for_table(table)
        for field in entity.fields:
            if field.name == column:
                return field.type
        raise ConfigurationError(
            f"The column specified, {column}, does not exist in the table {table}",
            column,
        )

    def unique_key_groups(self, table: str) -> set[frozenset[str]]:
        entity = self._entity_for_table(table)
        return {frozenset(key) for key in entity.unique_keys}

    def _entity_for_table(self, table: str) -> EntityModel:
        entity = self.loader.get_entity_by_table(table)
        if entity is None:
            raise ConfigurationError(f"The table specified, {table}, does not exist", table)
        return entity
