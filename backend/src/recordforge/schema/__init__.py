"""Schema introspection and class/table resolution."""

from recordforge.schema.introspector import ClassResolver, SchemaIntrospector
from recordforge.schema.metadata import MetadataSchema
from recordforge.schema.resolver import DefaultClassResolver
from recordforge.schema.reflection import SQLAlchemySchema, normalize_type_name

__all__ = [
    "ClassResolver",
    "DefaultClassResolver",
    "MetadataSchema",
    "SQLAlchemySchema",
    "SchemaIntrospector",
    "normalize_type_name",
]
