"""Entity metadata loaded from YAML."""

from recordforge.metadata.loader import (
    BEHAVIOR_NAMES,
    BehaviorConfig,
    EntityModel,
    FieldDefinition,
    MetadataLoader,
)

__all__ = [
    "BEHAVIOR_NAMES",
    "BehaviorConfig",
    "EntityModel",
    "FieldDefinition",
    "MetadataLoader",
]
