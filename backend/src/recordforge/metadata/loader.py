"""Load and resolve entity metadata from YAML files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from recordforge.errors import ConfigurationError
from recordforge.text.inflection import humanize, tablize

BEHAVIOR_NAMES = ("email", "link", "dateCreated", "dateUpdated", "random", "upload")


@dataclass
class BehaviorConfig:
    """A column behaviour declared in metadata, e.g. ``random: {kind: hex, length: 8}``."""

    name: str
    params: dict[str, Any] = field(default_factory=dict)


@dataclass
class FieldDefinition:
    name: str
    type: str
    display_name: str
    behaviors: list[BehaviorConfig] = field(default_factory=list)


@dataclass
class EntityModel:
    name: str
    table: str
    fields: list[FieldDefinition]
    unique_keys: list[list[str]] = field(default_factory=list)

    def get_field(self, name: str) -> FieldDefinition | None:
        for f in self.fields:
            if f.name == name:
                return f
        return None


class MetadataLoader:
    """Loads entity definitions from ``{metadata_path}/entities/*.yaml``."""

    def __init__(self, metadata_path: Path):
        self.metadata_path = metadata_path
        self.entities: dict[str, EntityModel] = {}

    def load_all(self) -> None:
        """Load all entities."""
        entities_path = self.metadata_path / "entities"
        if not entities_path.exists():
            return

        for yaml_file in sorted(entities_path.glob("*.yaml")):
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
                if data and "entity" in data:
                    entity = self._resolve_entity(data)
                    self.entities[entity.name] = entity

    def _resolve_entity(self, data: dict) -> EntityModel:
        """Convert an entity dict to an EntityModel."""
        name = data["entity"]
        fields = [self._resolve_field(name, f) for f in data.get("fields", [])]

        unique_keys = []
        for key in data.get("uniqueKeys", []):
            if isinstance(key, str):
                key = [key]
            unique_keys.append(list(key))

        return EntityModel(
            name=name,
            table=data.get("table") or tablize(name),
            fields=fields,
            unique_keys=unique_keys,
        )

    def _resolve_field(self, entity_name: str, data: dict) -> FieldDefinition:
        """Convert field dict to FieldDefinition."""
        name = data["name"]
        return FieldDefinition(
            name=name,
            type=str(data.get("type", "varchar")).lower(),
            display_name=data.get("displayName", humanize(name)),
            behaviors=[
                self._resolve_behavior(entity_name, name, b)
                for b in data.get("behaviors", [])
            ],
        )

    def _resolve_behavior(self, entity_name: str, field_name: str, data: Any) -> BehaviorConfig:
        """Convert a behaviour entry (bare name or single-key mapping)."""
        if isinstance(data, str):
            name, params = data, {}
        elif isinstance(data, dict) and len(data) == 1:
            name, params = next(iter(data.items()))
            params = params or {}
            if not isinstance(params, dict):
                raise ConfigurationError(
                    f"Parameters of the {name} behavior on {entity_name}.{field_name} must be a mapping",
                    params,
                )
        else:
            raise ConfigurationError(
                f"Behavior on {entity_name}.{field_name} must be a name or a single-key mapping",
                data,
            )

        if name not in BEHAVIOR_NAMES:
            raise ConfigurationError(
                f"The behavior specified, {name}, on {entity_name}.{field_name} "
                f"must be one of {', '.join(BEHAVIOR_NAMES)}",
                name,
            )
        return BehaviorConfig(name=name, params=dict(params))

    def get_entity(self, name: str) -> EntityModel | None:
        """Get a resolved entity by name."""
        return self.entities.get(name)

    def get_entity_by_table(self, table: str) -> EntityModel | None:
        """Get the entity stored in a table."""
        for entity in self.entities.values():
            if entity.table == table:
                return entity
        return None

    def list_entities(self) -> list[str]:
        """List all entity names."""
        return list(self.entities.keys())
