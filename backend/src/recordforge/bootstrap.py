"""Wire a column behaviour registry to a database and entity metadata.

Usage:
    config = RecordforgeConfig.from_env()
    services = initialize_services(config, metadata_path=Path("metadata"))
    services.hook_service.run_validation("Account", context)
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.engine import Engine

from recordforge.columns.registry import ColumnBehaviorRegistry
from recordforge.config import RecordforgeConfig
from recordforge.errors import ConfigurationError
from recordforge.hooks import HookRegistry, HookService
from recordforge.metadata.loader import MetadataLoader
from recordforge.persistence import SQLAlchemyQueryExecutor, create_engine
from recordforge.schema import DefaultClassResolver, SQLAlchemySchema

logger = logging.getLogger(__name__)


@dataclass
class RecordforgeServices:
    """Container for the initialized services."""

    engine: Engine
    hooks: HookRegistry
    hook_service: HookService
    columns: ColumnBehaviorRegistry
    metadata_loader: MetadataLoader | None = None


def create_column_registry(
    config: RecordforgeConfig,
    engine: Engine,
    hooks: HookRegistry | None = None,
    resolver: DefaultClassResolver | None = None,
) -> ColumnBehaviorRegistry:
    """Create a registry that reads the schema of, and queries, the given database."""
    return ColumnBehaviorRegistry(
        schema=SQLAlchemySchema(engine),
        hooks=hooks or HookRegistry(),
        resolver=resolver or DefaultClassResolver(),
        query_executor=SQLAlchemyQueryExecutor(engine),
        max_random_attempts=config.random_max_attempts,
    )


def apply_entity_behaviors(
    registry: ColumnBehaviorRegistry,
    loader: MetadataLoader,
    upload_root: Path | None = None,
) -> int:
    """Configure every column behaviour declared in entity metadata.

    Table names and column display names from the metadata are mapped into
    the registry's resolver when it is a DefaultClassResolver.

    Returns:
        The number of behaviours configured
    """
    resolver = registry.resolver
    count = 0

    for entity_name in loader.list_entities():
        entity = loader.get_entity(entity_name)
        if entity is None:
            continue

        if isinstance(resolver, DefaultClassResolver):
            resolver.map_table(entity.name, entity.table)

        for field in entity.fields:
            if isinstance(resolver, DefaultClassResolver):
                resolver.map_column_label(entity.name, field.name, field.display_name)

            for behavior in field.behaviors:
                params = behavior.params
                if behavior.name == "email":
                    registry.configure_email_column(entity.name, field.name)
                elif behavior.name == "link":
                    registry.configure_link_column(entity.name, field.name)
                elif behavior.name == "dateCreated":
                    registry.configure_date_created_column(entity.name, field.name)
                elif behavior.name == "dateUpdated":
                    registry.configure_date_updated_column(entity.name, field.name)
                elif behavior.name == "random":
                    registry.configure_random_column(
                        entity.name,
                        field.name,
                        params.get("kind", "alphanumeric"),
                        params.get("length"),
                    )
                elif behavior.name == "upload":
                    if "directory" not in params:
                        raise ConfigurationError(
                            f"The upload behavior on {entity.name}.{field.name} needs a directory",
                            field.name,
                        )
                    directory = Path(params["directory"])
                    if not directory.is_absolute() and upload_root is not None:
                        directory = upload_root / directory
                    registry.configure_file_upload_column(entity.name, field.name, directory)
                count += 1

    logger.info("Configured %d column behaviors from metadata", count)
    return count


def initialize_services(
    config: RecordforgeConfig,
    metadata_path: Path | None = None,
    engine: Engine | None = None,
) -> RecordforgeServices:
    """Build the registry, hook dispatcher and (optionally) metadata behaviours."""
    if engine is None:
        engine = create_engine(config.database)

    hooks = HookRegistry()
    columns = create_column_registry(config, engine, hooks=hooks)

    loader = None
    if metadata_path is not None:
        loader = MetadataLoader(metadata_path)
        loader.load_all()
        apply_entity_behaviors(columns, loader, upload_root=config.upload_root)

    return RecordforgeServices(
        engine=engine,
        hooks=hooks,
        hook_service=HookService(hooks),
        columns=columns,
        metadata_loader=loader,
    )
