"""Tests for YAML entity metadata and the metadata-backed schema."""

from pathlib import Path

import pytest

from recordforge.errors import ConfigurationError
from recordforge.metadata import BehaviorConfig, MetadataLoader
from recordforge.schema import MetadataSchema

ACCOUNT_YAML = """\
entity: Account
table: accounts
fields:
  - name: email
    type: VARCHAR
    displayName: E-mail
    behaviors: [email]
  - name: homepage
    type: text
    behaviors:
      - link
  - name: token
    type: char
    behaviors:
      - random: {kind: hexadecimal, length: 32}
  - name: avatar
    behaviors:
      - upload: {directory: uploads/avatars}
  - name: created_at
    type: timestamp
    behaviors: [dateCreated]
  - name: updated_at
    type: timestamp
    behaviors: [dateUpdated]
uniqueKeys:
  - [token]
  - [email, homepage]
"""

USER_GROUP_YAML = """\
entity: UserGroup
fields:
  - name: group_name
    type: varchar
uniqueKeys:
  - group_name
"""


def write_entity(metadata_path: Path, filename: str, content: str) -> None:
    entities = metadata_path / "entities"
    entities.mkdir(parents=True, exist_ok=True)
    (entities / filename).write_text(content)


@pytest.fixture
def metadata_path(tmp_path):
    path = tmp_path / "metadata"
    write_entity(path, "account.yaml", ACCOUNT_YAML)
    write_entity(path, "user_group.yaml", USER_GROUP_YAML)
    return path


@pytest.fixture
def loader(metadata_path):
    loader = MetadataLoader(metadata_path)
    loader.load_all()
    return loader


class TestMetadataLoader:
    def test_loads_all_entities(self, loader):
        assert sorted(loader.list_entities()) == ["Account", "UserGroup"]

    def test_table_defaults_to_tablized_name(self, loader):
        assert loader.get_entity("Account").table == "accounts"
        assert loader.get_entity("UserGroup").table == "user_groups"

    def test_fields(self, loader):
        account = loader.get_entity("Account")
        email = account.get_field("email")

        assert email.type == "varchar"
        assert email.display_name == "E-mail"
        assert account.get_field("avatar").type == "varchar"
        assert account.get_field("created_at").display_name == "Created At"
        assert account.get_field("nope") is None

    def test_behaviors(self, loader):
        account = loader.get_entity("Account")

        assert account.get_field("email").behaviors == [BehaviorConfig("email")]
        assert account.get_field("token").behaviors == [
            BehaviorConfig("random", {"kind": "hexadecimal", "length": 32})
        ]
        assert account.get_field("avatar").behaviors[0].params == {"directory": "uploads/avatars"}

    def test_unique_keys(self, loader):
        assert loader.get_entity("Account").unique_keys == [["token"], ["email", "homepage"]]
        assert loader.get_entity("UserGroup").unique_keys == [["group_name"]]

    def test_get_entity_by_table(self, loader):
        assert loader.get_entity_by_table("accounts").name == "Account"
        assert loader.get_entity_by_table("missing") is None

    def test_missing_entities_directory(self, tmp_path):
        loader = MetadataLoader(tmp_path)
        loader.load_all()

        assert loader.list_entities() == []

    def test_unknown_behavior(self, tmp_path):
        write_entity(
            tmp_path,
            "bad.yaml",
            "entity: Bad\nfields:\n  - name: code\n    behaviors: [barcode]\n",
        )

        with pytest.raises(ConfigurationError, match="barcode"):
            MetadataLoader(tmp_path).load_all()

    def test_behavior_with_several_keys(self, tmp_path):
        write_entity(
            tmp_path,
            "bad.yaml",
            "entity: Bad\nfields:\n  - name: code\n    behaviors:\n      - {email: {}, link: {}}\n",
        )

        with pytest.raises(ConfigurationError, match="single-key mapping"):
            MetadataLoader(tmp_path).load_all()

    def test_behavior_params_must_be_a_mapping(self, tmp_path):
        write_entity(
            tmp_path,
            "bad.yaml",
            "entity: Bad\nfields:\n  - name: code\n    behaviors:\n      - random: 8\n",
        )

        with pytest.raises(ConfigurationError, match="random behavior on Bad.code must be a mapping"):
            MetadataLoader(tmp_path).load_all()


class TestMetadataSchema:
    def test_column_type(self, loader):
        schema = MetadataSchema(loader)

        assert schema.column_type("accounts", "token") == "char"
        assert schema.column_type("user_groups", "group_name") == "varchar"

    def test_unknown_table_and_column(self, loader):
        schema = MetadataSchema(loader)

        with pytest.raises(ConfigurationError, match="table specified, nope"):
            schema.column_type("nope", "token")
        with pytest.raises(ConfigurationError, match="column specified, nope"):
            schema.column_type("accounts", "nope")

    def test_unique_key_groups(self, loader):
        assert MetadataSchema(loader).unique_key_groups("accounts") == {
            frozenset(["token"]),
            frozenset(["email", "homepage"]),
        }
