"""Tests for column behaviour configuration."""

import os

import pytest

from recordforge.columns import ColumnBehaviorRegistry, RandomColumnSettings, RandomKind
from recordforge.errors import ConfigurationError, RuntimeEnvironmentError
from recordforge.hooks import HookKey
from recordforge.schema import DefaultClassResolver


class User:
    pass


# =============================================================================
# Column type checks
# =============================================================================


class TestColumnTypeChecks:
    @pytest.mark.parametrize(
        "method",
        [
            "configure_email_column",
            "configure_link_column",
        ],
    )
    def test_string_behaviours_reject_non_string_columns(self, registry, method):
        with pytest.raises(ConfigurationError) as exc_info:
            getattr(registry, method)(User, "age")

        assert "The column specified, age, is a integer column" in str(exc_info.value)
        assert "varchar, char, text" in str(exc_info.value)
        assert exc_info.value.value == "integer"

    def test_date_behaviours_reject_string_columns(self, registry):
        with pytest.raises(ConfigurationError, match="date, time, timestamp"):
            registry.configure_date_created_column(User, "email")
        with pytest.raises(ConfigurationError, match="a date updated column"):
            registry.configure_date_updated_column(User, "email")

    def test_random_rejects_date_column(self, registry):
        with pytest.raises(ConfigurationError, match="a random string column"):
            registry.configure_random_column(User, "birthday", "alpha", 5)

    def test_upload_rejects_date_column(self, registry, tmp_path):
        with pytest.raises(ConfigurationError, match="a file upload column"):
            registry.configure_file_upload_column(User, "created_at", tmp_path)

    def test_unknown_column(self, registry):
        with pytest.raises(ConfigurationError, match="missing"):
            registry.configure_email_column(User, "missing")

    def test_rejected_configuration_registers_nothing(self, registry, hooks):
        with pytest.raises(ConfigurationError):
            registry.configure_email_column(User, "age")

        assert hooks.list_registered("User") == []
        assert registry.email_columns(User) == []


# =============================================================================
# Email and link columns
# =============================================================================


class TestEmailAndLinkColumns:
    def test_email_registers_format_accessor_and_validation(self, registry, hooks):
        registry.configure_email_column(User, "email")

        assert hooks.is_registered("User", HookKey.replace("format_email"))
        assert len(hooks.get("User", HookKey.post_validate())) == 1
        assert registry.email_columns(User) == ["email"]

    def test_validation_hook_registered_once_per_class(self, registry, hooks):
        registry.configure_email_column(User, "email")
        registry.configure_email_column(User, "backup_email")

        assert len(hooks.get("User", HookKey.post_validate())) == 1
        assert registry.email_columns("User") == ["email", "backup_email"]

    def test_email_and_link_each_get_one_validation_hook(self, registry, hooks):
        registry.configure_email_column(User, "email")
        registry.configure_link_column(User, "website")
        registry.configure_link_column(User, "nickname")

        assert len(hooks.get("User", HookKey.post_validate())) == 2
        assert hooks.is_registered("User", HookKey.replace("format_website"))
        assert hooks.is_registered("User", HookKey.replace("format_nickname"))

    def test_reconfiguring_same_column_is_idempotent(self, registry, hooks):
        registry.configure_link_column(User, "website")
        registry.configure_link_column(User, "website")

        assert registry.link_columns(User) == ["website"]
        assert len(hooks.get("User", HookKey.replace("format_website"))) == 1

    def test_class_instance_and_name_are_the_same_class(self, registry):
        registry.configure_email_column(User(), "email")

        assert registry.email_columns(User) == ["email"]
        assert registry.email_columns("User") == ["email"]


# =============================================================================
# Timestamps
# =============================================================================


class TestDateColumns:
    def test_created_and_updated_hooks(self, registry, hooks):
        registry.configure_date_created_column(User, "created_at")
        registry.configure_date_updated_column(User, "updated_at")
        registry.configure_date_updated_column(User, "birthday")

        assert len(hooks.get("User", HookKey.post_begin_store())) == 2
        assert registry.date_created_columns(User) == ["created_at"]
        assert registry.date_updated_columns(User) == ["updated_at", "birthday"]

    def test_current_timestamp_uses_clock(self, registry):
        assert registry.current_timestamp() == "2024-03-15 09:30:45"


# =============================================================================
# Random columns
# =============================================================================


class TestRandomColumns:
    def test_configures_settings(self, registry, hooks):
        registry.configure_random_column(User, "token", "hexadecimal", 32)

        assert registry.random_columns(User) == {
            "token": RandomColumnSettings(RandomKind.HEXADECIMAL, 32)
        }
        assert len(hooks.get("User", HookKey.pre_validate())) == 1

    def test_accepts_enum_kind(self, registry):
        registry.configure_random_column(User, "token", RandomKind.NUMERIC, 4)

        assert registry.random_columns(User)["token"].kind is RandomKind.NUMERIC

    def test_invalid_kind(self, registry):
        with pytest.raises(ConfigurationError) as exc_info:
            registry.configure_random_column(User, "token", "base64", 8)

        assert str(exc_info.value) == (
            "The type, base64, must be one of alphanumeric, alpha, numeric, hexadecimal."
        )

    @pytest.mark.parametrize("length", [0, -3, 2.5, "abc", "", "²", None, True])
    def test_invalid_length(self, registry, length):
        with pytest.raises(ConfigurationError, match="needs to be an integer greater than zero"):
            registry.configure_random_column(User, "token", "alpha", length)

    @pytest.mark.parametrize("length,expected", [(8, 8), ("12", 12), (4.0, 4)])
    def test_integral_lengths(self, registry, length, expected):
        registry.configure_random_column(User, "token", "alpha", length)

        assert registry.random_columns(User)["token"].length == expected

    def test_hook_registered_once_for_many_columns(self, registry, hooks):
        registry.configure_random_column(User, "token", "alpha", 8)
        registry.configure_random_column(User, "nickname", "numeric", 4)

        assert len(hooks.get("User", HookKey.pre_validate())) == 1
        assert list(registry.random_columns(User)) == ["token", "nickname"]


# =============================================================================
# Upload columns
# =============================================================================


class TestFileUploadColumns:
    def test_registers_upload_accessor(self, registry, hooks, tmp_path):
        registry.configure_file_upload_column(User, "avatar", tmp_path)

        assert hooks.is_registered("User", HookKey.replace("upload_avatar"))
        assert registry.file_upload_columns(User) == {"avatar": tmp_path}

    def test_last_directory_wins(self, registry, hooks, tmp_path):
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()

        registry.configure_file_upload_column(User, "avatar", first)
        registry.configure_file_upload_column(User, "avatar", str(second))

        assert registry.file_upload_columns(User) == {"avatar": second}
        assert len(hooks.get("User", HookKey.replace("upload_avatar"))) == 1

    def test_missing_directory(self, registry, tmp_path):
        missing = tmp_path / "nope"

        with pytest.raises(RuntimeEnvironmentError) as exc_info:
            registry.configure_file_upload_column(User, "avatar", missing)

        assert str(exc_info.value) == f"The file upload directory, {missing}, is not writable"

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="root can write to read-only directories",
    )
    def test_read_only_directory(self, registry, tmp_path):
        locked = tmp_path / "locked"
        locked.mkdir()
        locked.chmod(0o500)
        try:
            with pytest.raises(RuntimeEnvironmentError):
                registry.configure_file_upload_column(User, "avatar", locked)
        finally:
            locked.chmod(0o700)


class TestClassResolution:
    def test_mapped_table_is_used_for_type_checks(self, schema, hooks):
        schema.tables["members"] = {"contact": "varchar"}
        resolver = DefaultClassResolver()
        resolver.map_table("Member", "members")
        registry = ColumnBehaviorRegistry(schema, hooks, resolver=resolver)

        registry.configure_email_column("Member", "contact")

        assert registry.email_columns("Member") == ["contact"]
