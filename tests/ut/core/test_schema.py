"""属性表与资源构造测试"""

from __future__ import annotations

import dataclasses

import pytest

from pkgcatalog.core.exceptions import CatalogError, SchemaError
from pkgcatalog.core.pkg.models import Ensure
from pkgcatalog.core.pkg.schema import (
    ABSOLUTE_PATH_ATTRIBUTES,
    ATTRIBUTES,
    build,
    describe,
)


class TestDefaults:
    def test_defaults_applied(self) -> None:
        r = build({"name": "was9"})
        assert r.user == "root"
        assert r.package_owner == "root"
        assert r.package_group == "root"
        assert r.manage_ownership is True
        assert r.ensure is Ensure.PRESENT

    def test_optional_attributes_unset(self) -> None:
        r = build({"name": "was9"})
        for attr in ("package", "version", "target", "repository", "response",
                     "imcl_path", "jdk_package_name", "jdk_package_version", "options"):
            assert getattr(r, attr) is None

    def test_none_falls_back_to_default(self) -> None:
        r = build({"name": "was9", "user": None, "manage_ownership": None})
        assert r.user == "root" and r.manage_ownership is True

    def test_explicit_values_kept(self) -> None:
        r = build({
            "name": "was9",
            "user": "wasadmin",
            "package_owner": "wasadmin",
            "package_group": "wasgroup",
            "manage_ownership": False,
            "options": "-acceptLicense",
        })
        assert r.user == "wasadmin"
        assert r.package_group == "wasgroup"
        assert r.manage_ownership is False
        assert r.options == "-acceptLicense"

    def test_display_name(self) -> None:
        assert build({"name": "was9"}).ref == "Package[was9]"

    def test_resource_is_read_only(self) -> None:
        r = build({"name": "was9"})
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.user = "other"  # type: ignore[misc]


class TestMalformedInput:
    def test_unknown_attribute(self) -> None:
        with pytest.raises(SchemaError, match="unknown attribute.*install_dir"):
            build({"name": "was9", "install_dir": "/opt"})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(SchemaError, match="must be a mapping"):
            build(["name", "was9"])  # type: ignore[arg-type]

    @pytest.mark.parametrize("name", [None, "", "   ", 42])
    def test_bad_name(self, name: object) -> None:
        raw = {} if name is None else {"name": name}
        with pytest.raises(SchemaError, match="name must be a non-empty string"):
            build(raw)

    @pytest.mark.parametrize(("attr", "value"), [
        ("target", 5),
        ("package", ["a"]),
        ("user", True),
        ("version", True),
        ("options", {"a": 1}),
    ])
    def test_wrong_string_type(self, attr: str, value: object) -> None:
        with pytest.raises(SchemaError, match=f"{attr} must be a string"):
            build({"name": "x", attr: value})

    def test_schema_error_is_catalog_error(self) -> None:
        with pytest.raises(CatalogError):
            build({"name": "x", "bogus": 1})


class TestCoercion:
    @pytest.mark.parametrize(("value", "expected"), [
        (True, True), (False, False),
        ("true", True), ("False", False), ("yes", True), ("NO", False),
    ])
    def test_boolean_words(self, value: object, expected: bool) -> None:
        assert build({"name": "x", "manage_ownership": value}).manage_ownership is expected

    @pytest.mark.parametrize("value", ["maybe", 1, 0, "on"])
    def test_boolean_rejected(self, value: object) -> None:
        with pytest.raises(SchemaError, match="manage_ownership must be a boolean"):
            build({"name": "x", "manage_ownership": value})

    def test_numeric_version_becomes_string(self) -> None:
        assert build({"name": "x", "version": 9.0}).version == "9.0"

    def test_state_alias(self) -> None:
        assert build({"name": "x", "state": "absent"}).ensure is Ensure.ABSENT

    def test_state_and_ensure_conflict(self) -> None:
        with pytest.raises(SchemaError, match="alias"):
            build({"name": "x", "state": "absent", "ensure": "present"})

    def test_invalid_ensure(self) -> None:
        with pytest.raises(SchemaError, match="ensure must be one of present, absent"):
            build({"name": "x", "ensure": "latest"})


class TestSchemaTable:
    def test_absolute_path_attributes_in_check_order(self) -> None:
        assert ABSOLUTE_PATH_ATTRIBUTES == ("imcl_path", "target", "response")

    def test_every_model_field_declared(self) -> None:
        r = build({"name": "x"})
        assert {a.name for a in ATTRIBUTES} == set(r.to_dict())

    def test_describe(self) -> None:
        rows = {row["name"]: row for row in describe()}
        assert rows["manage_ownership"]["default"] == "true"
        assert rows["ensure"]["default"] == "present"
        assert rows["user"]["default"] == "root"
        assert rows["target"]["default"] == ""
        assert all(row["description"] for row in rows.values())
