"""Tests for case conversion and naming conventions."""

import pytest

from gql_scalagen.core.naming import (
    NameConverter,
    camel_case,
    constant_case,
    parse_import,
    pascal_case,
    snake_case,
)


class TestCaseConversion:
    """Tests for the case helpers."""

    def test_snake_case(self):
        assert snake_case("UserName") == "user_name"
        assert snake_case("getUserById") == "get_user_by_id"

    def test_pascal_case(self):
        assert pascal_case("user_name") == "UserName"
        assert pascal_case("getUser") == "GetUser"
        assert pascal_case("Address") == "Address"

    def test_camel_case(self):
        assert camel_case("user_name") == "userName"

    def test_constant_case(self):
        assert constant_case("userName") == "USER_NAME"


class TestParseImport:
    """Tests for module#prop parsing."""

    def test_with_prop(self):
        assert parse_import("java.time#Instant") == ("java.time", "Instant")

    def test_without_prop(self):
        assert parse_import("scala.scalajs.js") == ("scala.scalajs.js", None)


class TestNameConverter:
    """Tests for NameConverter."""

    def test_default_is_pascal_case(self):
        assert NameConverter()("getUser") == "GetUser"

    def test_suffix_and_prefix(self):
        convert = NameConverter()
        assert convert("GetUser", suffix="Query") == "GetUserQuery"
        assert convert("user", prefix="My") == "MyUser"

    def test_preserves_underscores(self):
        assert NameConverter()("Unnamed_1_") == "Unnamed_1_"
        assert NameConverter()("user_name") == "User_Name"

    def test_transform_underscore(self):
        assert NameConverter(transform_underscore=True)("user_name") == "UserName"

    def test_keep(self):
        assert NameConverter("change-case#keep")("my_name") == "my_name"

    def test_convention_without_module(self):
        assert NameConverter("camelCase")("UserName") == "userName"

    def test_unknown_convention(self):
        with pytest.raises(ValueError, match="Unknown naming convention"):
            NameConverter("change-case#kebabCase")
