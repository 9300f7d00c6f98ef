"""Tests for operation containers."""

import logging

import pytest
from graphql import build_schema, parse

from gql_scalagen.core.config import make_config
from gql_scalagen.core.errors import FieldNotFoundError, MissingRootTypeError, UnsupportedConstructError
from gql_scalagen.core.loader import collect_fragments
from gql_scalagen.core.operations import (
    OperationsVisitor,
    RunState,
    find_operations,
    generate_operation_name,
    name_wranglings,
)

DOCUMENT = """
query GetUser($id: ID) {
  user(id: $id) { ...UserFields }
}

fragment UserFields on User { id name }
"""


@pytest.fixture
def visit(config):
    def factory(source: str, state: RunState | None = None, cfg=None):
        visitor = OperationsVisitor(cfg or config, state)
        visitor.visit_document(parse(source))
        return visitor

    return factory


def config_with_fragments(schema, source: str, raw=None):
    return make_config(schema, raw, collect_fragments([parse(source)]))


class TestRunState:
    """Tests for RunState and operation naming."""

    def test_unnamed_counter(self):
        state = RunState()
        assert state.next_unnamed() == "Unnamed_1_"
        assert state.next_unnamed() == "Unnamed_2_"

    def test_named_operation(self):
        (operation,) = find_operations(parse("query Named { users { id } }"))
        assert generate_operation_name(operation, RunState()) == (False, "Named")

    def test_anonymous_operation(self):
        (operation,) = find_operations(parse("{ users { id } }"))
        assert generate_operation_name(operation, RunState()) == (True, "Unnamed_1_")


class TestFindOperations:
    """Tests for find_operations."""

    def test_document_order_without_fragments(self):
        document = parse("query B { users { id } } fragment F on User { id } mutation A { rename(id: 1, name: \"x\") { id } }")
        assert [op.name.value for op in find_operations(document)] == ["B", "A"]


class TestOperationsVisitor:
    """Tests for OperationsVisitor."""

    def test_container_names(self, visit):
        visitor = visit(
            """
            query GetUser { user { id } }
            query UserQuery { user { id } }
            mutation Rename { rename(id: 1, name: "x") { id } }
            """
        )
        assert [u.object_name for u in visitor.units] == ["GetUserQuery", "UserQuery", "RenameMutation"]
        assert [u.operation_type for u in visitor.units] == ["query", "query", "mutation"]

    def test_unnamed_operations(self, visit):
        visitor = visit("{ users { id } } { user { id } }")
        assert [u.name for u in visitor.units] == ["Unnamed_1_", "Unnamed_2_"]
        assert [u.object_name for u in visitor.units] == ["Unnamed_1_Query", "Unnamed_2_Query"]
        assert all(u.synthesized for u in visitor.units)

    def test_new_state_restarts_numbering(self, visit):
        visit("{ users { id } }")
        visitor = visit("{ users { id } }", RunState())
        assert visitor.units[0].name == "Unnamed_1_"

    def test_shared_state_continues_numbering(self, visit):
        state = RunState()
        visit("{ users { id } }", state)
        visitor = visit("{ users { id } }", state)
        assert visitor.units[0].name == "Unnamed_2_"

    def test_variables_and_data(self, schema, visit):
        visitor = visit(DOCUMENT, cfg=config_with_fragments(schema, DOCUMENT))
        (unit,) = visitor.units
        assert unit.ok
        assert [v.name for v in unit.variables] == ["id"]
        assert unit.variables[0].type_signature == "js.UndefOr[String]"
        assert [f.name for f in unit.data.fields] == ["user"]
        assert [f.name for f in unit.data.children[0].fields] == ["id", "name"]

    def test_no_variables(self, visit):
        (unit,) = visit("query Q { users { id } }").units
        assert unit.variables == []

    def test_document_references_fragments(self, schema, visit):
        (unit,) = visit(DOCUMENT, cfg=config_with_fragments(schema, DOCUMENT)).units
        assert unit.document.startswith("query GetUser($$id: ID)")
        assert unit.document.splitlines()[-1] == "${Fragment.UserFields}"

    def test_document_with_inline_fragments(self, schema, visit):
        cfg = config_with_fragments(schema, DOCUMENT, {"isolateFragments": False})
        (unit,) = visit(DOCUMENT, cfg=cfg).units
        assert "fragment UserFields on User" in unit.document
        assert "${" not in unit.document

    def test_custom_fragment_object_name(self, schema, visit):
        cfg = config_with_fragments(schema, DOCUMENT, {"fragmentObjectName": "Frags"})
        (unit,) = visit(DOCUMENT, cfg=cfg).units
        assert unit.document.splitlines()[-1] == "${Frags.UserFields}"

    def test_failures_are_isolated(self, visit, caplog):
        with caplog.at_level(logging.ERROR, logger="gql_scalagen"):
            visitor = visit("query Bad { user { missing } } query Good { user { id } }")
        bad, good = visitor.units
        assert not bad.ok
        assert isinstance(bad.error, FieldNotFoundError)
        assert good.ok
        assert "Error generating operation Bad" in caplog.text

    def test_abstract_field_fails_its_operation(self, visit):
        bad, good = visit("query Lookup { node(id: 1) { id } } query Good { user { id } }").units
        assert isinstance(bad.error, UnsupportedConstructError)
        assert good.ok

    def test_missing_root_type(self, visit):
        cfg = make_config(build_schema("type Query { a: Int }"))
        (unit,) = visit("mutation M { a }", cfg=cfg).units
        assert isinstance(unit.error, MissingRootTypeError)
        assert unit.object_name == "M"

    def test_name_wranglings(self, visit):
        visitor = visit("query GetUser { user { id } } { users { id } }")
        assert visitor.name_wranglings == [
            "// ops mappings:",
            "// GetUser => GetUserQuery",
            "// Unnamed_1_ => Unnamed_1_Query",
        ]

    def test_name_wranglings_keep_first_mapping(self):
        state = RunState()
        state.name_mappings.setdefault("A", "AQuery")
        state.name_mappings.setdefault("A", "Other")
        assert name_wranglings(state) == ["// ops mappings:", "// A => AQuery"]
