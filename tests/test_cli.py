"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from gql_scalagen.cli import HEADER, main

SCHEMA = """
type Query { user(id: ID): User }
type User { id: ID! name: String }
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "schema.graphql"
    path.write_text(SCHEMA)
    return path


@pytest.fixture
def documents_dir(tmp_path):
    path = tmp_path / "ops"
    path.mkdir()
    (path / "user.graphql").write_text("query GetUser($id: ID) { user(id: $id) { ...UserFields } }")
    (path / "fragments.graphql").write_text("fragment UserFields on User { id name }")
    return path


class TestSchemaCommand:
    """Tests for the schema command."""

    def test_generates_schema(self, runner, schema_file, tmp_path):
        output = tmp_path / "Schema.scala"
        result = runner.invoke(main, ["schema", "-s", str(schema_file), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "Done!" in result.output
        code = output.read_text()
        assert code.startswith(HEADER + "\n\n")
        assert "trait User extends js.Object {" in code

    def test_bad_output_extension(self, runner, schema_file, tmp_path):
        result = runner.invoke(main, ["schema", "-s", str(schema_file), "-o", str(tmp_path / "Schema.txt")])
        assert result.exit_code == 2

    def test_invalid_schema(self, runner, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text("type Query { user: Missing }")
        result = runner.invoke(main, ["schema", "-s", str(path), "-o", str(tmp_path / "Schema.scala")])
        assert result.exit_code == 1
        assert "Invalid schema" in result.output

    def test_invalid_config(self, runner, schema_file, tmp_path):
        config = tmp_path / "codegen.json"
        config.write_text(json.dumps({"wrapperPolicy": "maybe"}))
        args = ["schema", "-s", str(schema_file), "-o", str(tmp_path / "Schema.scala"), "-c", str(config)]
        result = runner.invoke(main, args)
        assert result.exit_code == 1
        assert "Unknown wrapper policy" in result.output

    def test_custom_templates(self, runner, schema_file, tmp_path):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "trait.scala.j2").write_text("// trait {{ name }}")
        output = tmp_path / "Schema.scala"
        result = runner.invoke(main, ["schema", "-s", str(schema_file), "-o", str(output), "-t", str(templates)])
        assert result.exit_code == 0, result.output
        assert "// trait User" in output.read_text()


class TestOperationsCommand:
    """Tests for the operations command."""

    def test_generates_operations(self, runner, schema_file, documents_dir, tmp_path):
        output = tmp_path / "Operations.scala"
        args = ["operations", "-s", str(schema_file), "-d", str(documents_dir), "-o", str(output)]
        result = runner.invoke(main, args)
        assert result.exit_code == 0, result.output
        code = output.read_text()
        assert "object Fragment {" in code
        assert "object GetUserQuery {" in code

    def test_config_file(self, runner, schema_file, documents_dir, tmp_path):
        config = tmp_path / "codegen.json"
        config.write_text(json.dumps({"gqlImport": "app.graphql#gql", "fragmentObjectName": "Frags"}))
        output = tmp_path / "Operations.scala"
        args = ["operations", "-s", str(schema_file), "-d", str(documents_dir), "-o", str(output), "-c", str(config)]
        result = runner.invoke(main, args)
        assert result.exit_code == 0, result.output
        code = output.read_text()
        assert "import app.graphql.gql" in code
        assert "val operation = gql(operationString)" in code
        assert "${Frags.UserFields}" in code

    def test_external_fragments(self, runner, schema_file, tmp_path):
        ops = tmp_path / "ops.graphql"
        ops.write_text("query GetUser { user { ...Shared } }")
        shared = tmp_path / "shared.graphql"
        shared.write_text("fragment Shared on User { id }")
        config = tmp_path / "codegen.json"
        config.write_text(json.dumps({"externalFragments": [str(shared)]}))
        output = tmp_path / "Operations.scala"
        args = ["operations", "-s", str(schema_file), "-d", str(ops), "-o", str(output), "-c", str(config)]
        result = runner.invoke(main, args)
        assert result.exit_code == 0, result.output
        code = output.read_text()
        assert "${Fragment.Shared}" in code
        assert "object Fragment {" not in code

    def test_failed_operation_warns(self, runner, schema_file, tmp_path):
        ops = tmp_path / "ops.graphql"
        ops.write_text("query Broken { user { missing } }")
        output = tmp_path / "Operations.scala"
        result = runner.invoke(main, ["operations", "-s", str(schema_file), "-d", str(ops), "-o", str(output)])
        assert result.exit_code == 0, result.output
        assert "1 operation(s) could not be generated: Broken" in result.output
        assert "// Error generating BrokenQuery" in output.read_text()

    def test_unparsable_document(self, runner, schema_file, tmp_path):
        ops = tmp_path / "ops.graphql"
        ops.write_text("query Broken {")
        output = tmp_path / "Operations.scala"
        result = runner.invoke(main, ["operations", "-s", str(schema_file), "-d", str(ops), "-o", str(output)])
        assert result.exit_code == 1
        assert "Error parsing ops.graphql" in result.output

    def test_missing_documents(self, runner, schema_file, tmp_path):
        args = ["operations", "-s", str(schema_file), "-d", str(tmp_path / "nope"), "-o", str(tmp_path / "O.scala")]
        result = runner.invoke(main, args)
        assert result.exit_code == 2
