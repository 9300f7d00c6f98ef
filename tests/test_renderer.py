"""Tests for Scala.js rendering."""

import pytest
from graphql import GraphQLID, GraphQLNonNull, GraphQLString, parse

from gql_scalagen.core.enums import build_enum_definitions
from gql_scalagen.core.errors import FieldNotFoundError
from gql_scalagen.core.gql import build_fragment_block
from gql_scalagen.core.loader import collect_fragments
from gql_scalagen.core.operations import OperationsVisitor, OperationUnit
from gql_scalagen.core.renderer import (
    NATIVE_TRAIT_OPTIONS,
    ScalaRenderer,
    TraitOptions,
    declaration,
    extends_clause,
    literal_entries,
    one_line,
    scala_ident,
    scaladoc,
)
from gql_scalagen.core.schema_types import TraitSpec
from gql_scalagen.core.variables import GenOptions, create_variable


@pytest.fixture
def renderer():
    return ScalaRenderer()


@pytest.fixture
def user_variables():
    return [
        create_variable("id", GraphQLNonNull(GraphQLID), GenOptions(scalars={"ID": "String"})),
        create_variable("name", GraphQLString, GenOptions(documentation="The name")),
    ]


def lines_of(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines()]


class TestFilters:
    """Tests for template filters."""

    def test_scala_ident(self):
        assert scala_ident("type") == "`type`"
        assert scala_ident("name") == "name"

    def test_one_line(self):
        assert one_line("first\n  second ") == "first second"
        assert one_line(None) == ""

    def test_scaladoc(self):
        assert scaladoc("ends */ here") == "ends * / here"

    def test_extends_clause(self):
        assert extends_clause(["js.Object", "A", "B"]) == "extends js.Object with A with B"
        assert extends_clause([]) == ""

    def test_declaration(self, user_variables):
        user_id, name = user_variables
        assert declaration(user_id) == "val id: String"
        assert declaration(name) == "val name: String|Null = null"
        assert declaration(name, ignore_default=True) == "val name: String|Null"

    def test_declaration_keyword_and_mutable(self):
        variable = create_variable("type", GraphQLString, GenOptions(immutable=False))
        assert declaration(variable) == "var `type`: String|Null = null"

    def test_declaration_renamed(self):
        variable = create_variable("name", GraphQLString, GenOptions(convert_name=str.upper))
        assert declaration(variable) == '@JSName("name") val NAME: String|Null = null'
        assert literal_entries([variable]) == '"name" -> NAME.asInstanceOf[js.Any]'


class TestRenderTrait:
    """Tests for traits and companions."""

    def test_trait(self, renderer, user_variables):
        lines = lines_of(renderer.render_trait("User", user_variables))
        assert lines[0] == "trait User extends js.Object {"
        assert "val id: String" in lines
        assert "/** The name */" in lines
        assert "val name: String|Null = null" in lines
        assert "} // end User companion" == lines[-1]

    def test_companion(self, renderer, user_variables):
        lines = lines_of(renderer.render_trait("User", user_variables))
        assert "def apply(id: String, name: String|Null = null): User =" in lines
        assert (
            'js.Dynamic.literal("id" -> id.asInstanceOf[js.Any], "name" -> name.asInstanceOf[js.Any]).asInstanceOf[User]'
            in lines
        )
        assert "def unapply(value: User) =" in lines
        assert "Some((value.id, value.name))" in lines
        assert "implicit class Copy(private val orig: User) extends AnyVal {" in lines
        assert "def copy(id: String = orig.id, name: String|Null = orig.name): User =" in lines

    def test_native_without_defaults(self, renderer, user_variables):
        lines = lines_of(renderer.render_trait("User", user_variables, NATIVE_TRAIT_OPTIONS))
        assert lines[0] == "@js.native"
        assert "val name: String|Null" in lines
        assert "def apply(id: String, name: String|Null = null): User =" in lines

    def test_description_and_supers(self, renderer, user_variables):
        options = TraitOptions(description="A user", extends=("Base",))
        lines = lines_of(renderer.render_trait("User", user_variables, options, supers=["Node"]))
        assert lines[:2] == ["/** A user */", "trait User extends js.Object with Node with Base {"]

    def test_without_companion(self, renderer, user_variables):
        text = renderer.render_trait("User", user_variables, TraitOptions(include_companion=False))
        assert "object User" not in text
        assert text.endswith("}")

    def test_no_unapply_for_large_traits(self, renderer):
        variables = [create_variable(f"f{i}", GraphQLString) for i in range(23)]
        text = renderer.render_trait("Wide", variables)
        assert "def unapply" not in text
        assert "def apply" in text

    def test_fqn(self, renderer, user_variables):
        text = renderer.render_trait("User", user_variables, TraitOptions(fqn="Data.User"))
        assert "def unapply(value: Data.User) =" in lines_of(text)
        assert "trait User extends js.Object {" in lines_of(text)

    def test_nested_is_indented(self, renderer, user_variables):
        text = renderer.render_trait("Outer", user_variables, nested="trait Inner")
        assert "  trait Inner" in text.splitlines()

    def test_trait_spec(self, renderer, user_variables):
        spec = TraitSpec("User", user_variables, "Object type User", ("Node",))
        lines = lines_of(renderer.render_trait_spec(spec))
        assert lines[:2] == ["/** Object type User */", "trait User extends js.Object with Node {"]


class TestRenderEnum:
    """Tests for enum rendering."""

    def test_enum(self, renderer, schema):
        (role,) = build_enum_definitions(schema)
        assert renderer.render_enum(role).splitlines() == [
            "/** Enum Role",
            " * Schema name: Role",
            " */",
            "@js.native",
            "sealed trait Role extends js.Any",
            "object Role {",
            '  val ADMIN = "ADMIN".asInstanceOf[Role]',
            '  val USER = "USER".asInstanceOf[Role]',
            "}",
        ]

    def test_custom_template(self, tmp_path, schema):
        (tmp_path / "enum.scala.j2").write_text("// custom {{ enum.name }}")
        (role,) = build_enum_definitions(schema)
        assert ScalaRenderer(str(tmp_path)).render_enum(role) == "// custom Role"


class TestRenderFragments:
    """Tests for the fragment object."""

    def test_fragment_block(self, renderer):
        document = parse("fragment UserFields on User { id }")
        block = build_fragment_block(collect_fragments([document]))
        assert renderer.render_fragment_block(block).splitlines() == [
            "object Fragment {",
            '  val UserFields = s"""fragment UserFields on User {',
            "  id",
            '}"""',
            "} // end Fragment object",
        ]

    def test_empty_block(self, renderer):
        assert renderer.render_fragment_block(build_fragment_block([])) == ""


class TestRenderOperation:
    """Tests for operation containers."""

    @pytest.fixture
    def unit(self, config):
        visitor = OperationsVisitor(config)
        (unit,) = visitor.visit_document(parse("query GetUser($id: ID) { user(id: $id) { id home { city } } }"))
        return unit

    def test_container(self, renderer, unit):
        lines = lines_of(renderer.render_operation(unit))
        assert lines[0] == "object GetUserQuery {"
        assert lines[1] == 'val operationString = s"""query GetUser($$id: ID) {'
        assert lines[-1] == "} // end GetUserQuery object"
        assert not any(line.startswith("val operation =") for line in lines)

    def test_gql_import(self, renderer, unit):
        lines = lines_of(renderer.render_operation(unit, "app.graphql#gql"))
        assert "val operation = gql(operationString)" in lines

    def test_variables(self, renderer, unit):
        lines = lines_of(renderer.render_operation(unit, variables_supers=["HasVariables"]))
        assert "trait Variables extends js.Object with HasVariables {" in lines
        assert "val id: js.UndefOr[String] = js.undefined" in lines
        assert "def unapply(value: GetUserQuery.Variables) =" in lines

    def test_data(self, renderer, unit):
        lines = lines_of(renderer.render_operation(unit, data_supers=["Base"]))
        assert "trait Data extends js.Object {" in lines
        assert "val user: Data.User_User|Null" in lines
        assert "trait User_User extends js.Object with Base {" in lines
        assert "def unapply(value: Data.User_User.Home_Address) =" in lines
        assert "} // end Data companion" in lines

    def test_failed_unit(self, renderer):
        unit = OperationUnit(
            name="Bad",
            synthesized=False,
            object_name="BadQuery",
            operation_type="query",
            error=FieldNotFoundError("missing", "User"),
        )
        assert renderer.render_operation(unit) == (
            "// Error generating BadQuery: Could not find field 'missing' on type 'User'"
        )


class TestRenderImports:
    """Tests for import lines."""

    def test_imports(self, renderer):
        assert renderer.render_imports(["scala.scalajs.js", "app#gql", None, "scala.scalajs.js"]) == [
            "import scala.scalajs.js",
            "import app.gql",
        ]
