"""Scala.js rendering with Jinja2 templates.

Supports custom templates via the template_dir parameter:
    renderer = ScalaRenderer(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates

Available templates to override:
    - trait.scala.j2: trait plus companion object
    - object.scala.j2: plain object wrapping other content
    - enum.scala.j2: enum as a native trait with values
    - fragments.scala.j2: the fragment object
"""

import json
import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Sequence

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .enums import EnumDefinition
from .gql import FragmentBlock
from .naming import parse_import
from .operations import OperationUnit
from .schema_types import TraitSpec
from .shapes import DataShape
from .variables import PLVariable

DEFAULT_IMPORTS = ("scala.scalajs.js", "scala.scalajs.js.|", "scala.scalajs.js.annotation.JSName")

SCALA_KEYWORDS = {
    "abstract", "case", "catch", "class", "def", "do", "else", "extends", "false", "final",
    "finally", "for", "forSome", "if", "implicit", "import", "lazy", "match", "new", "null",
    "object", "override", "package", "private", "protected", "return", "sealed", "super",
    "this", "throw", "trait", "true", "try", "type", "val", "var", "while", "with", "yield",
}

# Tuples, and so unapply, stop at 22 members
MAX_TUPLE_SIZE = 22


def scala_ident(name: str) -> str:
    """Quote names that are Scala keywords with backticks."""
    if name in SCALA_KEYWORDS:
        return f"`{name}`"
    return name


def scala_string(value: str) -> str:
    return json.dumps(value)


def one_line(text: str) -> str:
    """Make text safe for a single-line ``//`` comment."""
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def scaladoc(text: str) -> str:
    """Make text safe inside ``/** ... */``."""
    return one_line(text).replace("*/", "* /")


def extends_clause(supers: Sequence[str]) -> str:
    """``extends A with B with C``, or nothing for no supertypes."""
    if not supers:
        return ""
    return " ".join(["extends", supers[0], *(f"with {s}" for s in supers[1:])])


def js_property(variable: PLVariable) -> str:
    """Name of the JavaScript property behind a member."""
    return variable.original_name or variable.name


def declaration(variable: PLVariable, ignore_default: bool = False) -> str:
    """Trait member declaration, e.g. ``val name: String|Null = null``."""
    parts = []
    if variable.original_name:
        parts.append(f"@JSName({scala_string(variable.original_name)})")
    parts.append("val" if variable.immutable else "var")
    decl = f"{' '.join(parts)} {scala_ident(variable.name)}: {variable.type_signature}"
    if variable.default_value and not ignore_default:
        decl += f" = {variable.default_value}"
    return decl


def apply_params(variables: Sequence[PLVariable]) -> str:
    params = []
    for v in variables:
        default = f" = {v.default_value}" if v.default_value else ""
        params.append(f"{scala_ident(v.name)}: {v.type_signature}{default}")
    return ", ".join(params)


def copy_params(variables: Sequence[PLVariable]) -> str:
    return ", ".join(
        f"{scala_ident(v.name)}: {v.type_signature} = orig.{scala_ident(v.name)}" for v in variables
    )


def literal_entries(variables: Sequence[PLVariable], conversion: str = "{}.asInstanceOf[js.Any]") -> str:
    """Key/value pairs for ``js.Dynamic.literal``."""
    return ", ".join(
        f"{scala_string(js_property(v))} -> {conversion.format(scala_ident(v.name))}" for v in variables
    )


def unapply_values(variables: Sequence[PLVariable]) -> str:
    return ", ".join(f"value.{scala_ident(v.name)}" for v in variables)


@dataclass(frozen=True)
class TraitOptions:
    """How a trait and its companion are rendered."""
    # Add ``@js.native``
    native: bool = False
    include_companion: bool = True
    include_apply: bool = True
    include_unapply: bool = True
    include_copy: bool = True
    # Drop member defaults in the trait itself; apply still uses them
    ignore_default_values_in_trait: bool = False
    # Name used everywhere except the declarations, e.g. ``Data.User_User``
    fqn: str | None = None
    extends: tuple[str, ...] = ()
    description: str | None = None
    # Turns a member into a js.Any for js.Dynamic.literal
    dynamic_value_conversion: str = "{}.asInstanceOf[js.Any]"


NATIVE_TRAIT_OPTIONS = TraitOptions(native=True, ignore_default_values_in_trait=True)


class ScalaRenderer:
    """Renders generation units to Scala.js source text.

    Example:
        renderer = ScalaRenderer()
        text = renderer.render_trait("User", variables)
    """

    def __init__(self, template_dir: str | None = None):
        """Initialize the renderer.

        Args:
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
        """
        self.template_dir = template_dir

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_scalagen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["scala_ident"] = scala_ident
        self.env.filters["scala_string"] = scala_string
        self.env.filters["one_line"] = one_line
        self.env.filters["scaladoc"] = scaladoc
        self.env.filters["extends_clause"] = extends_clause
        self.env.filters["declaration"] = declaration
        self.env.filters["apply_params"] = apply_params
        self.env.filters["copy_params"] = copy_params
        self.env.filters["literal_entries"] = literal_entries
        self.env.filters["unapply_values"] = unapply_values

    def _render(self, template_name: str, **context) -> str:
        template = self.env.get_template(template_name)
        return template.render(**context).rstrip("\n")

    def render_trait(
        self,
        name: str,
        variables: Sequence[PLVariable],
        options: TraitOptions | None = None,
        nested: str | None = None,
        supers: Sequence[str] = (),
    ) -> str:
        """Render a trait and, unless disabled, its companion object."""
        options = options or TraitOptions()
        return self._render(
            "trait.scala.j2",
            name=name,
            fqn=options.fqn or name,
            variables=list(variables),
            options=options,
            supers=["js.Object", *supers, *options.extends],
            nested=nested,
            max_tuple_size=MAX_TUPLE_SIZE,
        )

    def render_trait_spec(self, spec: TraitSpec, options: TraitOptions | None = None) -> str:
        """Render a schema-wide trait; its description wins unless options set one."""
        options = options or TraitOptions()
        if options.description is None:
            options = replace(options, description=spec.description)
        return self.render_trait(spec.name, spec.variables, options, supers=spec.supers)

    def render_object(self, name: str, parts: Iterable[str]) -> str:
        """Render an object wrapping already rendered content."""
        return self._render("object.scala.j2", name=name, parts=[p for p in parts if p])

    def render_enum(self, enum: EnumDefinition) -> str:
        return self._render("enum.scala.j2", enum=enum)

    def render_fragment_block(self, block: FragmentBlock) -> str:
        """Render the fragment object; nothing when there are no fragments."""
        if not block:
            return ""
        return self._render("fragments.scala.j2", block=block)

    def render_data_shape(
        self,
        shape: DataShape,
        options: TraitOptions = NATIVE_TRAIT_OPTIONS,
        nested_options: TraitOptions | None = None,
    ) -> str:
        """Render a result shape with its nested shapes inside its companion.

        ``nested_options`` applies to every shape below the top one.
        """
        nested_options = nested_options or options
        nested = "\n".join(self.render_data_shape(child, nested_options) for child in shape.children)
        return self.render_trait(
            shape.name,
            shape.fields,
            replace(options, fqn=shape.qualified_name),
            nested=nested or None,
            supers=shape.supers,
        )

    def render_operation(
        self,
        unit: OperationUnit,
        gql_import: str | None = None,
        data_supers: Sequence[str] = (),
        variables_supers: Sequence[str] = (),
    ) -> str:
        """Render an operation container, or an error marker for failed units."""
        if not unit.ok:
            return f"// Error generating {unit.object_name}: {one_line(str(unit.error))}"

        parts = [f'val operationString = s"""{unit.document}"""']
        if gql_import:
            _, prop_name = parse_import(gql_import)
            if prop_name:
                parts.append(f"val operation = {prop_name}(operationString)")
        if unit.variables:
            parts.append(
                self.render_trait(
                    "Variables",
                    unit.variables,
                    TraitOptions(extends=tuple(variables_supers), fqn=f"{unit.object_name}.Variables"),
                )
            )
        if unit.data is not None:
            parts.append(
                self.render_data_shape(
                    unit.data,
                    NATIVE_TRAIT_OPTIONS,
                    replace(NATIVE_TRAIT_OPTIONS, extends=tuple(data_supers)),
                )
            )
        return self.render_object(unit.object_name, parts)

    def render_imports(self, imports: Iterable[str | None]) -> list[str]:
        """Import lines for ``package`` or ``package#member`` entries, deduplicated."""
        lines = []
        for entry in imports:
            if not entry:
                continue
            module_name, prop_name = parse_import(entry)
            line = f"import {module_name}.{prop_name}" if prop_name else f"import {module_name}"
            if line not in lines:
                lines.append(line)
        return lines
