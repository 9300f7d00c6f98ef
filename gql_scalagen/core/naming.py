"""Naming helpers and naming-convention converters.

Conventions use the ``module#function`` form of graphql-codegen configs,
e.g. ``pascal-case#pascalCase``. Only the function part is significant.
"""

import re
from dataclasses import dataclass
from typing import Callable


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def pascal_case(name: str) -> str:
    """Convert snake_case or camelCase to PascalCase."""
    return "".join(word.capitalize() for word in snake_case(name).split("_"))


def camel_case(name: str) -> str:
    """Convert to camelCase."""
    pascal = pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def constant_case(name: str) -> str:
    """Convert to CONSTANT_CASE."""
    return snake_case(name).upper()


def keep(name: str) -> str:
    return name


CONVENTIONS: dict[str, Callable[[str], str]] = {
    "keep": keep,
    "pascalCase": pascal_case,
    "camelCase": camel_case,
    "snakeCase": snake_case,
    "constantCase": constant_case,
    "upperCase": str.upper,
    "lowerCase": str.lower,
}

DEFAULT_NAMING_CONVENTION = "pascal-case#pascalCase"


def parse_import(value: str) -> tuple[str, str | None]:
    """Split ``moduleName#propName`` into its two parts."""
    module_name, _, prop_name = value.partition("#")
    return module_name, prop_name or None


@dataclass(frozen=True)
class NameConverter:
    """Applies a naming convention to GraphQL names.

    Underscores are preserved by default: each underscore-separated part is
    converted on its own, so ``Unnamed_1_`` stays ``Unnamed_1_``.
    """

    convention: str = DEFAULT_NAMING_CONVENTION
    transform_underscore: bool = False

    def __post_init__(self):
        # raises early on unknown conventions
        self.function

    @property
    def function(self) -> Callable[[str], str]:
        _, prop_name = parse_import(self.convention)
        key = prop_name or self.convention
        try:
            return CONVENTIONS[key]
        except KeyError:
            raise ValueError(f"Unknown naming convention: {self.convention}") from None

    def __call__(self, name: str, prefix: str = "", suffix: str = "") -> str:
        convert = self.function
        if convert is keep:
            converted = name
        elif "_" in name and not self.transform_underscore:
            converted = "_".join(convert(part) if part else part for part in name.split("_"))
        else:
            converted = convert(name)
        return f"{prefix}{converted}{suffix}"
