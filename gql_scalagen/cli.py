"""Command-line interface for gql-scalagen."""

import logging
from pathlib import Path

import click

from .core.config import RawConfig, load_config, make_config
from .core.errors import CodegenError
from .core.generator import CodeGenerator, validate_output_file
from .core.hooks import AddHeaderHook, HookRunner
from .core.loader import collect_fragments, load_documents, load_schema
from .core.renderer import ScalaRenderer

HEADER = "// Generated by gql-scalagen. Do not edit."


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _check_output(output: str):
    try:
        validate_output_file(output)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--output") from e


def _make_generator(config, template_dir: str | None) -> CodeGenerator:
    hooks = HookRunner()
    hooks.add_post_hook(AddHeaderHook(HEADER))
    return CodeGenerator(config, renderer=ScalaRenderer(template_dir), hooks=hooks)


schema_option = click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file, directory, or archive (.zip, .tar.gz, .tgz).",
)
output_option = click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output .scala file.",
)
config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file.",
)
templates_option = click.option(
    "--templates",
    "-t",
    "template_dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with Jinja2 templates overriding the built-in ones.",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option(package_name="gql-scalagen")
def main():
    """GraphQL code generator for Scala.js.

    Generate Scala.js traits from GraphQL schemas and typed operation
    objects from GraphQL documents.
    """
    pass


@main.command()
@schema_option
@output_option
@config_option
@templates_option
@verbose_option
def schema(schema: str, output: str, config_path: str | None, template_dir: str | None, verbose: bool):
    """Generate traits for every type in a GraphQL schema.

    Examples:

        gql-scalagen schema --schema ./schema.graphql --output ./Schema.scala

        gql-scalagen schema -s ./schema.tgz -o ./Schema.scala -c codegen.json
    """
    _setup_logging(verbose)
    _check_output(output)
    try:
        click.echo("Parsing schema...")
        gql_schema = load_schema(schema)
        raw = load_config(config_path) if config_path else RawConfig()
        config = make_config(gql_schema, raw)

        click.echo("Generating code...")
        generator = _make_generator(config, template_dir)
        generator.write(output, generator.generate_schema(Path(output).name))
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated code in {Path(output).resolve()}")


@main.command()
@schema_option
@click.option(
    "--documents",
    "-d",
    required=True,
    multiple=True,
    type=click.Path(exists=True),
    help="Operation document file or directory. Can be repeated.",
)
@output_option
@config_option
@templates_option
@verbose_option
def operations(
    schema: str,
    documents: tuple[str, ...],
    output: str,
    config_path: str | None,
    template_dir: str | None,
    verbose: bool,
):
    """Generate an object per operation in GraphQL documents.

    Examples:

        gql-scalagen operations -s ./schema.graphql -d ./queries -o ./Operations.scala

        gql-scalagen operations -s ./schema -d a.graphql -d b.graphql -o ./Ops.scala -c codegen.json
    """
    _setup_logging(verbose)
    _check_output(output)
    try:
        click.echo("Parsing schema...")
        gql_schema = load_schema(schema)
        raw = load_config(config_path) if config_path else RawConfig()

        click.echo("Parsing documents...")
        docs = load_documents(documents)
        external = load_documents(raw.external_fragments)
        fragments = collect_fragments(docs, external)
        if verbose:
            click.echo(f"  Documents: {len(docs)}")
            click.echo(f"  Fragments: {len(fragments)}")
        config = make_config(gql_schema, raw, fragments)

        click.echo("Generating code...")
        generator = _make_generator(config, template_dir)
        content = generator.generate_operations(docs, Path(output).name)
        generator.write(output, content)
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    if generator.failed_operations:
        failed = ", ".join(generator.failed_operations)
        click.echo(f"Warning: {len(generator.failed_operations)} operation(s) could not be generated: {failed}", err=True)
    click.echo(f"Done! Generated code in {Path(output).resolve()}")
