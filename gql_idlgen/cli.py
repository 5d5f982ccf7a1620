"""Command-line interface for gql-idlgen."""

import logging
from pathlib import Path

import click
from rich.logging import RichHandler

from .core.config import JsonMappingConfigSupplier, MappingConfig
from .core.errors import CodegenError
from .core.hooks import AddHeaderHook, HookRunner
from .core.processor import SchemaProcessor


def setup_logging(verbose: bool):
    """Send library log records to the console."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_time=False, show_path=False)],
        force=True,
    )


def parse_custom_types(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``Name=target`` pairs given with --custom-type."""
    mapping = {}
    for value in values:
        name, sep, target = value.partition("=")
        if not sep or not name.strip() or not target.strip():
            raise click.BadParameter(
                f"expected NAME=TARGET, got {value!r}", param_hint="--custom-type"
            )
        mapping[name.strip()] = target.strip()
    return mapping


@click.group()
@click.version_option(package_name="gql-idlgen")
def main():
    """GraphQL IDL code generator for Python.

    Generate pydantic models and typed interfaces from GraphQL schemas.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    "schemas",
    required=True,
    multiple=True,
    type=click.Path(exists=True),
    help="GraphQL schema file or directory. Can be repeated.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(file_okay=False),
    help="Output directory for generated code.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON mapping config. Command-line options take precedence.",
)
@click.option("--package-name", help="Package for all generated modules.")
@click.option("--model-package-name", help="Package for generated models.")
@click.option("--api-package-name", help="Package for operation and resolver interfaces.")
@click.option("--model-name-prefix", help="Prefix for generated model class names.")
@click.option("--model-name-suffix", help="Suffix for generated model class names.")
@click.option(
    "--custom-type",
    "custom_types",
    multiple=True,
    metavar="NAME=TARGET",
    help="Map a GraphQL type to a Python type, e.g. DateTime=datetime.datetime.",
)
@click.option(
    "--validation-annotation",
    help="Expression assigned to required model fields (default: Field(...)).",
)
@click.option(
    "--apis/--no-apis",
    "generate_apis",
    default=None,
    help="Generate Query/Mutation/Subscription interfaces (default: on).",
)
@click.option(
    "--equals-and-hash/--no-equals-and-hash",
    "generate_equals_and_hash_code",
    default=None,
    help="Generate frozen (hashable) models.",
)
@click.option(
    "--to-string/--no-to-string",
    "generate_to_string",
    default=None,
    help="Generate __str__ for models.",
)
@click.option(
    "--templates",
    "template_dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with Jinja2 templates overriding the built-in ones.",
)
@click.option("--header", help="Header added to the top of every generated file.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schemas: tuple[str, ...],
    output: str,
    config_path: str | None,
    package_name: str | None,
    model_package_name: str | None,
    api_package_name: str | None,
    model_name_prefix: str | None,
    model_name_suffix: str | None,
    custom_types: tuple[str, ...],
    validation_annotation: str | None,
    generate_apis: bool | None,
    generate_equals_and_hash_code: bool | None,
    generate_to_string: bool | None,
    template_dir: str | None,
    header: str | None,
    verbose: bool,
):
    """Generate Python code from GraphQL schemas.

    Examples:

        gql-idlgen generate --schema ./schema --output ./generated

        gql-idlgen generate -s events.graphqls -o ./src --package-name app.graphql

        gql-idlgen generate -s ./schema -o ./src -c codegen.json --no-apis
    """
    setup_logging(verbose)
    output_path = Path(output).resolve()

    config = MappingConfig(
        custom_types_mapping=parse_custom_types(custom_types),
        model_validation_annotation=validation_annotation,
        generate_equals_and_hash_code=generate_equals_and_hash_code,
        generate_to_string=generate_to_string,
        generate_apis=generate_apis,
        package_name=package_name,
        model_package_name=model_package_name,
        api_package_name=api_package_name,
        model_name_prefix=model_name_prefix,
        model_name_suffix=model_name_suffix,
    )
    supplier = JsonMappingConfigSupplier(config_path) if config_path else None

    hooks = HookRunner()
    if header:
        hooks.add_post_hook(AddHeaderHook(header))

    if verbose:
        click.echo(f"Schemas: {', '.join(schemas)}")
        click.echo(f"Output: {output_path}")

    try:
        processor = SchemaProcessor(
            list(schemas),
            output_path,
            config,
            config_supplier=supplier,
            template_dir=template_dir,
            hooks=hooks,
        )
        result = processor.generate()
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Skipped definitions: {result.skipped}")
        for path, count in result.definition_counts.items():
            click.echo(f"  {path}: {count} definitions")

    click.echo(f"Done! Generated {len(result.files)} files in {output_path}")


if __name__ == "__main__":
    main()
