"""Schema processing pipeline.

For a run over one or more schema files:

1. prepare the output directory,
2. parse every schema (a syntax error aborts before anything is generated),
3. register a default mapping for each custom scalar not already mapped,
4. for each schema, classify every definition in declaration order and
   render the models of its mapper, then render the resolver model.
"""

import logging
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from graphql import DocumentNode

from .classifier import DefinitionKind, classify
from .config import JsonMappingConfigSupplier, MappingConfig
from .errors import UnresolvedTypeReferenceError
from .generator import CodeGenerator
from .hooks import HookRunner
from .mappers import (
    map_enum,
    map_input,
    map_interface,
    map_operations,
    map_resolvers,
    map_type,
    map_union,
)
from .model import GenerationModel
from .parser import SchemaParser
from .registry import TypeMappingRegistry, register_document_scalars
from .type_resolver import TypeReferenceResolver

logger = logging.getLogger(__name__)

Mapper = Callable[[TypeReferenceResolver, object, DocumentNode], list[GenerationModel]]


def _map_operation_definition(resolver, definition, _document):
    if not resolver.registry.generate_apis:
        return []
    return map_operations(resolver, definition)


MAPPERS: dict[DefinitionKind, Mapper] = {
    DefinitionKind.OPERATION: _map_operation_definition,
    DefinitionKind.TYPE: lambda resolver, definition, document: [
        map_type(resolver, definition, document)
    ],
    DefinitionKind.INTERFACE: lambda resolver, definition, _: [map_interface(resolver, definition)],
    DefinitionKind.ENUM: lambda resolver, definition, _: [map_enum(resolver, definition)],
    DefinitionKind.INPUT: lambda resolver, definition, _: [map_input(resolver, definition)],
    DefinitionKind.UNION: lambda resolver, definition, _: [map_union(resolver, definition)],
}

_unmapped = set(DefinitionKind) - set(MAPPERS) - {DefinitionKind.UNSUPPORTED}
if _unmapped:
    raise RuntimeError(f"No mapper for definition kinds: {sorted(k.value for k in _unmapped)}")


@dataclass
class GenerationResult:
    """Summary of a generation run."""

    files: list[Path] = field(default_factory=list)
    # Definitions classified as unsupported and skipped
    skipped: int = 0
    # Number of definitions per schema file
    definition_counts: dict[str, int] = field(default_factory=dict)


class SchemaProcessor:
    """Generates source files for a set of GraphQL schema files.

    Example:
        processor = SchemaProcessor(
            ["schema/events.graphqls"],
            "./generated",
            MappingConfig(custom_types_mapping={"DateTime": "datetime.datetime"}),
        )
        processor.generate()
    """

    def __init__(
        self,
        schemas: str | Iterable[str],
        output_dir: str | Path,
        config: MappingConfig | None = None,
        config_supplier: JsonMappingConfigSupplier | None = None,
        template_dir: str | None = None,
        hooks: HookRunner | None = None,
    ):
        """Initialize the processor.

        Args:
            schemas: Schema files and/or directories containing them
            output_dir: Directory where generated code will be written
            config: Primary mapping configuration
            config_supplier: Source of a second configuration; it only
                fills options the primary one leaves unset
            template_dir: Optional directory with custom Jinja2 templates
            hooks: Post-generation hooks applied to every rendered file
        """
        config = (config or MappingConfig()).model_copy(deep=True)
        if config_supplier is not None:
            config.combine(config_supplier.get())
        self.registry = TypeMappingRegistry(config)
        self.parser = SchemaParser(schemas)
        self.generator = CodeGenerator(output_dir, self.registry.config, template_dir, hooks)

    def generate(self) -> GenerationResult:
        """Run the whole pipeline and return what was generated."""
        self.generator.prepare_output_dir()
        documents = self.parser.parse_all()

        for _, document in documents:
            register_document_scalars(self.registry, document)
        resolver = TypeReferenceResolver.for_documents(
            self.registry, [document for _, document in documents]
        )

        result = GenerationResult()
        for path, document in documents:
            start = time.monotonic()
            try:
                for model in self.map_document(document, resolver, result):
                    result.files.append(self.generator.generate_file(model))
            except UnresolvedTypeReferenceError as e:
                raise e.with_schema(path) from e
            elapsed_ms = int((time.monotonic() - start) * 1000)
            count = len(document.definitions)
            result.definition_counts[path] = count
            logger.info(
                "Finished processing schema '%s' in %d ms (%d definitions)",
                path,
                elapsed_ms,
                count,
            )
        logger.info(
            "Generated %d files in '%s'", len(result.files), self.generator.output_dir
        )
        return result

    @staticmethod
    def map_document(
        document: DocumentNode,
        resolver: TypeReferenceResolver,
        result: GenerationResult | None = None,
    ) -> Iterator[GenerationModel]:
        """Yield the models of a document in declaration order.

        The resolver model comes last since it covers every object and
        interface of the document.
        """
        for definition in document.definitions:
            kind = classify(definition)
            if kind is DefinitionKind.UNSUPPORTED:
                logger.debug("Skipping unsupported definition: %s", definition.kind)
                if result is not None:
                    result.skipped += 1
                continue
            yield from MAPPERS[kind](resolver, definition, document)
        yield map_resolvers(resolver, document.definitions)
