"""Type mapping registry for GraphQL code generation.

Holds the mapping from GraphQL type names to Python types for one run.
User overrides are applied first; custom scalars found in a schema are
registered afterwards and never replace an existing entry.

Example usage:
    from gql_idlgen.core.config import MappingConfig
    from gql_idlgen.core.registry import TypeMappingRegistry

    config = MappingConfig(custom_types_mapping={"DateTime": "datetime.datetime"})
    registry = TypeMappingRegistry(config.with_defaults())
    registry.set_if_absent("DateTime", "str")  # no-op, override wins
    registry.set_if_absent("Money", "str")

    registry.resolve("DateTime")  # "datetime.datetime"
    registry.resolve("Money")     # "str"
"""

import logging

from graphql import DocumentNode, ScalarTypeDefinitionNode

from .config import MappingConfig

logger = logging.getLogger(__name__)

# Python type used for custom scalars without an explicit mapping
DEFAULT_SCALAR_TYPE = "str"


class TypeMappingRegistry:
    """Registry of GraphQL type name to Python type mappings.

    Also carries the (defaulted) configuration of the run so that mappers
    get everything they need from a single object.
    """

    def __init__(self, config: MappingConfig | None = None):
        self.config = (config or MappingConfig()).with_defaults()
        self._mappings: dict[str, str] = {}
        for graphql_name, target in self.config.custom_types_mapping.items():
            self.set_override(graphql_name, target)

    def resolve(self, graphql_name: str) -> str | None:
        """Get the Python type for a GraphQL type, or None if unmapped."""
        return self._mappings.get(graphql_name)

    def has(self, graphql_name: str) -> bool:
        return graphql_name in self._mappings

    def set_if_absent(self, graphql_name: str, target: str) -> bool:
        """Register a mapping unless one exists. Returns True if added."""
        if graphql_name in self._mappings:
            return False
        self._mappings[graphql_name] = target
        return True

    def set_override(self, graphql_name: str, target: str):
        """Register a mapping, replacing any existing one."""
        self._mappings[graphql_name] = target

    def mappings(self) -> dict[str, str]:
        """Return a copy of all registered mappings."""
        return dict(self._mappings)

    # Convenience accessors for the configuration

    @property
    def model_package(self) -> str:
        return self.config.resolved_model_package

    @property
    def api_package(self) -> str:
        return self.config.resolved_api_package

    @property
    def generate_apis(self) -> bool:
        return bool(self.config.generate_apis)

    def model_class_name(self, graphql_name: str) -> str:
        """Apply the configured prefix and suffix to a generated model name."""
        prefix = self.config.model_name_prefix or ""
        suffix = self.config.model_name_suffix or ""
        return f"{prefix}{graphql_name}{suffix}"


def register_document_scalars(
    registry: TypeMappingRegistry, document: DocumentNode
) -> list[str]:
    """Give every custom scalar in the document a default Python type.

    Scalars that already have a mapping keep it. Returns the names that
    were newly registered.
    """
    added = []
    for definition in document.definitions:
        if isinstance(definition, ScalarTypeDefinitionNode):
            name = definition.name.value
            if registry.set_if_absent(name, DEFAULT_SCALAR_TYPE):
                added.append(name)
    if added:
        logger.debug("Registered default mapping for scalars: %s", ", ".join(added))
    return added
