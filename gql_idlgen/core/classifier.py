"""Classification of schema definitions into generation strategies."""

from enum import Enum

from graphql import (
    DefinitionNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    UnionTypeDefinitionNode,
)

from .errors import UnsupportedDefinitionError

# Object types whose fields become operations instead of model fields
ROOT_OPERATION_TYPES = ("Query", "Mutation", "Subscription")


class DefinitionKind(Enum):
    OPERATION = "operation"
    TYPE = "type"
    INTERFACE = "interface"
    ENUM = "enum"
    INPUT = "input"
    UNION = "union"
    UNSUPPORTED = "unsupported"


def is_root_operation_type(name: str) -> bool:
    """Check for Query, Mutation or Subscription (exact, case-sensitive)."""
    return name in ROOT_OPERATION_TYPES


def classify(definition: DefinitionNode) -> DefinitionKind:
    """Return the generation strategy for a definition.

    Extension nodes (``extend type ...``), the schema block, directive
    definitions and scalars have no strategy and classify as UNSUPPORTED.
    """
    if isinstance(definition, ObjectTypeDefinitionNode):
        if is_root_operation_type(definition.name.value):
            return DefinitionKind.OPERATION
        return DefinitionKind.TYPE
    if isinstance(definition, InterfaceTypeDefinitionNode):
        return DefinitionKind.INTERFACE
    if isinstance(definition, EnumTypeDefinitionNode):
        return DefinitionKind.ENUM
    if isinstance(definition, InputObjectTypeDefinitionNode):
        return DefinitionKind.INPUT
    if isinstance(definition, UnionTypeDefinitionNode):
        return DefinitionKind.UNION
    return DefinitionKind.UNSUPPORTED


def classify_strict(definition: DefinitionNode) -> DefinitionKind:
    """Like ``classify`` but raise for unsupported definitions."""
    kind = classify(definition)
    if kind is DefinitionKind.UNSUPPORTED:
        raise UnsupportedDefinitionError(definition.kind)
    return kind
