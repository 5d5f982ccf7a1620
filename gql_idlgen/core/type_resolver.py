"""Resolution of GraphQL type references into Python types.

A type reference such as ``[Event!]!`` is a chain of NonNull and List
wrappers around a named type. ``TypeReferenceResolver.resolve`` walks the
chain and returns a flat ``TypeReference``:

    [Event!]!  ->  TypeReference(target_name="Event", is_required=True,
                                 list_items_required=(True,))

Named types are looked up in this order: built-in scalars, the mapping
registry, then the types defined by the schemas of the run.

A custom mapping is either a dotted name (``datetime.datetime``), imported
with ``from datetime import datetime``, or any other type expression
(``dict[str, typing.Any]``), used verbatim with the modules it mentions
imported whole.
"""

import re
from collections.abc import Iterable

from graphql import (
    DocumentNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    TypeDefinitionNode,
    TypeNode,
)

from .classifier import is_root_operation_type
from .errors import CodegenError, UnresolvedTypeReferenceError
from .model import ImportModel, TypeReference
from .naming import module_name
from .registry import TypeMappingRegistry

BUILTIN_SCALARS = {
    "Int": "int",
    "Float": "float",
    "String": "str",
    "Boolean": "bool",
    "ID": "str",
}

_DOTTED_NAME = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)+")
# Module part of every ``module.attr`` reference inside an expression
_MODULE_REFERENCE = re.compile(r"(?<![\w.])([A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*)\.[A-Za-z_]\w*")


def import_path(from_package: str, to_package: str, module: str) -> str:
    """Module path to use in an import from ``from_package``.

    Same package gives a relative import; otherwise an absolute one, or a
    relative one climbing to the top when the target package is the root.
    """
    if from_package == to_package:
        return f".{module}"
    if to_package:
        return f"{to_package}.{module}"
    depth = len(from_package.split("."))
    return "." * (depth + 1) + module


class TypeReferenceResolver:
    """Turns GraphQL type references into ``TypeReference`` values."""

    def __init__(
        self,
        registry: TypeMappingRegistry,
        known_types: Iterable[str] = (),
        interface_parents: dict[str, list[str]] | None = None,
    ):
        self.registry = registry
        self.known_types = set(known_types)
        # Interface name -> interfaces it implements
        self.interface_parents = dict(interface_parents or {})

    @classmethod
    def for_documents(
        cls, registry: TypeMappingRegistry, documents: Iterable[DocumentNode]
    ) -> "TypeReferenceResolver":
        """Create a resolver that knows every type defined in the documents."""
        names = set()
        interface_parents = {}
        for document in documents:
            for definition in document.definitions:
                if isinstance(definition, TypeDefinitionNode):
                    names.add(definition.name.value)
                if isinstance(definition, InterfaceTypeDefinitionNode):
                    interface_parents[definition.name.value] = [
                        i.name.value for i in definition.interfaces or ()
                    ]
        return cls(registry, names, interface_parents)

    def resolve(self, type_node: TypeNode, context: str | None = None) -> TypeReference:
        """Resolve a possibly wrapped type reference.

        Args:
            type_node: The type reference from a field or argument
            context: Name of the definition being mapped, for error messages
        """
        is_required = isinstance(type_node, NonNullTypeNode)
        list_items_required = []

        node = type_node
        while not isinstance(node, NamedTypeNode):
            if isinstance(node, NonNullTypeNode):
                node = node.type
            elif isinstance(node, ListTypeNode):
                list_items_required.append(isinstance(node.type, NonNullTypeNode))
                node = node.type
            else:
                raise CodegenError(f"Unexpected type node {type(node).__name__}")

        named = self.resolve_name(node.name.value, context)
        return TypeReference(
            graphql_name=named.graphql_name,
            target_name=named.target_name,
            is_required=is_required,
            list_items_required=tuple(list_items_required),
            is_generated=named.is_generated,
            import_module=named.import_module,
            module_imports=named.module_imports,
        )

    def resolve_name(self, name: str, context: str | None = None) -> TypeReference:
        """Resolve a bare named type (nullable, not a list)."""
        if name in BUILTIN_SCALARS:
            return TypeReference(graphql_name=name, target_name=BUILTIN_SCALARS[name])

        target = self.registry.resolve(name)
        if target is not None:
            if _DOTTED_NAME.fullmatch(target):
                module, _, target_name = target.rpartition(".")
                return TypeReference(
                    graphql_name=name, target_name=target_name, import_module=module
                )
            modules = sorted(set(_MODULE_REFERENCE.findall(target)))
            return TypeReference(
                graphql_name=name, target_name=target, module_imports=tuple(modules)
            )

        if name in self.known_types:
            return TypeReference(
                graphql_name=name,
                target_name=self.class_name(name),
                is_generated=True,
            )

        raise UnresolvedTypeReferenceError(name, context)

    def interface_ancestors(self, name: str) -> set[str]:
        """Every interface ``name`` inherits from, directly or not."""
        ancestors = set()
        pending = list(self.interface_parents.get(name, ()))
        while pending:
            parent = pending.pop()
            if parent not in ancestors:
                ancestors.add(parent)
                pending.extend(self.interface_parents.get(parent, ()))
        return ancestors

    def class_name(self, graphql_name: str) -> str:
        """Name of the class generated for a schema type."""
        if is_root_operation_type(graphql_name):
            return graphql_name
        return self.registry.model_class_name(graphql_name)

    def package_of(self, graphql_name: str) -> str:
        """Package of the class generated for a schema type."""
        if is_root_operation_type(graphql_name):
            return self.registry.api_package
        return self.registry.model_package

    def import_for(self, ref: TypeReference, from_package: str) -> ImportModel | None:
        """Import statement needed to use ``ref`` from ``from_package``.

        Modules of a custom type expression are listed separately in
        ``ref.module_imports``.
        """
        if ref.import_module:
            return ImportModel(ref.import_module, ref.target_name)
        if ref.is_generated:
            module = import_path(
                from_package, self.package_of(ref.graphql_name), module_name(ref.target_name)
            )
            return ImportModel(module, ref.target_name)
        return None
