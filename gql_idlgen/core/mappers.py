"""Mappers from schema definitions to generation models.

Every mapper takes the ``TypeReferenceResolver`` of the run (which carries
the mapping registry) and one definition, and returns a new model. Mappers
keep no state between calls.
"""

from collections.abc import Iterable

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    UnionTypeDefinitionNode,
    print_ast,
)

from .classifier import is_root_operation_type
from .model import (
    ArgumentModel,
    EnumModel,
    FieldModel,
    ImportModel,
    OperationFieldModel,
    OperationModel,
    ResolverModel,
    ResolverTypeModel,
    Template,
    TypeModel,
    TypeReference,
    UnionModel,
)
from .naming import capitalize, method_name, module_name, safe_identifier
from .type_resolver import TypeReferenceResolver

RESOLVERS_CLASS_NAME = "Resolvers"
# Parameters every generated resolver method starts with
RESOLVER_PARAMETERS = ("self", "parent")


def _description(node) -> str | None:
    return node.description.value if node.description else None


class _Imports:
    """Collects the imports of one generated module."""

    def __init__(self, resolver: TypeReferenceResolver, package: str, class_name: str):
        self.resolver = resolver
        self.package = package
        self.class_name = class_name
        self.runtime: set[ImportModel] = set()
        self.type_checking: set[ImportModel] = set()

    def add(self, ref: TypeReference, runtime: bool = False):
        for module in ref.module_imports:
            self.runtime.add(ImportModel(module))
        imp = self.resolver.import_for(ref, self.package)
        if imp is None or imp.name == self.class_name:
            return
        if runtime or ref.import_module:
            self.runtime.add(imp)
        else:
            self.type_checking.add(imp)

    def apply(self, model):
        model.imports = sorted(self.runtime)
        model.type_checking_imports = sorted(self.type_checking - self.runtime)
        return model


def _map_arguments(
    resolver: TypeReferenceResolver,
    nodes: Iterable[InputValueDefinitionNode],
    context: str,
    imports: _Imports,
    reserved: Iterable[str] = ("self",),
) -> list[ArgumentModel]:
    """Map arguments to parameters of a generated method.

    ``reserved`` holds the parameter names the method already uses; an
    argument whose Python name is taken gets trailing underscores.
    """
    used = set(reserved)
    arguments = []
    for node in nodes:
        ref = resolver.resolve(node.type, context)
        imports.add(ref)
        python_name = method_name(node.name.value)
        while python_name in used:
            python_name += "_"
        used.add(python_name)
        arguments.append(
            ArgumentModel(
                name=node.name.value,
                python_name=python_name,
                type=ref,
                default_value=print_ast(node.default_value) if node.default_value else None,
                description=_description(node),
            )
        )
    return arguments


def _map_fields(
    resolver: TypeReferenceResolver,
    nodes: Iterable[FieldDefinitionNode | InputValueDefinitionNode],
    context: str,
    imports: _Imports,
    reserved: Iterable[str] = ("self",),
) -> list[FieldModel]:
    fields = []
    for node in nodes:
        ref = resolver.resolve(node.type, context)
        imports.add(ref)
        # Input fields have no arguments
        argument_nodes = getattr(node, "arguments", None) or ()
        fields.append(
            FieldModel(
                name=node.name.value,
                python_name=safe_identifier(node.name.value),
                type=ref,
                arguments=_map_arguments(resolver, argument_nodes, context, imports, reserved),
                description=_description(node),
            )
        )
    return fields


def _map_parents(
    resolver: TypeReferenceResolver, names: Iterable[str], context: str, imports: _Imports
) -> list[str]:
    """Resolve base classes, dropping interfaces another parent already inherits.

    A GraphQL type lists every interface it implements, including inherited
    ones; keeping both a class and its base would break the method
    resolution order.
    """
    names = list(dict.fromkeys(names))
    inherited = set()
    for name in names:
        inherited |= resolver.interface_ancestors(name)
    parents = []
    for name in names:
        if name in inherited:
            continue
        ref = resolver.resolve_name(name, context)
        imports.add(ref, runtime=True)
        if ref.target_name not in parents:
            parents.append(ref.target_name)
    return parents


def unions_containing(document: DocumentNode, type_name: str) -> list[str]:
    """Names of the unions in the document that list ``type_name`` as a member."""
    return [
        definition.name.value
        for definition in document.definitions
        if isinstance(definition, UnionTypeDefinitionNode)
        and any(member.name.value == type_name for member in definition.types or ())
    ]


def map_type(
    resolver: TypeReferenceResolver,
    definition: ObjectTypeDefinitionNode,
    document: DocumentNode,
) -> TypeModel:
    """Map an object type.

    The document is needed to find the unions the type belongs to; those
    become parents of the generated class next to its interfaces.
    """
    name = definition.name.value
    class_name = resolver.class_name(name)
    package = resolver.registry.model_package
    imports = _Imports(resolver, package, class_name)
    parent_names = [i.name.value for i in definition.interfaces or ()]
    parent_names += unions_containing(document, name)
    model = TypeModel(
        template=Template.TYPE,
        class_name=class_name,
        package=package,
        module_name=module_name(class_name),
        description=_description(definition),
        fields=_map_fields(resolver, definition.fields or (), name, imports),
        parents=_map_parents(resolver, parent_names, name, imports),
    )
    return imports.apply(model)


def map_interface(
    resolver: TypeReferenceResolver, definition: InterfaceTypeDefinitionNode
) -> TypeModel:
    name = definition.name.value
    class_name = resolver.class_name(name)
    package = resolver.registry.model_package
    imports = _Imports(resolver, package, class_name)
    parent_names = [i.name.value for i in definition.interfaces or ()]
    model = TypeModel(
        template=Template.INTERFACE,
        class_name=class_name,
        package=package,
        module_name=module_name(class_name),
        description=_description(definition),
        fields=_map_fields(resolver, definition.fields or (), name, imports),
        parents=_map_parents(resolver, parent_names, name, imports),
        is_interface=True,
    )
    return imports.apply(model)


def map_input(
    resolver: TypeReferenceResolver, definition: InputObjectTypeDefinitionNode
) -> TypeModel:
    """Map an input object. Inputs are rendered with the type template."""
    name = definition.name.value
    class_name = resolver.class_name(name)
    package = resolver.registry.model_package
    imports = _Imports(resolver, package, class_name)
    model = TypeModel(
        template=Template.TYPE,
        class_name=class_name,
        package=package,
        module_name=module_name(class_name),
        description=_description(definition),
        fields=_map_fields(resolver, definition.fields or (), name, imports),
        is_input=True,
    )
    return imports.apply(model)


def map_enum(resolver: TypeReferenceResolver, definition: EnumTypeDefinitionNode) -> EnumModel:
    class_name = resolver.class_name(definition.name.value)
    return EnumModel(
        template=Template.ENUM,
        class_name=class_name,
        package=resolver.registry.model_package,
        module_name=module_name(class_name),
        description=_description(definition),
        values=[value.name.value for value in definition.values or ()],
    )


def map_union(resolver: TypeReferenceResolver, definition: UnionTypeDefinitionNode) -> UnionModel:
    """Map a union.

    Members are not imported: they subclass the union, so importing them
    here would be circular.
    """
    name = definition.name.value
    class_name = resolver.class_name(name)
    return UnionModel(
        template=Template.UNION,
        class_name=class_name,
        package=resolver.registry.model_package,
        module_name=module_name(class_name),
        description=_description(definition),
        members=[
            resolver.resolve_name(member.name.value, name).target_name
            for member in definition.types or ()
        ],
    )


def _map_operation(
    resolver: TypeReferenceResolver,
    node: FieldDefinitionNode,
    root_type: str,
    imports: _Imports,
) -> OperationFieldModel:
    context = f"{root_type}.{node.name.value}"
    return_type = resolver.resolve(node.type, context)
    imports.add(return_type)
    return OperationFieldModel(
        name=node.name.value,
        method_name=method_name(node.name.value),
        return_type=return_type,
        arguments=_map_arguments(resolver, node.arguments or (), context, imports),
        description=_description(node),
    )


def map_operation_field(
    resolver: TypeReferenceResolver, node: FieldDefinitionNode, root_type: str
) -> OperationModel:
    """Map one field of a root type to its own operation interface.

    The class is named after the field and the root type, e.g. field
    ``eventsByIds`` of ``Query`` becomes ``EventsByIdsQuery``.
    """
    class_name = capitalize(node.name.value) + root_type
    package = resolver.registry.api_package
    imports = _Imports(resolver, package, class_name)
    model = OperationModel(
        template=Template.OPERATION,
        class_name=class_name,
        package=package,
        module_name=module_name(class_name),
        description=_description(node),
        operation_type=root_type.lower(),
        root_type=root_type,
        operations=[_map_operation(resolver, node, root_type, imports)],
    )
    return imports.apply(model)


def map_operation_root(
    resolver: TypeReferenceResolver, definition: ObjectTypeDefinitionNode
) -> OperationModel:
    """Map a root type to a single interface holding all of its operations.

    Client tooling expects one root object per root operation type (see
    facebook/relay#112), so this model is produced for every root type,
    including one without fields.
    """
    root_type = definition.name.value
    package = resolver.registry.api_package
    imports = _Imports(resolver, package, root_type)
    model = OperationModel(
        template=Template.OPERATION,
        class_name=root_type,
        package=package,
        module_name=module_name(root_type),
        description=_description(definition),
        operation_type=root_type.lower(),
        root_type=root_type,
        is_root=True,
        operations=[
            _map_operation(resolver, node, root_type, imports)
            for node in definition.fields or ()
        ],
    )
    return imports.apply(model)


def map_operations(
    resolver: TypeReferenceResolver, definition: ObjectTypeDefinitionNode
) -> list[OperationModel]:
    """Map a Query, Mutation or Subscription type.

    Returns one model per field followed by the root model.
    """
    if not is_root_operation_type(definition.name.value):
        raise ValueError(f"{definition.name.value} is not a root operation type")
    root_type = definition.name.value
    models = [
        map_operation_field(resolver, node, root_type) for node in definition.fields or ()
    ]
    models.append(map_operation_root(resolver, definition))
    return models


def resolver_definitions(
    definitions: Iterable,
) -> list[ObjectTypeDefinitionNode | InterfaceTypeDefinitionNode]:
    """Object and interface definitions that get field resolvers.

    Query, Mutation and Subscription are excluded.
    """
    return [
        definition
        for definition in definitions
        if isinstance(definition, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode))
        and not is_root_operation_type(definition.name.value)
    ]


def map_resolvers(resolver: TypeReferenceResolver, definitions: Iterable) -> ResolverModel:
    """Build the aggregate resolver model for a whole document."""
    package = resolver.registry.api_package
    imports = _Imports(resolver, package, RESOLVERS_CLASS_NAME)
    types = []
    for definition in resolver_definitions(definitions):
        name = definition.name.value
        imports.add(resolver.resolve_name(name, name))
        types.append(
            ResolverTypeModel(
                name=name,
                model_class_name=resolver.class_name(name),
                resolver_class_name=f"{name}Resolver",
                accessor_name=method_name(name),
                fields=_map_fields(
                    resolver, definition.fields or (), name, imports, RESOLVER_PARAMETERS
                ),
                is_interface=isinstance(definition, InterfaceTypeDefinitionNode),
            )
        )
    model = ResolverModel(
        template=Template.RESOLVER,
        class_name=RESOLVERS_CLASS_NAME,
        package=package,
        module_name=module_name(RESOLVERS_CLASS_NAME),
        types=types,
    )
    return imports.apply(model)
