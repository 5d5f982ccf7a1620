"""Generation models handed to the template stage.

Each model describes exactly one generated module. Models are built fresh
for every definition by the mappers and are not reused.
"""

from dataclasses import dataclass, field
from enum import Enum


class Template(Enum):
    """Templates that render generation models."""

    TYPE = "type"
    INTERFACE = "interface"
    ENUM = "enum"
    UNION = "union"
    OPERATION = "operation"
    RESOLVER = "resolver"

    @property
    def file_name(self) -> str:
        return f"{self.value}.py.j2"


@dataclass(frozen=True)
class TypeReference:
    """A GraphQL type reference flattened into Python terms.

    ``list_items_required`` has one entry per list level, outermost first,
    telling whether the items of that list are non-null. ``list_depth`` and
    ``is_list_item_required`` (the innermost level) are derived from it.
    """

    graphql_name: str
    target_name: str
    is_required: bool = False
    list_items_required: tuple[bool, ...] = ()
    # True when target_name is a class generated from the schema
    is_generated: bool = False
    # Module to import target_name from, for dotted custom mappings
    import_module: str | None = None
    # Modules referenced by a custom type expression, imported whole
    module_imports: tuple[str, ...] = ()

    @property
    def is_list(self) -> bool:
        return bool(self.list_items_required)

    @property
    def list_depth(self) -> int:
        return len(self.list_items_required)

    @property
    def is_list_item_required(self) -> bool:
        return bool(self.list_items_required) and self.list_items_required[-1]

    @property
    def annotation(self) -> str:
        """Python annotation, e.g. ``list[list[int | None] | None] | None``."""
        text = self.target_name
        for items_required in reversed(self.list_items_required):
            if not items_required:
                text = f"{text} | None"
            text = f"list[{text}]"
        if not self.is_required:
            text = f"{text} | None"
        return text


@dataclass(frozen=True, order=True)
class ImportModel:
    """One ``from module import name`` statement, or ``import module``
    when ``name`` is empty."""

    module: str
    name: str = ""

    @property
    def statement(self) -> str:
        if not self.name:
            return f"import {self.module}"
        return f"from {self.module} import {self.name}"


@dataclass
class ArgumentModel:
    """An argument of a field or operation."""

    name: str
    python_name: str
    type: TypeReference
    default_value: str | None = None
    description: str | None = None

    @property
    def is_optional(self) -> bool:
        """Callers may omit the argument (nullable or has a default)."""
        return not self.type.is_required or self.default_value is not None

    @property
    def annotation(self) -> str:
        if self.type.is_required and self.is_optional:
            return f"{self.type.annotation} | None"
        return self.type.annotation


@dataclass
class FieldModel:
    """A field of a type, interface or input."""

    name: str
    python_name: str
    type: TypeReference
    arguments: list[ArgumentModel] = field(default_factory=list)
    description: str | None = None

    @property
    def needs_alias(self) -> bool:
        return self.python_name != self.name


@dataclass
class GenerationModel:
    """Fields shared by every generated module."""

    template: Template
    class_name: str
    package: str
    module_name: str
    description: str | None = None
    # Imports needed at runtime (base classes, custom scalar types)
    imports: list[ImportModel] = field(default_factory=list)
    # Imports only needed by annotations
    type_checking_imports: list[ImportModel] = field(default_factory=list)

    @property
    def relative_path(self) -> str:
        """Output path relative to the output directory."""
        parts = [p for p in self.package.split(".") if p]
        return "/".join(parts + [f"{self.module_name}.py"])


@dataclass
class TypeModel(GenerationModel):
    """Object type, interface or input object."""

    fields: list[FieldModel] = field(default_factory=list)
    # Implemented interfaces, then unions that contain this type
    parents: list[str] = field(default_factory=list)
    is_input: bool = False
    is_interface: bool = False


@dataclass
class EnumModel(GenerationModel):
    values: list[str] = field(default_factory=list)


@dataclass
class UnionModel(GenerationModel):
    members: list[str] = field(default_factory=list)


@dataclass
class OperationFieldModel:
    """One operation exposed by a Query, Mutation or Subscription type."""

    name: str
    method_name: str
    return_type: TypeReference
    arguments: list[ArgumentModel] = field(default_factory=list)
    description: str | None = None


@dataclass
class OperationModel(GenerationModel):
    operation_type: str = "query"
    root_type: str = "Query"
    # True for the model describing the whole root type
    is_root: bool = False
    operations: list[OperationFieldModel] = field(default_factory=list)


@dataclass
class ResolverTypeModel:
    """Field resolvers for one object or interface type."""

    name: str
    model_class_name: str
    resolver_class_name: str
    accessor_name: str
    fields: list[FieldModel] = field(default_factory=list)
    is_interface: bool = False


@dataclass
class ResolverModel(GenerationModel):
    types: list[ResolverTypeModel] = field(default_factory=list)
