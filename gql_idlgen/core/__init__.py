"""Core modules for GraphQL code generation."""

from .classifier import DefinitionKind, classify, classify_strict, is_root_operation_type
from .config import JsonMappingConfigSupplier, MappingConfig
from .errors import (
    CodegenError,
    ParseError,
    RenderError,
    UnresolvedTypeReferenceError,
    UnsupportedDefinitionError,
    WriteError,
)
from .generator import CodeGenerator
from .hooks import AddHeaderHook, HookRunner, PostGenerateHook
from .model import (
    ArgumentModel,
    EnumModel,
    FieldModel,
    GenerationModel,
    OperationFieldModel,
    OperationModel,
    ResolverModel,
    ResolverTypeModel,
    Template,
    TypeModel,
    TypeReference,
    UnionModel,
)
from .parser import SchemaParser
from .processor import GenerationResult, SchemaProcessor
from .registry import TypeMappingRegistry, register_document_scalars
from .type_resolver import TypeReferenceResolver

__all__ = [
    # Configuration
    "MappingConfig",
    "JsonMappingConfigSupplier",
    "TypeMappingRegistry",
    "register_document_scalars",
    # Classification and type resolution
    "DefinitionKind",
    "classify",
    "classify_strict",
    "is_root_operation_type",
    "TypeReferenceResolver",
    # Models
    "ArgumentModel",
    "EnumModel",
    "FieldModel",
    "GenerationModel",
    "OperationFieldModel",
    "OperationModel",
    "ResolverModel",
    "ResolverTypeModel",
    "Template",
    "TypeModel",
    "TypeReference",
    "UnionModel",
    # Pipeline
    "SchemaParser",
    "CodeGenerator",
    "SchemaProcessor",
    "GenerationResult",
    # Hooks
    "PostGenerateHook",
    "AddHeaderHook",
    "HookRunner",
    # Errors
    "CodegenError",
    "ParseError",
    "RenderError",
    "UnresolvedTypeReferenceError",
    "UnsupportedDefinitionError",
    "WriteError",
]
