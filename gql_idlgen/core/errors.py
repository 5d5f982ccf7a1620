"""Exceptions raised while turning a GraphQL schema into source files."""


class CodegenError(Exception):
    """Base class for all code generation errors."""


class ParseError(CodegenError):
    """Raised when a schema file cannot be read or is not valid SDL."""

    def __init__(self, schema_path: str, message: str):
        self.schema_path = schema_path
        self.message = message
        super().__init__(f"Error parsing {schema_path}: {message}")


class UnsupportedDefinitionError(CodegenError):
    """Raised for definition nodes the generator has no strategy for."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unsupported GraphQL definition: {kind}")


class UnresolvedTypeReferenceError(CodegenError):
    """Raised when a field refers to a type that is defined nowhere."""

    def __init__(
        self,
        type_name: str,
        definition_name: str | None = None,
        schema_path: str | None = None,
    ):
        self.type_name = type_name
        self.definition_name = definition_name
        self.schema_path = schema_path
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"Unknown type '{self.type_name}'"
        if self.definition_name:
            message += f" referenced by '{self.definition_name}'"
        if self.schema_path:
            message += f" in {self.schema_path}"
        return message

    def with_schema(self, schema_path: str) -> "UnresolvedTypeReferenceError":
        """Return a copy of this error that names the schema file."""
        return UnresolvedTypeReferenceError(
            self.type_name, self.definition_name, schema_path
        )


class RenderError(CodegenError):
    """Raised when a template fails or renders invalid Python."""

    def __init__(self, template: str, output_path: str, message: str):
        self.template = template
        self.output_path = output_path
        self.message = message
        super().__init__(
            f"Failed to render {output_path}: {message}\nTemplate: {template}"
        )


class WriteError(CodegenError):
    """Raised when a generated file cannot be written."""

    def __init__(self, output_path: str, message: str):
        self.output_path = output_path
        self.message = message
        super().__init__(f"Failed to write {output_path}: {message}")
