"""Mapping configuration for a generation run.

Options can be given directly, on the command line, or loaded from a JSON
file through ``JsonMappingConfigSupplier``. JSON keys use camelCase:

    {
        "customTypesMapping": {"DateTime": "datetime.datetime"},
        "modelPackageName": "app.models",
        "generateApis": false
    }
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CodegenError

DEFAULT_VALIDATION_ANNOTATION = "Field(...)"
DEFAULT_EQUALS_AND_HASH_CODE = False
DEFAULT_TO_STRING = False
DEFAULT_GENERATE_APIS = True


class MappingConfig(BaseModel):
    """Options controlling how schema definitions map to generated code.

    Every option is optional so that two configurations can be combined
    field by field; ``with_defaults`` fills whatever is still unset.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        protected_namespaces=(),
    )

    custom_types_mapping: dict[str, str] = Field(
        default_factory=dict, alias="customTypesMapping"
    )
    model_validation_annotation: str | None = Field(
        None, alias="modelValidationAnnotation"
    )
    generate_equals_and_hash_code: bool | None = Field(
        None, alias="generateEqualsAndHashCode"
    )
    generate_to_string: bool | None = Field(None, alias="generateToString")
    generate_apis: bool | None = Field(None, alias="generateApis")
    package_name: str | None = Field(None, alias="packageName")
    model_package_name: str | None = Field(None, alias="modelPackageName")
    api_package_name: str | None = Field(None, alias="apiPackageName")
    model_name_prefix: str | None = Field(None, alias="modelNamePrefix")
    model_name_suffix: str | None = Field(None, alias="modelNameSuffix")

    def combine(self, other: "MappingConfig | None") -> None:
        """Fill options that are unset here with values from ``other``.

        Options already set on this config always win. Custom type mappings
        are merged key by key with the same rule.
        """
        if other is None:
            return
        for name in type(self).model_fields:
            if name == "custom_types_mapping":
                continue
            if getattr(self, name) is None:
                setattr(self, name, getattr(other, name))
        for graphql_name, target in other.custom_types_mapping.items():
            self.custom_types_mapping.setdefault(graphql_name, target)

    def with_defaults(self) -> "MappingConfig":
        """Return a copy with every unset toggle replaced by its default."""
        config = self.model_copy(deep=True)
        if config.model_validation_annotation is None:
            config.model_validation_annotation = DEFAULT_VALIDATION_ANNOTATION
        if config.generate_equals_and_hash_code is None:
            config.generate_equals_and_hash_code = DEFAULT_EQUALS_AND_HASH_CODE
        if config.generate_to_string is None:
            config.generate_to_string = DEFAULT_TO_STRING
        if config.generate_apis is None:
            config.generate_apis = DEFAULT_GENERATE_APIS
        return config

    @property
    def resolved_model_package(self) -> str:
        return self.model_package_name or self.package_name or ""

    @property
    def resolved_api_package(self) -> str:
        return self.api_package_name or self.package_name or ""


class JsonMappingConfigSupplier:
    """Supplies a ``MappingConfig`` stored in a JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self) -> MappingConfig:
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise CodegenError(f"Cannot read mapping config {self.path}: {e}") from e
        try:
            return MappingConfig.model_validate_json(content)
        except ValidationError as e:
            raise CodegenError(f"Invalid mapping config {self.path}: {e}") from e
