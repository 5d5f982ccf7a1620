"""Name conversions between GraphQL and Python identifiers."""

import keyword
import re


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def capitalize(name: str) -> str:
    """Upper-case the first letter only: ``eventsByIds`` -> ``EventsByIds``."""
    return name[:1].upper() + name[1:]


def safe_identifier(name: str) -> str:
    """Make a name usable as a Python attribute or parameter.

    Keywords get a trailing underscore. Leading underscores are moved to the
    end, since pydantic treats underscored attributes as private.
    """
    if name.startswith("_"):
        name = name.lstrip("_") + "_"
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def method_name(graphql_name: str) -> str:
    """Python method or parameter name for a GraphQL field or argument."""
    return safe_identifier(snake_case(graphql_name))


def module_name(class_name: str) -> str:
    """Module (file) name holding a generated class."""
    return snake_case(class_name)


def safe_docstring(text: str | None) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str | None) -> str:
    """Make text safe for a single-line Python comment."""
    if not text:
        return ""
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()
