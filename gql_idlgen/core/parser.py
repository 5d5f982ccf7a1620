"""GraphQL schema loading using graphql-core.

Reads SDL files and returns their parsed documents. Directives and
descriptions are kept on the AST; no schema validation is done here.
"""

import os
from collections.abc import Iterable

from graphql import DocumentNode, GraphQLSyntaxError, parse

from .errors import ParseError

SCHEMA_EXTENSIONS = (".graphqls", ".graphql", ".gql")


class SchemaParser:
    """Parses GraphQL schema files into documents."""

    def __init__(self, schema_paths: str | Iterable[str]):
        """Initialize a parser with schema files and/or directories."""
        if isinstance(schema_paths, str):
            schema_paths = [schema_paths]
        self.schema_paths = list(schema_paths)

    def collect_schema_files(self) -> list[str]:
        """Expand directories into the schema files they contain.

        Files given explicitly keep their order; files found in a directory
        are sorted.
        """
        files = []
        for path in self.schema_paths:
            if os.path.isdir(path):
                found = []
                for root, _, filenames in os.walk(path):
                    for filename in filenames:
                        if filename.endswith(SCHEMA_EXTENSIONS):
                            found.append(os.path.join(root, filename))
                files.extend(sorted(found))
            else:
                files.append(path)
        return files

    def parse_all(self) -> list[tuple[str, DocumentNode]]:
        """Parse every schema file, in order."""
        return [(path, self.parse_file(path)) for path in self.collect_schema_files()]

    @staticmethod
    def parse_file(path: str) -> DocumentNode:
        try:
            with open(path, encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise ParseError(path, str(e)) from e
        return SchemaParser.parse_text(content, path)

    @staticmethod
    def parse_text(content: str, source_name: str = "<string>") -> DocumentNode:
        try:
            return parse(content)
        except GraphQLSyntaxError as e:
            raise ParseError(source_name, e.message) from e
