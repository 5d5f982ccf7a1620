"""Tests for template rendering and file writing."""

import ast

import pytest

from gql_idlgen.core.config import MappingConfig
from gql_idlgen.core.errors import RenderError, WriteError
from gql_idlgen.core.generator import CodeGenerator
from gql_idlgen.core.hooks import AddHeaderHook, HookRunner
from gql_idlgen.core.mappers import (
    map_enum,
    map_input,
    map_interface,
    map_operations,
    map_resolvers,
    map_type,
    map_union,
)


def _definition(document, name):
    for definition in document.definitions:
        if getattr(definition, "name", None) and definition.name.value == name:
            return definition
    raise KeyError(name)


@pytest.fixture
def generator(tmp_path):
    return CodeGenerator(tmp_path / "out")


@pytest.fixture
def event_model(events_document, events_resolver):
    return map_type(events_resolver, _definition(events_document, "Event"), events_document)


class TestTypeTemplate:
    """Tests for type.py.j2."""

    def test_renders_valid_python(self, generator, event_model):
        ast.parse(generator.render(event_model))

    def test_class_and_fields(self, generator, event_model):
        code = generator.render(event_model)
        assert "class Event(Node, SearchResult):" in code
        assert '    """Something that happened."""' in code
        assert "    id: str = Field(...)\n" in code
        assert "    status: EventStatus | None = None\n" in code
        assert "    createdAt: str | None = None\n" in code
        assert "    # Arguments: id: str | None\n" in code
        assert "    property: list[EventProperty | None] | None = None\n" in code

    def test_imports(self, generator, event_model):
        code = generator.render(event_model)
        assert "from __future__ import annotations" in code
        assert "from .node import Node\nfrom .search_result import SearchResult\n" in code
        assert (
            "if TYPE_CHECKING:\n"
            "    from .event_property import EventProperty\n"
            "    from .event_status import EventStatus\n"
        ) in code

    def test_plain_model_base(self, generator, events_document, events_resolver):
        model = map_input(events_resolver, _definition(events_document, "EventInput"))
        code = generator.render(model)
        assert "class EventInput(BaseModel):" in code
        assert "EventInput input generated" in code
        assert "    status: EventStatus = Field(...)\n" in code
        assert "    from_: str | None = Field(None, alias='from')\n" in code

    def test_without_validation_annotation(self, tmp_path, event_model):
        generator = CodeGenerator(tmp_path, MappingConfig(model_validation_annotation=""))
        code = generator.render(event_model)
        assert "    id: str\n" in code

    def test_equals_and_to_string(self, tmp_path, event_model):
        generator = CodeGenerator(
            tmp_path,
            MappingConfig(generate_equals_and_hash_code=True, generate_to_string=True),
        )
        code = generator.render(event_model)
        ast.parse(code)
        assert "    model_config = ConfigDict(frozen=True)\n" in code
        assert "    def __str__(self) -> str:\n" in code
        assert 'f"Event(id={self.id!r}, status={self.status!r}, ' in code

    def test_empty_model_has_pass(self, generator, resolver_factory):
        from graphql import parse

        document = parse("input Empty")
        model = map_input(resolver_factory(document), document.definitions[0])
        code = generator.render(model)
        ast.parse(code)
        assert "class Empty(BaseModel):\n    pass\n" in code


class TestOtherTemplates:
    """Tests for the remaining templates."""

    def test_enum(self, generator, events_document, events_resolver):
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        assert generator.render(model) == (
            '"""EventStatus enum generated from the GraphQL schema. Do not edit."""\n'
            "\n"
            "from enum import Enum\n"
            "\n"
            "\n"
            "class EventStatus(str, Enum):\n"
            '    """Lifecycle of an event."""\n'
            "\n"
            "    OPEN = 'OPEN'\n"
            "    IN_PROGRESS = 'IN_PROGRESS'\n"
            "    LOGGED = 'LOGGED'\n"
        )

    def test_interface(self, generator, events_document, events_resolver):
        model = map_interface(events_resolver, _definition(events_document, "Node"))
        code = generator.render(model)
        assert "class Node(BaseModel):" in code
        assert "    id: str = Field(...)\n" in code

    def test_union(self, generator, events_document, events_resolver):
        model = map_union(events_resolver, _definition(events_document, "SearchResult"))
        code = generator.render(model)
        ast.parse(code)
        assert "class SearchResult(BaseModel):" in code
        assert "Union of Event, EventProperty." in code
        assert "__union_members__ = ('Event', 'EventProperty')" in code

    def test_operation(self, generator, events_document, events_resolver):
        events_query = map_operations(events_resolver, _definition(events_document, "Query"))[0]
        code = generator.render(events_query)
        ast.parse(code)
        assert "from typing import TYPE_CHECKING, Protocol" in code
        assert "class EventsQuery(Protocol):" in code
        assert (
            "    def events(self, status: EventStatus | None = None, "
            "first: int | None = None) -> list[Event]:\n"
        ) in code
        assert "Default first: 10." in code

    def test_root_operation(self, generator, events_document, events_resolver):
        root = map_operations(events_resolver, _definition(events_document, "Query"))[-1]
        code = generator.render(root)
        ast.parse(code)
        assert 'class Query(Protocol):\n    """Root Query type."""\n' in code
        assert "    def events(" in code
        assert "    def event(self, id: str) -> Event | None:\n" in code

    def test_required_arguments_come_first(self, generator, resolver_factory):
        from graphql import parse

        document = parse("type Mutation { rename(note: String, id: ID!, name: String! = \"x\"): Boolean }")
        model = map_operations(resolver_factory(document), document.definitions[0])[0]
        code = generator.render(model)
        assert (
            "def rename(self, id: str, note: str | None = None, name: str | None = None)"
            " -> bool | None:"
        ) in code

    def test_resolvers(self, generator, events_document, events_resolver):
        model = map_resolvers(events_resolver, events_document.definitions)
        code = generator.render(model)
        ast.parse(code)
        assert "class EventResolver(Protocol):" in code
        assert "    def created_at(self, parent: Event) -> str | None:\n" in code
        assert (
            "    def property(self, parent: Event, id: str | None = None)"
            " -> list[EventProperty | None] | None:\n"
        ) in code
        assert "class Resolvers(Protocol):" in code
        assert "    event_property: EventPropertyResolver\n" in code
        assert "class NodeResolver(Protocol):" in code

    def test_resolver_parent_argument_renamed(self, generator, resolver_factory):
        from graphql import parse

        document = parse("type Comment { replies(parent: ID): [Comment] }")
        code = generator.render(map_resolvers(resolver_factory(document), document.definitions))
        assert (
            "    def replies(self, parent: Comment, parent_: str | None = None)"
            " -> list[Comment | None] | None:\n"
        ) in code

    def test_empty_resolvers(self, generator, resolver_factory):
        from graphql import parse

        document = parse("enum E { A }")
        code = generator.render(map_resolvers(resolver_factory(document), document.definitions))
        ast.parse(code)
        assert "class Resolvers(Protocol):" in code
        assert "    pass\n" in code


class TestWriting:
    """Tests for generate_file() and errors."""

    def test_writes_into_package_path(self, tmp_path, events_document, resolver_factory):
        resolver = resolver_factory(events_document, MappingConfig(package_name="app.graphql"))
        model = map_enum(resolver, _definition(events_document, "EventStatus"))
        path = CodeGenerator(tmp_path).generate_file(model)
        assert path == tmp_path / "app" / "graphql" / "event_status.py"
        assert path.read_text(encoding="utf-8").startswith('"""EventStatus enum')

    def test_post_hooks_applied(self, tmp_path, events_document, events_resolver):
        hooks = HookRunner([AddHeaderHook("# Generated")])
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        path = CodeGenerator(tmp_path, hooks=hooks).generate_file(model)
        assert path.read_text(encoding="utf-8").startswith("# Generated\n\n")

    def test_custom_template_dir(self, tmp_path, events_document, events_resolver):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "enum.py.j2").write_text("# {{ model.class_name }}\n", encoding="utf-8")
        generator = CodeGenerator(tmp_path / "out", template_dir=str(templates))
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        assert generator.render(model) == "# EventStatus\n"

    def test_invalid_python_raises_render_error(self, tmp_path, events_document, events_resolver):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "enum.py.j2").write_text("class {{ model.class_name }}(:\n", encoding="utf-8")
        generator = CodeGenerator(tmp_path / "out", template_dir=str(templates))
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        with pytest.raises(RenderError) as exc_info:
            generator.render(model)
        assert exc_info.value.template == "enum.py.j2"
        assert exc_info.value.output_path == "event_status.py"

    def test_compile_error_raises_render_error(self, tmp_path, events_document, events_resolver):
        templates = tmp_path / "templates"
        templates.mkdir()
        # Parses, but a duplicate parameter only fails at compile time
        (templates / "enum.py.j2").write_text(
            "def {{ model.class_name | snake_case }}(value, value):\n    pass\n", encoding="utf-8"
        )
        generator = CodeGenerator(tmp_path / "out", template_dir=str(templates))
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        with pytest.raises(RenderError, match="duplicate argument"):
            generator.render(model)
        assert not (tmp_path / "out" / "event_status.py").exists()

    def test_template_error_raises_render_error(self, tmp_path, events_document, events_resolver):
        templates = tmp_path / "templates"
        templates.mkdir()
        (templates / "enum.py.j2").write_text("{{ model.no_such_attribute }}\n", encoding="utf-8")
        generator = CodeGenerator(tmp_path / "out", template_dir=str(templates))
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        with pytest.raises(RenderError):
            generator.render(model)

    def test_write_error(self, tmp_path, events_document, events_resolver):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        model = map_enum(events_resolver, _definition(events_document, "EventStatus"))
        with pytest.raises(WriteError):
            CodeGenerator(blocker).generate_file(model)

    def test_prepare_output_dir_keeps_files(self, tmp_path):
        out = tmp_path / "out"
        out.mkdir()
        (out / "keep.txt").write_text("keep", encoding="utf-8")
        CodeGenerator(out).prepare_output_dir()
        assert (out / "keep.txt").read_text(encoding="utf-8") == "keep"

    def test_prepare_output_dir_creates(self, tmp_path):
        out = tmp_path / "a" / "b"
        CodeGenerator(out).prepare_output_dir()
        assert out.is_dir()
