"""Shared fixtures for the test suite."""

import pytest
from graphql import parse

from gql_idlgen.core.config import MappingConfig
from gql_idlgen.core.registry import TypeMappingRegistry, register_document_scalars
from gql_idlgen.core.type_resolver import TypeReferenceResolver

EVENTS_SCHEMA = '''
scalar DateTime

"""Lifecycle of an event."""
enum EventStatus {
    OPEN
    IN_PROGRESS
    LOGGED
}

interface Node {
    id: ID!
}

"""Something that happened."""
type Event implements Node {
    id: ID!
    status: EventStatus
    createdAt: DateTime
    property(id: ID): [EventProperty]
}

type EventProperty {
    intVal: Int
    children: [EventProperty!]!
}

union SearchResult = Event | EventProperty

input EventInput {
    status: EventStatus!
    from: String
}

type Query {
    events(status: EventStatus, first: Int = 10): [Event!]!
    event(id: ID!): Event
}

type Mutation {
    createEvent(input: EventInput!): Event!
}

type Subscription {
    eventCreated: Event
}

directive @auth(role: String) on FIELD_DEFINITION

extend type Event {
    extra: String
}
'''


@pytest.fixture
def events_schema():
    return EVENTS_SCHEMA


@pytest.fixture
def events_document():
    return parse(EVENTS_SCHEMA)


@pytest.fixture
def schema_file(tmp_path):
    path = tmp_path / "events.graphqls"
    path.write_text(EVENTS_SCHEMA, encoding="utf-8")
    return str(path)


def make_resolver(document, config=None):
    """Registry + resolver for one document, scalars registered."""
    registry = TypeMappingRegistry(config or MappingConfig())
    register_document_scalars(registry, document)
    return TypeReferenceResolver.for_documents(registry, [document])


@pytest.fixture
def events_resolver(events_document):
    return make_resolver(events_document)


@pytest.fixture
def resolver_factory():
    return make_resolver
