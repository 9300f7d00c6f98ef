"""Shared fixtures: a small schema exercising every type kind."""

import pytest
from graphql import FragmentDefinitionNode, OperationDefinitionNode, build_schema, parse

from gql_scalagen.core.config import make_config
from gql_scalagen.core.selections import ResolveContext

SCHEMA_SDL = '''
"""Anything with an id"""
interface Node {
  id: ID!
}

type Query {
  user(id: ID): User
  users: [User!]!
  node(id: ID!): Node
}

type Mutation {
  rename(id: ID!, name: String!): User
}

type User implements Node {
  id: ID!
  "The display name"
  name: String
  address: Address
  home: Address
  work: Address
  friends: [User]
  tags: [String!]
  role: Role
  type: String
  createdAt: DateTime
  balance: Money
}

type Address {
  city: String!
  street: String
}

enum Role {
  ADMIN
  USER
}

scalar DateTime
scalar Money

"""Filter for user lookups"""
input UserFilter {
  name: String
  role: Role = USER
  limit: Int = 10
  tags: [String!]
}
'''


@pytest.fixture
def schema():
    return build_schema(SCHEMA_SDL)


@pytest.fixture
def config(schema):
    return make_config(schema)


@pytest.fixture
def context_for(schema, config):
    """Parse a document and build a resolve context over its fragments.

    Returns ``(context, first operation or None)``.
    """

    def factory(source: str):
        document = parse(source)
        fragments = tuple(d for d in document.definitions if isinstance(d, FragmentDefinitionNode))
        operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
        context = ResolveContext(schema, fragments, config.scalars, config.enum_values)
        return context, operations[0] if operations else None

    return factory
