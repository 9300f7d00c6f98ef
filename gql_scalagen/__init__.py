"""Scala.js code generation from GraphQL schemas and operation documents."""

__version__ = "0.1.0"
