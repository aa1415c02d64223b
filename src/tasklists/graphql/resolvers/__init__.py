"""Resolver package for GraphQL schema.

Query and mutation handlers plus the per-field entity resolvers referenced by
the GraphQL types. Every handler that touches user data calls
`require_authenticated` before doing anything else.
"""
