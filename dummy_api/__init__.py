"""
Dummy JSON API.

A small REST facade over a hosted key-value store: greeting, user CRUD and
admin seed/dump endpoints, documented through the generated OpenAPI schema.
"""
