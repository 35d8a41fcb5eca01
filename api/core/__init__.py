"""
Shared, cross-cutting code for the API.

`core/` holds the small building blocks both resources use (settings, DB
wiring, schema bootstrap, logging). Resource-specific SQL lives in the
resource package (e.g. `students/`).
"""
