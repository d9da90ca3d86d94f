"""
Core primitives shared across the notes service.

This package hosts configuration (env vars, paths), the error taxonomy mapped
to HTTP responses, and logging setup. Routers and the store depend on these
instead of reading the environment or inventing ad hoc string errors.
"""
