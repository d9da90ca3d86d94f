"""
Persistence adapters.

Repositories translate note-level operations into transactions against the
bucket store. Routers depend on them instead of opening transactions directly.
"""
