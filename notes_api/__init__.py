"""Notes service: CRUD over notes kept in a single-file bucket store."""
