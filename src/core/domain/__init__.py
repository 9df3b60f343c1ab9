"""Domain models.

- Pure data structures: roles, method shapes, candidates and results.
- The domain knows nothing about `inspect`, blob encodings or the CLI.
"""
