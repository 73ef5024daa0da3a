"""Integration tests for fluent-xml.

Integration tests validate the builder and traversal façades together:
- Documents written to and read back from the file system
- Files, bytes and streams as parse sources

Run with: poetry run pytest tests/integration/ -v
Skip: pytest -m "not integration"
"""
