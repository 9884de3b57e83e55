"""Custom integrations, importable for tests."""
