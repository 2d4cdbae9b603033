"""docsprov test suite."""
