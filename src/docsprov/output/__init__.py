"""Output layer: human and JSON rendering of service results."""
