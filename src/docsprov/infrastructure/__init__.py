"""Infrastructure layer: external collaborators (processes, filesystem)."""
