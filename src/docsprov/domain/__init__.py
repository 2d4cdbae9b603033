"""Domain layer: provisioning steps and their outcomes."""
