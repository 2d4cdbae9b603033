"""docsprov — documentation-build environment provisioner."""

__version__ = "0.1.0"
