"""Service layer: result contract, provisioning runner, telemetry."""
