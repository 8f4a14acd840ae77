"""Commons package - settings and telemetry shared by all layers."""
