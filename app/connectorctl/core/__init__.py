"""Core change-detection logic for connectorctl."""
