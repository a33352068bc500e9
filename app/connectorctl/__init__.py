"""connectorctl - find the connectors a change set touches."""

__version__ = "0.3.0"
