"""custreg — customer master-data registry."""

__version__ = "0.1.0"
