"""Travel AI Agent - multi-agent travel assistant."""

__version__ = "0.1.0"
