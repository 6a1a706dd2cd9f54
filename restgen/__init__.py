"""Registry of protobuf services, messages and their REST mappings for gateway code generation."""

__version__ = "0.1.0"