"""querykey-lint: flag raw query keys in TanStack Query code."""

__version__ = "0.1.0"
