"""Core business logic layer.

Subpackages:
- selection: filtering, scaling and ranking meal templates for a request
- geo: great-circle distance helpers for the store lookup
"""
__all__ = ["selection", "geo"]
