"""Interfaces/abstractions of the Core.

Why:
- Defines contracts (Protocol) implemented by concrete adapters.
- Services depend on these abstractions, tests plug in fakes.
"""
