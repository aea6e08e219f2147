"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces:
- Graph storage and shortest paths (in-memory store, Dijkstra)
- Caching of shortest-path runs (in-memory, null)
- Text input and output (line protocol reader, stream writer)
"""
