"""Domain-specific realtime publishers.

These modules contain *publish* helpers only (build payload + emit).
They must not define Socket.IO server instances or connection handlers.
"""
