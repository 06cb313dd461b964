"""
Tests for the space colonization growth simulation.

This package contains tests for:
- Node arena and attractor pool bookkeeping
- The growth engine step algorithm
- Graph extraction, seeding and configuration
- Exporters and renderers
"""
