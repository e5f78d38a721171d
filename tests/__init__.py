"""Test suite for Enterprise Groovy.

Test organization:
- fixtures/: Node tree builders and descriptor helpers
- unit/: Unit tests for individual modules

Run tests with:
    pytest tests/
    pytest tests/unit/
    pytest tests/ -v --tb=short
"""
