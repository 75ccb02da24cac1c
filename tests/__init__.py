"""
Test Suite for Trace Query.

Test organization:
    - unit/: Unit tests for individual components
    - integration/: Orchestrator runs across real files and engines
    - fixtures/: Shared test fixtures and sample data

Running Tests:
    pytest tests/                           # All tests
    pytest tests/unit/                      # Unit tests only
    pytest tests/integration/               # Integration tests only
    pytest -m "not saxon"                   # Skip the real Saxon engine
    pytest --cov=src/trace_query            # With coverage
"""
