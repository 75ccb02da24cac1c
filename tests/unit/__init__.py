"""
Unit Tests - Testing Individual Components in Isolation.

Each component is tested in isolation with mocked or scripted
collaborators. Unit tests should be fast, deterministic, and focused.

Test Files:
    - test_config_models.py: Path normalisation and defaults
    - test_config_loader.py: Property/YAML loading and errors
    - test_query_executor.py: Binding, serialization and match counting
    - test_render_stage.py: Best-effort rendering and display
    - test_stages.py: Typed stage parameters
    - test_run_validator.py: Pre-run checks
    - test_cli.py: Argument handling and exit codes
"""
