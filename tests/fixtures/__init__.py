"""
Test Fixtures - Shared Test Data and Configurations.

This package contains reusable test fixtures:
    - trace-xml.cfg: Sample property file with every recognised key

Usage:
    Reference the files through the ``sample_config_path`` fixture.
"""
