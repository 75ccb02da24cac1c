"""
Validation Package.

Pre-run checks: an OID is present and the configured metadata files can
be found.
"""
