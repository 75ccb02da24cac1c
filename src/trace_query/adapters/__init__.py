"""
Adapters Package - Infrastructure Implementations.

    - saxon_engine: XQuery and XSLT via saxonche
    - browser_viewer: Opens reports with the webbrowser module
    - mock_engine: Scripted engines for development and testing
"""
