"""
Integration Tests - End-to-End Pipeline Tests.

These tests verify that all components work together correctly on real
files. Most use the scripted MockQueryEngine to avoid external engines
while testing the full workflow; test_saxon_engine.py runs Saxon itself.

Test Files:
    - test_trace_pipeline.py: Full trace workflow and abort policy
    - test_saxon_engine.py: Real XQuery/XSLT evaluation
"""
