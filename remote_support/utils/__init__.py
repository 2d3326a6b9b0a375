"""
Description: Shared utilities subpackage.
Main features:
    - Error taxonomy
    - Structured logging and metrics
"""
