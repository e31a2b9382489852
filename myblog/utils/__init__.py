"""
Shared utilities.

Modules:
- logging_setup: standardized logging configuration
"""
