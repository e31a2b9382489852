"""
Core configuration and shared error types.

Modules:
- settings: environment-backed application settings
- errors: application error taxonomy used by every layer
"""
