"""Authentication: password hashing, session tokens and request dependencies."""
