"""Hybrid ECDH + AES-GCM encryption for secrets submitted by clients."""
