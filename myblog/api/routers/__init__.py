"""
API Routers

Routers:
- health_router: Health check endpoint
- crypto_router: ECDH key exchange and hybrid decryption
- auth_router: Session token inspection and refresh
- admin_router: Admin-only statistics
"""
