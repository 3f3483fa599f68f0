"""
auth — User accounts and bearer tokens.

Provides:
  • Signed, one-hour identity tokens (HMAC-SHA256)
  • bcrypt password hashing
  • Register / Login / My-profile API routes
  • ``get_current_user`` FastAPI dependency
"""
