"""
Vercel Serverless Entry Point

Vercel's Python runtime detects the ASGI application exported as `app`
and invokes it for every request routed to /api/*.
"""

from app.main import app  # noqa: F401
