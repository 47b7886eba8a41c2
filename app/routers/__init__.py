"""
Routers module - API endpoint handlers organized by feature.

- account: account deletion (cascade delete + session cookie clearing)
- tools: prompt enhancement, HTML tool generation, image analysis
"""
