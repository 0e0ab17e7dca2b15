"""
API routes module.

FastAPI application factory, routers and dependencies for all HTTP endpoints.
"""
