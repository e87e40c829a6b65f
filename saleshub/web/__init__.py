"""
Web layer - FastAPI routers and request models
"""
