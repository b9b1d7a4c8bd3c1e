"""
ToDo Resource Service - in-memory ToDo CRUD over FastAPI and http.server
"""

__version__ = "1.0.0"
