"""
Test application.

Reuses the service application so tests exercise the same routers, handlers and lifespan as production.
"""

from src.service.course_booking.main import app

__all__ = ['app']
