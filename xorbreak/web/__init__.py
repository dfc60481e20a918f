"""Web API package"""

from .server import BreakerWebServer, create_app

__all__ = ['BreakerWebServer', 'create_app']
