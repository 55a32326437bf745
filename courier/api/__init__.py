"""Courier HTTP API layer.

This package provides the Falcon ASGI application serving the health
probes and the GitHub and Zoho webhook receivers.

Usage
-----
Create and run the application::

    from courier.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # full mode with webhook receivers

"""

from courier.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
