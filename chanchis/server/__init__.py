"""
Chanchis Server Package.

This package contains the web server implementation for the Chanchis mini-app.
It includes the API definition, configuration, exception handling and the
service layer orchestrating chain, relayer, explorer and storage access.

Subpackages:
    api: FastAPI route definitions and endpoint logic.
    core: Configuration and constants.
    exception_handlers: Error-to-response mapping.
    middleware: Request tracing.
    services: Business logic and service layer.
"""
