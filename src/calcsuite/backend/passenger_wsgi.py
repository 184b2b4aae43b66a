"""WSGI entrypoint for Passenger-style hosting of the CalcSuite API."""

from calcsuite.backend.app import create_app

# Passenger looks for a module-level variable named ``application``.
application = create_app()
