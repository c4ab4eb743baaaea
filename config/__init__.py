"""Top-level package for Django configuration.

This package holds the settings modules for the different environments
and the WSGI and ASGI entry points of the meeting rooms API.
"""
