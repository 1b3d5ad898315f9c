"""
Residence Portal API package.

The application is built by api.app.create_app(); run_api.py serves it.
"""
