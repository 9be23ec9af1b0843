"""Host-side helpers for the chart JSON API.

Request payloads are decoded into `plotting` schema types, validated against
their metadata, and per-chart state is kept in the session. Chart computation
itself lives in the Django-free `plotting` package.
"""
