"""Bundled providers.

Each module exposes ``create_provider(context)`` and is addressed by its
dashed name, e.g. ``app-launcher`` for :mod:`central_flow.plugins.app_launcher`.
"""
