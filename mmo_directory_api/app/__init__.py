"""
Application package initializer.

This package contains the main entrypoint for the directory API and
its submodules: ``core`` (settings, logging, the record store),
``schemas`` (Pydantic payloads), ``services`` (slug normalisation,
SEO autofill and the member service) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
