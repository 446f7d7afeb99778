"""A small threaded HTTP server with a static file handler and a routed JSON API."""

__version__ = "0.1.0"