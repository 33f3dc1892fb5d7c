"""Browser-based web UI for pagesim.

This package provides a Flask application that runs simulations over
HTTP.  It is an **optional** extra — install with::

    pip install pagesim[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /`` — HTML form for pasting a trace.
- ``GET /api/policies`` — accepted policy names.
- ``POST /api/simulate`` — run a trace and return JSON totals.
"""
