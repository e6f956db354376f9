"""Browser-based web UI for the simulator.

This package provides a Flask application that runs simulations over
HTTP.  It is an **optional** extra — install with::

    pip install pagesim[web]

The ``create_app`` factory in ``app.py`` serves three endpoints:

- ``GET /`` — HTML form for entering a reference string.
- ``GET /api/policies`` — the available replacement policies.
- ``POST /api/simulate`` — run a simulation and return JSON.
"""
