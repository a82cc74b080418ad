"""Browser-facing HTTP API for py-bash sessions.

This package provides a Flask application that hosts many isolated
shell sessions.  It is an **optional** extra — install with::

    pip install py-bash[web]

The ``create_app`` factory in ``app.py`` wires the JSON endpoints; a
front-end renders the transcript and turns key presses into calls.
"""
