"""
Application package initializer.

The project is organised in layers: HTTP endpoints under
``api/v1/endpoints`` call services in ``services``, which in turn use
the repositories in ``repositories`` to talk to SQLite.  Purchase
side effects (invoice number, sold books) run asynchronously through
the dispatcher in ``events``.
"""

from .main import app  # noqa: F401
