"""
Main entrypoint for the Bookstore API.

This module assembles the FastAPI application: it sets up logging,
builds the repositories, services and event listeners, registers the
error handlers and includes the versioned routers.  The application
is instantiated at import time as ``app``, e.g.::

    uvicorn bookstore_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import get_database_path, init_db
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .events import EventDispatcher, GenerateNfeListener, PurchaseEvent, UpdateSoldBookListener
from .repositories import BookRepository, CustomerRepository, PurchaseRepository
from .services import BookService, CustomerService, PurchaseService

logger = logging.getLogger(__name__)


def wire_services(app: FastAPI, settings: Settings) -> None:
    """Build the object graph and attach it to ``app.state``.

    Every collaborator is passed through a constructor; there is no
    container.  Listeners subscribe in order: the invoice number is
    generated before the books are marked as sold.
    """
    db_path = get_database_path(settings.database_url)

    customer_repository = CustomerRepository(db_path)
    book_repository = BookRepository(db_path)
    purchase_repository = PurchaseRepository(db_path, customer_repository, book_repository)

    dispatcher = EventDispatcher(maxsize=settings.event_queue_size, drain_timeout=settings.event_drain_timeout)
    book_service = BookService(book_repository)
    customer_service = CustomerService(customer_repository, book_service)
    purchase_service = PurchaseService(purchase_repository, customer_service, book_service, dispatcher)

    dispatcher.subscribe(PurchaseEvent, GenerateNfeListener(purchase_service).listen)
    dispatcher.subscribe(PurchaseEvent, UpdateSoldBookListener(book_service).listen)

    app.state.settings = settings
    app.state.db_path = db_path
    app.state.customer_repository = customer_repository
    app.state.dispatcher = dispatcher
    app.state.book_service = book_service
    app.state.customer_service = customer_service
    app.state.purchase_service = purchase_service


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment-derived
        module-level settings.  Tests pass their own instance.

    Returns
    -------
    FastAPI
        A configured application.  The database is migrated and the
        event dispatcher started when the application starts up.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(app.state.db_path)
        if settings.admin_email and settings.admin_password:
            await app.state.customer_service.ensure_admin(settings.admin_email, settings.admin_password)
        await app.state.dispatcher.start()
        logger.info("%s %s started (database %s)", settings.project_name, settings.api_version, app.state.db_path)
        try:
            yield
        finally:
            await app.state.dispatcher.stop()

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug, lifespan=lifespan)
    wire_services(app, settings)
    register_exception_handlers(app)
    app.include_router(v1_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
