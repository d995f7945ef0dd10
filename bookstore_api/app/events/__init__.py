"""
In-process event dispatch.

``PurchaseService`` publishes a ``PurchaseEvent`` after storing a
purchase.  The ``EventDispatcher`` hands it to a background worker
task, which calls every subscribed listener.  Delivery is
at-most-once and never blocks the publisher.
"""

from .dispatcher import EventDispatcher
from .listeners import GenerateNfeListener, UpdateSoldBookListener
from .purchase_event import PurchaseEvent

__all__ = ["EventDispatcher", "GenerateNfeListener", "PurchaseEvent", "UpdateSoldBookListener"]
