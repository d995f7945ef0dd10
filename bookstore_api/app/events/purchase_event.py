from dataclasses import dataclass

from ..models import Purchase


@dataclass(frozen=True)
class PurchaseEvent:
    """A purchase was stored.  Carries the purchase with its books."""

    purchase: Purchase
