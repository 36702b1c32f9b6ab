from .database import db
from .claim import WidgetClaim, SUBMITTED, CONFIRMED, DELIVERED

__all__ = ['db', 'WidgetClaim', 'SUBMITTED', 'CONFIRMED', 'DELIVERED']
