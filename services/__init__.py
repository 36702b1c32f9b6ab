from .catalog import Widget, WidgetCatalog
from .store import ClaimStore
from .rate_limit import RateLimiter
from .kit import KitClient
from .claims import ClaimService, LookupKeys, DeliveryPlan
from .download import DownloadGate
from .errors import (ClaimError, ValidationError, RateLimitError, GatewayError, NotFoundError,
                     NotConfirmedError, WidgetGoneError, DeliveryError)

__all__ = ['Widget', 'WidgetCatalog', 'ClaimStore', 'RateLimiter', 'KitClient',
           'ClaimService', 'LookupKeys', 'DeliveryPlan', 'DownloadGate',
           'ClaimError', 'ValidationError', 'RateLimitError', 'GatewayError', 'NotFoundError',
           'NotConfirmedError', 'WidgetGoneError', 'DeliveryError']
