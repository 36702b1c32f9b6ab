"""
Claim lifecycle: submitted -> confirmed -> delivered.

Submit subscribes the visitor with Kit and records the claim, Confirm handles
the visitor coming back from the confirmation email, and Deliver decides how
a confirmed claim gets its asset.
"""
import uuid
from collections import namedtuple
from werkzeug.utils import safe_join
from models import WidgetClaim, SUBMITTED, CONFIRMED, DELIVERED
from utils import generate_claim_token, utcnow
from .errors import ValidationError, RateLimitError, NotFoundError, NotConfirmedError, WidgetGoneError

LookupKeys = namedtuple('LookupKeys', ['subscriber_id', 'token', 'email'])
LookupKeys.__new__.__defaults__ = (None, None, None)

# Either redirect_url or file_path is set, never both
DeliveryPlan = namedtuple('DeliveryPlan', ['claim', 'widget', 'redirect_url', 'file_path'])


def _by_subscriber_id(store, keys):
    return store.latest_by_subscriber_id(keys.subscriber_id) if keys.subscriber_id else None


def _by_token(store, keys):
    return store.by_token(keys.token) if keys.token else None


def _by_email(store, keys):
    return store.latest_by_email(keys.email) if keys.email else None


# Subscriber id is set by Kit itself so it wins; email is the last resort
LOOKUP_STRATEGIES = (_by_subscriber_id, _by_token, _by_email)


class ClaimService:

    def __init__(self, settings, catalog, gateway, store, limiter):
        self.settings = settings
        self.catalog = catalog
        self.gateway = gateway
        self.store = store
        self.limiter = limiter

    def submit(self, email, widget_id, ip_hash):
        """Subscribe the visitor and record a new claim.

        Nothing is written if validation, the rate limit or the Kit call fails.
        """
        if not isinstance(email, str) or not isinstance(widget_id, str):
            raise ValidationError()
        email = email.strip()
        widget_id = widget_id.strip()

        widget = self.catalog.get(widget_id)
        if not email or not widget:
            raise ValidationError()

        if self.limiter.is_limited(ip_hash):
            print(f"[Claims] Rate limit reached for {ip_hash[:12]}")
            raise RateLimitError()

        # Generate unique claim token
        while True:
            token = generate_claim_token()
            if not self.store.token_exists(token):
                break

        # GatewayError propagates; no record is kept for a failed subscription
        subscriber_id = self.gateway.register_or_update(email, token, widget.id)

        claim = WidgetClaim(
            id=str(uuid.uuid4()),
            email=email,
            widget_id=widget.id,
            status=SUBMITTED,
            kit_subscriber_id=subscriber_id,
            claim_token=token,
            ip_hash=ip_hash,
            created_at=utcnow()
        )
        self.store.add(claim)

        print(f"[Claims] Claim {claim.id} submitted for widget {widget.id}")
        return claim

    def find(self, keys):
        """Resolve a claim from whichever lookup keys are present"""
        for strategy in LOOKUP_STRATEGIES:
            claim = strategy(self.store, keys)
            if claim is not None:
                return claim
        return None

    def confirm(self, keys):
        """Mark the matching claim confirmed and return it with its widget.

        Confirming an already confirmed or delivered claim changes nothing.
        """
        claim = self.find(keys)
        if claim is None:
            raise NotFoundError()

        if claim.status == SUBMITTED:
            claim.advance(CONFIRMED, utcnow())
            self.store.save(claim)
            print(f"[Claims] Claim {claim.id} confirmed")

        widget = self.catalog.get(claim.widget_id)
        if widget is None:
            print(f"[Claims] Widget {claim.widget_id} for claim {claim.id} is no longer in the catalog")
            raise WidgetGoneError()

        return claim, widget

    def deliver(self, token):
        """Work out where a confirmed claim's asset comes from"""
        claim = self.store.by_token(token) if token else None
        if claim is None:
            raise NotFoundError()
        if not claim.is_confirmed:
            raise NotConfirmedError()

        widget = self.catalog.get(claim.widget_id)
        if widget is None:
            raise WidgetGoneError('Widget download is unavailable.')

        if self.settings.download_base_url:
            return DeliveryPlan(claim, widget, f"{self.settings.download_base_url}/{widget.zip}", None)

        file_path = safe_join(self.settings.assets_dir, 'zips', widget.zip)
        if file_path is None:
            raise WidgetGoneError('Widget download is unavailable.')
        return DeliveryPlan(claim, widget, None, file_path)

    def mark_delivered(self, claim):
        """Record a completed download; the first delivery time is kept"""
        claim.advance(DELIVERED, utcnow())
        self.store.save(claim)
        print(f"[Claims] Claim {claim.id} delivered")
        return claim
