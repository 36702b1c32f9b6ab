from .database import db

SUBMITTED = 'submitted'
CONFIRMED = 'confirmed'
DELIVERED = 'delivered'

# Statuses in lifecycle order; a claim only ever moves to the right
STATUS_ORDER = (SUBMITTED, CONFIRMED, DELIVERED)


class WidgetClaim(db.Model):
    """Database model for a visitor's claim on a free widget."""
    __tablename__ = 'widget_claims'

    id = db.Column(db.String(36), primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    widget_id = db.Column(db.String(100), nullable=False)

    # Status tracking
    status = db.Column(db.String(20), nullable=False, default=SUBMITTED)  # submitted, confirmed, delivered
    kit_subscriber_id = db.Column(db.String(100))
    claim_token = db.Column(db.String(24), nullable=False, unique=True, index=True)
    ip_hash = db.Column(db.String(64))

    # Timestamps (naive UTC)
    created_at = db.Column(db.DateTime, nullable=False)
    confirmed_at = db.Column(db.DateTime)
    delivered_at = db.Column(db.DateTime)

    @property
    def is_confirmed(self):
        """True once the email has been confirmed, including after delivery"""
        return self.status in (CONFIRMED, DELIVERED)

    def advance(self, status, when):
        """Move forward to `status`, stamping its timestamp the first time only."""
        if STATUS_ORDER.index(status) < STATUS_ORDER.index(self.status):
            raise ValueError(f"Cannot move claim {self.id} from {self.status} back to {status}")

        self.status = status
        if status == CONFIRMED and self.confirmed_at is None:
            self.confirmed_at = when
        elif status == DELIVERED and self.delivered_at is None:
            self.delivered_at = when

    def __repr__(self):
        return f"<WidgetClaim {self.id} {self.widget_id} {self.status}>"
