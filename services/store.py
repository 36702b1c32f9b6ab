from models import db, WidgetClaim


class ClaimStore:
    """Reads and writes WidgetClaim rows. Every write is a single-row commit."""

    def add(self, claim):
        db.session.add(claim)
        db.session.commit()
        return claim

    def save(self, claim):
        db.session.commit()
        return claim

    def by_token(self, token):
        return WidgetClaim.query.filter_by(claim_token=token).first()

    def token_exists(self, token):
        return db.session.query(WidgetClaim.id).filter_by(claim_token=token).first() is not None

    def latest_by_subscriber_id(self, subscriber_id):
        return (WidgetClaim.query
                .filter_by(kit_subscriber_id=str(subscriber_id))
                .order_by(WidgetClaim.created_at.desc())
                .first())

    def latest_by_email(self, email):
        return (WidgetClaim.query
                .filter_by(email=email)
                .order_by(WidgetClaim.created_at.desc())
                .first())

    def count_since(self, ip_hash, since):
        """Count claims from one address hash created at or after `since`"""
        return WidgetClaim.query.filter(
            WidgetClaim.ip_hash == ip_hash,
            WidgetClaim.created_at >= since
        ).count()
