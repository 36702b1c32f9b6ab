import requests
from .errors import GatewayError


class KitClient:
    """Subscribes claimants to the Kit (ConvertKit) form that sends the confirmation email."""

    def __init__(self, settings):
        self.settings = settings

    def subscribe_url(self):
        return f"{self.settings.kit_api_base}/forms/{self.settings.kit_form_id}/subscribe"

    def build_payload(self, email, token, widget_id):
        """Request body carrying the claim token and widget id as custom fields"""
        settings = self.settings
        return {
            "api_key": settings.kit_api_key,
            "email": email,
            "tags": [settings.kit_tag_id] if settings.kit_tag_id else [],
            "fields": {
                settings.kit_custom_token_field: token,
                settings.kit_custom_widget_field: widget_id,
            },
        }

    def register_or_update(self, email, token, widget_id):
        """Create or update the subscriber and return their Kit id (None if unknown)"""
        if not self.settings.kit_configured:
            # Degraded mode: no confirmation email is sent
            print("[Kit] Missing Kit credentials - skipping subscription")
            print(f"[Kit] Would subscribe {email} for widget {widget_id}")
            return None

        try:
            print(f"[Kit] Subscribing {email} for widget {widget_id}...")
            response = requests.post(
                self.subscribe_url(),
                json=self.build_payload(email, token, widget_id),
                headers={"Content-Type": "application/json"},
                timeout=self.settings.kit_timeout
            )
        except requests.RequestException as e:
            print(f"[Kit] Network error: {e}")
            raise GatewayError(None, str(e)) from e

        if not response.ok:
            print(f"[Kit] API error. Status: {response.status_code}")
            print(f"[Kit] Response: {response.text}")
            raise GatewayError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            data = {}

        subscriber = ((data or {}).get("subscription") or {}).get("subscriber") or {}
        subscriber_id = subscriber.get("id")

        print(f"[Kit] Subscriber {email} processed successfully")
        return str(subscriber_id) if subscriber_id is not None else None
