"""
Errors raised by the claim lifecycle.

Every error ends the current request; routes turn them into error pages.
"""


class ClaimError(Exception):
    """Base class for claim lifecycle failures"""
    message = 'Something went wrong. Please try again.'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(ClaimError):
    message = 'Please choose a widget and enter an email.'


class RateLimitError(ClaimError):
    message = 'Rate limit reached. Please try again later.'


class GatewayError(ClaimError):
    """The email provider was unreachable or refused the subscription"""
    message = 'We could not send your confirmation email. Please try again.'

    def __init__(self, status_code=None, body=None):
        super().__init__()
        self.status_code = status_code
        self.body = body

    def __str__(self):
        return f"Kit error: {self.status_code} {self.body}"


class NotFoundError(ClaimError):
    message = 'We could not find your claim. Please try a fresh request from the home page.'


class NotConfirmedError(ClaimError):
    message = 'Please confirm your email before downloading.'


class WidgetGoneError(ClaimError):
    message = 'We could not locate the widget details.'


class DeliveryError(ClaimError):
    message = 'Download failed. Please contact support.'
