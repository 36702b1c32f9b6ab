from datetime import timedelta
from utils import utcnow

SUBMISSIONS_PER_WINDOW = 5
WINDOW = timedelta(hours=1)


class RateLimiter:
    """Throttles claim submissions per hashed client address.

    Advisory only: the count is read without a lock, so two simultaneous
    submissions can both slip under the limit.
    """

    def __init__(self, store, limit=SUBMISSIONS_PER_WINDOW, window=WINDOW):
        self.store = store
        self.limit = limit
        self.window = window

    def is_limited(self, ip_hash, now=None):
        now = now or utcnow()
        return self.store.count_since(ip_hash, now - self.window) >= self.limit
