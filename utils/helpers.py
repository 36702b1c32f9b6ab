import hashlib
import secrets
from datetime import datetime, timezone

# URL-safe alphabet, same characters nanoid uses
CLAIM_TOKEN_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_-'
CLAIM_TOKEN_LENGTH = 24


def generate_claim_token(length=CLAIM_TOKEN_LENGTH):
    """Generate an unguessable, URL-safe claim token"""
    return ''.join(secrets.choice(CLAIM_TOKEN_ALPHABET) for _ in range(length))


def hash_ip(ip, salt):
    """Salted one-way hash of a client address, used only for rate limiting"""
    return hashlib.sha256(f"{ip}-{salt}".encode('utf-8')).hexdigest()


def utcnow():
    """Current UTC time as a naive datetime, matching how timestamps are stored"""
    return datetime.now(timezone.utc).replace(tzinfo=None)
