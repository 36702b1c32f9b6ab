from .helpers import generate_claim_token, hash_ip, utcnow

__all__ = ['generate_claim_token', 'hash_ip', 'utcnow']
