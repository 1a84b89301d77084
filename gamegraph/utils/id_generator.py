"""
Comment ID generator.

Comments are keyed by integers. Front-ends usually pass their own message id;
when they don't, a random positive 53-bit id is drawn so the value stays
exact in JSON consumers.
"""
import secrets

COMMENT_ID_BITS = 53


def generate_comment_id() -> int:
    """Generate a new positive comment id"""
    return secrets.randbits(COMMENT_ID_BITS) or 1
