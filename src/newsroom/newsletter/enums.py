"""Enums for the Newsroom newsletter module."""

from enum import StrEnum


# NEWSROOM_HASH_METHOD allowed values
class HashMethod(StrEnum):
    """Digest used to derive the key sent along every request."""

    MD5 = "md5"
    SHA256 = "sha256"


class SubscriptionStatus(StrEnum):
    """Status of a subscription as reported by Newsroom."""

    VALID = "Valid"
    OTHER = "Other"
