"""Key derivation for the Newsroom API."""

import hashlib

from .enums import HashMethod

_DIGESTS = {
    HashMethod.MD5: hashlib.md5,  # noqa: S324
    HashMethod.SHA256: hashlib.sha256,
}


def normalise_email(email: str, normalised: bool) -> str:
    """Return the email address as it must be sent to Newsroom."""
    return email.lower() if normalised else email


def generate_key(email: str, private_key: str, hash_method: HashMethod, normalised: bool = False) -> str:
    """
    Generate the communication key of a subscriber.

    The key is the hexadecimal digest of the email address followed by the
    private key. Only the email address is lower-cased in normalised mode.
    """
    digest = _DIGESTS[HashMethod(hash_method)]
    value = normalise_email(email, normalised) + private_key
    return digest(value.encode()).hexdigest()
