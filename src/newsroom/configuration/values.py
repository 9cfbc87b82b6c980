"""Custom value classes for django-configurations."""

from configurations import values

from newsroom.newsletter.enums import HashMethod


class HashMethodValue(values.Value):
    """
    Hash method used to derive Newsroom keys, validated when settings load.

    Usage in a django-configurations class::

        NEWSROOM_HASH_METHOD = HashMethodValue(environ_prefix=None)
    """

    def __init__(self, default=HashMethod.MD5, *args, **kwargs):
        """Initialize the value with md5 as default."""
        super().__init__(default, *args, **kwargs)

    def to_python(self, value):
        """Convert the environment value to a HashMethod."""
        try:
            return HashMethod(value.strip().lower())
        except ValueError as err:
            raise ValueError(
                f"Cannot interpret hash method {value!r}, expected one of {', '.join(HashMethod)}."
            ) from err
