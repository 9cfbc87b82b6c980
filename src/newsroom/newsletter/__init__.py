"""Newsroom newsletter module."""

from django.utils.functional import LazyObject

from .handler import NewsroomHandler


class DefaultNewsletter(LazyObject):
    """Lazy object to handle the newsletter backend."""

    def _setup(self):
        """Configure the newsletter backend."""
        self._wrapped = newsletter_handler()


newsletter_handler = NewsroomHandler()
newsletter = DefaultNewsletter()
