"""Newsletter backend handler."""

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.functional import cached_property
from django.utils.module_loading import import_string

from newsroom.newsletter.backends.base import BaseBackend
from newsroom.newsletter.exceptions import NewsroomInvalidBackendError

# Backends which can be selected by name in the handler definition.
BACKENDS = {
    "newsroom": "newsroom.newsletter.backends.newsroom.NewsroomBackend",
    "lenient": "newsroom.newsletter.backends.newsroom.LenientNewsroomBackend",
    "mock": "newsroom.newsletter.backends.mock.MockNewsroomBackend",
}


class NewsroomHandler:
    """Newsletter handler managing the backend instantiation."""

    def __init__(self, backend=None):
        """Initialize the newsletter handler."""
        # backend is an optional backend definition
        # (structured like settings.NEWSROOM_NEWSLETTER).
        self._backend = backend
        self._newsletter = None

    @cached_property
    def backend(self):
        """Put in cache the backend properties from the settings."""
        if self._backend is not None:
            return self._backend
        try:
            return settings.NEWSROOM_NEWSLETTER.copy()
        except AttributeError as e:
            raise ImproperlyConfigured("settings.NEWSROOM_NEWSLETTER is not configured") from e

    def __call__(self):
        """Create if not existing the backend and then return it."""
        if self._newsletter is None:
            self._newsletter = self.create_newsletter(self.backend)
        return self._newsletter

    def reset(self):
        """Forget the backend instance so the next call builds a new one."""
        self._newsletter = None
        self.__dict__.pop("backend", None)

    def create_newsletter(self, params):
        """Instantiate and configure the newsletter backend."""
        params = params.copy()
        backend = params.pop("BACKEND", "newsroom")
        parameters = params.pop("PARAMETERS", {})

        if isinstance(backend, str):
            try:
                klass = import_string(BACKENDS[backend])
            except KeyError as e:
                raise NewsroomInvalidBackendError(
                    f"Unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}."
                ) from e
        else:
            klass = backend

        if not (isinstance(klass, type) and issubclass(klass, BaseBackend)):
            raise NewsroomInvalidBackendError(f"Backend {backend!r} is not a newsletter backend.")
        return klass(**parameters)
