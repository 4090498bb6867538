"""Provider call shapes and adapters."""

import functools
from collections.abc import Callable

from fontlocate.core.cancellation import CancellationToken
from fontlocate.core.models import Descriptor
from fontlocate.fonts.models import ScalableFont

# A provider returns a font or raises a FontLocateError subclass
Provider = Callable[[CancellationToken, Descriptor], ScalableFont]
SimpleProvider = Callable[[Descriptor], ScalableFont]


def adapt_provider(simple: SimpleProvider) -> Provider:
    """Turn a provider that knows nothing about cancellation into a full provider.

    The token is ignored; once started, the wrapped provider runs to completion.
    """

    @functools.wraps(simple)
    def provider(token: CancellationToken, descriptor: Descriptor) -> ScalableFont:
        return simple(descriptor)

    return provider


def provider_name(provider: Provider) -> str:
    """Readable name of a provider for log messages."""
    return getattr(provider, "__name__", None) or type(provider).__name__
