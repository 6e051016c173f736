"""Adapters the menu builder talks to: link generation and timing."""
from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional, Protocol

from django.urls import reverse
from django.utils.http import urlencode

logger = logging.getLogger(__name__)


class LinkResolver(Protocol):
    def generate(
        self,
        route_name: str,
        params: Optional[Mapping[str, str]] = None,
        query: Optional[Mapping[str, str]] = None,
    ) -> str: ...


class DjangoLinkResolver:
    """Resolve named routes with ``django.urls.reverse``.

    ``params`` fill the route's path converters, ``query`` is appended as a
    query string. ``NoReverseMatch`` propagates.
    """

    def generate(self, route_name, params=None, query=None):
        url = reverse(route_name, kwargs=dict(params) if params else None)
        if query:
            url = f"{url}?{urlencode(query)}"
        return url


class Translator(Protocol):
    def trans(self, key: str) -> str: ...


class Stopwatch(Protocol):
    def start(self, name: str) -> None: ...

    def stop(self, name: str) -> Optional[float]: ...


class NullStopwatch:
    def start(self, name):
        pass

    def stop(self, name):
        return None


class LoggingStopwatch:
    """Measure named spans and log their duration at DEBUG level."""

    def __init__(self):
        self._started: Dict[str, float] = {}

    def start(self, name):
        self._started[name] = time.perf_counter()

    def stop(self, name):
        started = self._started.pop(name, None)
        if started is None:
            logger.debug("Stopwatch span %s stopped without being started", name)
            return None
        elapsed = time.perf_counter() - started
        logger.debug("%s took %.2f ms", name, elapsed * 1000)
        return elapsed


@contextmanager
def timed(stopwatch: Stopwatch, name: str) -> Iterator[None]:
    """Run the enclosed block inside a stopwatch span.

    Errors raised by the stopwatch itself are logged and dropped; errors
    raised by the block propagate.
    """
    try:
        stopwatch.start(name)
    except Exception:
        logger.warning("Stopwatch failed to start %s", name, exc_info=True)

    try:
        yield
    finally:
        try:
            stopwatch.stop(name)
        except Exception:
            logger.warning("Stopwatch failed to stop %s", name, exc_info=True)
