"""Observability utilities: OpenTelemetry spans and optional Langfuse tracing.

- span: context manager opening an OpenTelemetry span around a pipeline phase.
  A tracer provider is installed once; spans are exported to the console only
  when OTEL_CONSOLE_EXPORT is enabled, otherwise an externally configured
  exporter (or none) receives them.
- Trace: thin wrapper over a Langfuse trace that is inert unless LANGFUSE_HOST,
  LANGFUSE_PUBLIC_KEY and LANGFUSE_SECRET_KEY are all configured.

Tracing must never fail a load or ask, so Langfuse client errors are logged
and dropped.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from langfuse import Langfuse
from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from docrag.config import settings

logger = logging.getLogger(__name__)

_langfuse_client: Optional[Langfuse] = None
_otel_inited: bool = False


def _init_langfuse() -> Optional[Langfuse]:
    """Create and memoize a Langfuse client when fully configured."""
    global _langfuse_client
    if _langfuse_client is not None:
        return _langfuse_client
    if settings.LANGFUSE_HOST and settings.LANGFUSE_PUBLIC_KEY and settings.LANGFUSE_SECRET_KEY:
        _langfuse_client = Langfuse(
            host=settings.LANGFUSE_HOST,
            public_key=settings.LANGFUSE_PUBLIC_KEY,
            secret_key=settings.LANGFUSE_SECRET_KEY,
        )
    return _langfuse_client


def _init_otel() -> None:
    """Install the global tracer provider once."""
    global _otel_inited
    if _otel_inited:
        return
    tp = TracerProvider()
    if settings.OTEL_CONSOLE_EXPORT:
        tp.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
    trace.set_tracer_provider(tp)
    _otel_inited = True


@contextmanager
def span(name: str, attributes: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
    """Open an OpenTelemetry span for the duration of the block.

    Args:
        name: Span name, e.g. "rag.load".
        attributes: Initial span attributes.

    Yields:
        The active span, so callers can attach result attributes.
    """
    _init_otel()
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(name, attributes=attributes or {}) as current:
        yield current


class Trace:
    """Langfuse trace for one ask; every method is a no-op when disabled."""

    def __init__(self, name: str, input: Optional[Dict[str, Any]] = None):
        self.name = name
        self._trace = None
        client = _init_langfuse()
        if client is not None:
            try:
                self._trace = client.trace(name=name, input=input or {})
            except Exception as e:
                logger.debug("Langfuse trace %s not started: %s", name, e)

    @property
    def enabled(self) -> bool:
        return self._trace is not None

    def event(self, name: str, data: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            return
        try:
            self._trace.event(name=name, input=data or {})
        except Exception as e:
            logger.debug("Langfuse event %s dropped: %s", name, e)

    def generation(
        self,
        name: str,
        prompt: Any,
        output: str,
        model: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Record one model call with its prompt and output.

        ``model`` is the name reported by the model that answered; it falls back
        to settings.OPENAI_MODEL when the caller does not know it.
        """
        if not self.enabled:
            return
        try:
            self._trace.generation(
                name=name,
                input=prompt,
                output=output,
                metadata=metadata or {},
                model=model or settings.OPENAI_MODEL,
            )
        except Exception as e:
            logger.debug("Langfuse generation %s dropped: %s", name, e)

    def end(self, output: Optional[Dict[str, Any]] = None) -> None:
        if not self.enabled:
            return
        try:
            self._trace.update(output=output or {})
        except Exception as e:
            logger.debug("Langfuse trace %s not finalized: %s", self.name, e)
