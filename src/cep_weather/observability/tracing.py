"""
cep_weather.observability.tracing

Explicit tracing handle shared by the gateway and downstream services.

Responsibilities:
- Own the OpenTelemetry tracer provider for one process (init/shutdown lifecycle).
- Open spans as children of an explicitly passed context.
- Serialize/deserialize trace context on HTTP headers (W3C trace-context).

Nothing here touches the global OpenTelemetry provider or the ambient "current
span"; callers thread a `Context` value through every operation.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from contextlib import contextmanager

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Status, StatusCode
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

TRACER_NAME = "cep_weather"


class Tracing:
    def __init__(
        self,
        *,
        service_name: str,
        otlp_endpoint: str | None = None,
        span_processor: SpanProcessor | None = None,
    ) -> None:
        self._service_name = service_name
        self._otlp_endpoint = otlp_endpoint or None
        self._span_processor = span_processor
        self._propagator = TraceContextTextMapPropagator()
        self._provider: TracerProvider | None = None
        self._tracer: trace.Tracer | None = None

    @property
    def started(self) -> bool:
        return self._provider is not None

    def init(self) -> None:
        if self._provider is not None:
            return

        provider = TracerProvider(
            sampler=ALWAYS_ON,
            resource=Resource.create({SERVICE_NAME: self._service_name}),
        )
        if self._span_processor is not None:
            provider.add_span_processor(self._span_processor)
        if self._otlp_endpoint is not None:
            exporter = OTLPSpanExporter(endpoint=self._otlp_endpoint, insecure=True)
            provider.add_span_processor(BatchSpanProcessor(exporter))

        self._provider = provider
        self._tracer = provider.get_tracer(TRACER_NAME)

    def shutdown(self) -> None:
        # Flushes pending batches to the exporter.
        if self._provider is None:
            return
        self._provider.shutdown()
        self._provider = None
        self._tracer = None

    @contextmanager
    def span(self, name: str, *, parent: Context) -> Iterator[Context]:
        """
        Open `name` as a child of `parent` and yield the context that carries it.

        The yielded context is what callers pass to nested spans and to `inject`.
        """

        if self._tracer is None:
            raise RuntimeError("Tracing.init() must run before spans are opened")

        span = self._tracer.start_span(name, context=parent)
        try:
            yield trace.set_span_in_context(span, parent)
        except Exception as e:
            span.record_exception(e)
            span.set_status(Status(StatusCode.ERROR, str(e)))
            raise
        finally:
            span.end()

    def inject(self, context: Context) -> dict[str, str]:
        carrier: dict[str, str] = {}
        self._propagator.inject(carrier, context=context)
        return carrier

    def extract(self, headers: Mapping[str, str]) -> Context:
        # Missing/invalid traceparent yields an empty context, i.e. a new root trace.
        return self._propagator.extract(carrier=dict(headers), context=Context())


def inbound_trace_id(headers: Mapping[str, str]) -> str:
    # Read-only peek at the caller's traceparent; no tracer provider involved.
    context = TraceContextTextMapPropagator().extract(carrier=dict(headers), context=Context())
    return trace_id_of(context)


def trace_id_of(context: Context) -> str:
    span_context = trace.get_current_span(context).get_span_context()
    if not span_context.is_valid:
        return ""
    return trace.format_trace_id(span_context.trace_id)


# --- Module Notes -----------------------------------------------------------
# The gateway injects the delegation span's context into the outbound request;
# the downstream service extracts it, so both halves land in one trace.
