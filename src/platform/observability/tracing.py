"""
OpenTelemetry tracing.

Use cases, the service façade and the cache adapter open their own spans with
`trace.get_tracer(__name__)`. Until `TracingConfig.setup()` installs a provider
those spans are no-ops, which is what unit tests run with.

Export targets come from settings:
- `OTEL_EXPORTER_OTLP_ENDPOINT`: OTLP/gRPC collector (e.g. http://localhost:4317)
- `OTEL_CONSOLE_EXPORT`: dump spans to stdout
"""

from typing import Any

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.redis import RedisInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter

from src.platform.config.core_setting import settings


# Health checks and metric scrapes would otherwise dominate the trace volume
UNTRACED_URLS = 'health,metrics'


class TracingConfig:
    def __init__(self, *, service_name: str | None = None) -> None:
        self.service_name = service_name or settings.SERVICE_NAME
        self._provider: TracerProvider | None = None

    def _span_processors(self) -> list[SpanProcessor]:
        processors: list[SpanProcessor] = []
        if settings.OTEL_EXPORTER_OTLP_ENDPOINT:
            exporter = OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)
            processors.append(BatchSpanProcessor(exporter))
        if settings.OTEL_CONSOLE_EXPORT:
            processors.append(BatchSpanProcessor(ConsoleSpanExporter()))
        return processors

    def setup(self) -> None:
        """Install the global tracer provider. Call once, at startup."""
        resource = Resource(
            attributes={
                SERVICE_NAME: self.service_name,
                SERVICE_VERSION: settings.VERSION,
                DEPLOYMENT_ENVIRONMENT: settings.DEPLOY_ENV,
            }
        )
        self._provider = TracerProvider(resource=resource)
        for processor in self._span_processors():
            self._provider.add_span_processor(processor)
        trace.set_tracer_provider(self._provider)

    @staticmethod
    def instrument_fastapi(*, app: Any) -> None:
        FastAPIInstrumentor.instrument_app(app, excluded_urls=UNTRACED_URLS)

    @staticmethod
    def instrument_sqlalchemy(*, engine: Any) -> None:
        # AsyncEngine wraps a sync engine; the instrumentor hooks the sync one
        SQLAlchemyInstrumentor().instrument(engine=getattr(engine, 'sync_engine', engine))

    @staticmethod
    def instrument_redis() -> None:
        RedisInstrumentor().instrument()

    def shutdown(self) -> None:
        if self._provider:
            self._provider.shutdown()
