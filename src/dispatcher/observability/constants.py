"""Constants for observability layer."""

# HTTP header for correlation ID propagation
CORRELATION_ID_HEADER = "X-Correlation-ID"

# Service identifier for logs
SERVICE_NAME = "model-dispatch"


# Log event names following the pattern: {domain}.{action}.{result}
class LogEvents:
    """Standardized log event names."""

    # Provider client lifecycle
    PROVIDER_CLIENT_INITIALIZED = "provider.client.initialized"

    # Primary provider
    PRIMARY_QUERY_STARTED = "provider.primary.started"
    PRIMARY_QUERY_COMPLETED = "provider.primary.completed"
    PRIMARY_QUERY_FAILED = "provider.primary.failed"
    PRIMARY_QUERY_EMPTY = "provider.primary.empty"
    PRIMARY_UNAVAILABLE = "provider.primary.unavailable"

    # Per-model events (secondary provider)
    MODEL_QUERY_STARTED = "model.query.started"
    MODEL_QUERY_COMPLETED = "model.query.completed"
    MODEL_QUERY_FAILED = "model.query.failed"

    # Aggregation events
    DISPATCH_PARALLEL_COMPLETED = "dispatch.parallel.completed"
    DISPATCH_FALLBACK_COMPLETED = "dispatch.fallback.completed"
    DISPATCH_FALLBACK_EXHAUSTED = "dispatch.fallback.exhausted"
    DISPATCH_FAILED = "dispatch.request.failed"

    # Request lifecycle events
    REQUEST_STARTED = "request.started"
    REQUEST_COMPLETED = "request.completed"
    REQUEST_FAILED = "request.failed"

    # Error events
    ERROR_CONFIGURATION = "error.configuration"


# Fields that should be redacted in logs
SENSITIVE_FIELDS = frozenset({
    "api_key",
    "primary_api_key",
    "secondary_api_key",
    "authorization",
    "token",
})

# Fields to redact (case-insensitive patterns)
SENSITIVE_FIELD_PATTERNS = frozenset({
    "api_key",
    "secret",
})

# Redaction placeholder
REDACTED_VALUE = "[REDACTED]"
