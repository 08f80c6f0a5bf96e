"""
Prometheus Metrics for the salary insights flows

Metrics Categories:
- Flow metrics: calls per flow and outcome, latency, in-flight gauge
- LLM metrics: token usage per operation
- Validation metrics: rejected form submissions
"""

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST
)
from functools import wraps
from time import time
from typing import Awaitable, Callable, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# FLOW METRICS
# =============================================================================

flow_calls_total = Counter(
    'flow_calls_total',
    'Total number of flow calls',
    ['flow', 'status']  # flow: predict_salary, generate_cover_letter, suggest_skills
)

flow_latency_seconds = Histogram(
    'flow_latency_seconds',
    'Flow call duration in seconds',
    ['flow'],
    buckets=[0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0]
)

flows_in_progress = Gauge(
    'flows_in_progress',
    'Number of flow calls currently awaiting the provider',
    ['flow']
)


# =============================================================================
# LLM-SPECIFIC METRICS
# =============================================================================

llm_tokens_total = Counter(
    'llm_tokens_total',
    'Total number of tokens consumed',
    ['operation', 'token_type']  # token_type: input, output
)


# =============================================================================
# VALIDATION METRICS
# =============================================================================

validation_failures_total = Counter(
    'validation_failures_total',
    'Total number of validation failures',
    ['validation_type']  # form field name, or output schema
)


# =============================================================================
# SYSTEM METRICS
# =============================================================================

application_info = Info(
    'application',
    'Application version and metadata'
)

application_info.info({
    'version': '0.1.0',
    'component': 'salary_insights'
})


# =============================================================================
# UTILITY DECORATORS
# =============================================================================

def track_flow_metrics(flow: str):
    """
    Decorator to track flow metrics for coroutine functions.

    Usage:
        @track_flow_metrics("predict_salary")
        async def predict_salary(llm_service, data):
            ...
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            flows_in_progress.labels(flow=flow).inc()
            start_time = time()

            try:
                result = await func(*args, **kwargs)
                flow_calls_total.labels(flow=flow, status='success').inc()
                return result

            except Exception:
                flow_calls_total.labels(flow=flow, status='failure').inc()
                raise

            finally:
                flow_latency_seconds.labels(flow=flow).observe(time() - start_time)
                flows_in_progress.labels(flow=flow).dec()

        return wrapper
    return decorator


# =============================================================================
# METRIC RECORDING FUNCTIONS
# =============================================================================

def record_llm_usage(operation: str, input_tokens: int, output_tokens: int):
    """Record LLM token usage for one call."""
    llm_tokens_total.labels(operation=operation, token_type='input').inc(input_tokens)
    llm_tokens_total.labels(operation=operation, token_type='output').inc(output_tokens)


def record_validation_failure(validation_type: str):
    """
    Record a validation failure.

    Args:
        validation_type: Form field name, or "<flow>_output" for schema mismatches
    """
    validation_failures_total.labels(
        validation_type=validation_type
    ).inc()


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

def get_metrics() -> tuple[bytes, str]:
    """
    Get Prometheus metrics in text format.

    Returns:
        Tuple of (metrics_bytes, content_type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST
