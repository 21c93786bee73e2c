"""Prometheus metrics definitions for cityvibes.

Exposes metrics for:
1. HTTP API metrics (requests, latency, errors)
2. Foursquare / OpenAI client metrics (calls, latency, errors)
3. Vibe pipeline metrics (translations, cache, ranking outcomes)
4. Background job metrics (runs, duration)
"""
from prometheus_client import Counter, Histogram, Gauge, Info

# =============================================================================
# HTTP API METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

HTTP_REQUEST_SIZE_BYTES = Histogram(
    "http_request_size_bytes",
    "HTTP request body size in bytes",
    ["method", "endpoint"],
    buckets=(100, 500, 1000, 5000, 10000, 50000, 100000),
)

HTTP_RESPONSE_SIZE_BYTES = Histogram(
    "http_response_size_bytes",
    "HTTP response body size in bytes",
    ["method", "endpoint"],
    buckets=(100, 500, 1000, 5000, 10000, 50000, 100000, 500000),
)

# =============================================================================
# FOURSQUARE API CLIENT METRICS
# =============================================================================

FOURSQUARE_API_CALLS_TOTAL = Counter(
    "foursquare_api_calls_total",
    "Total number of Foursquare Places API calls",
    ["endpoint", "status"],  # status: success, error
)

FOURSQUARE_API_CALL_DURATION_SECONDS = Histogram(
    "foursquare_api_call_duration_seconds",
    "Foursquare Places API call latency in seconds",
    ["endpoint"],
    buckets=(0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

FOURSQUARE_API_ERRORS_TOTAL = Counter(
    "foursquare_api_errors_total",
    "Total number of Foursquare Places API errors",
    ["endpoint", "error_type"],  # error_type: http_error, timeout, connection_error, invalid_json, missing_key
)

# =============================================================================
# OPENAI CLIENT METRICS
# =============================================================================

OPENAI_API_CALLS_TOTAL = Counter(
    "openai_api_calls_total",
    "Total number of OpenAI API calls",
    ["endpoint", "status"],
)

OPENAI_API_CALL_DURATION_SECONDS = Histogram(
    "openai_api_call_duration_seconds",
    "OpenAI API call latency in seconds",
    ["endpoint"],
    buckets=(0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)

# =============================================================================
# VIBE PIPELINE METRICS
# =============================================================================

# Translations by resolution source
TRANSLATION_RESULTS_TOTAL = Counter(
    "translation_results_total",
    "Semantic translations by source",
    ["source"],  # source: dictionary, llm, fallback
)

# Cache lookups (translation + places search caches)
CACHE_LOOKUPS_TOTAL = Counter(
    "cache_lookups_total",
    "Cache lookups by cache and result",
    ["cache", "result"],  # result: hit, miss, expired
)

CACHE_ENTRIES = Gauge(
    "cache_entries",
    "Number of entries currently held by an in-memory cache",
    ["cache"],
)

# Ranking request outcomes
RANKING_REQUESTS_TOTAL = Counter(
    "ranking_requests_total",
    "Ranking requests by outcome",
    ["outcome"],  # outcome: ranked, no_results, upstream_error, input_error
)

RANKING_DURATION_SECONDS = Histogram(
    "ranking_duration_seconds",
    "End-to-end ranking pipeline latency in seconds",
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 20.0),
)

# Category validation eliminated every candidate
VALIDATION_FALLBACKS_TOTAL = Counter(
    "validation_fallbacks_total",
    "Ranking requests that fell back to unfiltered candidates",
)

# Places added by the minimum-result backfill
BACKFILLED_PLACES_TOTAL = Counter(
    "backfilled_places_total",
    "Places added below the relevance threshold to reach the target count",
)

EXPLANATIONS_TOTAL = Counter(
    "explanations_total",
    "Explanations generated by source",
    ["source"],  # source: llm, template
)

FEEDBACK_TOTAL = Counter(
    "feedback_total",
    "User feedback received on recommended places",
    ["feedback"],  # feedback: like, skip
)

# =============================================================================
# BACKGROUND JOB METRICS
# =============================================================================

BACKGROUND_JOB_RUNS_TOTAL = Counter(
    "background_job_runs_total",
    "Total number of background job runs",
    ["job_name", "status"],  # status: success, error
)

BACKGROUND_JOB_DURATION_SECONDS = Histogram(
    "background_job_duration_seconds",
    "Background job execution duration in seconds",
    ["job_name"],
    buckets=(0.001, 0.01, 0.1, 1.0, 5.0, 10.0),
)

BACKGROUND_JOB_LAST_RUN_TIMESTAMP = Gauge(
    "background_job_last_run_timestamp_seconds",
    "Unix timestamp of the last successful job run",
    ["job_name"],
)

# =============================================================================
# APPLICATION INFO
# =============================================================================

APP_INFO = Info(
    "cityvibes",
    "CityVibes application information",
)

APP_INFO.info({
    "version": "1.0.0",
    "description": "Vibe-to-place recommendation service",
})
