"""
slicenshare_api.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Metrics/tracing exporters can be added here without touching request handling.
