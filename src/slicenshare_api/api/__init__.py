"""
slicenshare_api.api

API package for the SliceNShare service.

Responsibilities:
- FastAPI app factory, route group table and router modules.
- API-layer dependency wiring.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The API layer stays thin: admission middleware + mounting + delegation to route groups.
