"""
slicenshare_api.api.routers

Router modules.

Responsibilities:
- Service endpoints owned by this repo (welcome page, favicon, health).
- Mount points for the storefront route groups (homepage, auth, products,
  streamers, cart, checkout).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Prefixes live in `api.routes`, not in the router modules.
