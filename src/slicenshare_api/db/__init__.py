"""
slicenshare_api.db

Persistence package.

Responsibilities:
- Own the single process-wide MongoDB connection handle.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Collections and documents belong to the route groups; this package only connects.
