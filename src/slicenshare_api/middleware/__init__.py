"""
slicenshare_api.middleware

Request admission middleware.

Responsibilities:
- Security response headers.
- Input sanitization and JSON body validation.
- CORS policy enforcement.
- The global error handler that turns any escaped error into a JSON response.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Registration order lives in `api.app.create_app`; each middleware assumes the
# ones registered outside it have already run.
