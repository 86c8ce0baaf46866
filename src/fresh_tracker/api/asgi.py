"""ASGI entrypoint for the FreshTracker API.

Serve with any ASGI server, e.g. ``uvicorn fresh_tracker.api.asgi:app``.
Settings are read from the environment when the module is imported.
"""

from fresh_tracker.api.app import create_app
from fresh_tracker.config import Settings
from fresh_tracker.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
