from __future__ import annotations

import os

from whitenoise import WhiteNoise

from .app_factory import create_app

# Expose a module-level WSGI application for Gunicorn
app = create_app()

static_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir, "static"))
app = WhiteNoise(app, root=static_root, prefix="static/")
