"""
Web entry point

Run with:
    python -m web

Host and port can be overridden with REFUELOS_WEB_HOST / REFUELOS_WEB_PORT.
"""

import os

import uvicorn

from core.config.loader import get_settings
from core.constants import Defaults, EnvVars

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "web.app:app",
        host=os.environ.get(EnvVars.WEB_HOST, Defaults.WEB_HOST),
        port=int(os.environ.get(EnvVars.WEB_PORT, Defaults.WEB_PORT)),
        log_level=settings.log_level.lower(),
        reload=False,
    )
