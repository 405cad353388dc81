#!/usr/bin/env python3
"""
Audio Investigation API: entrypoint for uvicorn investigation_server.server:app.

For uvicorn investigation_server:app use investigation_server/__init__.py.
"""

try:
    from .app import app
except ImportError:
    from app import app

if __name__ == "__main__":
    import uvicorn
    try:
        from .config import get_config
    except ImportError:
        from config import get_config
    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)
