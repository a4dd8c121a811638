#!/usr/bin/env python
"""
Web application entry point
Run this to start the FastAPI server
"""

import uvicorn

from backend.core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    print(f"Starting {settings.app_name} API server...")
    print(f"API docs available at: http://{settings.host}:{settings.port}/docs")

    uvicorn.run(
        "backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
    )
