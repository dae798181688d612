#!/usr/bin/env python3
"""
JetSet Backend Runner
Starts the API server
"""

import uvicorn
from app.config import settings

if __name__ == "__main__":
    print("Starting JetSet Backend Server...")
    print(f"   URL: http://{settings.host}:{settings.port}")
    print(f"   Docs: http://localhost:{settings.port}/docs")
    print()

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
