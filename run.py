#!/usr/bin/env python3
"""
Run script for the Audio2Face Animation Backend
"""
import uvicorn

from app.config.settings import settings
from app.main import app

if __name__ == "__main__":
    print(f"Audio2Face backend listening on http://localhost:{settings.port}")
    print(f"Health check: http://localhost:{settings.port}/api/health")
    uvicorn.run(app, host=settings.host, port=settings.port)
