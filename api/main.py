# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Updated: 2026-01-30
# Description: main.py
# -----------------------------------------------------------------------------
import logging

from fastapi import FastAPI

from api.routers import health, rag

# routers log through the root logger; component loggers have their own handlers
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
app = FastAPI(title="Voice RAG API")
app.include_router(health.router)
app.include_router(rag.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="127.0.0.1", port=8000)
