"""
Usage Dashboard — FastAPI app factory.
"""
from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from usage_dashboard.api.router_meta import router as meta_router
from usage_dashboard.api.router_newspapers import router as newspapers_router
from usage_dashboard.api.router_usage import router as usage_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Report where datasets come from; nothing is preloaded."""
    from usage_dashboard.config import EXPORTS_FOLDER, NEWSPAPER_DATASETS, NEWSPAPER_FOLDER, USAGE_DATASETS
    EXPORTS_FOLDER.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO"))

    print(f"  USAGE_DASHBOARD_DATA_DIR = {os.environ.get('USAGE_DASHBOARD_DATA_DIR', '(not set)')}")
    print(f"  Usage datasets: {len(USAGE_DATASETS)}")
    for name in USAGE_DATASETS:
        print(f"    - {name}")
    present = [m for m, path in NEWSPAPER_DATASETS.items() if os.path.isfile(path)]
    print(f"  Newspaper ledgers in {NEWSPAPER_FOLDER}: {len(present)}/{len(NEWSPAPER_DATASETS)}")
    print("\nUsage Dashboard ready\n")
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="Usage Dashboard API",
        description="E-resource usage and newspaper subscription analytics",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(usage_router)
    app.include_router(newspapers_router)

    return app


app = create_app()
