#!/usr/bin/env python
"""
Run the API Server

Starts the FastAPI server for transit region lookup.

Usage:
    python run_server.py

The server runs on http://localhost:8000

Endpoints:
    GET  /api/health                        - Health check
    GET  /api/regions                       - Region catalog (?refresh=true to reload)
    GET  /api/regions/closest               - Closest usable region (?lat=&lon=)
    GET  /api/regions/{id}                  - Single region
    GET  /api/regions/{id}/span             - Region span
    GET  /api/regions/{id}/contains         - Containment check (?lat=&lon=)
"""

import logging

import uvicorn

logging.basicConfig(level=logging.INFO)
uvicorn.run("transit_regions.server:app", host="0.0.0.0", port=8000, reload=False)
