#!/usr/bin/env python3
"""
Matter Mind Map API

Serves mind map payloads for matters from JSON files, one file per matter
(``<data dir>/<matterId>.json``). A file holds either the response envelope
(``{"matterName": ..., "data": {...}}``) or just the data object.

Endpoints:
- mind map payload for a matter (the fetch contract)
- availability check for a matter
- pre-built graph (nodes, edges, seed positions) honoring category toggles

Usage:
    pip install -e .
    mindmap-server --data-dir data/matters
    # or: uvicorn mindmap.api_server:app --reload --port 8085
"""

import argparse
import json
import logging
import secrets
from pathlib import Path
from typing import Any, Optional

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ValidationError

from . import __version__
from .catalog import EntityCatalog
from .config import API_TOKEN, DATA_DIR, SERVER_PORT
from .graph import build_graph
from .models import MindMapData
from .visibility import VisibilityFilter

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Matter Mind Map API",
    description="Entity and relationship graphs for matters",
    version=__version__,
)

# Enable CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class MatterNotFound(Exception):
    pass


class InvalidMatterData(ValueError):
    pass


class AuthError(Exception):
    def __init__(self, status_code, error, message):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message


# Response models
class StatusResponse(BaseModel):
    success: bool
    available: bool
    reportCount: int
    message: str


class GraphResponse(BaseModel):
    matterId: int
    matterName: Optional[str] = None
    nodeCount: int
    edgeCount: int
    componentCount: int
    hidden: list[str]
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]


def matter_path(matter_id):
    return Path(DATA_DIR) / f"{matter_id}.json"


def load_matter(matter_id):
    """Load (matter name, validated data) for a matter."""
    path = matter_path(matter_id)
    if not path.exists():
        raise MatterNotFound(matter_id)

    with open(path, "r") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidMatterData(f"{path.name} is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise InvalidMatterData(f"{path.name} must hold a JSON object")

    matter_name = raw.get("matterName")
    data = raw if "entities" in raw else raw.get("data") or {}
    return matter_name, MindMapData.model_validate(data)


def error_response(status_code, error, message):
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message},
    )


def not_found():
    return error_response(404, "MATTER_NOT_FOUND", "Matter not found")


def invalid_data(matter_id, exc):
    logger.error("Invalid mind map data for matter %s: %s", matter_id, exc)
    return error_response(500, "MIND_MAP_GENERATION_FAILED", "Mind map data for this matter is invalid")


bearer = HTTPBearer(auto_error=False)


def require_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer)):
    """Check the bearer token when the server is configured with one."""
    if not API_TOKEN:
        return
    if credentials is None:
        raise AuthError(401, "UNAUTHORIZED", "Please log in to continue")
    if not secrets.compare_digest(credentials.credentials.encode(), API_TOKEN.encode()):
        raise AuthError(403, "INVALID_TOKEN", "Invalid or expired token")


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return error_response(exc.status_code, exc.error, exc.message)


# Endpoints

@app.get("/")
async def root():
    """API info endpoint."""
    return {
        "service": "matter-mindmap-api",
        "version": __version__,
        "endpoints": {
            "/api/matters/{matter_id}/mind-map": "Entities, relationships and stats for a matter",
            "/api/matters/{matter_id}/mind-map/status": "Whether mind map data exists for a matter",
            "/api/matters/{matter_id}/graph": "Built nodes and edges with seed positions",
        },
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    data_dir = Path(DATA_DIR)
    return {
        "status": "healthy",
        "data_dir": str(data_dir),
        "matters_count": len(list(data_dir.glob("*.json"))) if data_dir.is_dir() else 0,
    }


@app.get("/api/matters/{matter_id}/mind-map", dependencies=[Depends(require_token)])
async def get_mind_map(matter_id: int):
    """Mind map payload for a matter."""
    try:
        matter_name, data = load_matter(matter_id)
    except MatterNotFound:
        return not_found()
    except (ValidationError, InvalidMatterData) as exc:
        return invalid_data(matter_id, exc)

    if data.stats.total_companies == 0 and not data.entities.companies:
        message = "No company data found for this matter"
    else:
        message = "Mind map loaded"

    return {
        "success": True,
        "message": message,
        "data": data.model_dump(mode="json", by_alias=True, exclude_none=True),
        "matterId": matter_id,
        "matterName": matter_name,
    }


@app.get(
    "/api/matters/{matter_id}/mind-map/status",
    response_model=StatusResponse,
    dependencies=[Depends(require_token)],
)
async def get_mind_map_status(matter_id: int):
    """Check if mind map data is available for a matter."""
    try:
        _, data = load_matter(matter_id)
    except MatterNotFound:
        return StatusResponse(
            success=True,
            available=False,
            reportCount=0,
            message="No mind map data found for this matter",
        )
    except (ValidationError, InvalidMatterData) as exc:
        return invalid_data(matter_id, exc)

    count = len(data.entities.companies)
    return StatusResponse(
        success=True,
        available=count > 0,
        reportCount=count,
        message=f"Mind map available with {count} companies" if count else "No companies found for this matter",
    )


@app.get(
    "/api/matters/{matter_id}/graph",
    response_model=GraphResponse,
    dependencies=[Depends(require_token)],
)
async def get_graph(
    matter_id: int,
    companies: bool = Query(default=True),
    persons: bool = Query(default=True),
    shareholders: bool = Query(default=True),
    addresses: bool = Query(default=True),
    bankruptcies: bool = Query(default=True),
):
    """
    Built graph for a matter.
    Category flags hide entities (and every edge touching them).
    """
    try:
        matter_name, data = load_matter(matter_id)
    except MatterNotFound:
        return not_found()
    except (ValidationError, InvalidMatterData) as exc:
        return invalid_data(matter_id, exc)

    visibility = VisibilityFilter(
        companies=companies,
        persons=persons,
        shareholders=shareholders,
        addresses=addresses,
        bankruptcies=bankruptcies,
    )
    graph = build_graph(EntityCatalog(data), visibility)

    return GraphResponse(
        matterId=matter_id,
        matterName=matter_name,
        nodeCount=len(graph.nodes),
        edgeCount=len(graph.edges),
        componentCount=graph.component_count,
        hidden=visibility.hidden(),
        nodes=graph.nodes,
        edges=graph.edges,
    )


def main():
    global API_TOKEN, DATA_DIR

    parser = argparse.ArgumentParser(description="Serve matter mind map data")
    parser.add_argument("--data-dir", default=DATA_DIR, help="Directory of <matterId>.json files")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=SERVER_PORT)
    parser.add_argument("--token", default=API_TOKEN, help="Bearer token required on /api routes")
    args = parser.parse_args()

    DATA_DIR = args.data_dir
    API_TOKEN = args.token
    logging.basicConfig(level=logging.INFO)

    import uvicorn
    uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
