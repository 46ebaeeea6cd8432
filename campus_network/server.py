# campus_network/server.py
import json
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import NetworkError
from .mst import optimize_network

logger = logging.getLogger(__name__)

app = FastAPI(title="Campus Network Optimizer")
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.get("/api/health")
def health():
    return {"status": "ok"}


@app.post("/api/optimize")
async def optimize(request: Request):
    """Run Kruskal's algorithm on the posted buildings and connections.

    Input errors answer 400 with ``{"error": message}``; anything else is a
    server fault and answers 500.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return JSONResponse(status_code=400, content={"error": f"Malformed JSON body: {e}"})

    try:
        result = optimize_network(payload)
    except NetworkError as e:
        logger.info("Rejected optimize request: %s", e)
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception:
        logger.exception("Optimize request failed")
        return JSONResponse(
            status_code=500,
            content={"error": "An error occurred while processing the request"},
        )

    return result
