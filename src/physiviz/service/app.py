"""
HTTP parse endpoint.

    POST /api/parse   {"problem": "..."}  ->  {"success": true, "result": {...}}

Run with ``physiviz-server`` (or ``python -m physiviz.service.app``).
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from physiviz.problem import ProblemFormatError

from .config import Settings, get_settings
from .parser import (
    CompletionClient,
    OpenRouterClient,
    ProblemRejectedError,
    ServiceConfigurationError,
    parse_problem,
)

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class ParseRequest(BaseModel):
    problem: str | None = None


def _error(status: int, error: str, message: str | None = None) -> JSONResponse:
    body = {"error": error}
    if message is not None:
        body["message"] = message
    return JSONResponse(status_code=status, content=body)


def create_app(settings: Settings | None = None, client: CompletionClient | None = None) -> FastAPI:
    """
    Build the parse service.

    Parameters
    ----------
    settings : Settings | None
        Service settings. Defaults to the environment-derived settings.
    client : CompletionClient | None
        Language-model client. Defaults to an ``OpenRouterClient`` built
        from ``settings``.
    """
    settings = settings if settings is not None else get_settings()
    client = client if client is not None else OpenRouterClient(settings)

    app = FastAPI(title="PhysiViz parse service")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

    @app.get("/api/health")
    def health() -> dict:
        return {"status": "ok", "configured": settings.configured}

    @app.post("/api/parse")
    def parse(data: ParseRequest):
        if not data.problem or not data.problem.strip():
            return _error(400, "Problem text required")

        try:
            problem = parse_problem(data.problem, client)
        except ServiceConfigurationError as exc:
            log.warning("Parse request rejected: %s", exc)
            return _error(500, "AI service not configured", str(exc))
        except ProblemRejectedError as exc:
            return _error(400, str(exc), str(exc))
        except (ProblemFormatError, RuntimeError) as exc:
            log.error("Failed to process problem: %s", exc)
            return _error(500, "Failed to process", str(exc))

        return {"success": True, "result": problem.model_dump(mode="json")}

    return app


def main() -> None:
    import uvicorn

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    settings = get_settings()
    if settings.configured:
        log.info("OpenRouter API key found")
    else:
        log.warning("OPENROUTER_API_KEY not set; /api/parse will answer 500")
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
