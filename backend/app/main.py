from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.config import settings
from app.core.search_orchestrator import search_flights as run_search
from app.errors import MalformedUpstreamResponse, SearchValidationError, UpstreamCallError
from app.models import FlightSearchRequest
from app.skills.search_offers import AmadeusOfferFetcher, get_offer_fetcher
import logging

# Setup Logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Flight Search Agent", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

SEARCH_FAILED = "Failed to search flights"

@app.exception_handler(SearchValidationError)
async def search_validation_handler(request: Request, exc: SearchValidationError):
    logger.info(f"Rejected search request: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})

@app.exception_handler(RequestValidationError)
async def body_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    message = "; ".join(problems) or "Invalid request body"
    logger.info(f"Rejected search request body: {message}")
    return JSONResponse(status_code=400, content={"error": message})

@app.exception_handler(UpstreamCallError)
async def upstream_error_handler(request: Request, exc: UpstreamCallError):
    logger.error(f"Error searching flights: {exc.details}")
    return JSONResponse(status_code=500, content={"error": SEARCH_FAILED, "details": exc.details})

@app.exception_handler(MalformedUpstreamResponse)
async def malformed_response_handler(request: Request, exc: MalformedUpstreamResponse):
    logger.error(f"Error searching flights: {exc.message}")
    return JSONResponse(status_code=500, content={"error": SEARCH_FAILED, "details": exc.message})

@app.post("/search_flights")
def search_flights(request: FlightSearchRequest, fetch: AmadeusOfferFetcher = Depends(get_offer_fetcher)):
    """Search flight offers for a oneway, roundtrip or multi-city trip."""
    logger.info(f"Search request: tripType={request.tripType}")
    return run_search(request, fetch)

@app.get("/health")
def health_check():
    return {"status": "ok", "env": settings.ENV}

if __name__ == "__main__":
    import uvicorn

    logger.info(f"Server is running on port {settings.PORT}")
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
