"""
Chambers Routing FastAPI Server

REST API exposing enquiry routing to the practice-management application.
Route handlers are thin: they load records through the repository, run the
routing algorithm and shape the response.

USAGE:
    Local: chambers serve (runs on http://localhost:8000)
    Docs: http://localhost:8000/docs (Swagger UI)
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, model_validator

from .config import settings
from .db import Repository, get_repository
from .logging_config import configure_logging
from .models import (
    BarristerWorkload,
    Enquiry,
    RoutingCriteria,
    RoutingInsights,
    RoutingRecommendation,
    RoutingResult,
    CandidateEvaluation,
    Seniority,
    Urgency,
)
from .routing import (
    EnquiryRouter,
    RoutingPolicy,
    build_workload_map,
    find_available_barristers,
    summarize_availability,
    summarize_workload,
)

logger = logging.getLogger(__name__)


# =============================================================================
# API Models (Request/Response Schemas)
# =============================================================================

class EnquiryInput(BaseModel):
    """Inline enquiry details for routing without a stored enquiry"""
    practice_area: Optional[str] = None
    matter_type: Optional[str] = None
    description: Optional[str] = None
    estimated_value: Optional[float] = Field(default=None, ge=0)
    urgency: Urgency


class AssignEnquiryRequest(BaseModel):
    """Route a stored enquiry (by id) or an inline one"""
    enquiry_id: Optional[str] = Field(default=None, description="Stored enquiry id")
    enquiry: Optional[EnquiryInput] = Field(default=None, description="Inline enquiry data")

    @model_validator(mode="after")
    def exactly_one_source(self) -> "AssignEnquiryRequest":
        if (self.enquiry_id is None) == (self.enquiry is None):
            raise ValueError("Provide exactly one of enquiry_id or enquiry")
        return self


class ResponseMeta(BaseModel):
    """Request metadata"""
    execution_time_ms: float
    version: str
    timestamp: str
    enquiry_id: Optional[str] = None


class AssignEnquiryResponse(BaseModel):
    """Routing result with a clerk-facing recommendation"""
    success: bool
    data: RoutingResult
    review: RoutingRecommendation
    meta: ResponseMeta


class EvaluateCandidatesRequest(BaseModel):
    """Evaluate specific barristers for a stored enquiry"""
    enquiry_id: str
    barrister_ids: List[str] = Field(..., min_length=1, max_length=settings.MAX_EVALUATION_CANDIDATES)
    include_unavailable: bool = False


class EnquirySummary(BaseModel):
    """Enquiry fields echoed back with the derived complexity"""
    id: str
    practice_area: Optional[str] = None
    matter_type: Optional[str] = None
    estimated_value: Optional[float] = None
    urgency: Optional[Urgency] = None
    complexity: str


class CandidatePartition(BaseModel):
    """Eligible / ineligible candidate lists"""
    eligible: List[CandidateEvaluation]
    ineligible: List[CandidateEvaluation]
    total: int


class EvaluateCandidatesResponse(BaseModel):
    """Candidate evaluation result"""
    success: bool
    enquiry: EnquirySummary
    candidates: CandidatePartition
    insights: RoutingInsights
    criteria: RoutingCriteria
    meta: ResponseMeta


class WorkloadResponse(BaseModel):
    """Current workload across barristers"""
    total: int
    average_utilization: float
    over_capacity: int
    workloads: List[BarristerWorkload]
    summary: Dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    timestamp: str
    database_connected: bool


# =============================================================================
# FastAPI Application
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info("%s API v%s starting", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("%s API shutting down", settings.APP_NAME)


app = FastAPI(
    title="Chambers Routing API",
    description=(
        "Enquiry routing for barristers' chambers\n\n"
        "- Recommend a barrister for an enquiry\n"
        "- Evaluate specific candidates with eligibility flags\n"
        "- Check barrister availability and workload"
    ),
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)


def get_router() -> EnquiryRouter:
    """Router built from current settings."""
    return EnquiryRouter(RoutingPolicy.from_settings())


def _meta(started: float, enquiry_id: Optional[str] = None) -> ResponseMeta:
    return ResponseMeta(
        execution_time_ms=round((time.perf_counter() - started) * 1000, 2),
        version=settings.ALGORITHM_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        enquiry_id=enquiry_id,
    )


def _workloads(
    repo: Repository,
    router: EnquiryRouter,
    barrister_ids: Optional[List[str]],
) -> Dict[str, BarristerWorkload]:
    counters = repo.get_workload_counters(barrister_ids)
    return build_workload_map(counters, router.policy.max_workload)


# =============================================================================
# Health & Status Endpoints
# =============================================================================

@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check(repo: Repository = Depends(get_repository)):
    """Health check endpoint for monitoring and load balancers."""
    try:
        repo.get_stats()
        db_connected = True
    except Exception:
        logger.exception("Database health check failed")
        db_connected = False

    return HealthResponse(
        status="healthy" if db_connected else "degraded",
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        database_connected=db_connected,
    )


@app.get("/", tags=["System"])
async def root():
    """Root endpoint with API information"""
    return {
        "name": "Chambers Routing API",
        "version": settings.APP_VERSION,
        "docs": "/docs",
        "endpoints": {
            "assign": "POST /v1/routing/assign-enquiry",
            "evaluate": "POST /v1/routing/evaluate-candidates",
            "availability": "GET /v1/routing/availability",
            "workload": "GET /v1/workload/current",
        },
    }


# =============================================================================
# Routing Endpoints
# =============================================================================

@app.post("/v1/routing/assign-enquiry", response_model=AssignEnquiryResponse, tags=["Routing"])
def assign_enquiry(
    request: AssignEnquiryRequest,
    repo: Repository = Depends(get_repository),
    router: EnquiryRouter = Depends(get_router),
):
    """
    Recommend a barrister for an enquiry.

    Routes against every active barrister, most engaged first. An empty
    chambers gives an empty ranking rather than an error.

    Example:
        ```json
        {"enquiry": {"practice_area": "Commercial", "urgency": "Immediate", "estimated_value": 50000}}
        ```
    """
    started = time.perf_counter()

    if request.enquiry_id is not None:
        enquiry = repo.get_enquiry(request.enquiry_id)
        if enquiry is None:
            raise HTTPException(status_code=404, detail=f"Enquiry not found: {request.enquiry_id}")
    else:
        enquiry = Enquiry(id="temp", **request.enquiry.model_dump())

    try:
        barristers = repo.list_barristers(active_only=True)
        workloads = _workloads(repo, router, [b.id for b in barristers])
        result = router.route_enquiry(enquiry, barristers, workloads)

        return AssignEnquiryResponse(
            success=True,
            data=result,
            review=router.summarize_for_review(enquiry, result),
            meta=_meta(started, request.enquiry_id),
        )

    except Exception as e:
        logger.exception("Enquiry routing failed")
        raise HTTPException(status_code=500, detail=f"Routing failed: {str(e)}")


@app.post("/v1/routing/evaluate-candidates", response_model=EvaluateCandidatesResponse, tags=["Routing"])
def evaluate_candidates(
    request: EvaluateCandidatesRequest,
    repo: Repository = Depends(get_repository),
    router: EnquiryRouter = Depends(get_router),
):
    """
    Evaluate specific barristers for a stored enquiry.

    Every barrister is returned with per-check eligibility flags, split into
    eligible and ineligible lists.
    """
    started = time.perf_counter()

    enquiry = repo.get_enquiry(request.enquiry_id)
    if enquiry is None:
        raise HTTPException(status_code=404, detail=f"Enquiry not found: {request.enquiry_id}")

    barristers = repo.list_barristers(
        active_only=not request.include_unavailable,
        ids=request.barrister_ids,
    )
    if not barristers:
        raise HTTPException(status_code=404, detail="None of the specified barristers exist or are available")

    try:
        workloads = _workloads(repo, router, [b.id for b in barristers])
        result = router.route_enquiry(
            enquiry,
            barristers,
            workloads,
            include_unavailable=request.include_unavailable,
        )

        return EvaluateCandidatesResponse(
            success=True,
            enquiry=EnquirySummary(
                id=enquiry.id,
                practice_area=enquiry.practice_area,
                matter_type=enquiry.matter_type,
                estimated_value=enquiry.estimated_value,
                urgency=enquiry.urgency,
                complexity=result.criteria.complexity.value,
            ),
            candidates=CandidatePartition(
                eligible=result.eligible,
                ineligible=result.ineligible,
                total=len(result.eligible) + len(result.ineligible),
            ),
            insights=result.insights,
            criteria=result.criteria,
            meta=_meta(started, enquiry.id),
        )

    except Exception as e:
        logger.exception("Candidate evaluation failed")
        raise HTTPException(status_code=500, detail=f"Evaluation failed: {str(e)}")


@app.get("/v1/routing/availability", tags=["Routing"])
def get_availability(
    practice_area: Optional[str] = Query(default=None, description="Required practice area"),
    seniority: Optional[Seniority] = Query(default=None, description="Exact seniority"),
    min_engagement_score: Optional[float] = Query(default=None, ge=0, le=100),
    max_workload_percent: Optional[float] = Query(default=None, ge=0, le=100),
    urgency: Optional[Urgency] = Query(default=None),
    include_inactive: bool = Query(default=False),
    limit: int = Query(default=20, ge=1, le=settings.AVAILABILITY_RESULT_LIMIT),
    repo: Repository = Depends(get_repository),
    router: EnquiryRouter = Depends(get_router),
) -> Dict[str, Any]:
    """
    List barristers by availability.

    Example:
        GET /v1/routing/availability?practice_area=Commercial&urgency=Immediate
    """
    started = time.perf_counter()

    try:
        barristers = repo.list_barristers(active_only=not include_inactive)
        workloads = _workloads(repo, router, [b.id for b in barristers])

        matches = find_available_barristers(
            barristers,
            workloads,
            practice_area=practice_area,
            seniority=seniority,
            min_engagement=min_engagement_score,
            max_workload_percent=max_workload_percent,
            urgency=urgency,
            include_inactive=include_inactive,
            limit=limit,
            policy=router.policy,
        )
        summary = summarize_availability(matches, practice_area, seniority, urgency)

        return {
            "success": True,
            "barristers": [m.to_dict() for m in matches],
            "summary": {
                "overview": summary.overview,
                "by_status": summary.by_status,
                "recommendations": summary.recommendations,
                "insights": summary.insights,
            },
            "total": len(barristers),
            "available": len(matches),
            "meta": _meta(started).model_dump(),
        }

    except Exception as e:
        logger.exception("Availability check failed")
        raise HTTPException(status_code=500, detail=f"Availability check failed: {str(e)}")


# =============================================================================
# Workload Endpoints
# =============================================================================

@app.get("/v1/workload/current", response_model=WorkloadResponse, tags=["Workload"])
def get_current_workload(
    barrister_id: Optional[List[str]] = Query(default=None, description="Limit to these barristers"),
    repo: Repository = Depends(get_repository),
    router: EnquiryRouter = Depends(get_router),
):
    """Current workload metrics per barrister."""
    try:
        workloads = sorted(
            _workloads(repo, router, barrister_id).values(),
            key=lambda w: (-w.utilization_rate, w.barrister_id),
        )
        summary = summarize_workload(workloads, router.policy)

        return WorkloadResponse(
            total=summary.total,
            average_utilization=summary.average_utilization,
            over_capacity=summary.over_capacity,
            workloads=workloads,
            summary=summary.to_dict(),
        )

    except Exception as e:
        logger.exception("Workload lookup failed")
        raise HTTPException(status_code=500, detail=f"Failed to fetch workload: {str(e)}")


# =============================================================================
# Main Entry Point (for direct execution)
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "chambers_routing.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
