"""
Edge-matching puzzle - FastAPI backend server

Provides API endpoints for checking, solving, rendering and generating puzzles.
"""

import logging
from typing import Optional

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel, Field

from em_solver import Board, Kind, PuzzleError, random_puzzle
from em_solver.config import CFG
from em_solver.samples import sample_records
from em_solver.solver import solve
from em_solver.viz import svg_markup

logger = logging.getLogger(__name__)

app = FastAPI(title="Edge-matching solver")
api_router = APIRouter(prefix="/api")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class Puzzle(BaseModel):
    size: int = Field(ge=2, le=CFG.MAX_SIZE)
    # (top, right, bottom, left) per piece, in id order
    pieces: list[list[int]] = Field(max_length=CFG.MAX_SIZE * CFG.MAX_SIZE)


class SolveRequest(Puzzle):
    order: Optional[str] = None
    node_limit: Optional[int] = None
    time_limit: Optional[float] = None


class PlacementOut(BaseModel):
    row: int
    col: int
    piece_id: int
    rotation: Optional[str] = None  # only for full cells
    faces: list[str]                # N, E, S, W


class SolveResponse(BaseModel):
    success: bool
    outcome: Optional[str] = None
    placements: list[PlacementOut] = []
    attempts: int = 0
    backtracks: int = 0
    error: Optional[str] = None


class CheckResponse(BaseModel):
    success: bool
    size: int = 0
    corner: int = 0
    border: int = 0
    full: int = 0
    error: Optional[str] = None


class GenerateRequest(BaseModel):
    size: int = Field(ge=2, le=CFG.MAX_SIZE)
    border_colors: Optional[int] = Field(None, ge=1)  # None: scaled with size
    inner_colors: Optional[int] = Field(None, ge=1)
    seed: Optional[int] = None


def _capped(requested, cap):
    """The client's limit, never above the server cap; missing or <= 0 means the cap."""
    if cap is None or cap <= 0:
        return requested
    if requested is None or requested <= 0:
        return cap
    return min(requested, cap)


def _solve(request: SolveRequest):
    board = Board.from_records(request.size, [tuple(p) for p in request.pieces])
    return solve(board, order=request.order,
                 node_limit=_capped(request.node_limit, CFG.NODE_LIMIT),
                 time_limit=_capped(request.time_limit, CFG.SERVER_TIME_LIMIT))


# Routes
@api_router.get("/health")
async def health():
    return {"status": "ok"}


@api_router.get("/sample", response_model=Puzzle)
async def sample():
    """The bundled 4x4 sample puzzle."""
    size, records = sample_records()
    return Puzzle(size=size, pieces=[list(r) for r in records])


@api_router.post("/check", response_model=CheckResponse)
def check(puzzle: Puzzle):
    """Classify the pieces of a puzzle without solving it."""
    try:
        board = Board.from_records(puzzle.size, [tuple(p) for p in puzzle.pieces])
    except PuzzleError as e:
        return CheckResponse(success=False, error=str(e))
    counts = board.kind_counts()
    return CheckResponse(success=True, size=board.size, corner=counts[Kind.CORNER],
                         border=counts[Kind.BORDER], full=counts[Kind.FULL])


@api_router.post("/solve", response_model=SolveResponse)
def solve_board(request: SolveRequest):
    """
    Solve the puzzle.

    Returns every placement as (row, col, piece id, rotation, faces), or
    success=false with the outcome (unsolvable, cancelled, limit_reached)
    or the input error.
    """
    try:
        result = _solve(request)
    except (PuzzleError, ValueError) as e:
        logger.info("rejected puzzle: %s", e)
        return SolveResponse(success=False, error=str(e))

    stats = result.stats
    if not result.solved:
        return SolveResponse(success=False, outcome=result.outcome.value,
                             attempts=stats.attempts, backtracks=stats.backtracks,
                             error="No solution found")

    placements = []
    for (row, col), (piece_id, rotation) in sorted(result.board.placements().items()):
        faces = result.board.cell((row, col)).faces()
        placements.append(PlacementOut(
            row=row, col=col, piece_id=piece_id,
            rotation=rotation.name if rotation is not None else None,
            faces=[str(f) for f in faces],
        ))
    return SolveResponse(success=True, outcome=result.outcome.value, placements=placements,
                         attempts=stats.attempts, backtracks=stats.backtracks)


@api_router.post("/svg")
def solve_svg(request: SolveRequest):
    """Solve the puzzle and return the board as SVG (empty board if unsolved)."""
    try:
        result = _solve(request)
    except (PuzzleError, ValueError) as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Response(content=svg_markup(result.board), media_type="image/svg+xml")


@api_router.post("/generate", response_model=Puzzle)
def generate(request: GenerateRequest):
    """A random solvable puzzle."""
    try:
        records = random_puzzle(request.size, request.border_colors, request.inner_colors,
                                seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return Puzzle(size=request.size, pieces=[list(r) for r in records])


# Register the API router
app.include_router(api_router)


if __name__ == "__main__":
    logging.basicConfig(level=CFG.LOG_LEVEL.upper())
    print(f"Starting edge-matching server at http://{CFG.HOST}:{CFG.PORT}")
    uvicorn.run(app, host=CFG.HOST, port=CFG.PORT)
