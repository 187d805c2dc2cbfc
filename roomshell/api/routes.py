"""FastAPI route definitions."""

from __future__ import annotations
from typing import Literal

from fastapi import APIRouter, Depends, Request

from roomshell.models import OperationResult, Volume
from roomshell.services.shell_service import ShellService
from roomshell.api.schemas import (
    AnalyzeRequest, AnalyzeResponse, ClassifyRequest, ClassifyResponse,
    CornerOutput, DoorCreateRequest, DoorMoveRequest, HistoryResponse,
    MeshCreateRequest, RoomCreateRequest, SceneResponse, WallOutput,
)

router = APIRouter()


def get_service(request: Request) -> ShellService:
    return request.app.state.service


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze_mesh(
    body: AnalyzeRequest,
    service: ShellService = Depends(get_service),
) -> AnalyzeResponse:
    """Detect corners and walls on a mesh without touching the scene."""
    corners, walls = service.analyze(body.mesh, body.angle_threshold)
    return AnalyzeResponse(
        corners=[
            CornerOutput(position=c.position, angle=c.angle, normal=c.normal, direction=d)
            for c, d in corners
        ],
        walls=[
            WallOutput(
                start=w.start, end=w.end, center=w.center,
                length=w.length, face_normal=w.face_normal, direction=d,
            )
            for w, d in walls
        ],
    )


@router.post("/classify", response_model=ClassifyResponse)
async def classify_normal(
    body: ClassifyRequest,
    service: ShellService = Depends(get_service),
) -> ClassifyResponse:
    return ClassifyResponse(direction=service.classify(body.normal, body.kind).value)


@router.post("/meshes", response_model=Volume, status_code=201)
async def add_mesh(
    body: MeshCreateRequest,
    service: ShellService = Depends(get_service),
) -> Volume:
    return service.add_mesh(body.mesh, body.name)


@router.post("/rooms", response_model=OperationResult)
async def build_room(
    body: RoomCreateRequest,
    service: ShellService = Depends(get_service),
) -> OperationResult:
    return service.build_room(body.mesh_id)


@router.delete("/rooms/{room_id}", response_model=OperationResult)
async def reset_room(room_id: str, service: ShellService = Depends(get_service)) -> OperationResult:
    return service.reset_room(room_id)


@router.post("/doors", response_model=OperationResult)
async def build_door(
    body: DoorCreateRequest,
    service: ShellService = Depends(get_service),
) -> OperationResult:
    return service.build_door(body.door_id)


@router.patch("/doors/{door_id}", response_model=OperationResult)
async def move_door(
    door_id: str,
    body: DoorMoveRequest,
    service: ShellService = Depends(get_service),
) -> OperationResult:
    return service.move_door(door_id, body.transform)


@router.delete("/doors/{door_id}", response_model=OperationResult)
async def remove_door(
    door_id: str,
    mode: Literal["reset", "delete"] = "reset",
    service: ShellService = Depends(get_service),
) -> OperationResult:
    """Reset the door's cuts, or with mode=delete also remove the door."""
    return service.remove_door(door_id, delete=mode == "delete")


@router.get("/scene", response_model=SceneResponse)
async def get_scene(service: ShellService = Depends(get_service)) -> SceneResponse:
    return SceneResponse(volumes=service.volumes(), rooms=service.rooms(), doors=service.doors())


@router.get("/history", response_model=HistoryResponse)
async def get_history(service: ShellService = Depends(get_service)) -> HistoryResponse:
    return HistoryResponse(entries=service.history())


@router.get("/health")
async def health(service: ShellService = Depends(get_service)) -> dict[str, str]:
    return {
        "status": "ok",
        "boolean_engine": "available" if service.boolean_available else "unavailable",
    }
