from __future__ import annotations

import asyncio
import contextlib
import json
from dataclasses import asdict, is_dataclass
from typing import AsyncIterator, List, Optional, Set

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from liftsim import AsyncioClock, ElevatorController, SimulationConfig
from liftsim.events import ARRIVED, LOG, MODE, RESET
from scheduler import SCHEDULER_REGISTRY


class FloorRequest(BaseModel):
    floor: int


class HallCall(BaseModel):
    floor: int
    direction: str


class ResetRequest(BaseModel):
    floor_count: Optional[int] = None
    ms_per_floor: Optional[int] = None


class SpeedUpdate(BaseModel):
    ms_per_floor: int


class AlgorithmSelection(BaseModel):
    name: str


class SimulationManager:
    def __init__(self, floor_count: int = 6, ms_per_floor: int = 1000, tick_interval: float = 0.25) -> None:
        self.config = SimulationConfig(floor_count=floor_count, ms_per_floor=ms_per_floor)
        self.controller: Optional[ElevatorController] = None
        self.clock: Optional[AsyncioClock] = None
        self.tick_interval = tick_interval
        self.clients: Set[WebSocket] = set()
        self._events: List[dict] = []
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self.controller is None:
            self._lock = asyncio.Lock()
            self.clock = AsyncioClock()
            self.controller = ElevatorController(self.config, self.clock)
            for event in (ARRIVED, LOG, MODE, RESET):
                self.controller.on_event(event, lambda payload, event=event: self._record(event, payload))
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        if self.clock:
            self.clock.close()
            self.clock = None
        self.controller = None
        self._events.clear()

    async def _run(self) -> None:
        while True:
            async with self._lock:
                payload = self.current_state()
                payload["events"] = self._drain_events()
            await self.broadcast(payload)
            await asyncio.sleep(self.tick_interval)

    async def broadcast(self, payload: dict) -> None:
        message = json.dumps(payload)
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except (WebSocketDisconnect, RuntimeError):
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> dict:
        state = self.require_controller().snapshot()
        state["logs"] = self.require_controller().logs
        return state

    def require_controller(self) -> ElevatorController:
        if self.controller is None:
            raise HTTPException(status_code=503, detail="Simulation not running")
        return self.controller

    async def submit_request(self, floor: int) -> dict:
        async with self._lock:
            accepted = self.require_controller().submit_request(floor)
            return self._with_result(accepted)

    async def call_elevator(self, floor: int, direction: str) -> dict:
        async with self._lock:
            accepted = self.require_controller().call_elevator(floor, direction)
            return self._with_result(accepted)

    async def toggle_emergency(self) -> dict:
        async with self._lock:
            self.require_controller().toggle_emergency()
            return self.current_state()

    async def toggle_maintenance(self) -> dict:
        async with self._lock:
            self.require_controller().toggle_maintenance()
            return self.current_state()

    async def reset(self, floor_count: Optional[int], ms_per_floor: Optional[int]) -> dict:
        async with self._lock:
            accepted = self.require_controller().reset(floor_count, ms_per_floor)
            return self._with_result(accepted)

    async def set_speed(self, ms_per_floor: int) -> dict:
        async with self._lock:
            accepted = self.require_controller().set_speed(ms_per_floor)
            return self._with_result(accepted)

    async def set_ordering(self, name: str) -> dict:
        if name.lower() not in SCHEDULER_REGISTRY:
            raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
        async with self._lock:
            self.require_controller().set_ordering(name)
            return self.current_state()

    def _with_result(self, accepted: bool) -> dict:
        state = self.current_state()
        state["accepted"] = accepted
        return state

    def _record(self, event: str, payload: object) -> None:
        data = asdict(payload) if is_dataclass(payload) else payload
        self._events.append({"event": event, "data": data})

    def _drain_events(self) -> List[dict]:
        events, self._events = self._events, []
        return events


manager = SimulationManager()


@contextlib.asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    await manager.start()
    try:
        yield
    finally:
        await manager.stop()


app = FastAPI(title="LiftSim Simulation API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/state")
async def get_state() -> dict:
    return manager.current_state()


@app.post("/requests")
async def submit_request(request: FloorRequest) -> dict:
    return await manager.submit_request(request.floor)


@app.post("/calls")
async def call_elevator(call: HallCall) -> dict:
    return await manager.call_elevator(call.floor, call.direction)


@app.post("/emergency")
async def toggle_emergency() -> dict:
    return await manager.toggle_emergency()


@app.post("/maintenance")
async def toggle_maintenance() -> dict:
    return await manager.toggle_maintenance()


@app.post("/reset")
async def reset(request: ResetRequest) -> dict:
    return await manager.reset(request.floor_count, request.ms_per_floor)


@app.post("/config/speed")
async def set_speed(update: SpeedUpdate) -> dict:
    return await manager.set_speed(update.ms_per_floor)


@app.post("/algorithm")
async def set_algorithm(selection: AlgorithmSelection) -> dict:
    try:
        return await manager.set_ordering(selection.name)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
