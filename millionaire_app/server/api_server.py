"""FastAPI server exposing audience, host and key-value sync endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, AsyncIterator

from fastapi import Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel
import uvicorn

from millionaire_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from millionaire_app.core.errors import ActionResult, MalformedStoredValue, StoreError, WriteResult
from millionaire_app.core.game_controller import GameController
from millionaire_app.core.models import QuizQuestion
from millionaire_app.storage.base import KeyValueStore


class VotePayload(BaseModel):
    """Payload schema for audience votes."""

    selected_option_index: int
    class_name: str | None = None
    question_index: int | None = None


class AnswerPayload(BaseModel):
    """Payload schema for the host's locked-in answer."""

    selected_option_index: int


class AssignmentPayload(BaseModel):
    class_name: str
    question_index: int | None = None


class ClassesPayload(BaseModel):
    classes: list[str]


class QuestionPayload(BaseModel):
    """One entry of the editable question bank."""

    question_text: str
    options: list[str]
    correct_option_index: int
    topic: str | None = None


class QuestionsPayload(BaseModel):
    questions: list[QuestionPayload]


class StoreValuePayload(BaseModel):
    """Body of ``PUT /kv/{key}``."""

    value: Any = None


def _get_controller_dependency(controller: GameController):
    def dependency() -> GameController:
        return controller

    return dependency


def _action_response(result: ActionResult, controller: GameController) -> dict[str, object]:
    return {
        "session_id": result.session_id,
        "active": controller.is_active(),
        "question_index": controller.current_question_index,
        "ok": result.ok,
        "warnings": result.warnings(),
    }


def _write_warnings(writes: list[WriteResult]) -> list[str]:
    return [f"{write.key}: {write.error}" for write in writes if not write.ok]


def create_api_app(controller: GameController, store: KeyValueStore) -> FastAPI:
    """Create a FastAPI application wired to the provided controller and store."""

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        await controller.initialize()
        yield

    app = FastAPI(title="Math Millionaire API", version="0.1.0", lifespan=lifespan)
    controller_dep = _get_controller_dependency(controller)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # --- Key-value sync (backs RemoteStore on other devices) ---

    @app.get("/kv/{key:path}")
    async def read_key(key: str) -> dict[str, object]:
        try:
            value = await store.get(key)
        except StoreError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        if value is None:
            raise HTTPException(status_code=404, detail=f"Key {key!r} not found")
        return {"key": key, "value": value}

    @app.put("/kv/{key:path}")
    async def write_key(key: str, payload: StoreValuePayload) -> dict[str, object]:
        try:
            await store.set(key, payload.value)
        except MalformedStoredValue as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except StoreError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return {"key": key}

    @app.delete("/kv/{key:path}", status_code=204)
    async def delete_key(key: str) -> Response:
        try:
            await store.remove(key)
        except StoreError as exc:
            raise HTTPException(status_code=503, detail=str(exc)) from exc
        return Response(status_code=204)

    # --- Audience ---

    @app.get("/session")
    async def get_session(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        session_id, active, question_index = await manager.get_audience_session()
        return {"session_id": session_id, "active": active, "question_index": question_index}

    @app.get("/question")
    async def get_question(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        session_id, active, question_index = await manager.get_audience_session()
        snapshot = await manager.get_current_snapshot(session_id) if session_id else None
        if snapshot is None:
            return {
                "session_id": session_id,
                "active": active,
                "question_number": None,
                "question": None,
                "options": [],
                "assigned_class": None,
            }
        # The correct option stays on the host side.
        return {
            "session_id": session_id,
            "active": active,
            "question_number": snapshot.question_number,
            "question": snapshot.question_text,
            "options": snapshot.options,
            "assigned_class": snapshot.assigned_class,
        }

    @app.get("/classes")
    async def get_classes(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        return {"classes": await manager.load_classes()}

    @app.post("/vote", status_code=201)
    async def submit_vote(
        payload: VotePayload,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        try:
            writes = await manager.record_vote(
                payload.selected_option_index,
                class_name=payload.class_name,
                question_index=payload.question_index,
            )
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"recorded": all(write.ok for write in writes), "warnings": _write_warnings(writes)}

    # --- Host ---

    @app.post("/host/start", status_code=201)
    async def start_game(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        try:
            result = await manager.start_session()
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return _action_response(result, manager)

    @app.post("/host/advance")
    async def advance(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        try:
            result = await manager.advance_question()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _action_response(result, manager)

    @app.post("/host/answer")
    async def answer(
        payload: AnswerPayload,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        try:
            outcome = await manager.answer_question(payload.selected_option_index)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        body = asdict(outcome)
        body["failed_writes"] = _write_warnings(outcome.failed_writes)
        return body

    @app.post("/host/quit")
    async def quit_game(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        try:
            result = await manager.quit_game()
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return _action_response(result, manager)

    @app.get("/host/question")
    async def host_question(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        snapshot = await manager.get_current_snapshot()
        return {"snapshot": asdict(snapshot) if snapshot else None, "host_score": manager.host_score}

    @app.put("/host/assignment")
    async def override_assignment(
        payload: AssignmentPayload,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        try:
            result = await manager.override_assignment(payload.class_name, payload.question_index)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        body = _action_response(result, manager)
        body["assigned_class"] = await manager.get_assigned_class(payload.question_index)
        return body

    @app.get("/host/lifelines")
    async def lifeline_states(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        states = await manager.get_lifeline_states()
        return {name: state.as_dict() for name, state in states.items()}

    @app.post("/host/lifelines/{lifeline}")
    async def use_lifeline(
        lifeline: str,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        try:
            outcome = await manager.use_lifeline(lifeline)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        body = asdict(outcome)
        body["failed_writes"] = _write_warnings(outcome.failed_writes)
        return body

    @app.get("/host/scores")
    async def class_scores(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        scores = await manager.compute_class_scores()
        return {
            "scores": {name: summary.as_dict() for name, summary in scores.items()},
            "standings": [asdict(row) for row in await manager.get_class_standings()],
        }

    @app.get("/host/statistics/{question_index}")
    async def question_statistics(
        question_index: int,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        statistics = await manager.get_question_statistics(question_index)
        return asdict(statistics)

    @app.put("/host/classes")
    async def save_classes(
        payload: ClassesPayload,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        result = await manager.save_classes(payload.classes)
        return {"classes": await manager.load_classes(), "ok": result.ok, "warnings": result.warnings()}

    @app.get("/host/questions")
    async def get_questions(manager: GameController = Depends(controller_dep)) -> dict[str, object]:
        return {"questions": [asdict(question) for question in manager.get_questions()]}

    @app.put("/host/questions")
    async def save_questions(
        payload: QuestionsPayload,
        manager: GameController = Depends(controller_dep),
    ) -> dict[str, object]:
        questions = [
            QuizQuestion(
                question_text=item.question_text,
                options=item.options,
                correct_option_index=item.correct_option_index,
                topic=item.topic,
            )
            for item in payload.questions
        ]
        try:
            result = await manager.save_questions(questions)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except RuntimeError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {
            "questions": [asdict(question) for question in manager.get_questions()],
            "ok": result.ok,
            "warnings": result.warnings(),
        }

    return app


def run_api_server(
    app: FastAPI,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Serve the application until interrupted."""
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)
    server.run()
