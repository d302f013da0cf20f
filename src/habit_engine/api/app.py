"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import date, timedelta

from fastapi import FastAPI, HTTPException, Request

from habit_engine.api.schemas import (
    CheckInRequest,
    FoodLogRequest,
    UsernameRequest,
    WellnessLogRequest,
)
from habit_engine.app_logging import configure_logging
from habit_engine.containers import AppContainer
from habit_engine.domain.checkins import HabitEngineState
from habit_engine.services.aggregator import Timeframe
from habit_engine.services.clock import local_today

DEFAULT_HISTORY_DAYS = 30


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        try:
            source = await state_container.engine.start_session(_today(state_container))
            logger.info("Session started from %s state", source.value)
        except Exception:
            logger.exception("Failed to reconcile with the remote profile")
        yield
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/streak")
    async def get_streak(request: Request) -> dict[str, object]:
        """Return the current streak state."""
        state_container: AppContainer = request.app.state.container
        today = _today(state_container)
        return _state_payload(state_container.engine.state(today))

    @app.post("/check-ins")
    async def post_check_in(
        payload: CheckInRequest, request: Request
    ) -> dict[str, object]:
        """Record a daily check-in and return the updated streak."""
        state_container: AppContainer = request.app.state.container
        today = _today(state_container)
        result = state_container.engine.check_in(
            payload.date_key or today,
            payload.sugar_free,
            today,
            grams_consumed=payload.grams_consumed,
            notes=payload.notes,
            mood=payload.mood,
        )
        response = _state_payload(result.state)
        response["newly_unlocked"] = [asdict(item) for item in result.newly_unlocked]
        return response

    @app.get("/check-ins")
    async def list_check_ins(
        request: Request, start: date | None = None, end: date | None = None
    ) -> dict[str, object]:
        """Return check-ins in [start, end); defaults to the last 30 days."""
        state_container: AppContainer = request.app.state.container
        today = _today(state_container)
        end_exclusive = end or today + timedelta(days=1)
        start_inclusive = start or end_exclusive - timedelta(days=DEFAULT_HISTORY_DAYS)
        records = state_container.engine.history(start_inclusive, end_exclusive)
        return {"check_ins": [asdict(record) for record in records]}

    @app.post("/streak/reset")
    async def reset_streak(request: Request) -> dict[str, object]:
        """Start the running streak over from today."""
        state_container: AppContainer = request.app.state.container
        return _state_payload(
            state_container.engine.reset_streak(_today(state_container))
        )

    @app.post("/food-logs")
    async def post_food_log(
        payload: FoodLogRequest, request: Request
    ) -> dict[str, object]:
        """Score and store a food entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.engine.log_food(
            payload.date_key or _today(state_container),
            payload.name,
            payload.nutrients(),
            payload.portion_percent,
            entry_id=payload.id,
        )
        return asdict(entry)

    @app.post("/wellness-logs")
    async def post_wellness_log(
        payload: WellnessLogRequest, request: Request
    ) -> dict[str, object]:
        """Store today's (or the given date's) wellness entry."""
        state_container: AppContainer = request.app.state.container
        entry = state_container.engine.log_wellness(
            payload.date_key or _today(state_container),
            payload.mood,
            payload.energy,
            payload.focus,
            payload.sleep_hours,
        )
        return asdict(entry)

    @app.get("/dashboard")
    async def dashboard(request: Request, days: int = 7) -> dict[str, object]:
        """Return the composite score dashboard for 7, 30 or 365 days."""
        state_container: AppContainer = request.app.state.container
        try:
            timeframe = Timeframe(days)
        except ValueError as exc:
            raise HTTPException(
                status_code=422,
                detail="days must be one of 7, 30, 365",
            ) from exc
        view = state_container.engine.dashboard(timeframe, _today(state_container))
        return asdict(view)

    @app.get("/achievements")
    async def get_achievements(request: Request) -> dict[str, object]:
        """Return unlocked and locked milestones."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.engine.achievements(_today(state_container)))

    @app.get("/plan/today")
    async def get_plan_guidance(request: Request) -> dict[str, object]:
        """Return today's reduction plan limit and guidance."""
        state_container: AppContainer = request.app.state.container
        return asdict(state_container.engine.plan_guidance(_today(state_container)))

    @app.post("/profile/username")
    async def claim_username(
        payload: UsernameRequest, request: Request
    ) -> dict[str, object]:
        """Validate and store a username; rejections carry a reason."""
        state_container: AppContainer = request.app.state.container
        check = state_container.profile_service.claim_username(
            payload.username, state_container.settings.user_id
        )
        return {"ok": check.ok, "reason": check.reason}

    @app.delete("/data")
    async def clear_data(request: Request) -> dict[str, object]:
        """Wipe local check-ins, logs and streak state."""
        state_container: AppContainer = request.app.state.container
        return _state_payload(state_container.engine.clear_all(_today(state_container)))

    return app


def _today(container: AppContainer) -> date:
    return local_today(container.settings.timezone)


def _state_payload(state: HabitEngineState) -> dict[str, object]:
    return {"revision": state.revision, "streak": asdict(state.streak)}
