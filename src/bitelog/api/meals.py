"""Meal entry and diary endpoints."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from bitelog.api.schemas import DiaryResponse, MealEntryPayload, MealEntryResponse

if TYPE_CHECKING:
    from bitelog.containers import AppContainer

router = APIRouter(tags=["meals"])


@router.get("/meals")
def list_meals(date: datetime.date, request: Request) -> list[MealEntryResponse]:
    """Return the meal entries of a date."""
    container: AppContainer = request.app.state.container
    entries = container.meal_entry_service.list_meal_entries(date)
    return [MealEntryResponse.from_domain(entry) for entry in entries]


@router.post("/meals", status_code=status.HTTP_201_CREATED)
def create_meal(payload: MealEntryPayload, request: Request) -> MealEntryResponse:
    """Log a meal entry."""
    container: AppContainer = request.app.state.container
    entry = container.meal_entry_service.create_meal_entry(payload.to_domain(None))
    return MealEntryResponse.from_domain(entry)


@router.get("/meals/{meal_entry_id}")
def get_meal(meal_entry_id: int, request: Request) -> MealEntryResponse:
    """Return a meal entry with totals."""
    container: AppContainer = request.app.state.container
    entry = container.meal_entry_service.get_meal_entry(meal_entry_id)
    if entry is None:
        raise _not_found(meal_entry_id)
    return MealEntryResponse.from_domain(entry)


@router.put("/meals/{meal_entry_id}")
def replace_meal(
    meal_entry_id: int, payload: MealEntryPayload, request: Request
) -> MealEntryResponse:
    """Replace a meal entry and all of its components."""
    container: AppContainer = request.app.state.container
    entry = container.meal_entry_service.update_meal_entry(
        payload.to_domain(meal_entry_id)
    )
    if entry is None:
        raise _not_found(meal_entry_id)
    return MealEntryResponse.from_domain(entry)


@router.delete("/meals/{meal_entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal(meal_entry_id: int, request: Request) -> Response:
    """Delete a meal entry."""
    container: AppContainer = request.app.state.container
    if not container.meal_entry_service.delete_meal_entry(meal_entry_id):
        raise _not_found(meal_entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/diary/{day}")
def get_diary(day: datetime.date, request: Request) -> DiaryResponse:
    """Return all meals of a date with summed totals."""
    container: AppContainer = request.app.state.container
    return DiaryResponse.from_domain(container.diary_service.get_diary(day))


def _not_found(meal_entry_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Meal entry {meal_entry_id} not found",
    )
