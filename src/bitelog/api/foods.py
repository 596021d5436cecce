"""Food item endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from bitelog.api.schemas import FoodItemPayload, FoodItemResponse, MacrosResponse

if TYPE_CHECKING:
    from bitelog.containers import AppContainer
    from bitelog.domain.models import FoodCategory

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
def list_foods(request: Request, load_components: bool = True) -> list[FoodItemResponse]:
    """Return all food items."""
    container: AppContainer = request.app.state.container
    items = container.food_item_service.list_food_items(load_components)
    return [FoodItemResponse.from_domain(item) for item in items]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_food(payload: FoodItemPayload, request: Request) -> FoodItemResponse:
    """Create a simple or composite food item."""
    container: AppContainer = request.app.state.container
    category = _resolve_category(container, payload.category_id)
    item = container.food_item_service.create_food_item(
        payload.to_domain(None, category)
    )
    return FoodItemResponse.from_domain(item)


@router.get("/{food_item_id}")
def get_food(food_item_id: int, request: Request) -> FoodItemResponse:
    """Return a food item with resolved macros."""
    container: AppContainer = request.app.state.container
    item = container.food_item_service.get_food_item_by_id(food_item_id)
    if item is None:
        raise _not_found(food_item_id)
    return FoodItemResponse.from_domain(item)


@router.get("/{food_item_id}/nutrients")
def get_food_nutrients(food_item_id: int, request: Request) -> MacrosResponse:
    """Return per-100g macros of a food item."""
    container: AppContainer = request.app.state.container
    if container.food_item_service.get_food_item_by_id(food_item_id) is None:
        raise _not_found(food_item_id)
    return MacrosResponse.from_domain(
        container.nutrient_resolver.resolve(food_item_id)
    )


@router.put("/{food_item_id}")
def replace_food(
    food_item_id: int, payload: FoodItemPayload, request: Request
) -> FoodItemResponse:
    """Replace a food item including its full component list."""
    container: AppContainer = request.app.state.container
    category = _resolve_category(container, payload.category_id)
    item = container.food_item_service.update_food_item(
        payload.to_domain(food_item_id, category)
    )
    if item is None:
        raise _not_found(food_item_id)
    return FoodItemResponse.from_domain(item)


@router.delete("/{food_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_food(food_item_id: int, request: Request) -> Response:
    """Delete a food item."""
    container: AppContainer = request.app.state.container
    if not container.food_item_service.delete_food_item(food_item_id):
        raise _not_found(food_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _resolve_category(
    container: AppContainer, category_id: int | None
) -> FoodCategory | None:
    if category_id is None:
        return None
    category = container.category_service.get_category(category_id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Food category {category_id} not found",
        )
    return category


def _not_found(food_item_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Food item {food_item_id} not found",
    )
