"""Food category endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from bitelog.api.schemas import CategoryPayload, CategoryResponse

if TYPE_CHECKING:
    from bitelog.containers import AppContainer

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
def list_categories(request: Request) -> list[CategoryResponse]:
    """Return all food categories."""
    container: AppContainer = request.app.state.container
    return [
        CategoryResponse.from_domain(category)
        for category in container.category_service.list_categories()
    ]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(payload: CategoryPayload, request: Request) -> CategoryResponse:
    """Create a food category."""
    container: AppContainer = request.app.state.container
    category = container.category_service.create_category(payload.name)
    return CategoryResponse.from_domain(category)


@router.get("/{category_id}")
def get_category(category_id: int, request: Request) -> CategoryResponse:
    """Return a single food category."""
    container: AppContainer = request.app.state.container
    category = container.category_service.get_category(category_id)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Food category {category_id} not found",
        )
    return CategoryResponse.from_domain(category)


@router.put("/{category_id}")
def rename_category(
    category_id: int, payload: CategoryPayload, request: Request
) -> CategoryResponse:
    """Rename a food category."""
    container: AppContainer = request.app.state.container
    category = container.category_service.rename_category(category_id, payload.name)
    if category is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Food category {category_id} not found for update",
        )
    return CategoryResponse.from_domain(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, request: Request) -> Response:
    """Delete a food category."""
    container: AppContainer = request.app.state.container
    if not container.category_service.delete_category(category_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Food category {category_id} not found for deletion",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
