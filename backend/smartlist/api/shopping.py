"""
Shopping list API endpoints.

Generates lists from recipes, meal plans or ingredient names, and optimizes,
renders and exports existing lists. Lists are not stored server-side; clients
send the list back for optimization or export.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from smartlist.exceptions import InvalidShoppingInput, ShoppingListExportError
from smartlist.models.shopping import (
    ExportShoppingListRequest,
    ExportShoppingListResponse,
    IngredientShoppingListRequest,
    MealPlanShoppingListRequest,
    ShoppingCategory,
    ShoppingListResult,
    SmartShoppingListRequest,
)
from smartlist.services.export import render
from smartlist.services.shopping import ShoppingListService, get_shopping_list_service

router = APIRouter(prefix="/api/shopping", tags=["shopping"])


@router.post("/generate", response_model=ShoppingListResult)
async def generate_list(
    request: SmartShoppingListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResult:
    """Generate a consolidated list from recipes.

    Ingredients are merged across recipes, pantry stock is subtracted when
    provided, and items are grouped by store section.
    """
    try:
        return await service.generate_smart_shopping_list(
            request.recipes, request.user_id, pantry=request.pantry
        )
    except InvalidShoppingInput as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/from-ingredients", response_model=ShoppingListResult)
async def generate_from_ingredients(
    request: IngredientShoppingListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResult:
    """Generate a list from plain ingredient names."""
    try:
        return await service.generate_shopping_list_from_ingredients(
            request.ingredient_names, request.user_id
        )
    except InvalidShoppingInput as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/from-meal-plan", response_model=ShoppingListResult)
async def generate_from_meal_plan(
    request: MealPlanShoppingListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResult:
    """Generate a list for planned meals, scaled to each entry's servings."""
    try:
        return await service.generate_shopping_list_from_meal_plan(
            request.meal_plan_items, request.user_id, pantry=request.pantry
        )
    except InvalidShoppingInput as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/categories", response_model=list[ShoppingCategory])
async def get_categories(
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> list[ShoppingCategory]:
    """All store categories in route order."""
    return await service.get_shopping_categories()


@router.post("/optimize", response_model=ShoppingListResult)
async def optimize_list(
    shopping_list: ShoppingListResult,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ShoppingListResult:
    """Merge duplicates and reorder a list along the store route."""
    try:
        return await service.optimize_shopping_list(shopping_list)
    except InvalidShoppingInput as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/export", response_model=ExportShoppingListResponse)
async def export_list(
    request: ExportShoppingListRequest,
    service: ShoppingListService = Depends(get_shopping_list_service),
) -> ExportShoppingListResponse:
    """Save the list as a plain-text note in the export directory."""
    try:
        filename = await service.export_shopping_list_to_notes(
            request.shopping_list, request.list_name
        )
    except ShoppingListExportError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return ExportShoppingListResponse(
        filename=filename,
        list_name=request.list_name or request.shopping_list.list_name or "Shopping List",
    )


@router.post("/render", response_class=PlainTextResponse)
async def render_list(shopping_list: ShoppingListResult) -> str:
    """The plain-text note for a list, without writing a file."""
    return render(shopping_list)
