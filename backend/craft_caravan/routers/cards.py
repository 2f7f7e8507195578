from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse

from craft_caravan.dependencies import get_catalog_service
from craft_caravan.services.cards import (
    render_archive_links,
    render_blog_cards,
    render_item_cards,
)
from craft_caravan.services.catalog import CatalogResult, CatalogService

router = APIRouter(prefix="/v1/api/cards", tags=["cards"])


def _require(result: CatalogResult):
    if not result.ok:
        raise HTTPException(status_code=502, detail=result.error)
    return result.data


@router.get("/items", response_class=HTMLResponse)
async def item_cards(
    collection_id: str = Query(..., description="Collection to list"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    items = _require(await catalog.get_items_by_collection(collection_id))
    return HTMLResponse(render_item_cards(items))


@router.get("/posts", response_class=HTMLResponse)
async def blog_cards(
    limit: int = Query(None, ge=1, description="Max posts to return"),
    category: str = Query(None, description="Category filter"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    posts = _require(await catalog.get_posts(limit=limit, category=category))
    return HTMLResponse(render_blog_cards(posts))


@router.get("/archive", response_class=HTMLResponse)
async def archive_links(
    catalog: CatalogService = Depends(get_catalog_service),
):
    collections = _require(await catalog.get_collections())
    return HTMLResponse(render_archive_links(collections))
