from fastapi import APIRouter, Depends, Query, Response

from craft_caravan.dependencies import get_catalog_service
from craft_caravan.models.catalog import CatalogResponse
from craft_caravan.services.catalog import CatalogResult, CatalogService

router = APIRouter(prefix="/v1/api", tags=["catalog"])


def _respond(result: CatalogResult, response: Response) -> CatalogResponse:
    if result.not_found:
        response.status_code = 404
    elif not result.ok:
        response.status_code = 502
    return CatalogResponse(data=result.data, error=result.error)


@router.get("/collections", response_model=CatalogResponse)
async def list_collections(
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_collections(), response)


@router.get("/collections/current", response_model=CatalogResponse)
async def current_collection(
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_current_collection(), response)


@router.get("/collections/archived", response_model=CatalogResponse)
async def archived_collections(
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_archived_collections(), response)


@router.get("/collections/{slug}", response_model=CatalogResponse)
async def collection_by_slug(
    slug: str,
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_collection_by_slug(slug), response)


@router.get("/collections/{collection_id}/items", response_model=CatalogResponse)
async def collection_items(
    collection_id: str,
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_items_by_collection(collection_id), response)


@router.get("/posts", response_model=CatalogResponse)
async def list_posts(
    response: Response,
    limit: int = Query(None, ge=1, description="Max posts to return"),
    category: str = Query(None, description="Category filter, 'all' for every category"),
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_posts(limit=limit, category=category), response)


@router.get("/posts/{slug}", response_model=CatalogResponse)
async def post_by_slug(
    slug: str,
    response: Response,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return _respond(await catalog.get_post_by_slug(slug), response)
