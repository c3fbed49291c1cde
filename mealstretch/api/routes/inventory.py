from fastapi import APIRouter, Depends

from mealstretch.infra.Catalog_Repository import Catalog, get_catalog

router = APIRouter()


@router.get("/api/inventory")
def list_inventory(catalog: Catalog = Depends(get_catalog)):
    """Return every grocery item of the reference inventory."""
    return [item.to_dict() for item in catalog.items]
