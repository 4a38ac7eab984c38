from fastapi import APIRouter

from routers import charts, data, dates, images

router = APIRouter()

# include sub-routers
router.include_router(data.router)
router.include_router(dates.router)
router.include_router(charts.router)
router.include_router(images.router)
