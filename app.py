import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import ensure_admin_account
from config import CORS_ORIGINS, LOG_LEVEL
from database import SessionLocal
from errors import RestaurantError
from routes.auth_route import auth_router
from routes.grocery_route import grocery_router
from routes.order_route import order_router
from routes.reservation_route import reservation_router
from routes.table_route import table_router
from routes.user_route import user_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("restaurant")


@asynccontextmanager
async def lifespan(app: FastAPI):
    db = SessionLocal()
    try:
        ensure_admin_account(db)
    finally:
        db.close()
    logger.info("Restaurant API started")
    yield


app = FastAPI(title="Restaurant Management API", lifespan=lifespan)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(user_router)
app.include_router(table_router)
app.include_router(reservation_router)
app.include_router(order_router)
app.include_router(grocery_router)


@app.exception_handler(RestaurantError)
async def restaurant_error_handler(request: Request, exc: RestaurantError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/")
async def base_path():
    """
    Root endpoint to verify that the API is running.

    Returns:
        dict: A success message.
    """
    return {"success": True}
