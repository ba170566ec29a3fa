# main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from config import settings
from db import ping_db, engine, Base
from logging_config import setup_logging
from routes import api_router
from utils.errors import ServiceError
from utils.versioning import ApiVersionMiddleware
import models  # noqa: F401  (register tables on Base.metadata)

setup_logging()
logger = logging.getLogger("hr_api")

app = FastAPI(
    title=settings.APP_NAME,
    description="API REST para gerenciamento de funcionários e departamentos (v1 básica, v2 com paginação e PATCH)",
    version="2.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(ApiVersionMiddleware)

app.include_router(api_router)


# -----------------------------
# Error mapping
# -----------------------------
@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning("%s %s -> 400: %d erro(s) de validação", request.method, request.url.path, len(errors))
    return JSONResponse(status_code=400, content={"message": "Dados inválidos", "errors": errors})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("%s %s -> 400: violação de integridade: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content={"message": "Operação viola uma restrição de integridade"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Erro não tratado em %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Erro interno do servidor"})


@app.on_event("startup")
def _startup():
    logger.info("Starting %s (%s)", settings.APP_NAME, settings.ENVIRONMENT)
    try:
        ping_db()
        logger.info("Database connection OK.")
    except SQLAlchemyError as e:
        logger.error("Database connection failed: %s", e)
        return

    if settings.DB_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    logger.info("Startup complete.")


@app.get("/health")
def health():
    return {"status": "ok", "version": app.version}


@app.get("/db/ping")
def db_ping():
    ping_db()
    return {"db": "up"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=settings.DEBUG)
