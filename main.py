from config import env_result
import uvicorn
from datetime import datetime
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Depends
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from routers import mcbb
from base_logger import logger
from config import (MAIN_SERVER_DESCRIPTION, CONTACT_INFO, LICENSE_INFO, IMAGE_NAME, DEBUG, SERVER_TYPE, SENTRY_URL,
                    VERSION, ALLOW_METHODS)
from schemas import StandardResponse
from utils.errors import McbbError
from utils.registry import registry
import sentry_sdk
from sentry_sdk.integrations.starlette import StarletteIntegration
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk import set_user


class UnicodeJSONResponse(JSONResponse):
    media_type = "application/json; charset=UTF-8"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("enter lifespan")
    now = datetime.now()
    utc_offset = datetime.now().astimezone().utcoffset().total_seconds() / 3600
    logger.info(f"Current system timezone: {now.astimezone().tzname()} (UTC{utc_offset:+.0f})")
    logger.info(f"Mirror sources: {registry.describe()}; origin: {registry.origin_base_url()}")
    logger.info("ending lifespan startup")
    yield
    logger.info("entering lifespan shutdown")


def identify_user(request: Request) -> None:
    set_user(
        {
            "ip_address": request.client.host if request.client else None,
        })


if SENTRY_URL:
    sentry_sdk.init(
        dsn=SENTRY_URL,
        send_default_pii=True,
        traces_sample_rate=1.0,
        integrations=[
            StarletteIntegration(
                transaction_style="url",
                failed_request_status_codes={403, *range(500, 599)},
            ),
            FastApiIntegration(
                transaction_style="url",
                failed_request_status_codes={403, *range(500, 599)},
            ),
        ],
        release=f"{VERSION}-{SERVER_TYPE}",
        environment=SERVER_TYPE,
    )


app = FastAPI(redoc_url=None,
              title="Minecraft Client Mirror API",
              summary="Resolve Minecraft client jar download URLs on mirrored distribution sources.",
              version=f"{IMAGE_NAME} {VERSION}" + (" DEBUG" if DEBUG else ""),
              description=MAIN_SERVER_DESCRIPTION,
              contact=CONTACT_INFO,
              license_info=LICENSE_INFO,
              openapi_url="/openapi.json",
              lifespan=lifespan,
              debug=DEBUG,
              default_response_class=UnicodeJSONResponse,
              dependencies=[Depends(identify_user)])


@app.exception_handler(McbbError)
async def mcbb_error_handler(request: Request, exc: McbbError) -> UnicodeJSONResponse:
    if exc.code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.msg}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.msg}")
    body = StandardResponse(code=exc.code, msg=exc.msg, data=[], request_method=request.method)
    return UnicodeJSONResponse(status_code=exc.code, content=body.model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> UnicodeJSONResponse:
    body = StandardResponse(code=exc.status_code, msg=str(exc.detail), data=[], request_method=request.method)
    return UnicodeJSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> UnicodeJSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed with unexpected error: {exc!r}")
    body = StandardResponse(code=500, msg=f"Internal server error: {exc}", data=[], request_method=request.method)
    return UnicodeJSONResponse(status_code=500, content=body.model_dump())


app.include_router(mcbb.router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=list(ALLOW_METHODS),
    allow_headers=["*"],
)


@app.get("/", response_model=StandardResponse)
async def root() -> StandardResponse:
    return StandardResponse(
        msg="Minecraft Client Mirror API",
        data={
            "version": app.version,
            "sources": {key: registry.get(key).name for key in registry.all_keys()}
        }
    )


if __name__ == "__main__":
    if env_result:
        logger.info(".env file is loaded")
    uvicorn.run(app, host="0.0.0.0", port=8080, proxy_headers=True, forwarded_allow_ips="*")
