import json
from fastapi import APIRouter, Request, Depends
from config import ALLOW_METHODS
from schemas import StandardResponse
from utils.errors import BadMethod
from utils.fetcher import RemoteFetcher
from utils.registry import registry
from utils.resolver import VersionResolver
from utils.validator import validate_params
from base_logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Minecraft Client Mirror"])


def get_resolver() -> VersionResolver:
    return VersionResolver(registry, RemoteFetcher())


async def read_request_params(request: Request) -> dict:
    """
    GET reads the query string. POST reads a JSON object body and falls back to the form body when the payload
    is not a non-empty JSON object.
    """
    if request.method != "POST":
        return dict(request.query_params)
    body = await request.body()
    try:
        payload = json.loads(body) if body else None
    except (ValueError, RecursionError):
        payload = None
    if isinstance(payload, dict) and payload:
        return payload
    form = await request.form()
    return dict(form)


@router.api_route("/mcbb", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], response_model=StandardResponse)
@router.api_route("/mcbb.php", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], response_model=StandardResponse,
                  include_in_schema=False)
async def resolve_client_download(request: Request,
                                  resolver: VersionResolver = Depends(get_resolver)) -> StandardResponse:
    """
    Resolve the client jar download URL of a Minecraft version on the selected mirror.

    :param request: Request object from FastAPI, parameters are read from the query string (GET) or body (POST)

    :param resolver: version resolver bound to the mirror registry and a remote fetcher

    :return: Standard response with admin, source, version and download information
    """
    if request.method not in ALLOW_METHODS:
        raise BadMethod(request.method, ALLOW_METHODS)

    params = await read_request_params(request)
    validated = validate_params(params)
    logger.info(f"Admin {validated.admin} requested {validated.mcbb} from {validated.choose}")

    result = await resolver.resolve(validated)
    return StandardResponse(
        code=200,
        msg="Download info resolved",
        data=result.model_dump(),
        request_method=request.method
    )
