from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mt5_relay.schemas.ingest import ErrorResponse

# Unknown paths and known paths hit with the wrong method both read as 404.
_NOT_FOUND_CODES = {404, 405}


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code in _NOT_FOUND_CODES:
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(message="Not found").model_dump(by_alias=True),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=str(exc.detail)).model_dump(by_alias=True),
        headers=exc.headers,
    )
