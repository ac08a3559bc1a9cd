import datetime

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from loguru import logger

from mt5_relay.parsing.payload import count_bars, parse_record, record_symbol
from mt5_relay.relay.selector import Relay
from mt5_relay.schemas.ingest import ErrorResponse, HealthResponse, IngestResponse
from mt5_relay.schemas.relay import RelayResult

router = APIRouter()


def get_relay(request: Request) -> Relay:
    """FastAPI dependency returning the relay owned by the running app."""
    return request.app.state.relay


def _build_ingest_response(mode: str, result: RelayResult, bars_count: int) -> IngestResponse:
    if mode == "broadcast":
        if result.ok:
            return IngestResponse(
                status="ok",
                message="Data received and broadcast to backends",
                bars_count=bars_count,
                delivered_to=result.delivered,
            )
        return IngestResponse(
            status="warning",
            message="Data received but some backends failed to receive it",
            bars_count=bars_count,
            error=result.error,
            delivered_to=result.delivered,
            failed_deliveries=result.failed,
        )

    if result.ok:
        return IngestResponse(
            status="ok",
            message="Data received and forwarded to backend",
            bars_count=bars_count,
        )
    return IngestResponse(
        status="warning",
        message="Data received but failed to forward to backend",
        bars_count=bars_count,
        error=result.error,
    )


@router.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
def health(request: Request, relay: Relay = Depends(get_relay)) -> HealthResponse:
    return HealthResponse(
        service=request.app.state.settings.service_name,
        mode=relay.mode,
        timestamp=datetime.datetime.now(datetime.UTC).isoformat().replace("+00:00", "Z"),
        **relay.health_fields(),
    )


@router.post(
    "/api/mt5-data",
    response_model=IngestResponse,
    response_model_exclude_none=True,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def ingest_mt5_data(
    request: Request, relay: Relay = Depends(get_relay)
) -> IngestResponse | JSONResponse:
    body = await request.body()
    try:
        record = parse_record(body)
    except ValueError as exc:
        logger.error(f"Error parsing data: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(message="Invalid JSON").model_dump(by_alias=True),
        )

    bars_count = count_bars(record)
    logger.info(f"Received from MT5: {record_symbol(record)} | Bars: {bars_count}")

    # The sender always gets a 200 once the body parsed; downstream trouble
    # only shows up as a warning.
    result = await relay.relay(record)
    return _build_ingest_response(relay.mode, result, bars_count)
