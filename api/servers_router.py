from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError as PayloadError

from exceptions import ConfigurationError, ServerNotFound, StoreError
from models.record import ServerRecord
from services.server_store import ServerStore, get_server_store
from services.validation import canonical_address, validate_address, validate_server

router = APIRouter(prefix="/servers", tags=["servers"])


def get_logger() -> logging.Logger:
    return logging.getLogger("api.servers")


def path_address(request: Request) -> str:
    address = request.path_params.get("address")
    if address is None:
        # answered with a 500 by the app's ConfigurationError handler
        raise ConfigurationError(f"no address specified in request {request.url}")
    return address


def _describe(err: PayloadError) -> str:
    problems = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item["loc"])
        problems.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(problems)


@router.get("/{address:path}", response_model=ServerRecord)
async def get_server(
    address: str = Depends(path_address),
    store: ServerStore = Depends(get_server_store),
    log: logging.Logger = Depends(get_logger),
):
    """Look up a server by its address"""
    log.debug("[servers] getting server %s", address)

    errs = validate_address(address)
    if errs:
        raise HTTPException(status_code=400, detail=[str(e) for e in errs])

    try:
        return await store.get(canonical_address(address))
    except ServerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        log.warning("[servers] lookup failed for %s: %s", address, e)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/{address:path}", response_model=ServerRecord)
async def post_server(
    request: Request,
    address: str = Depends(path_address),
    store: ServerStore = Depends(get_server_store),
    log: logging.Logger = Depends(get_logger),
):
    """Create or update a server from a posted server object"""
    log.debug("[servers] posting server %s", address)

    body = await request.body()
    try:
        server = ServerRecord.model_validate_json(body)
    except PayloadError as e:
        raise HTTPException(status_code=400, detail=_describe(e))

    errs = validate_server(server)
    if errs:
        log.debug("[servers] rejected %s with %d error(s)", address, len(errs))
        raise HTTPException(status_code=422, detail=[str(e) for e in errs])

    try:
        return await store.upsert(server)
    except StoreError as e:
        log.warning("[servers] upsert failed for %s: %s", address, e)
        raise HTTPException(status_code=500, detail=str(e))
