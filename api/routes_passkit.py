from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from passkit import (
    LogRequest,
    PassRequest,
    RegisterRequest,
    SerialNumbersRequest,
    ServiceResult,
    UnregisterRequest,
    WalletServices,
    parse_tag,
)
from passkit.results import Outcome

router = APIRouter()


class RegistrationBody(BaseModel):
    pushToken: str


class LogBody(BaseModel):
    logs: List[str] = []


def _services(request: Request) -> WalletServices:
    services = getattr(request.app.state, "wallet", None)
    if services is None:
        raise HTTPException(status_code=500, detail={"code": "NOT_READY", "message": "wallet services not initialized"})
    return services


def _render(result: ServiceResult) -> Response:
    if result.outcome is Outcome.FAILURE:
        code = result.error.value.upper() if result.error else "FAILED"
        raise HTTPException(status_code=result.status, detail={"code": code, "message": result.message})
    if result.outcome is Outcome.SUCCESS_WITH_DATA:
        return JSONResponse(content=result.body, status_code=result.status)
    return Response(status_code=result.status)


@router.post("/{version}/devices/{device_library_identifier}/registrations/{pass_type_identifier}/{serial_number}")
def register_device(
    version: str,
    device_library_identifier: str,
    pass_type_identifier: str,
    serial_number: str,
    body: RegistrationBody,
    request: Request,
):
    result = _services(request).registration.register(
        RegisterRequest(
            device_library_identifier=device_library_identifier,
            pass_type_identifier=pass_type_identifier,
            serial_number=serial_number,
            push_token=body.pushToken,
        )
    )
    return _render(result)


@router.get("/{version}/devices/{device_library_identifier}/registrations/{pass_type_identifier}")
def serial_numbers(
    version: str,
    device_library_identifier: str,
    pass_type_identifier: str,
    request: Request,
    passesUpdatedSince: Optional[str] = Query(default=None),
):
    result = _services(request).sync_query.get_serial_numbers(
        SerialNumbersRequest(
            device_library_identifier=device_library_identifier,
            pass_type_identifier=pass_type_identifier,
            passes_updated_since=parse_tag(passesUpdatedSince, where="passesUpdatedSince"),
        )
    )
    if result.outcome is Outcome.SUCCESS_WITH_DATA:
        # Wallet clients treat the tag as an opaque string.
        body = dict(result.body)
        body["lastUpdated"] = str(body["lastUpdated"])
        return JSONResponse(content=body, status_code=result.status)
    return _render(result)


@router.get("/{version}/passes/{pass_type_identifier}/{serial_number}")
def latest_pass(
    version: str,
    pass_type_identifier: str,
    serial_number: str,
    request: Request,
    if_modified_since: Optional[str] = Header(default=None),
):
    result = _services(request).pass_fetch.get_pass(
        PassRequest(
            pass_type_identifier=pass_type_identifier,
            serial_number=serial_number,
            if_modified_since=parse_tag(if_modified_since, where="if-modified-since"),
        )
    )
    return _render(result)


@router.delete("/{version}/devices/{device_library_identifier}/registrations/{pass_type_identifier}/{serial_number}")
def unregister_device(
    version: str,
    device_library_identifier: str,
    pass_type_identifier: str,
    serial_number: str,
    request: Request,
):
    result = _services(request).unregistration.unregister(
        UnregisterRequest(
            device_library_identifier=device_library_identifier,
            pass_type_identifier=pass_type_identifier,
            serial_number=serial_number,
        )
    )
    return _render(result)


@router.post("/{version}/log")
def device_log(version: str, body: LogBody, request: Request):
    result = _services(request).log_sink.log(LogRequest(logs=tuple(body.logs)))
    return JSONResponse(content={"logs": result.body}, status_code=result.status)
