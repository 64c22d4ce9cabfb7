from typing import Any
import time

from fastapi import Body, Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from .config import load_config
from .crypto.jcs import canonical_json
from .errors import KeyImportError, SigningError
from .host import CgPluginLibHost
from .obs.prom import observe_sign, observe_verify, prometheus_latest
from .utils.logging import get_logger

app = FastAPI(title="Common Ground plugin host signer")
log = get_logger()


class HostUnavailable(Exception):
    pass


class VerifyBody(BaseModel):
    data: Any
    signature: str


async def get_host(request: Request) -> CgPluginLibHost:
    # Created on first use so the app imports without keys configured
    host = getattr(request.app.state, "host", None)
    if host is None:
        if not load_config().has_keys:
            raise HostUnavailable("signing keys are not configured")
        host = await CgPluginLibHost.from_env()
        request.app.state.host = host
        log.info("Signing host created from environment")
    return host


@app.exception_handler(HostUnavailable)
async def host_unavailable(request: Request, exc: HostUnavailable):
    return JSONResponse({"error": str(exc)}, status_code=503)


@app.exception_handler(KeyImportError)
async def key_import_failed(request: Request, exc: KeyImportError):
    return JSONResponse({"error": str(exc)}, status_code=500)


@app.get("/__health")
async def health():
    return {"status": "ok"}


@app.post("/api/sign")
async def sign(payload: Any = Body(...), host: CgPluginLibHost = Depends(get_host)):
    start = time.time()
    try:
        signed = await host.sign_request(payload)
    except SigningError as e:
        observe_sign(ok=False, latency_ms=(time.time() - start) * 1000)
        return JSONResponse({"error": str(e)}, status_code=500)
    observe_sign(ok=True, latency_ms=(time.time() - start) * 1000)
    # NaN and Infinity are accepted in the body; serialize them as JSON.stringify does
    return Response(content=canonical_json(signed), media_type="application/json")


@app.post("/api/verify")
async def verify(body: VerifyBody, host: CgPluginLibHost = Depends(get_host)):
    start = time.time()
    valid = await host.verify_signature(body.data, body.signature)
    observe_verify(valid=valid, latency_ms=(time.time() - start) * 1000)
    return {"valid": valid}


@app.get("/metrics")
async def metrics():
    data, content_type = prometheus_latest()
    return Response(content=data, media_type=content_type)
