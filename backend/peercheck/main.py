from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from datetime import datetime
from typing import Optional
import ipaddress
import logging

from . import config
from .checks import check_bgp, error_result, run_check
from .eigrp import check_eigrp
from .exceptions import CheckError
from .models import CheckResult
from .snmp_session import SnmpSession
from .thresholds import ThresholdConfig
from .wlan import check_wlan

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.WARNING))
logger = logging.getLogger(__name__)

VERSION = "0.1.0"


# Validate IP addresses
def validate_ip(ip_string: str) -> str:
    try:
        ipaddress.ip_address(ip_string)
        return ip_string
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid IP: {ip_string}")


def open_session(host: str) -> SnmpSession:
    """Session for one request, credentials from the environment."""
    return SnmpSession(host)


# Security headers middleware
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


# Initialize the FastAPI app
app = FastAPI(
    title="peercheck API",
    version=VERSION,
    docs_url=None,          # Disable Swagger UI (/docs)
    openapi_url=None,       # Disable OpenAPI schema (/openapi.json)
    redoc_url=None          # Disable ReDoc (/redoc)
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["Content-Type"],
    max_age=600,
)

# Add security headers to all responses
app.add_middleware(SecurityHeadersMiddleware)


async def _run(host: str, check, warning, critical, result, low, high, **kwargs) -> dict:
    host = validate_ip(host)
    try:
        thresholds = ThresholdConfig.from_options(
            warning=warning, critical=critical, expected=result, low=low, high=high
        )
        session = open_session(host)
    except CheckError as e:
        outcome: CheckResult = error_result(e)
    else:
        outcome = await run_check(session, check, config.CHECK_TIMEOUT, config=thresholds, **kwargs)

    logger.info(f"{host}: {outcome.render()}")
    return {
        "host": host,
        "timestamp": datetime.now().isoformat(),
        **outcome.to_dict(),
    }


@app.get("/")
async def root():
    """API root"""
    return {
        "message": "peercheck API",
        "status": "running",
        "version": VERSION,
        "endpoints": {
            "health": "/api/health",
            "bgp": "/api/checks/bgp/{host}?peer=",
            "eigrp": "/api/checks/eigrp/{host}?asn=&vpn=",
            "wlan": "/api/checks/wlan/{host}?ssid=&all=",
        }
    }


@app.get("/api/health")
async def health():
    """Health Check"""
    return {
        "status": "ok",
        "timestamp": datetime.now().isoformat(),
        "community_configured": bool(config.SNMP_COMMUNITY),
        "snmp_version": config.SNMP_VERSION,
    }


@app.get("/api/checks/bgp/{host}")
async def bgp(
    host: str,
    peer: str = Query(..., description="BGP peer address"),
    vendor: Optional[str] = None,
    warning: Optional[str] = None,
    critical: Optional[str] = None,
    result: Optional[str] = None,
    low: bool = False,
    high: bool = False,
):
    """BGP session state and prefix count of one peer"""
    peer = validate_ip(peer)
    return await _run(host, check_bgp, warning, critical, result, low, high, peer=peer, vendor=vendor)


@app.get("/api/checks/eigrp/{host}")
async def eigrp(
    host: str,
    asn: Optional[str] = None,
    vpn: Optional[str] = None,
    warning: Optional[str] = None,
    critical: Optional[str] = None,
    result: Optional[str] = None,
    low: bool = False,
    high: bool = False,
):
    """EIGRP neighbour count"""
    return await _run(host, check_eigrp, warning, critical, result, low, high, asn=asn, vpn=vpn)


@app.get("/api/checks/wlan/{host}")
async def wlan(
    host: str,
    ssid: Optional[str] = None,
    all: bool = False,
    warning: Optional[str] = None,
    critical: Optional[str] = None,
    result: Optional[str] = None,
    low: bool = False,
    high: bool = False,
):
    """Wireless client count, per SSID or in total"""
    return await _run(host, check_wlan, warning, critical, result, low, high, ssid=ssid, all_clients=all)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
