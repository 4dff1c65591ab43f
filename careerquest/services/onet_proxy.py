"""
O*NET Web Services proxy

Forwards a logical "path + query" to the upstream catalog with the configured
Basic credentials and client id, so the credentials never reach the browser.

The proxy never raises for upstream or transport failures: it always answers
with a ProxyResponse(status_code, body), where failing bodies look like
{"error": "..."}. The /api/onet route and OnetCatalogClient share that contract.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

import httpx

from careerquest.config import Settings
from careerquest.utils.logger import get_logger
from careerquest.utils.metrics import inc, track_duration

logger = get_logger("services.onet_proxy")

USER_AGENT = "CareerQuest/1.0"

QueryParams = Union[Mapping[str, Any], Sequence[Tuple[str, Any]], None]


@dataclass
class ProxyResponse:
    status_code: int
    body: Any
    transport_failed: bool = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _error(status_code: int, message: str) -> ProxyResponse:
    return ProxyResponse(status_code=status_code, body={"error": message})


def _invalid_path(path: str) -> bool:
    """Only relative upstream resource paths may be proxied"""
    if "://" in path or path.startswith("/") or "\\" in path:
        return True
    return any(segment == ".." for segment in path.split("/"))


class OnetProxy:
    """Authenticated pass-through to https://services.onetcenter.org/ws/"""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.onet_base_url if settings.onet_base_url.endswith("/") else settings.onet_base_url + "/"
        self.client_id = settings.onet_client
        self.auth = httpx.BasicAuth(settings.onet_username, settings.onet_password)
        self.timeout = settings.onet_timeout_seconds
        self._transport = transport

    async def forward(self, path: Optional[str], params: QueryParams = None) -> ProxyResponse:
        if not path:
            return _error(400, "Path parameter is required")
        if _invalid_path(path):
            return _error(400, "Path parameter must be a relative O*NET resource path")

        query = httpx.QueryParams(params or {})
        query = query.remove("path")
        if "client" not in query:
            query = query.add("client", self.client_id)

        url = f"{self.base_url}{path}"
        logger.info(f"[O*NET] Proxying request to: {path}", extra={"upstream_path": path})

        try:
            async with track_duration("onet", "proxy"):
                async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                    response = await client.get(
                        url,
                        params=query,
                        auth=self.auth,
                        headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                    )

                if not response.is_success:
                    logger.error(
                        f"[O*NET] API error {response.status_code} {response.reason_phrase}: {response.text[:500]}",
                        extra={"upstream_path": path, "upstream_status": response.status_code},
                    )
                    inc("onet.upstream_error")
                    return _error(
                        response.status_code,
                        f"O*NET API returned error: {response.status_code} {response.reason_phrase}",
                    )

                return ProxyResponse(status_code=200, body=response.json())

        except (httpx.HTTPError, ValueError) as e:
            # Transport failures and bodies that are not JSON
            logger.error(
                f"[O*NET] Error proxying request: {type(e).__name__}: {e}",
                extra={"upstream_path": path, "error_type": type(e).__name__},
            )
            failed = _error(500, f"Failed to fetch data from O*NET Web Services: {e}")
            failed.transport_failed = True
            return failed
