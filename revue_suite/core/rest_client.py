"""
Lightweight bearer-token REST client for RevueCrafters API testing
"""

import time
import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

import httpx

from revue_suite.config import SuiteConfig
from revue_suite.models.revue import ApiResponseDTO

logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE")


@dataclass
class ApiResponse:
    """Status code + body of a single API call"""
    status_code: int
    text: str
    json_body: Any = None
    duration: float = 0.0

    @property
    def success(self) -> bool:
        return self.status_code < 400

    def api_message(self) -> ApiResponseDTO:
        return ApiResponseDTO.from_body(self.json_body)

    @classmethod
    def from_httpx(cls, response: httpx.Response, duration: float) -> "ApiResponse":
        try:
            parsed = response.json()
        except ValueError:
            parsed = None
        return cls(response.status_code, response.text, parsed, duration)


class RestClient:
    """Lightweight REST client with optional bearer authentication"""

    def __init__(self, config: SuiteConfig, token: Optional[str] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self.token = token
        self._transport = transport

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = httpx.AsyncClient(
            base_url=config.api_base_url,
            headers=headers,
            timeout=config.request_timeout,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    def with_token(self, token: str) -> "RestClient":
        """New client for the same endpoint carrying the given bearer token"""
        return RestClient(self.config, token=token, transport=self._transport)

    async def request(self, method: str, endpoint: str, data: Optional[Dict] = None,
                      params: Optional[Dict] = None) -> ApiResponse:
        """Make REST request and return status code + parsed body"""
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {method}")

        kwargs: Dict[str, Any] = {}
        if params:
            kwargs["params"] = params
        if data is not None and method in ("POST", "PUT", "DELETE"):
            kwargs["json"] = data

        start_time = time.time()
        response = await self._client.request(method, endpoint, **kwargs)
        duration = time.time() - start_time

        logger.debug(f"{method} {endpoint} -> {response.status_code} ({duration:.3f}s)")
        return ApiResponse.from_httpx(response, duration)

    async def get(self, endpoint: str, params: Optional[Dict] = None) -> ApiResponse:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Optional[Dict] = None) -> ApiResponse:
        return await self.request("POST", endpoint, data=data)

    async def put(self, endpoint: str, data: Optional[Dict] = None, params: Optional[Dict] = None) -> ApiResponse:
        return await self.request("PUT", endpoint, data=data, params=params)

    async def delete(self, endpoint: str, params: Optional[Dict] = None) -> ApiResponse:
        return await self.request("DELETE", endpoint, params=params)

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self) -> "RestClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()
