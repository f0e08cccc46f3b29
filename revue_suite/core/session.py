"""
Session bootstrap: login, register-then-login fallback, authenticated client
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from revue_suite.config import Credentials, SuiteConfig
from revue_suite.core.rest_client import RestClient
from revue_suite.models.revue import LoginRequest, RegisterUserRequest

logger = logging.getLogger(__name__)

LOGIN_ENDPOINT = "/api/User/Authentication"
REGISTER_ENDPOINT = "/api/User/Create"


class SessionBootstrapError(RuntimeError):
    """Credentials or login failure; the run cannot continue"""


@dataclass(frozen=True)
class AuthenticatedSession:
    """Authenticated client shared by every step of a run"""
    client: RestClient
    credentials: Credentials
    access_token: str

    async def close(self):
        await self.client.aclose()


async def try_login(client: RestClient, credentials: Credentials) -> Optional[str]:
    """Return the access token, or None if this attempt did not produce one"""
    payload = LoginRequest(email=credentials.email, password=credentials.password).model_dump()
    try:
        response = await client.post(LOGIN_ENDPOINT, payload)
    except httpx.HTTPError as e:
        logger.warning(f"Login request failed: {e}")
        return None

    if response.status_code != 200 or not response.text.strip():
        logger.info(f"Login rejected for {credentials.email}: HTTP {response.status_code}")
        return None

    body = response.json_body
    if not isinstance(body, dict):
        logger.info("Login response is not a JSON object")
        return None

    token = body.get("accessToken")
    if not isinstance(token, str) or not token.strip():
        logger.info("Login response has no accessToken")
        return None

    return token


async def register_user(client: RestClient, credentials: Credentials):
    """Single best-effort registration; the follow-up login decides the outcome"""
    payload = RegisterUserRequest(
        user_name=credentials.user_name,
        email=credentials.email,
        password=credentials.password,
        re_password=credentials.password,
    ).to_payload()
    try:
        response = await client.post(REGISTER_ENDPOINT, payload)
    except httpx.HTTPError as e:
        logger.warning(f"Registration request failed: {e}")
        return None

    logger.info(f"Registration of {credentials.user_name} returned HTTP {response.status_code}")
    return response


async def bootstrap_session(config: SuiteConfig,
                            transport: Optional[httpx.AsyncBaseTransport] = None) -> AuthenticatedSession:
    """
    Produce an authenticated session or raise SessionBootstrapError.

    One login attempt; on failure exactly one registration followed by one
    more login attempt. No backoff.
    """
    credentials = config.credentials
    if not credentials.is_complete():
        raise SessionBootstrapError("Email or password is empty.")

    anonymous = RestClient(config, transport=transport)
    try:
        token = await try_login(anonymous, credentials)
        if token is None:
            logger.info(f"Login failed, registering {credentials.email} and retrying once")
            await register_user(anonymous, credentials)
            token = await try_login(anonymous, credentials)
    finally:
        await anonymous.aclose()

    if token is None:
        raise SessionBootstrapError("Login failed.")

    logger.info(f"Authenticated as {credentials.email} (token {token[:12]}...)")
    return AuthenticatedSession(anonymous.with_token(token), credentials, token)
