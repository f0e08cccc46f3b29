"""
Lightweight API testing configuration for the RevueCrafters suite
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = "https://d2925tksfvgq8c.cloudfront.net"

FALLBACK_EMAIL = "user@examplee.com"
FALLBACK_PASSWORD = "string12"


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def resolve_credentials(env_email: Optional[str], env_password: Optional[str]) -> Tuple[str, str]:
    """Use the environment pair only when both values are present, else the fallback pair"""
    if _is_blank(env_email) or _is_blank(env_password):
        return FALLBACK_EMAIL, FALLBACK_PASSWORD
    return env_email.strip(), env_password


@dataclass
class Credentials:
    """Login credentials for the suite's test account"""
    email: str
    password: str

    @property
    def user_name(self) -> str:
        return self.email.split('@')[0]

    def is_complete(self) -> bool:
        return not _is_blank(self.email) and not _is_blank(self.password)


@dataclass
class SuiteConfig:
    """Lightweight API contract testing configuration"""

    # API Testing Only
    api_base_url: str = field(default_factory=lambda: os.getenv('REVUE_API_BASE_URL', DEFAULT_API_BASE_URL).rstrip('/'))
    request_timeout: float = field(default_factory=lambda: float(os.getenv('REVUE_REQUEST_TIMEOUT', '30.0')))

    # Account
    email: str = ''
    password: str = ''

    # Reporting
    log_level: str = field(default_factory=lambda: os.getenv('REVUE_LOG_LEVEL', 'INFO'))
    test_data_prefix: str = field(default_factory=lambda: os.getenv('REVUE_TEST_PREFIX', 'RC_TEST'))

    def __post_init__(self):
        if not self.email and not self.password:
            self.email, self.password = resolve_credentials(
                os.getenv('REVUE_EMAIL'), os.getenv('REVUE_PASSWORD')
            )

    @property
    def credentials(self) -> Credentials:
        return Credentials(self.email, self.password)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if _is_blank(self.email):
            errors.append("Email is empty.")
        if _is_blank(self.password):
            errors.append("Password is empty.")
        if not self.api_base_url.startswith(('http://', 'https://')):
            errors.append(f"REVUE_API_BASE_URL must be an http(s) URL, got '{self.api_base_url}'")
        if self.request_timeout <= 0:
            errors.append("REVUE_REQUEST_TIMEOUT must be positive")

        return errors


def configure_logging(level: str = "INFO"):
    """Configure root logging once for runner and test sessions"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # httpx logs every request at INFO; the client traces requests itself
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_config() -> SuiteConfig:
    """Get validated suite configuration"""
    config = SuiteConfig()
    errors = config.validate()

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    logger.info(f"API base URL: {config.api_base_url}")
    return config
