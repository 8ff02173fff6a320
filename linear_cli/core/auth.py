import logging
from typing import Generator, Optional

import httpx

from linear_cli.core.config import settings
from linear_cli.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

API_KEY_HELP = (
    "LINEAR_API_KEY environment variable is not set.\n"
    "Get your key at: Linear Settings → API → Create Key\n"
    'Then: export LINEAR_API_KEY="lin_api_..."'
)


def _mask_token(token: str, visible_chars: int = 4) -> str:
    """对 token 进行脱敏处理，仅显示前几个字符"""
    if not token or len(token) <= visible_chars:
        return "***"
    return f"{token[:visible_chars]}***"


def get_api_key() -> str:
    """
    获取 Linear API Key

    Returns:
        配置中的 API Key

    Raises:
        ConfigurationError: 未配置 LINEAR_API_KEY
    """
    key = settings.LINEAR_API_KEY
    if not key:
        logger.error("No Linear API key configured")
        raise ConfigurationError(API_KEY_HELP)
    logger.debug("Using Linear API key %s", _mask_token(key))
    return key


class LinearAuth(httpx.Auth):
    """
    Auth for the Linear GraphQL API.
    The key is sent verbatim in the Authorization header and resolved per
    request, so a missing key only fails once a command actually talks to
    the API.
    """

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._api_key or get_api_key()
        yield request
