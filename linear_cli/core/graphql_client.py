import logging
import threading
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from linear_cli.core.auth import LinearAuth
from linear_cli.core.config import settings
from linear_cli.core.exceptions import (
    APIConnectionError,
    APIHTTPError,
    GraphQLResponseError,
    LinearAPIError,
)
from linear_cli.schemas.linear import GraphQLRequest, GraphQLResponse

logger = logging.getLogger(__name__)

_graphql_client = None
_graphql_client_lock = threading.Lock()

# 可重试的异常类型 (仅在 LINEAR_MAX_ATTEMPTS > 1 时生效)
RETRYABLE_EXCEPTIONS = (
    httpx.ConnectError,
    httpx.TimeoutException,
)


def _should_retry_response(response: httpx.Response) -> bool:
    """检查响应是否需要重试（5xx 服务端错误）"""
    return response.status_code >= 500


class RetryableHTTPError(Exception):
    """可重试的 HTTP 错误"""

    def __init__(self, response: httpx.Response):
        self.response = response
        super().__init__(f"HTTP {response.status_code}: {response.text[:200]}")


class GraphQLClient:
    """
    Linear GraphQL API 异步客户端

    特性:
    - 自动注入认证头 (Authorization)
    - 解包响应中的 data / errors
    - 可选重试 (网络错误、超时、5xx)，默认只请求一次
    """

    RETRY_MIN_WAIT = 1  # 最小等待时间（秒）
    RETRY_MAX_WAIT = 10  # 最大等待时间（秒）

    def __init__(
        self,
        api_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        api_key: Optional[str] = None,
    ):
        self.api_url = api_url or settings.LINEAR_API_URL
        self.max_attempts = (
            max_attempts if max_attempts is not None else settings.LINEAR_MAX_ATTEMPTS
        )
        logger.info(
            "Initializing GraphQLClient with api_url=%s, max_attempts=%d",
            self.api_url,
            self.max_attempts,
        )
        self.client = httpx.AsyncClient(
            headers={"Content-Type": "application/json"},
            auth=LinearAuth(api_key),
            timeout=httpx.Timeout(timeout or settings.LINEAR_TIMEOUT),
        )

    def _get_retry_decorator(self):
        """获取重试装饰器配置"""
        return retry(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(
                multiplier=1, min=self.RETRY_MIN_WAIT, max=self.RETRY_MAX_WAIT
            ),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS + (RetryableHTTPError,)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )

    async def _post_with_retry(self, payload: Dict[str, Any]) -> httpx.Response:
        """
        带重试的 POST

        Raises:
            RetryableHTTPError: 最后一次尝试仍为 5xx
            httpx.RequestError: 最后一次尝试仍为网络错误
        """

        @self._get_retry_decorator()
        async def _do_request():
            logger.debug("POST %s payload: %s", self.api_url, payload)
            response = await self.client.post(self.api_url, json=payload)
            logger.debug("Response status: %d", response.status_code)

            if _should_retry_response(response):
                logger.warning("Received %d from %s", response.status_code, self.api_url)
                raise RetryableHTTPError(response)
            return response

        return await _do_request()

    async def execute(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        执行一个 GraphQL 文档

        Args:
            query: query / mutation 文本
            variables: 绑定变量 (可选)

        Returns:
            响应中的 data 字段

        Raises:
            APIHTTPError: 非 2xx 响应
            APIConnectionError: 网络错误或超时
            GraphQLResponseError: 响应包含 errors
            LinearAPIError: 响应体无法解析或缺少 data
        """
        payload = GraphQLRequest(query=query, variables=variables).model_dump(
            exclude_none=True
        )

        try:
            response = await self._post_with_retry(payload)
        except RetryableHTTPError as e:
            response = e.response
        except httpx.TimeoutException as e:
            logger.error("Request to %s timed out: %s", self.api_url, e)
            raise APIConnectionError(f"Request timed out: {e}") from e
        except httpx.RequestError as e:
            logger.error("Request to %s failed (network error): %s", self.api_url, e)
            raise APIConnectionError(f"Request failed: {e}") from e

        if response.is_error:
            logger.error(
                "HTTP error %d from %s: %s",
                response.status_code,
                self.api_url,
                response.text[:200],
            )
            raise APIHTTPError(response.status_code, response.reason_phrase)

        try:
            body = GraphQLResponse.model_validate(response.json())
        except ValueError as e:
            # json 解析失败 / 响应体不是对象 (ValidationError 也是 ValueError)
            logger.error("Unparseable response from %s: %s", self.api_url, e)
            raise LinearAPIError(f"Invalid response from API: {e}") from e

        if not body.is_success:
            errors = [item.model_dump() for item in body.errors or []]
            logger.error("GraphQL errors: %s", [item["message"] for item in errors])
            raise GraphQLResponseError(errors)

        if body.data is None:
            logger.error("Response from %s contained no data", self.api_url)
            raise LinearAPIError("Response contained no data")

        logger.info("GraphQL request successful -> %d", response.status_code)
        return body.data

    async def close(self):
        """关闭客户端连接"""
        logger.debug("Closing GraphQLClient connection")
        await self.client.aclose()


def get_graphql_client() -> GraphQLClient:
    """
    获取全局单例客户端（线程安全）

    Returns:
        GraphQLClient: Linear API 客户端实例
    """
    global _graphql_client

    if _graphql_client is not None:
        return _graphql_client

    with _graphql_client_lock:
        if _graphql_client is None:
            logger.debug("Creating new GraphQLClient singleton instance")
            _graphql_client = GraphQLClient()

    return _graphql_client


def get_root_field(data: Dict[str, Any], field: str) -> Any:
    """
    取出 data 中的根字段

    Raises:
        LinearAPIError: 字段缺失或为 null
    """
    value = data.get(field)
    if value is None:
        logger.error("Response is missing root field: %s", field)
        raise LinearAPIError(f"Response is missing field: {field}")
    return value


def get_nodes(data: Dict[str, Any], field: str) -> List[Dict]:
    """取出连接类型根字段的 nodes 列表，例如 data["teams"]["nodes"]"""
    connection = get_root_field(data, field)
    nodes = connection.get("nodes") if isinstance(connection, dict) else None
    if not isinstance(nodes, list):
        logger.error("Response field %s has no nodes list", field)
        raise LinearAPIError(f"Response is missing field: {field}.nodes")
    return nodes
