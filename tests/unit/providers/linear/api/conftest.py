"""
API 测试共享 Fixtures

API 类只依赖 GraphQLClient.execute，这里用 AsyncMock 替代，
断言发送的 GraphQL 变量与对返回 data 的解包。
"""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def mock_client():
    """模拟 GraphQLClient"""
    client = AsyncMock()
    client.execute = AsyncMock()
    return client

