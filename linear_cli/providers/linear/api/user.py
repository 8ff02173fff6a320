import logging
from typing import Dict, Optional

from linear_cli.core.exceptions import NotFoundError
from linear_cli.core.graphql_client import GraphQLClient, get_graphql_client, get_nodes

logger = logging.getLogger(__name__)

FIND_USER_QUERY = """
query($name: String!) {
  users(filter: { name: { containsIgnoreCase: $name } }) { nodes { id name } }
}
"""


class UserAPI:
    """Linear 用户 API 封装"""

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def find_user(self, name: str) -> Dict:
        """
        按名称模糊查找用户 (忽略大小写的包含匹配，取第一个)

        Raises:
            NotFoundError: 无匹配用户
        """
        logger.debug("Searching user: %s", name)
        data = await self.client.execute(FIND_USER_QUERY, {"name": name})
        nodes = get_nodes(data, "users")
        if not nodes:
            raise NotFoundError("User", name)
        return nodes[0]
