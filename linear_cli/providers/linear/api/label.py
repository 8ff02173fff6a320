import logging
from typing import Dict, Optional

from linear_cli.core.exceptions import NotFoundError
from linear_cli.core.graphql_client import GraphQLClient, get_graphql_client, get_nodes

logger = logging.getLogger(__name__)

FIND_LABEL_QUERY = """
query($name: String!) {
  issueLabels(filter: { name: { eq: $name } }) { nodes { id name } }
}
"""


class LabelAPI:
    """Issue 标签 API 封装"""

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def find_label(self, name: str) -> Dict:
        """
        按名称精确查找标签

        Raises:
            NotFoundError: 标签不存在
        """
        data = await self.client.execute(FIND_LABEL_QUERY, {"name": name})
        nodes = get_nodes(data, "issueLabels")
        if not nodes:
            raise NotFoundError("Label", name)
        return nodes[0]
