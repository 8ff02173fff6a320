"""
ProjectAPI - 项目维度的原子接口封装

GraphQL:
- query projects(first, filter: ProjectFilter, orderBy: updatedAt)
- query projects(filter: { name: { containsIgnoreCase } })
"""

import logging
from typing import Any, Dict, List, Optional

from linear_cli.core.exceptions import NotFoundError
from linear_cli.core.graphql_client import GraphQLClient, get_graphql_client, get_nodes
from linear_cli.providers.linear.filters import build_project_filter

logger = logging.getLogger(__name__)

LIST_PROJECTS_QUERY = """
query($first: Int!, $filter: ProjectFilter) {
  projects(first: $first, filter: $filter, orderBy: updatedAt) {
    nodes {
      id name state
      teams { nodes { key } }
      createdAt updatedAt
    }
  }
}
"""

FIND_PROJECT_QUERY = """
query($name: String!) {
  projects(filter: { name: { containsIgnoreCase: $name } }) { nodes { id name } }
}
"""


class ProjectAPI:
    """Linear 项目 API 封装"""

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def list_projects(
        self, team_key: Optional[str] = None, first: int = 50
    ) -> List[Dict]:
        """
        获取项目列表，按更新时间排序

        Args:
            team_key: 仅返回该团队可访问的项目
            first: 最大返回数量

        Returns:
            项目列表
        """
        variables: Dict[str, Any] = {"first": first}
        project_filter = build_project_filter(team_key)
        if project_filter:
            variables["filter"] = project_filter

        logger.debug("Listing projects: team_key=%s, first=%d", team_key, first)
        data = await self.client.execute(LIST_PROJECTS_QUERY, variables)
        projects = get_nodes(data, "projects")
        logger.info("Retrieved %d projects", len(projects))
        return projects

    async def find_project(self, name: str) -> Dict:
        """
        按名称模糊查找项目 (忽略大小写的包含匹配，取第一个)

        Returns:
            {id, name}

        Raises:
            NotFoundError: 无匹配项目
        """
        data = await self.client.execute(FIND_PROJECT_QUERY, {"name": name})
        nodes = get_nodes(data, "projects")
        if not nodes:
            raise NotFoundError("Project", name)
        if len(nodes) > 1:
            logger.info(
                "Project name %r matched %d projects, using %r",
                name,
                len(nodes),
                nodes[0]["name"],
            )
        return nodes[0]
