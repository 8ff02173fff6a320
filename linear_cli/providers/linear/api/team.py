"""
TeamAPI - 团队维度的原子接口封装

GraphQL:
- query teams
- query teams(filter: { key: { eq } })
"""

import logging
from typing import Dict, List, Optional

from linear_cli.core.exceptions import NotFoundError
from linear_cli.core.graphql_client import GraphQLClient, get_graphql_client, get_nodes

logger = logging.getLogger(__name__)

LIST_TEAMS_QUERY = """
query { teams { nodes { id name key } } }
"""

TEAM_ID_QUERY = """
query($key: String!) {
  teams(filter: { key: { eq: $key } }) { nodes { id } }
}
"""

TEAM_STATES_QUERY = """
query($teamKey: String!) {
  teams(filter: { key: { eq: $teamKey } }) {
    nodes { states { nodes { id name type position } } }
  }
}
"""


class TeamAPI:
    """Linear 团队 API 封装"""

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def list_teams(self) -> List[Dict]:
        """
        获取全部团队

        Returns:
            团队列表，每项包含 {id, name, key}
        """
        data = await self.client.execute(LIST_TEAMS_QUERY)
        teams = get_nodes(data, "teams")
        logger.info("Retrieved %d teams", len(teams))
        return teams

    async def get_team_id(self, key: str) -> str:
        """
        团队 key → 团队 ID

        Raises:
            NotFoundError: 团队不存在
        """
        logger.debug("Resolving team key: %s", key)
        data = await self.client.execute(TEAM_ID_QUERY, {"key": key})
        nodes = get_nodes(data, "teams")
        if not nodes:
            raise NotFoundError("Team", key)
        return nodes[0]["id"]

    async def list_team_states(self, key: str) -> List[Dict]:
        """
        获取团队的工作流状态

        Returns:
            状态列表，每项包含 {id, name, type, position}

        Raises:
            NotFoundError: 团队不存在
        """
        data = await self.client.execute(TEAM_STATES_QUERY, {"teamKey": key})
        nodes = get_nodes(data, "teams")
        if not nodes:
            raise NotFoundError("Team", key)
        states = nodes[0]["states"]["nodes"]
        logger.info("Retrieved %d workflow states for team %s", len(states), key)
        return states
