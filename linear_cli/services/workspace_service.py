import logging
from typing import Dict, List, Optional

from linear_cli.core.graphql_client import GraphQLClient
from linear_cli.providers.linear.api import ProjectAPI, TeamAPI, WorkflowStateAPI

logger = logging.getLogger(__name__)


class WorkspaceService:
    """
    工作区级别的只读查询: 团队、项目、工作流状态
    """

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.teams = TeamAPI(client)
        self.projects = ProjectAPI(client)
        self.states = WorkflowStateAPI(client)

    async def list_teams(self) -> List[Dict]:
        return await self.teams.list_teams()

    async def list_projects(self, team: Optional[str] = None) -> List[Dict]:
        return await self.projects.list_projects(team_key=team)

    async def list_states(self, team: Optional[str] = None) -> List[Dict]:
        """
        列出工作流状态

        指定 team 时返回该团队的状态 (含 position)；
        否则返回全部状态，每项带所属团队 key。
        """
        if team:
            return await self.teams.list_team_states(team)
        return await self.states.list_states()
