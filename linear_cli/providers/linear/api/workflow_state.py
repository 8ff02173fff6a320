import logging
from typing import Dict, List, Optional

from linear_cli.core.graphql_client import GraphQLClient, get_graphql_client, get_nodes

logger = logging.getLogger(__name__)

LIST_STATES_QUERY = """
query { workflowStates { nodes { id name type team { key } } } }
"""


class WorkflowStateAPI:
    """工作流状态 API 封装 (跨团队)"""

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def list_states(self) -> List[Dict]:
        data = await self.client.execute(LIST_STATES_QUERY)
        states = get_nodes(data, "workflowStates")
        logger.info("Retrieved %d workflow states", len(states))
        return states
