import logging
from typing import Dict, Optional

from linear_cli.core.graphql_client import (
    GraphQLClient,
    get_graphql_client,
    get_root_field,
)

logger = logging.getLogger(__name__)

CREATE_COMMENT_MUTATION = """
mutation($input: CommentCreateInput!) {
  commentCreate(input: $input) {
    success
    comment { id body createdAt }
  }
}
"""


class CommentAPI:
    """评论 API 封装"""

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def create_comment(self, issue_id: str, body: str) -> Dict:
        """
        在 Issue 下添加评论

        Returns:
            commentCreate 结果 {success, comment}
        """
        logger.debug("Creating comment on issue %s (%d chars)", issue_id, len(body))
        data = await self.client.execute(
            CREATE_COMMENT_MUTATION, {"input": {"issueId": issue_id, "body": body}}
        )
        return get_root_field(data, "commentCreate")
