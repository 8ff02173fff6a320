"""
IssueAPI - Issue 维度的原子接口封装

GraphQL:
- query issues(first, filter: IssueFilter, orderBy: updatedAt)
- query issues(filter: { team.key, number })   按 TEAM-123 定位
- query searchIssues(term, first)
- mutation issueCreate / issueUpdate

Issue 的定位统一通过 IssueIdentifier (team key + 序号) 完成，
调用方需先用 parse_identifier 校验格式。
"""

import logging
from typing import Any, Dict, List, Optional

from linear_cli.core.exceptions import NotFoundError
from linear_cli.core.graphql_client import (
    GraphQLClient,
    get_graphql_client,
    get_nodes,
    get_root_field,
)
from linear_cli.schemas.linear import IssueIdentifier

logger = logging.getLogger(__name__)

LIST_ISSUES_QUERY = """
query($first: Int!, $filter: IssueFilter) {
  issues(first: $first, filter: $filter, orderBy: updatedAt) {
    nodes {
      id identifier title priority priorityLabel
      state { name type }
      assignee { name }
      labels { nodes { name } }
      createdAt updatedAt
    }
  }
}
"""

ISSUE_DETAIL_QUERY = """
query($teamKey: String!, $number: Float!) {
  issues(filter: { team: { key: { eq: $teamKey } }, number: { eq: $number } }) {
    nodes {
      id identifier title description
      priority priorityLabel
      state { id name type }
      assignee { id name }
      labels { nodes { name } }
      comments { nodes { body user { name } createdAt } }
      parent { identifier title }
      children { nodes { identifier title state { name } } }
      relations { nodes { type relatedIssue { identifier title } } }
      createdAt updatedAt dueDate estimate url
    }
  }
}
"""

ISSUE_ID_QUERY = """
query($teamKey: String!, $number: Float!) {
  issues(filter: { team: { key: { eq: $teamKey } }, number: { eq: $number } }) {
    nodes { id }
  }
}
"""

ISSUE_TEAM_STATES_QUERY = """
query($teamKey: String!, $number: Float!) {
  issues(filter: { team: { key: { eq: $teamKey } }, number: { eq: $number } }) {
    nodes {
      id
      team { states { nodes { id name } } }
    }
  }
}
"""

SEARCH_ISSUES_QUERY = """
query($term: String!, $first: Int!) {
  searchIssues(term: $term, first: $first) {
    nodes {
      id identifier title priority priorityLabel
      state { name }
      assignee { name }
      labels { nodes { name } }
      updatedAt
    }
  }
}
"""

CREATE_ISSUE_MUTATION = """
mutation($input: IssueCreateInput!) {
  issueCreate(input: $input) {
    success
    issue { id identifier title url }
  }
}
"""

UPDATE_ISSUE_MUTATION = """
mutation($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue { identifier title priority priorityLabel assignee { name } labels { nodes { name } } }
  }
}
"""

UPDATE_ISSUE_STATE_MUTATION = """
mutation($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) {
    success
    issue { identifier state { name } }
  }
}
"""


class IssueAPI:
    """
    Linear Issue API 封装

    依赖: IssueIdentifier (team key + number)
    """

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.client = client or get_graphql_client()

    async def _find_one(self, query: str, identifier: IssueIdentifier) -> Dict:
        data = await self.client.execute(query, identifier.as_variables())
        nodes = get_nodes(data, "issues")
        if not nodes:
            raise NotFoundError("Issue", str(identifier))
        return nodes[0]

    async def list_issues(
        self, issue_filter: Optional[Dict[str, Any]] = None, first: int = 25
    ) -> List[Dict]:
        """
        获取 Issue 列表，按更新时间排序

        Args:
            issue_filter: IssueFilter (见 filters.build_issue_filter)
            first: 最大返回数量
        """
        variables: Dict[str, Any] = {"first": first}
        if issue_filter:
            variables["filter"] = issue_filter

        logger.debug("Listing issues: filter=%s, first=%d", issue_filter, first)
        data = await self.client.execute(LIST_ISSUES_QUERY, variables)
        issues = get_nodes(data, "issues")
        logger.info("Retrieved %d issues", len(issues))
        return issues

    async def get_issue(self, identifier: IssueIdentifier) -> Dict:
        """
        获取 Issue 完整详情 (评论、父子关系、关联 Issue 等)

        Raises:
            NotFoundError: Issue 不存在
        """
        logger.debug("Getting issue details: %s", identifier)
        return await self._find_one(ISSUE_DETAIL_QUERY, identifier)

    async def resolve_issue_id(self, identifier: IssueIdentifier) -> str:
        """
        TEAM-123 → Issue ID

        Raises:
            NotFoundError: Issue 不存在
        """
        issue = await self._find_one(ISSUE_ID_QUERY, identifier)
        logger.debug("Resolved %s -> %s", identifier, issue["id"])
        return issue["id"]

    async def get_issue_team_states(self, identifier: IssueIdentifier) -> Dict:
        """
        获取 Issue ID 及其所属团队的工作流状态

        Returns:
            {id, team: {states: {nodes: [{id, name}]}}}
        """
        return await self._find_one(ISSUE_TEAM_STATES_QUERY, identifier)

    async def search_issues(self, query: str, first: int = 20) -> List[Dict]:
        """全文搜索 Issue"""
        logger.debug("Searching issues: query=%r, first=%d", query, first)
        data = await self.client.execute(
            SEARCH_ISSUES_QUERY, {"term": query, "first": first}
        )
        issues = get_nodes(data, "searchIssues")
        logger.info("Search returned %d issues", len(issues))
        return issues

    async def create_issue(self, issue_input: Dict[str, Any]) -> Dict:
        """
        创建 Issue

        Args:
            issue_input: IssueCreateInput (至少包含 title、teamId)

        Returns:
            issueCreate 结果 {success, issue}
        """
        logger.debug("Creating issue: %s", issue_input)
        data = await self.client.execute(CREATE_ISSUE_MUTATION, {"input": issue_input})
        result = get_root_field(data, "issueCreate")
        logger.info(
            "Issue created: success=%s, identifier=%s",
            result.get("success"),
            (result.get("issue") or {}).get("identifier"),
        )
        return result

    async def update_issue(self, issue_id: str, issue_input: Dict[str, Any]) -> Dict:
        """
        更新 Issue 字段

        Returns:
            issueUpdate 结果 {success, issue}
        """
        logger.debug("Updating issue %s: %s", issue_id, issue_input)
        data = await self.client.execute(
            UPDATE_ISSUE_MUTATION, {"id": issue_id, "input": issue_input}
        )
        return get_root_field(data, "issueUpdate")

    async def update_issue_state(self, issue_id: str, state_id: str) -> Dict:
        """更新 Issue 的工作流状态"""
        logger.debug("Moving issue %s to state %s", issue_id, state_id)
        data = await self.client.execute(
            UPDATE_ISSUE_STATE_MUTATION,
            {"id": issue_id, "input": {"stateId": state_id}},
        )
        return get_root_field(data, "issueUpdate")
