import logging
from typing import Any, Dict, List, Optional

from linear_cli.core.exceptions import NotFoundError, UsageError
from linear_cli.core.graphql_client import GraphQLClient
from linear_cli.core.identifier import parse_identifier
from linear_cli.providers.linear.api import (
    CommentAPI,
    IssueAPI,
    LabelAPI,
    ProjectAPI,
    TeamAPI,
    UserAPI,
)
from linear_cli.providers.linear.filters import build_issue_filter

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 25
SEARCH_LIMIT = 20


class IssueService:
    """
    Issue 业务服务 (Application Layer)
    负责 Issue 相关命令的编排: 校验参数 → 名称解析为 ID → 发起一次查询或变更。
    """

    def __init__(self, client: Optional[GraphQLClient] = None):
        self.issues = IssueAPI(client)
        self.teams = TeamAPI(client)
        self.projects = ProjectAPI(client)
        self.users = UserAPI(client)
        self.labels = LabelAPI(client)
        self.comments = CommentAPI(client)
        logger.debug("IssueService initialized successfully")

    async def list_issues(
        self,
        team: Optional[str] = None,
        status: Optional[str] = None,
        assignee: Optional[str] = None,
        label: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> List[Dict]:
        issue_filter = build_issue_filter(
            team=team, status=status, assignee=assignee, label=label
        )
        return await self.issues.list_issues(issue_filter, first=limit)

    async def get_issue(self, identifier: str) -> Dict[str, Any]:
        """获取 Issue 详情"""
        return await self.issues.get_issue(parse_identifier(identifier))

    async def search_issues(self, query: str) -> List[Dict]:
        if not query.strip():
            raise UsageError("Usage: search-issues <query>")
        return await self.issues.search_issues(query, first=SEARCH_LIMIT)

    async def _resolve_common_fields(
        self,
        issue_input: Dict[str, Any],
        label: Optional[str],
        project: Optional[str],
        assignee: Optional[str],
    ) -> None:
        # 依次解析 label → project → assignee，任一未找到即终止
        if label:
            issue_input["labelIds"] = [(await self.labels.find_label(label))["id"]]
        if project:
            issue_input["projectId"] = (await self.projects.find_project(project))["id"]
        if assignee:
            issue_input["assigneeId"] = (await self.users.find_user(assignee))["id"]

    async def create_issue(
        self,
        title: str,
        team: str,
        description: str = "",
        priority: Optional[int] = None,
        label: Optional[str] = None,
        project: Optional[str] = None,
        assignee: Optional[str] = None,
        parent: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        创建一个 Issue

        team / label / project / assignee / parent 均为人类可读名称，
        在发起 issueCreate 前逐一解析为 ID。

        :return: issueCreate 结果 {success, issue}
        """
        if not title or not team:
            raise UsageError("create-issue requires --title and --team")
        # 先校验 parent 格式，避免无效输入产生多余请求
        parent_identifier = parse_identifier(parent) if parent else None

        logger.info(
            "Creating issue: title=%s, team=%s, priority=%s, assignee=%s",
            title,
            team,
            priority,
            assignee,
        )

        issue_input: Dict[str, Any] = {
            "title": title,
            "description": description,
            "teamId": await self.teams.get_team_id(team),
        }
        if priority is not None:
            issue_input["priority"] = priority

        await self._resolve_common_fields(issue_input, label, project, assignee)

        if parent_identifier:
            issue_input["parentId"] = await self.issues.resolve_issue_id(
                parent_identifier
            )

        return await self.issues.create_issue(issue_input)

    async def update_issue(
        self,
        identifier: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        priority: Optional[int] = None,
        assignee: Optional[str] = None,
        label: Optional[str] = None,
        project: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        更新 Issue 的一个或多个字段

        Raises:
            UsageError: 未提供任何字段 (在任何网络请求之前)
        """
        issue_identifier = parse_identifier(identifier)
        if not any([title, description, assignee, label, project]) and priority is None:
            raise UsageError("No fields to update. Provide at least one --flag.")

        issue_id = await self.issues.resolve_issue_id(issue_identifier)

        issue_input: Dict[str, Any] = {}
        if priority is not None:
            issue_input["priority"] = priority
        if title:
            issue_input["title"] = title
        if description:
            issue_input["description"] = description
        await self._resolve_common_fields(issue_input, label, project, assignee)

        logger.info("Updating issue %s: fields=%s", identifier, sorted(issue_input))
        return await self.issues.update_issue(issue_id, issue_input)

    async def update_status(self, identifier: str, state_name: str) -> Dict[str, Any]:
        """
        将 Issue 移动到指定工作流状态 (状态名忽略大小写)

        Raises:
            NotFoundError: 团队中没有该状态，消息中列出可用状态
        """
        issue_identifier = parse_identifier(identifier)
        if not state_name:
            raise UsageError('Usage: update-status <IDENTIFIER> "<State Name>"')

        issue = await self.issues.get_issue_team_states(issue_identifier)
        states = issue["team"]["states"]["nodes"]
        state = next(
            (s for s in states if s["name"].lower() == state_name.lower()), None
        )
        if state is None:
            raise NotFoundError(
                "State", state_name, available=[s["name"] for s in states]
            )

        logger.info("Moving %s to state %s", identifier, state["name"])
        return await self.issues.update_issue_state(issue["id"], state["id"])

    async def add_comment(self, identifier: str, body: str) -> Dict[str, Any]:
        issue_identifier = parse_identifier(identifier)
        if not body.strip():
            raise UsageError("Usage: add-comment <IDENTIFIER> <comment body>")

        issue_id = await self.issues.resolve_issue_id(issue_identifier)
        return await self.comments.create_comment(issue_id, body)
