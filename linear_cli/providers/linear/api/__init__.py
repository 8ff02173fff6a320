"""
Linear API 层 - 原子能力封装

每个类对应一种远端资源，每个方法对应一个 GraphQL 文档。
名称 → ID 的点查询 (get_team_id / find_project / find_user / find_label /
resolve_issue_id) 在无匹配时抛出 NotFoundError。

使用示例:
    from linear_cli.providers.linear.api import TeamAPI, IssueAPI

    teams = await TeamAPI().list_teams()
    issue = await IssueAPI().get_issue(parse_identifier("BLU-42"))
"""

from .team import TeamAPI
from .workflow_state import WorkflowStateAPI
from .project import ProjectAPI
from .user import UserAPI
from .label import LabelAPI
from .issue import IssueAPI
from .comment import CommentAPI

__all__ = [
    "TeamAPI",
    "WorkflowStateAPI",
    "ProjectAPI",
    "UserAPI",
    "LabelAPI",
    "IssueAPI",
    "CommentAPI",
]
