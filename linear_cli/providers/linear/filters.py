"""
CLI 参数 → Linear 过滤条件 (IssueFilter / ProjectFilter)

过滤条件始终作为 GraphQL 变量传递，不拼接进文档文本。
"""

from typing import Any, Dict, Optional


def build_issue_filter(
    team: Optional[str] = None,
    status: Optional[str] = None,
    assignee: Optional[str] = None,
    label: Optional[str] = None,
) -> Optional[Dict[str, Any]]:
    """
    组装 list-issues 的 IssueFilter

    Args:
        team: 团队 key，精确匹配
        status: 工作流状态名称，精确匹配
        assignee: 经办人名称，忽略大小写的包含匹配
        label: 标签名称，任一标签精确匹配

    Returns:
        IssueFilter 字典；未提供任何条件时返回 None
    """
    issue_filter: Dict[str, Any] = {}
    if team:
        issue_filter["team"] = {"key": {"eq": team}}
    if status:
        issue_filter["state"] = {"name": {"eq": status}}
    if assignee:
        issue_filter["assignee"] = {"name": {"containsIgnoreCase": assignee}}
    if label:
        issue_filter["labels"] = {"some": {"name": {"eq": label}}}
    return issue_filter or None


def build_project_filter(team: Optional[str] = None) -> Optional[Dict[str, Any]]:
    if not team:
        return None
    return {"accessibleTeams": {"some": {"key": {"eq": team}}}}

