"""
Description:
    linear-cli 命令行入口

    每个子命令: 校验参数 → 名称解析为 ID → 发起一次查询或变更 → 以 JSON 输出结果。
    stdout 只输出 JSON，日志和错误信息写到 stderr。

Usage:
    linear-cli list-teams
    linear-cli list-issues --team BLU --status "In Progress" --limit 10
    linear-cli get-issue BLU-42
    linear-cli create-issue --title "Fix login" --team BLU --priority 2
    linear-cli update-status BLU-42 "Done"
    linear-cli add-comment BLU-42 Looks good to me
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Awaitable, Callable, Dict, List, Optional

from linear_cli.core.config import settings
from linear_cli.core.exceptions import LinearCLIError
from linear_cli.core.graphql_client import GraphQLClient
from linear_cli.services.issue_service import DEFAULT_LIST_LIMIT, IssueService
from linear_cli.services.workspace_service import WorkspaceService

logger = logging.getLogger(__name__)

PROG = "linear-cli"


def _priority(value: str) -> int:
    """--priority: 0=none, 1=urgent ... 4=low"""
    try:
        priority = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid priority: {value!r} (expected 0-4)")
    if not 0 <= priority <= 4:
        raise argparse.ArgumentTypeError(f"invalid priority: {value!r} (expected 0-4)")
    return priority


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Query and update Linear issues from the command line. Output is JSON.",
        epilog="Requires LINEAR_API_KEY (Linear Settings → API → Create Key).",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="debug logging on stderr"
    )
    sub = parser.add_subparsers(dest="command", metavar="<command>")

    sub.add_parser("list-teams", help="List all teams")

    p = sub.add_parser("list-projects", help="List projects (optionally filter by team)")
    p.add_argument("--team", metavar="KEY", help="Filter by team key")

    p = sub.add_parser("list-states", help="List workflow states")
    p.add_argument("--team", metavar="KEY", help="Only this team's states")

    p = sub.add_parser("list-issues", help="List issues with filters")
    p.add_argument("--team", metavar="KEY", help="Filter by team key")
    p.add_argument("--status", metavar="NAME", help="Filter by status name")
    p.add_argument("--assignee", metavar="NAME", help="Filter by assignee name")
    p.add_argument("--label", metavar="NAME", help="Filter by label name")
    p.add_argument(
        "--limit",
        metavar="N",
        type=_positive_int,
        default=DEFAULT_LIST_LIMIT,
        help=f"Max results (default: {DEFAULT_LIST_LIMIT})",
    )

    p = sub.add_parser("get-issue", help="Get full issue details (e.g., BLU-42)")
    p.add_argument("identifier", metavar="IDENTIFIER")

    p = sub.add_parser("search-issues", help="Full-text search issues")
    # REMAINDER: 以 - 开头的单词也作为正文
    p.add_argument("query", nargs=argparse.REMAINDER, metavar="QUERY")

    p = sub.add_parser("create-issue", help="Create a new issue")
    p.add_argument("--title", required=True, help="Issue title")
    p.add_argument("--team", metavar="KEY", required=True, help="Team key")
    p.add_argument("--description", metavar="DESC", default="", help="Issue description")
    p.add_argument(
        "--priority", type=_priority, help="Priority (0=none, 1=urgent, 4=low)"
    )
    p.add_argument("--label", metavar="NAME", help="Label name")
    p.add_argument("--project", metavar="NAME", help="Project name (fuzzy match)")
    p.add_argument("--assignee", metavar="NAME", help="Assignee name (fuzzy match)")
    p.add_argument("--parent", metavar="IDENTIFIER", help="Parent issue (e.g., BLU-10)")

    p = sub.add_parser("update-issue", help="Update an existing issue")
    p.add_argument("identifier", metavar="IDENTIFIER")
    p.add_argument("--title", help="New title")
    p.add_argument("--description", metavar="DESC", help="New description")
    p.add_argument("--priority", type=_priority, help="New priority (0-4)")
    p.add_argument("--label", metavar="NAME", help="Set label")
    p.add_argument("--project", metavar="NAME", help="Set project (fuzzy match)")
    p.add_argument("--assignee", metavar="NAME", help="Set assignee (fuzzy match)")

    p = sub.add_parser("update-status", help="Update issue workflow state")
    p.add_argument("identifier", metavar="IDENTIFIER")
    p.add_argument("state", metavar="STATE")

    p = sub.add_parser("add-comment", help="Add comment to issue")
    p.add_argument("identifier", metavar="IDENTIFIER")
    p.add_argument("body", nargs=argparse.REMAINDER, metavar="BODY")

    return parser


# ── Command handlers ─────────────────────────────────────────────────────

Handler = Callable[[argparse.Namespace, GraphQLClient], Awaitable[Any]]


async def _list_teams(args, client):
    return await WorkspaceService(client).list_teams()


async def _list_projects(args, client):
    return await WorkspaceService(client).list_projects(team=args.team)


async def _list_states(args, client):
    return await WorkspaceService(client).list_states(team=args.team)


async def _list_issues(args, client):
    return await IssueService(client).list_issues(
        team=args.team,
        status=args.status,
        assignee=args.assignee,
        label=args.label,
        limit=args.limit,
    )


async def _get_issue(args, client):
    return await IssueService(client).get_issue(args.identifier)


async def _search_issues(args, client):
    return await IssueService(client).search_issues(" ".join(args.query))


async def _create_issue(args, client):
    return await IssueService(client).create_issue(
        title=args.title,
        team=args.team,
        description=args.description,
        priority=args.priority,
        label=args.label,
        project=args.project,
        assignee=args.assignee,
        parent=args.parent,
    )


async def _update_issue(args, client):
    return await IssueService(client).update_issue(
        args.identifier,
        title=args.title,
        description=args.description,
        priority=args.priority,
        assignee=args.assignee,
        label=args.label,
        project=args.project,
    )


async def _update_status(args, client):
    return await IssueService(client).update_status(args.identifier, args.state)


async def _add_comment(args, client):
    return await IssueService(client).add_comment(args.identifier, " ".join(args.body))


COMMANDS: Dict[str, Handler] = {
    "list-teams": _list_teams,
    "list-projects": _list_projects,
    "list-states": _list_states,
    "list-issues": _list_issues,
    "get-issue": _get_issue,
    "search-issues": _search_issues,
    "create-issue": _create_issue,
    "update-issue": _update_issue,
    "update-status": _update_status,
    "add-comment": _add_comment,
}


async def run_command(args: argparse.Namespace) -> Any:
    """执行单个命令，结束后关闭客户端"""
    client = GraphQLClient()
    try:
        return await COMMANDS[args.command](args, client)
    finally:
        await client.close()


def _configure_logging(verbose: bool) -> None:
    # stdout 专用于 JSON 输出
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.get_log_level(),
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """主入口，返回进程退出码"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 1

    _configure_logging(args.verbose)
    logger.debug("Running command: %s", args.command)

    try:
        result = asyncio.run(run_command(args))
    except LinearCLIError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        return 130

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
