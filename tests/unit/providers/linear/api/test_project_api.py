import pytest

from linear_cli.core.exceptions import NotFoundError
from linear_cli.providers.linear.api import ProjectAPI


class TestListProjects:
    """测试 list_projects 方法"""

    @pytest.mark.asyncio
    async def test_without_team(self, mock_client):
        projects = [{"id": "p1", "name": "Roadmap"}]
        mock_client.execute.return_value = {"projects": {"nodes": projects}}

        result = await ProjectAPI(mock_client).list_projects()

        assert result == projects
        assert mock_client.execute.call_args.args[1] == {"first": 50}

    @pytest.mark.asyncio
    async def test_with_team(self, mock_client):
        mock_client.execute.return_value = {"projects": {"nodes": []}}

        await ProjectAPI(mock_client).list_projects(team_key="BLU", first=10)

        assert mock_client.execute.call_args.args[1] == {
            "first": 10,
            "filter": {"accessibleTeams": {"some": {"key": {"eq": "BLU"}}}},
        }


class TestFindProject:
    """测试 find_project 方法"""

    @pytest.mark.asyncio
    async def test_first_match_wins(self, mock_client):
        mock_client.execute.return_value = {
            "projects": {
                "nodes": [
                    {"id": "p1", "name": "Mobile App"},
                    {"id": "p2", "name": "Mobile Web"},
                ]
            }
        }

        project = await ProjectAPI(mock_client).find_project("mobile")

        assert project["id"] == "p1"
        assert mock_client.execute.call_args.args[1] == {"name": "mobile"}

    @pytest.mark.asyncio
    async def test_not_found(self, mock_client):
        mock_client.execute.return_value = {"projects": {"nodes": []}}

        with pytest.raises(NotFoundError) as exc_info:
            await ProjectAPI(mock_client).find_project("Ghost")
        assert str(exc_info.value) == 'Project "Ghost" not found.'
