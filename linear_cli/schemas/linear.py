from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class GraphQLRequest(BaseModel):
    query: str
    variables: Optional[Dict[str, Any]] = None


class GraphQLErrorItem(BaseModel):
    message: str = ""

    # path / locations / extensions are kept as-is for error output
    model_config = ConfigDict(extra="allow")


class GraphQLResponse(BaseModel):
    data: Optional[Dict[str, Any]] = None
    errors: Optional[List[GraphQLErrorItem]] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def is_success(self) -> bool:
        return not self.errors


class IssueIdentifier(BaseModel):
    """Human-readable issue key, e.g. ``BLU-42``."""

    team_key: str
    number: int

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.team_key}-{self.number}"

    def as_variables(self) -> Dict[str, Any]:
        return {"teamKey": self.team_key, "number": self.number}
