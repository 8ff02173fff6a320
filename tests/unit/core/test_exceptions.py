from linear_cli.core.exceptions import (
    APIHTTPError,
    GraphQLResponseError,
    LinearCLIError,
    NotFoundError,
)


def test_not_found_message():
    assert str(NotFoundError("Team", "BLU")) == 'Team "BLU" not found.'


def test_not_found_lists_available():
    error = NotFoundError("State", "Doing", available=["Todo", "In Progress", "Done"])
    assert str(error) == 'State "Doing" not found. Available: Todo, In Progress, Done'
    assert error.available == ["Todo", "In Progress", "Done"]


def test_http_error_without_reason():
    assert str(APIHTTPError(500)) == "HTTP 500"


def test_graphql_error_message_is_indented_json():
    error = GraphQLResponseError([{"message": "bad"}])
    assert str(error) == 'GraphQL errors: [\n  {\n    "message": "bad"\n  }\n]'


def test_all_errors_exit_non_zero():
    for error in (
        NotFoundError("User", "x"),
        APIHTTPError(404, "Not Found"),
        GraphQLResponseError([]),
    ):
        assert isinstance(error, LinearCLIError)
        assert error.exit_code != 0
