import pytest

from engagespot import EngagespotRequestError, EngagespotResult, ErrorKind


def test_success_result_unwraps_to_text() -> None:
    result = EngagespotResult.success('{"id":"1"}', status_code=200)

    assert result.is_ok
    assert not result.is_err
    assert result.unwrap() == '{"id":"1"}'
    assert result.json() == {"id": "1"}
    assert result.error_kind is None


def test_failure_result_raises_on_unwrap() -> None:
    result = EngagespotResult.failure('{"error":"bad"}', status_code=400)

    assert result.is_err
    with pytest.raises(EngagespotRequestError) as exc_info:
        result.unwrap()
    assert exc_info.value.text == '{"error":"bad"}'
    assert exc_info.value.status_code == 400
    assert exc_info.value.kind is ErrorKind.APPLICATION


def test_unwrap_or_else_receives_error_text() -> None:
    failed = EngagespotResult.failure("connection refused", kind=ErrorKind.TRANSPORT)
    succeeded = EngagespotResult.success("ok")

    assert failed.unwrap_or_else(lambda err: f"Error: {err}") == "Error: connection refused"
    assert succeeded.unwrap_or_else(lambda err: f"Error: {err}") == "ok"
