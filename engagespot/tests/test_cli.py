import json

import pytest
from httpx import MockTransport, Request, Response

from engagespot import Engagespot, EngagespotSettings, cli


def _settings() -> EngagespotSettings:
    return EngagespotSettings(
        api_key="api_key", api_secret="api_secret", base_url="https://api.example.test/v3"
    )


@pytest.fixture
def recorded(monkeypatch: pytest.MonkeyPatch) -> list[Request]:
    requests: list[Request] = []

    def handler(request: Request) -> Response:
        requests.append(request)
        if request.url.path.endswith("/users/missing"):
            return Response(404, text="user not found")
        return Response(200, text='{"status":"queued"}')

    original = Engagespot.from_settings.__func__  # type: ignore[attr-defined]

    def from_settings(cls, settings, *, transport=None):  # noqa: ARG001 - transport replaced by mock
        return original(cls, settings, transport=MockTransport(handler))

    monkeypatch.setattr(Engagespot, "from_settings", classmethod(from_settings))
    return requests


def test_parser_collects_repeated_recipients() -> None:
    args = cli.parse_args(
        ["send", "--title", "Hi", "--recipient", "a@b.com", "--recipient", "c@d.com", "--data", '{"k": 1}']
    )

    assert args.command == "send"
    assert args.recipients == ["a@b.com", "c@d.com"]
    assert args.data == {"k": 1}


def test_parser_rejects_invalid_json() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["user-attrs", "user-1", "--attrs", "{not json"])


@pytest.mark.asyncio
async def test_run_sends_notification(recorded: list[Request]) -> None:
    args = cli.parse_args(
        ["send", "--title", "Hi", "--recipient", "a@b.com", "--message", "Body", "--category", "news"]
    )

    result = await cli.run(args, _settings())

    assert result.is_ok
    assert result.json() == {"status": "queued"}
    assert recorded[0].method == "POST"
    assert json.loads(recorded[0].content) == {
        "notification": {"title": "Hi", "message": "Body"},
        "recipients": ["a@b.com"],
        "category": "news",
    }


@pytest.mark.asyncio
async def test_run_base_url_flag_overrides_settings(recorded: list[Request]) -> None:
    args = cli.parse_args(
        ["--base-url", "https://self-hosted.example/v3", "user-attrs", "user-1", "--attrs", '{"plan": "pro"}']
    )

    result = await cli.run(args, _settings())

    assert result.is_ok
    assert recorded[0].method == "PUT"
    assert str(recorded[0].url) == "https://self-hosted.example/v3/users/user-1"


@pytest.mark.asyncio
async def test_main_reports_failures(
    recorded: list[Request],
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("ENGAGESPOT_API_KEY", "api_key")
    monkeypatch.setenv("ENGAGESPOT_API_SECRET", "api_secret")
    monkeypatch.setenv("ENGAGESPOT_BASE_URL", "https://api.example.test/v3")

    exit_code = await cli.main_async(["user-attrs", "missing", "--attrs", '{"plan": "pro"}'])

    assert exit_code == 1
    report = json.loads(capsys.readouterr().out)
    assert report == {
        "status": "error",
        "statusCode": 404,
        "body": "user not found",
        "errorKind": "application",
    }
    assert len(recorded) == 1


@pytest.mark.asyncio
async def test_main_reports_missing_credentials(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setenv("ENGAGESPOT_API_KEY", "")
    monkeypatch.setenv("ENGAGESPOT_API_SECRET", "")

    exit_code = await cli.main_async(["user-attrs", "user-1", "--attrs", "{}"])

    assert exit_code == 1
    report = json.loads(capsys.readouterr().out)
    assert report["status"] == "error"
    assert "ENGAGESPOT_API_KEY" in report["message"]
