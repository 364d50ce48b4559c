"""Tests for the contentgen command line."""
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from contentgen import cli
from contentgen.errors import UnsupportedAuthTypeError
from contentgen.models import (
    Candidate,
    Content,
    CountTokensResponse,
    GenerateContentResponse,
    Part,
)
from contentgen.streaming import one_shot_stream

pytestmark = pytest.mark.unit


def text_response(text):
    return GenerateContentResponse(
        candidates=[Candidate(content=Content(role="model", parts=[Part(text=text)]), index=0)]
    )


@pytest.fixture
def generator():
    gen = MagicMock()
    gen.generate_content = AsyncMock(return_value=text_response("Paris"))
    gen.count_tokens = AsyncMock(return_value=CountTokensResponse(total_tokens=0))
    gen.aclose = AsyncMock()
    return gen


@pytest.fixture
def patched_factory(generator):
    with patch("contentgen.cli.create_content_generator", new_callable=AsyncMock) as factory, \
            patch("contentgen.cli.load_environment") as load_env:
        factory.return_value = generator
        yield factory, load_env


class TestCli:

    def test_generate_prints_text(self, patched_factory, generator, capsys, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")

        exit_code = cli.main(["--auth-type", "openai", "--model", "gpt-4o", "Capital of France?"])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "Paris"
        config = patched_factory[0].call_args.args[0]
        assert config.model == "gpt-4o"
        assert config.api_key == "sk-test"
        generator.aclose.assert_awaited_once()

    def test_stream_prints_chunks(self, patched_factory, generator, capsys):
        async def fetch():
            return text_response("streamed")

        generator.generate_content_stream = AsyncMock(return_value=one_shot_stream(fetch))

        exit_code = cli.main(["--auth-type", "deepseek", "--stream", "Hi"])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "streamed"

    def test_count_tokens(self, patched_factory, generator, capsys):
        exit_code = cli.main(["--auth-type", "glm", "--count-tokens", "Hi"])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == "0"

    def test_env_file_is_loaded(self, patched_factory):
        cli.main(["--auth-type", "openai", "--env-file", "/tmp/custom.env", "Hi"])
        patched_factory[1].assert_called_once_with("/tmp/custom.env")

    def test_configuration_error_exits_nonzero(self, patched_factory):
        patched_factory[0].side_effect = UnsupportedAuthTypeError("openai")

        assert cli.main(["--auth-type", "openai", "Hi"]) == 1

    def test_network_error_exits_nonzero(self, patched_factory, generator):
        generator.generate_content.side_effect = httpx.ConnectError("connection refused")

        assert cli.main(["--auth-type", "openai", "Hi"]) == 1
        generator.aclose.assert_awaited_once()

    def test_unknown_auth_type_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            cli.main(["--auth-type", "bogus", "Hi"])
