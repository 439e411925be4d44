import argparse
import json
from argparse import Namespace
from typing import Any, Callable, List

import httpx
import pytest

from pydantic import Field

from gandi_cli.api.common import ApiModel
from gandi_cli.command import COMMAND_PATH_DEST, Command, build_parser_tree, dispatch
from gandi_cli.config import Configuration
from gandi_cli.display import Format, print_info
from gandi_cli.errors import HttpStatusError, SerializationError, TransportError


CONFIG = Configuration(apikey="secret", endpoint="http://api.test")


class Thing(ApiModel):
    name: str
    size: int


class ThingShowCommand(Command):
    group = "show"
    name = "thing"
    item_type = Thing

    def build_request(self, config: Configuration, args: argparse.Namespace) -> httpx.Request:
        return config.build_request("/v5/thing")

    def display_human_result(self, item: Thing) -> None:
        print_info("name", item.name)

    def display_human_headers(self, headers: httpx.Headers) -> None:
        print_info("count", headers.get("X-Count", "none"))


class ThingListCommand(ThingShowCommand):
    group = "list"
    name = "things"
    item_type = List[Thing]

    def display_human_result(self, item: List[Thing]) -> None:
        for thing in item:
            print_info("name", thing.name)


def _args(*path: str, **flags: Any) -> Namespace:
    return Namespace(**{COMMAND_PATH_DEST: tuple(path)}, **flags)


def test_can_handle_matches_exact_path() -> None:
    command = ThingShowCommand()
    args = _args("show", "thing")

    assert command.can_handle(args) is args
    assert command.can_handle(_args("list", "things")) is None
    assert command.can_handle(Namespace()) is None


def test_handle_is_a_noop_when_not_routed(
    mock_client: Callable[..., httpx.Client], capsys: pytest.CaptureFixture[str]
) -> None:
    captured: List[httpx.Request] = []

    with mock_client(json={"name": "a", "size": 1}, captured=captured) as client:
        assert ThingShowCommand().handle(CONFIG, Namespace(group=None), client) is False

    assert captured == []
    assert capsys.readouterr().out == ""


def test_process_human_prints_result_then_headers(
    mock_client: Callable[..., httpx.Client], capsys: pytest.CaptureFixture[str]
) -> None:
    captured: List[httpx.Request] = []

    with mock_client(json={"name": "a", "size": 1}, headers={"X-Count": "7"}, captured=captured) as client:
        assert ThingShowCommand().handle(CONFIG, _args("show", "thing"), client) is True

    assert capsys.readouterr().out.splitlines() == ["name: a", "count: 7"]
    assert str(captured[0].url) == "http://api.test/v5/thing"
    assert captured[0].headers["Authorization"] == "Apikey secret"


@pytest.mark.parametrize("flag", ["json", "yaml", "toml"])
def test_machine_formats_skip_header_output(
    flag: str, mock_client: Callable[..., httpx.Client], capsys: pytest.CaptureFixture[str]
) -> None:
    with mock_client(json={"name": "a", "size": 1}, headers={"X-Count": "7"}) as client:
        ThingShowCommand().process(CONFIG, _args("show", "thing", **{flag: True}), client)

    out = capsys.readouterr().out
    assert "count" not in out
    assert "a" in out


def test_non_success_status_raises_without_decoding(
    mock_client: Callable[..., httpx.Client], capsys: pytest.CaptureFixture[str]
) -> None:
    with mock_client(status=404, json={"message": "not found"}) as client:
        with pytest.raises(HttpStatusError) as excinfo:
            ThingShowCommand().process(CONFIG, _args("show", "thing"), client)

    error = excinfo.value
    assert error.status == "404 Not Found"
    assert json.loads(error.body) == {"message": "not found"}
    assert "404" in str(error)
    assert '"message": "not found"' in str(error) or '"message":"not found"' in str(error)
    assert capsys.readouterr().out == ""


def test_undecodable_body_is_a_json_error(mock_client: Callable[..., httpx.Client]) -> None:
    with mock_client(json={"name": "a"}) as client:
        with pytest.raises(SerializationError) as excinfo:
            ThingShowCommand().process(CONFIG, _args("show", "thing"), client)

    assert excinfo.value.fmt == "json"


def test_invalid_json_body_is_a_json_error(mock_client: Callable[..., httpx.Client]) -> None:
    with mock_client(text="<html>oops</html>") as client:
        with pytest.raises(SerializationError, match="Json Formatting Error"):
            ThingShowCommand().process(CONFIG, _args("show", "thing"), client)


def test_transport_failure_is_wrapped() -> None:
    def _handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with httpx.Client(transport=httpx.MockTransport(_handler)) as client:
        with pytest.raises(TransportError, match="connection refused"):
            ThingShowCommand().process(CONFIG, _args("show", "thing"), client)


def test_toml_on_a_list_fails_after_decoding(mock_client: Callable[..., httpx.Client]) -> None:
    with mock_client(json=[{"name": "a", "size": 1}]) as client:
        with pytest.raises(SerializationError) as excinfo:
            ThingListCommand().process(CONFIG, _args("list", "things", toml=True), client)

    assert excinfo.value.fmt == "toml"


def test_display_result_uses_api_field_names(capsys: pytest.CaptureFixture[str]) -> None:
    class Typed(ApiModel):
        type_: str = Field(alias="type")

    class TypedCommand(ThingShowCommand):
        item_type = Typed

    TypedCommand().display_result(Typed(type="individual"), Format.JSON)

    assert json.loads(capsys.readouterr().out) == {"type": "individual"}


def test_dispatch_runs_only_the_first_match(
    mock_client: Callable[..., httpx.Client], capsys: pytest.CaptureFixture[str]
) -> None:
    captured: List[httpx.Request] = []
    first, duplicate = ThingShowCommand(), ThingShowCommand()

    with mock_client(json={"name": "a", "size": 1}, captured=captured) as client:
        ran = dispatch([ThingListCommand(), first, duplicate], CONFIG, _args("show", "thing"), client)

    assert ran is first
    assert len(captured) == 1


def test_dispatch_without_match(mock_client: Callable[..., httpx.Client]) -> None:
    with mock_client() as client:
        assert dispatch([ThingShowCommand()], CONFIG, Namespace(), client) is None


def test_parser_tree_nests_multi_word_names() -> None:
    class NestedCommand(ThingListCommand):
        name = "dns records"

    commands = [ThingShowCommand(), ThingListCommand(), NestedCommand()]
    parser = argparse.ArgumentParser()
    build_parser_tree(parser.add_subparsers(dest="group"), commands)

    args = parser.parse_args(["list", "dns", "records", "--json"])
    assert args.json is True
    assert NestedCommand().can_handle(args) is args
    assert ThingListCommand().can_handle(args) is None

    args = parser.parse_args(["show", "thing", "--yaml"])
    assert ThingShowCommand().can_handle(args) is args
    assert Format.from_args(args) is Format.YAML


def test_adapter_is_built_once_per_command() -> None:
    command = ThingShowCommand()

    assert command.adapter is command.adapter
    assert command.adapter.validate_python({"name": "a", "size": 1}) == Thing(name="a", size=1)
