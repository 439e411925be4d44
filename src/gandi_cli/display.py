"""Output formats and human-readable rendering helpers."""

from __future__ import annotations

import argparse
import enum
import json
import sys
from typing import Any, Mapping, Optional, Sequence

import tomli_w
import yaml
from rich.console import Console
from rich.text import Text

from .errors import SerializationError


# Bound to whatever sys.stdout is at print time.
console = Console(highlight=False, soft_wrap=True)


class Format(enum.Enum):
    """Output format of a command invocation."""

    JSON = "json"
    TOML = "toml"
    YAML = "yaml"
    HUMAN = "human"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Format":
        """Pick the format from the ``--json``/``--toml``/``--yaml`` flags."""

        if getattr(args, "json", False):
            return cls.JSON
        if getattr(args, "toml", False):
            return cls.TOML
        if getattr(args, "yaml", False):
            return cls.YAML
        return cls.HUMAN


def add_format_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--json", action="store_true", help="Display result in json")
    group.add_argument("--toml", action="store_true", help="Display result in toml")
    group.add_argument("--yaml", action="store_true", help="Display result in yaml")


def render(data: Any, fmt: Format) -> str:
    """Serialize plain data (dicts, lists, scalars) to ``fmt``.

    ``None`` values are dropped for TOML since it has no null, and TOML
    documents must be tables, so a top-level list is refused.
    """

    if fmt is Format.JSON:
        try:
            return json.dumps(data, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as exc:
            raise SerializationError("json", str(exc)) from exc
    if fmt is Format.YAML:
        try:
            return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
        except yaml.YAMLError as exc:
            raise SerializationError("yaml", str(exc)) from exc
    if fmt is Format.TOML:
        if not isinstance(data, Mapping):
            raise SerializationError(
                "toml", f"unsupported top-level type {type(data).__name__}, expected a table"
            )
        try:
            return tomli_w.dumps(_drop_none(data))
        except (TypeError, ValueError) as exc:
            raise SerializationError("toml", str(exc)) from exc
    raise ValueError(f"{fmt} has no generic serializer")


def _drop_none(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_drop_none(v) for v in value if v is not None]
    return value


def write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def print_info(key: str, val: str) -> None:
    """Print a ``key: value`` line with colors."""

    console.print(Text.assemble((key, "bright_blue"), ": ", (str(val), "green")))


def print_flag(key: str, val: bool) -> None:
    if val:
        console.print(Text.assemble((key, "bright_blue"), ": ", ("active", "bright_green")))
    else:
        console.print(Text.assemble((key, "bright_blue"), ": ", ("inactive", "red")))


def print_list(key: str, values: Optional[Sequence[str]]) -> None:
    """Print a comma separated list, nothing when empty."""

    if values:
        print_info(key, ", ".join(values))


def print_tags(tags: Optional[Sequence[str]]) -> None:
    if tags:
        print_info("tags", " ".join(tags))


def print_line(line: str) -> None:
    console.print(Text(line))


def print_blank() -> None:
    console.print()
