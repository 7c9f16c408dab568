"""Render message parameters as a YAML block for Loco asset notes."""

from __future__ import annotations

from typing import Any

import yaml

_INDENT = 5
_PAD = " " * _INDENT
_NO_BREAK_SPACE = "\u00a0"


class _IndentedSeqDumper(yaml.SafeDumper):
    """Safe dumper that indents block sequences below their mapping key.

    A mapping inside a sequence starts on the line after its bare ``-``.
    """

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)

    def expect_block_mapping(self) -> None:
        if self.sequence_context:
            self.write_line_break()
        super().expect_block_mapping()


def dump_parameters(parameters: Any) -> str:
    """Return ``{"parameters": parameters}`` as YAML for display in the Loco UI.

    Bare ``-`` lines are dropped and every indentation step becomes a single
    no-break space, which the Loco notes field renders verbatim.
    """
    dump = yaml.dump(
        {"parameters": parameters},
        Dumper=_IndentedSeqDumper,
        indent=_INDENT,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    dump = dump.replace(f"{_PAD}-\n", "")
    return dump.replace(_PAD, _NO_BREAK_SPACE)


__all__ = ["dump_parameters"]
