"""Command line entry point: ``markscope <text...>``.

All arguments are joined with single spaces, parsed with the built-in HTML
grammar, and the outcome tree is printed as JSON. The command has no
options: ``--help``, ``-n`` and ``--`` are all part of the text.
"""

from __future__ import annotations

import click

from markscope._serialize import to_json
from markscope._tokenizer import parse


class _TextCommand(click.Command):
    """A command whose arguments are taken verbatim."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        ctx.args = list(args)
        return ctx.args


@click.command(cls=_TextCommand, context_settings={"help_option_names": []})
@click.pass_context
def main(ctx: click.Context) -> None:
    """Parse the arguments with the built-in HTML elements and print JSON."""
    click.echo(to_json(parse(" ".join(ctx.args))))
