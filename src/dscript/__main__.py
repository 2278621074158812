## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# dscript — A small embeddable scripting language for short reactive snippets.
#

import sys
import traceback
from pathlib import Path
from dataclasses import dataclass

import click

from .tokens import TokenKind
from .types import AbstractValue
from .errors import ScriptError, InvalidToken, ParserError
from .formatting import write_without_ansi, format_token, format_value, format_tree, format_source_context

from . import api


@dataclass(frozen=True)
class RuntimeConfig:
    ignore: bool
    plain: bool


@dataclass
class ExecutionItem:
    source: str
    filename: str


def _is_incomplete(exc: ScriptError) -> bool:
    return isinstance(exc, ParserError) and exc.token is not None and exc.token.kind == TokenKind.EOF


class ScriptRunner:
    def __init__(self, config: RuntimeConfig):
        self.ignore = config.ignore
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.failure = False
        self.partial = False

    def _maybe_fatal_error(self, message: str, detail: str, exc_type: str = None, context: str = '', is_repl: bool = False) -> None:
        header = detail if not exc_type else f"{detail} (Exception: \033[33m{exc_type}\033[0m)"
        print(f'\033[30;43m {message} \033[0m {header}\n{context}', file=sys.stderr)
        self.failure = True
        if not is_repl and not self.ignore: sys.exit(1)

    def _handle_exception(self, exc, filename: str, source: str, is_repl: bool = False) -> bool:
        if isinstance(exc, InvalidToken):
            context = format_source_context(source, exc.line, exc.column, filename=filename)
            context += f"\n\033[90m{exc}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Tokenizing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context, is_repl)
        elif isinstance(exc, ParserError):
            if is_repl and _is_incomplete(exc): return True
            context = ''
            if exc.token is not None:
                context = format_source_context(source, exc.line, exc.column, max(1, len(exc.token.text)), filename=filename)
            context += f"\n\033[90m{exc}\033[0m\n"
            self._maybe_fatal_error("SYNTAX ERROR.", f"Parsing `\033[97m{filename}\033[0m` caused a problem!", type(exc).__name__, context, is_repl)
        else:
            print(f'\033[30;43m INTERNAL ERROR. \033[0m Script `\033[97m{filename}\033[0m` crashed the interpreter! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            traceback.print_exc()
            self.failure = True
            if not is_repl and not self.ignore: sys.exit(1)
        return False

    def _report_result(self, value: AbstractValue) -> None:
        print(f"\033[90m>>>\033[0m {format_value(value)}")

    def _report_error(self, message: str) -> None:
        print(f'\033[30;43m RUNTIME ERROR. \033[0m {message}', file=sys.stderr)
        self.partial = True

    def dump_tokens(self, item: ExecutionItem) -> None:
        try:
            for token in self.runtime.tokenize(item.source):
                print(f"\033[90m{token.line:>4}:{token.column:<4}\033[0m {format_token(token)}")
        except (ScriptError, Exception) as exc:
            self._handle_exception(exc, item.filename, item.source)

    def dump_tree(self, item: ExecutionItem) -> None:
        try:
            print(format_tree(self.runtime.parse(item.source)))
        except (ScriptError, Exception) as exc:
            self._handle_exception(exc, item.filename, item.source)

    def execute_items(self, items: list[ExecutionItem]) -> None:
        for item in items:
            self._execute_script(item.source, item.filename)

    def _execute_script(self, source: str, filename: str, is_repl: bool = False) -> bool:
        try:
            self.runtime.run(source, on_result=self._report_result, on_error=self._report_error)
        except (ScriptError, Exception) as exc:
            return self._handle_exception(exc, filename, source, is_repl=is_repl)
        return False

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('dscript - Embeddable scripting language REPL; type Ctrl+C to exit.')
        source = ""

        while True:
            try:
                prompt = "\033[36m<<< \033[0m" if not source.strip() else "\033[36m... \033[0m"
                line = input(prompt)
                if len(line.strip()) == 0: continue
                if line.strip() in ('quit', 'exit'): break
                source += line + "\n"

                # Incomplete statements keep accumulating until they parse.
                if not self._execute_script(source, '<REPL>', is_repl=True):
                    source = ""

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.failure: return 1
        return 2 if self.partial else 0


def _read_item(script) -> ExecutionItem:
    return ExecutionItem(script.read(), script.name or '<STDIN>')


@click.group()
@click.option('--ignore', '-i', is_flag=True, help='Ignore syntax errors and continue with the next script.')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, ignore: bool, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RuntimeConfig(ignore=ignore, plain=plain)


@cli.command('tokens')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def dump_tokens(ctx: click.Context, script) -> None:
    runner = ScriptRunner(ctx.obj['config'])
    runner.dump_tokens(_read_item(script))
    ctx.exit(runner.finalize())


@cli.command('ast')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def dump_ast(ctx: click.Context, script) -> None:
    runner = ScriptRunner(ctx.obj['config'])
    runner.dump_tree(_read_item(script))
    ctx.exit(runner.finalize())


@cli.command('run')
@click.argument('scripts', type=click.File('r', encoding='utf-8'), nargs=-1, required=True)
@click.pass_context
def run_files(ctx: click.Context, scripts) -> None:
    runner = ScriptRunner(ctx.obj['config'])
    runner.execute_items([_read_item(s) for s in scripts])
    ctx.exit(runner.finalize())


@cli.command('exec')
@click.argument('commands', nargs=-1, required=True)
@click.pass_context
def run_commands(ctx: click.Context, commands: tuple[str, ...]) -> None:
    runner = ScriptRunner(ctx.obj['config'])
    runner.execute_items([ExecutionItem(c, f'<INPUT_{i}>') for i, c in enumerate(commands, start=1)])
    ctx.exit(runner.finalize())


@cli.command('repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = ScriptRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in ('--ignore', '--plain', '-i', '-p')]
    r = [t for t in a if t not in g]

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run', ['-']) if not sys.stdin.isatty() else ('repl', [])
    elif r[0] in ('-c', '--command'):
        cmd, tail = 'exec', r[1:]
    elif r[0] in cli.commands:
        cmd, tail = r[0], r[1:]
    elif r == ['-'] or all(Path(t).suffix == '.ds' for t in r):
        cmd, tail = 'run', r
    else:
        # Unknown commands and --help are reported by click itself.
        cmd, tail = None, r

    cli.main(args=[*g, *([cmd] if cmd else []), *tail], prog_name='dscript')


if __name__ == "__main__":
    main()
