## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
import dataclasses

from .tokens import Token, TokenKind
from .types import AbstractValue, Types


def write_without_ansi(write_fn):
    """Wrapper function that strips ANSI codes before calling the original writer."""
    ansi_re = re.compile(r'\033\[[0-9;]*m')
    return lambda text: write_fn(ansi_re.sub('', text))


def format_token(token: Token) -> str:
    if token.kind in (TokenKind.IDENTIFIER, TokenKind.STRING, TokenKind.NUMBER):
        return f"{token.kind.name.title()}({token.text})"
    return token.kind.name


def format_value(value: AbstractValue) -> str:
    match value.type:
        case Types.VOID:
            return 'Void'
        case Types.STRING:
            return 'String("' + value.to_str().replace('"', '\\"') + '")'
        case Types.BOOLEAN:
            return f"Boolean({str(value.to_bool()).lower()})"
        case Types.INTEGER | Types.UNSIGNED_INTEGER | Types.FLOAT:
            return f"{value.type.value}({value.to_python()!r})"
    return f"{value.type.value}({value.memory.hex()})"


def format_tree(node, indent: int = 0) -> str:
    """Indented dump of a syntax tree, one node per line with its memory hint."""
    pad = ' ' * indent
    header = f"{pad}{type(node).__name__} \033[90m[{node.memory_hint()}B]\033[0m"
    lines, children = [], []
    for f in dataclasses.fields(node):
        attr = getattr(node, f.name)
        if isinstance(attr, list):
            children.extend(attr)
        elif dataclasses.is_dataclass(attr) and not isinstance(attr, Token):
            children.append(attr)
        elif isinstance(attr, Token):
            lines.append(f"{f.name}={attr.text}")
        else:
            lines.append(f"{f.name}={attr!r}")
    if lines:
        header += ' ' + ' '.join(lines)
    return '\n'.join([header] + [format_tree(c, indent + 4) for c in children])


def format_source_context(source: str, line: int, column: int, length: int = 1, filename: str = '<INPUT>') -> str:
    lines = source.splitlines()
    start_line, end_line = max(0, line - 3), min(len(lines), line + 2)
    result = [f"\033[97m  File \"{filename}\", line {line}\033[0m"]

    for i in range(start_line, end_line):
        line_content = lines[i]
        line_color = '\033[90m'
        if i+1 == line:
            line_color = '\033[97m'
            if 0 < column <= len(line_content):
                line_content = (
                    line_content[:column-1] +
                    f"\033[48;5;30m\033[1;97m{line_content[column-1:column+length-1]}\033[0m" +
                    line_content[column+length-1:]
                )
        result.append(f"{line_color}{i+1:>5} |\033[0m {line_content}")
    return '\n' + '\n'.join(result) + '\n'
