## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys

from .types import uint
from .library import Library
from .loader import get_script_name


## OUTPUT
def op_print_b(text: str) -> None: print('\033[97m' + text + '\033[0m')
def op_print_int_b(x: int) -> None: print('\033[97m' + str(x) + '\033[0m')
def op_print_uint_b(x: uint) -> None: print('\033[97m' + str(x) + '\033[0m')
def op_print_float_b(x: float) -> None: print('\033[97m' + repr(x) + '\033[0m')
def op_warn_b(text: str) -> None: print('\033[33m' + text + '\033[0m', file=sys.stderr)


def load_builtins_library() -> Library:
    lib = Library()
    for k, fn in list(globals().items()):
        if not k.startswith('op_'): continue
        lib.add_function(get_script_name(k), fn)

    lib.ensure_consistent()
    return lib
