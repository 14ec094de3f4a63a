from __future__ import annotations
import argparse
from typing import Callable, Dict, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.box import ROUNDED

from flagbits.core.errors import FlagError
from flagbits.core.flags import FlagSet
from flagbits.core.logging import logger, LEVELS
from flagbits.core.widths import UINT, by_name
from flagbits.system.settings import Settings

console = Console(highlight=False)

def render_flags(fs: FlagSet, title: str = "flags", active_only: bool = True, full_width: bool = False) -> Table:
    table = Table(title=title, box=ROUNDED)
    table.add_column("Flag")
    table.add_column("Value", justify="right")
    table.add_column("Bits")
    table.add_column("Set")
    digits = fs.width.bits if full_width else 8
    shown = fs.get_active_flags() if active_only else dict(fs.flag_map)
    for name, value in shown.items():
        is_set = fs.get_value() & value != 0
        table.add_row(escape(name), str(value), format(value, f"0{digits}b"),
                      "[green]yes[/]" if is_set else "[dim]no[/]")
    return table

def _attempt(label: str, fn: Callable, *args) -> bool:
    """Run a flag operation; print the error and keep going if it fails."""
    try:
        fn(*args)
        return True
    except FlagError as e:
        console.print(f"[red]{escape(label)}:[/] {escape(str(e))}")
        logger.debug("OperationFailed", op=label, error=str(e))
        return False

def _show_state(fs: FlagSet, full_width: bool = False):
    console.print(render_flags(fs, title="current flags", full_width=full_width))
    console.print(f"current flag value: {fs.to_binary(full_width)}")

# --- Demos ---
def demo_map(full_width: bool = False):
    flags = {f"flag{i + 1}": 1 << i for i in range(23)}
    fs = FlagSet.from_map(flags, width=UINT, strict=True)

    _attempt("failed to set flags", fs.set_by_value, 6)
    _show_state(fs, full_width)
    console.print(f"has flag2: {fs.has_any_by_name('flag2')}")
    console.print(f"has flag3: {fs.has_all_by_name('flag3')}")

    _attempt("failed to toggle flag", fs.toggle_by_name, "flag2")
    _show_state(fs, full_width)

    _attempt("failed to toggle flag", fs.toggle_by_name, "flag23")
    _show_state(fs, full_width)
    console.print(f"current flag value int: {fs.get_value()}")

    fs2 = FlagSet.from_map(flags, width=UINT, strict=True)
    _attempt("failed to set flags", fs2.set_by_value, 4194308)
    _show_state(fs2, full_width)
    console.print(f"current flag value int: {fs2.get_value()}")

def demo_slice(full_width: bool = False):
    fs = FlagSet.from_names(["flag1", "flag2", "flag3"])

    _attempt("failed to set flag", fs.set_by_name, "flag1")
    console.print(f"flag1 set: {fs.has_by_name('flag1')}")

    _attempt("failed to clear flag", fs.clear_by_name, "flag1")
    console.print(f"flag1 set: {fs.has_by_name('flag1')}")

    _attempt("failed to toggle flag", fs.toggle_by_name, "flag2")
    _show_state(fs, full_width)

    _attempt("failed to toggle flag", fs.toggle_by_name, "flag2")
    _show_state(fs, full_width)

DEMOS: Dict[str, Callable[..., None]] = {"map": demo_map, "slice": demo_slice}

# --- Flag set construction from arguments ---
def parse_map_entries(entries: Sequence[str]) -> Dict[str, int]:
    flag_map: Dict[str, int] = {}
    for entry in entries:
        name, sep, raw = entry.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=BIT, got '{entry}'")
        flag_map[name] = int(raw, 0)
    return flag_map

def build_flagset(args: argparse.Namespace, settings: Settings) -> FlagSet:
    if args.names:
        return FlagSet.from_names(args.names)
    width = by_name(args.width or settings.data.width)
    return FlagSet.from_map(parse_map_entries(args.map), width=width, strict=settings.data.strict)

# --- Commands ---
def cmd_demo(args, settings: Settings) -> int:
    DEMOS[args.which](full_width=settings.data.full_width)
    return 0

def cmd_decode(args, settings: Settings) -> int:
    try:
        fs = build_flagset(args, settings)
        value = int(args.value, 0)
        fs.set_by_value(value)
    except (FlagError, ValueError) as e:
        console.print(f"[red]failed to decode:[/] {escape(str(e))}")
        return 1
    _show_state(fs, settings.data.full_width)
    return 0

SHELL_HELP = "commands: set|clear|toggle|has NAME, any|all NAME..., value [N], show, quit"

def run_shell(fs: FlagSet, read: Callable[[str], str] = input, full_width: bool = False):
    """Developer command loop over a flag set."""
    ops = {"set": fs.set_by_name, "clear": fs.clear_by_name, "toggle": fs.toggle_by_name}
    while True:
        try:
            line = read(":").strip()
        except EOFError:
            break
        if not line:
            continue
        cmd, *rest = line.split()
        if cmd in ("exit", "quit", "q"):
            break
        if cmd in ops and len(rest) == 1:
            if _attempt(f"failed to {cmd} flag", ops[cmd], rest[0]):
                console.print(fs.to_binary(full_width))
        elif cmd == "has" and len(rest) == 1:
            _attempt("failed to check flag", lambda n: console.print(f"{n} set: {fs.has_by_name(n)}"), rest[0])
        elif cmd in ("any", "all") and rest:
            check = fs.has_any_by_name if cmd == "any" else fs.has_all_by_name
            _attempt("failed to check flags", lambda *ns: console.print(f"{cmd}: {check(*ns)}"), *rest)
        elif cmd == "value" and len(rest) == 1:
            try:
                value = int(rest[0], 0)
            except ValueError:
                console.print(f"[red]not a number:[/] {escape(rest[0])}")
                continue
            if _attempt("failed to set flags", fs.set_by_value, value):
                console.print(fs.to_binary(full_width))
        elif cmd == "value":
            console.print(f"{fs.get_value()} ({fs.to_binary(full_width)})")
        elif cmd == "show":
            console.print(render_flags(fs, title="flags", active_only=False, full_width=full_width))
        else:
            console.print(SHELL_HELP)

def cmd_shell(args, settings: Settings) -> int:
    try:
        fs = build_flagset(args, settings)
    except (FlagError, ValueError) as e:
        console.print(f"[red]failed to build flag set:[/] {escape(str(e))}")
        return 1
    console.print(SHELL_HELP)
    run_shell(fs, full_width=settings.data.full_width)
    return 0

def cmd_config(args, settings: Settings) -> int:
    for item in args.set or []:
        key, sep, raw = item.partition("=")
        if not sep:
            console.print(f"[red]expected KEY=VALUE:[/] {escape(item)}")
            return 1
        try:
            settings.set(key.strip(), raw)
        except (KeyError, ValueError) as e:
            console.print(f"[red]failed to update settings:[/] {escape(str(e.args[0]))}")
            return 1
    if args.set:
        settings.save()
    table = Table(title=str(settings.path), box=ROUNDED)
    table.add_column("Setting")
    table.add_column("Value")
    for key, value in vars(settings.data).items():
        table.add_row(key, str(value))
    console.print(table)
    return 0

def _add_set_source(p: argparse.ArgumentParser):
    group = p.add_mutually_exclusive_group(required=True)
    group.add_argument("--names", nargs="+", metavar="NAME", help="flag names, assigned 1, 2, 4, ... in order")
    group.add_argument("--map", nargs="+", metavar="NAME=BIT", help="explicit flag values")
    p.add_argument("--width", help="width for --map sets (uint8, uint16, uint32, uint64, uint)")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flagbits", description="Named bit flags over unsigned integers.")
    parser.add_argument("--log-level", choices=LEVELS, help="override the configured log level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("demo", help="run an example program")
    p.add_argument("which", choices=sorted(DEMOS))
    p.set_defaults(func=cmd_demo)

    p = sub.add_parser("decode", help="decode an integer into named flags")
    p.add_argument("value", help="integer, e.g. 6, 0b110, 0x6")
    _add_set_source(p)
    p.set_defaults(func=cmd_decode)

    p = sub.add_parser("shell", help="interactive flag editing")
    _add_set_source(p)
    p.set_defaults(func=cmd_shell)

    p = sub.add_parser("config", help="show or change settings")
    p.add_argument("--set", action="append", metavar="KEY=VALUE")
    p.set_defaults(func=cmd_config)
    return parser

def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    logger.set_level(args.log_level or settings.data.log_level)
    logger.debug("Command", name=args.command)
    return args.func(args, settings)
