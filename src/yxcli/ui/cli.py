"""Command-line interface router for yx-cli."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from yxcli.completion import (
    SUPPORTED_SHELLS,
    CommandNode,
    command_tree_from_parser,
    complete,
    completion_script,
)
from yxcli.config import (
    AliasStore,
    AliasStoreError,
    ConfigLoadError,
    ConfigValidationError,
    dump_effective_config,
    load_alias_file,
    load_config,
    parse_config_overrides,
    redact_config,
)
from yxcli.constants import COMPLETE_COMMAND, PROGRAM_NAME, VERSION
from yxcli.macro import (
    AliasTable,
    MacroError,
    define_alias,
    expand,
    join_tokens,
    remove_alias,
    reserved_command_names,
)
from yxcli.main import ExitCode
from yxcli.observability import setup_logging, shutdown_logging
from yxcli.ui.catalog import OUTPUT_OPTIONS, REMOTE_COMMANDS, CommandDecl, OptionDecl
from yxcli.ui.render import CLIRenderer, create_renderer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CLIError(RuntimeError):
    """Typed CLI failure with an explicit process exit code."""

    message: str
    exit_code: int = 1

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Per-invocation state shared by command handlers."""

    config: Mapping[str, Any]
    tree: CommandNode
    store: AliasStore
    reserved_names: frozenset[str]


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse command router; its metadata also feeds shell completion."""

    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=(
            "yx - command line client with user-defined aliases.\n\n"
            "Common workflows:\n"
            "  yx alias set co 'pr checkout'     Define a shortcut\n"
            "  yx co REPO 42                     Run it\n"
            "  yx completion bash                Print a shell completion script\n"
            "  yx -c observability.log_level=DEBUG co REPO 42\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "--config",
        "-c",
        dest="config_overrides",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help=(
            "Override a config value for this run, e.g. observability.log_level=DEBUG. "
            "Repeatable; must come before the command."
        ),
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Show debug logging on stderr.",
    )
    common.add_argument(
        "--no-color",
        action="store_true",
        default=False,
        help="Disable colored output (also respects NO_COLOR env var).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    _add_alias_commands(subparsers, common)

    # completion ----------------------------------------------------------
    completion_parser = subparsers.add_parser(
        "completion",
        parents=[common],
        help="Print a shell completion script",
        description=(
            "Print a completion script that asks yx for candidates.\n\n"
            "Examples:\n"
            '  eval "$(yx completion bash)"\n'
            "  yx completion fish > ~/.config/fish/completions/yx.fish\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    completion_parser.add_argument("shell", choices=SUPPORTED_SHELLS, help="Target shell")
    completion_parser.set_defaults(handler=_cmd_completion)

    # config --------------------------------------------------------------
    config_parser = subparsers.add_parser(
        "config",
        parents=[common],
        help="Show the effective configuration (redacted)",
    )
    config_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    config_parser.set_defaults(handler=_cmd_config)

    # help ----------------------------------------------------------------
    help_parser = subparsers.add_parser("help", help="Show help for a command")
    help_parser.add_argument("topic", nargs="*", help="Command path, e.g. 'pr checkout'")
    help_parser.set_defaults(handler=_cmd_help, root_parser=parser)

    # Registered without help= so it stays out of listings and completion.
    complete_parser = subparsers.add_parser(COMPLETE_COMMAND, add_help=False)
    complete_parser.add_argument("words", nargs=argparse.REMAINDER)
    complete_parser.set_defaults(handler=_cmd_complete)

    for command in REMOTE_COMMANDS:
        _add_remote_command(subparsers, command, common, prefix=())

    return parser


def _add_alias_commands(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    common: argparse.ArgumentParser,
) -> None:
    alias_parser = subparsers.add_parser(
        "alias",
        help="Create command shortcuts",
        description=(
            "Aliases replace a leading word with a stored expansion before dispatch.\n\n"
            "Examples:\n"
            "  yx alias set co 'pr checkout --org acme'\n"
            "  yx alias set pco 'co --draft'\n"
            "  yx alias list\n"
            "  yx alias expand pco repo 42\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    alias_sub = alias_parser.add_subparsers(
        dest="alias_command", required=True, metavar="<subcommand>"
    )

    list_parser = alias_sub.add_parser(
        "list", aliases=["ls"], parents=[common], help="List configured aliases"
    )
    list_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    list_parser.set_defaults(handler=_cmd_alias_list)

    set_parser = alias_sub.add_parser(
        "set",
        parents=[common],
        help="Create or change an alias",
        description=(
            "Define NAME as a shortcut for EXPANSION. Several expansion words are quoted\n"
            "and joined; a single word is stored verbatim. Put option-like words after\n"
            "'--' or inside quotes.\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    set_parser.add_argument("name", help="Alias name")
    set_parser.add_argument("expansion", nargs="+", help="Expansion words")
    set_parser.add_argument(
        "--clobber", action="store_true", help="Overwrite an existing alias with the same name"
    )
    set_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    set_parser.set_defaults(handler=_cmd_alias_set)

    delete_parser = alias_sub.add_parser(
        "delete", aliases=["rm"], parents=[common], help="Delete an alias"
    )
    delete_parser.add_argument("name", help="Alias name")
    delete_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    delete_parser.set_defaults(handler=_cmd_alias_delete)

    import_parser = alias_sub.add_parser(
        "import", parents=[common], help="Import aliases from a YAML file"
    )
    import_parser.add_argument("file", help="YAML mapping of alias name to expansion")
    import_parser.add_argument(
        "--clobber", action="store_true", help="Overwrite existing aliases with the same name"
    )
    import_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    import_parser.set_defaults(handler=_cmd_alias_import)

    expand_parser = alias_sub.add_parser(
        "expand", parents=[common], help="Show what an argv expands to"
    )
    expand_parser.add_argument("--json", action="store_true", help="Emit deterministic JSON output")
    expand_parser.add_argument("words", nargs=argparse.REMAINDER, help="Command words")
    expand_parser.set_defaults(handler=_cmd_alias_expand)


def _add_remote_command(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    command: CommandDecl,
    common: argparse.ArgumentParser,
    *,
    prefix: tuple[str, ...],
) -> None:
    path = (*prefix, command.name)
    if command.children:
        group_parser = subparsers.add_parser(
            command.name, help=command.help, description=command.help
        )
        nested = group_parser.add_subparsers(
            dest=f"{'_'.join(path)}_command", required=True, metavar="<subcommand>"
        )
        for child in command.children:
            _add_remote_command(nested, child, common, prefix=path)
        return

    leaf_parser = subparsers.add_parser(
        command.name, parents=[common], help=command.help, description=command.help
    )
    for argument in command.arguments:
        leaf_parser.add_argument(argument, metavar=argument.upper())
    option_dests = tuple(
        _add_declared_option(leaf_parser, option).dest
        for option in (*command.options, *OUTPUT_OPTIONS)
    )
    leaf_parser.set_defaults(
        handler=_cmd_remote,
        remote_path=path,
        remote_arguments=command.arguments,
        remote_options=option_dests,
    )


def _add_declared_option(parser: argparse.ArgumentParser, option: OptionDecl) -> argparse.Action:
    if option.metavar is None:
        return parser.add_argument(*option.flags, action="store_true", help=option.help)
    if option.repeatable:
        return parser.add_argument(
            *option.flags, metavar=option.metavar, action="append", help=option.help
        )
    return parser.add_argument(*option.flags, metavar=option.metavar, help=option.help)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def run_cli(argv: Sequence[str] | None = None) -> int:
    """Expand aliases, parse argv, route to a command handler, and return the exit code."""

    raw_argv = list(sys.argv[1:] if argv is None else argv)
    global_argv, command_argv = _split_global_options(raw_argv)
    parser = build_parser()
    tree = command_tree_from_parser(parser, name=PROGRAM_NAME)

    # Intercepted before argparse: partial words may look like unknown options.
    if raw_argv and raw_argv[0] == COMPLETE_COMMAND:
        _print_completions(tree, raw_argv[1:])
        return int(ExitCode.SUCCESS)

    try:
        config = load_config(cli_overrides=parse_config_overrides(global_argv[1::2]))
    except (ConfigLoadError, ConfigValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return int(ExitCode.CONFIG_ERROR)

    observability = config["observability"]
    setup_logging(observability)
    try:
        context = CLIContext(
            config=config,
            tree=tree,
            store=AliasStore(config["paths"]["alias_store"]),
            reserved_names=reserved_command_names(tree),
        )
        try:
            expanded = _expand_argv(command_argv, context)
            namespace = parser.parse_args([*global_argv, *expanded])
            if getattr(namespace, "verbose", False):
                setup_logging({**observability, "log_level": "DEBUG"})
            handler = getattr(namespace, "handler", None)
            if not callable(handler):
                parser.print_help(sys.stderr)
                return int(ExitCode.CONFIG_ERROR)
            result = handler(namespace, context)
        except CLIError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return int(exc.exit_code)
        return int(result)
    finally:
        shutdown_logging()


def main(argv: Sequence[str] | None = None) -> int:
    """Compatibility wrapper for main-module wiring."""

    return run_cli(argv)


def _split_global_options(argv: list[str]) -> tuple[list[str], list[str]]:
    """Peel leading ``--config KEY=VALUE`` pairs off ``argv`` so aliases see the command."""

    options: list[str] = []
    index = 0
    while index < len(argv):
        token = argv[index]
        if token in ("--config", "-c") and index + 1 < len(argv):
            options.extend(("--config", argv[index + 1]))
            index += 2
        elif token.startswith("--config="):
            options.extend(("--config", token.partition("=")[2]))
            index += 1
        elif token.startswith("-c") and len(token) > 2:
            options.extend(("--config", token[2:]))
            index += 1
        else:
            break
    return options, argv[index:]


def _expand_argv(raw_argv: list[str], context: CLIContext) -> list[str]:
    if not raw_argv or raw_argv[0] in context.reserved_names:
        return raw_argv
    table = _load_aliases(context)
    try:
        return expand(raw_argv, table)
    except MacroError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.ALIAS_ERROR) from exc


def _print_completions(tree: CommandNode, words: Sequence[str]) -> None:
    for candidate in complete(tree, words):
        print(candidate)


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_alias_list(args: argparse.Namespace, context: CLIContext) -> int:
    table = _load_aliases(context)

    if _flag(args, "json"):
        _emit_json({"command": "alias list", "aliases": dict(table.items())})
        return 0

    renderer = _get_renderer(args)
    if not table:
        renderer.text("no aliases configured")
        renderer.next_steps(["yx alias set co 'pr checkout'"])
        return 0
    renderer.table(("NAME", "EXPANSION"), [(name, table[name]) for name in table])
    return 0


def _cmd_alias_set(args: argparse.Namespace, context: CLIContext) -> int:
    name = _require_str(args.name, "name")
    words = list(args.expansion)
    expansion = words[0] if len(words) == 1 else join_tokens(words)
    previous = _load_aliases(context).get(name)

    _update_aliases(
        context,
        lambda table: define_alias(
            table,
            name,
            expansion,
            reserved_names=context.reserved_names,
            overwrite=_flag(args, "clobber"),
        ),
    )

    replaced = previous is not None
    if _flag(args, "json"):
        _emit_json(
            {
                "command": "alias set",
                "alias": name,
                "expansion": expansion,
                "replaced": replaced,
            }
        )
        return 0

    renderer = _get_renderer(args)
    verb = "Changed" if replaced else "Added"
    renderer.ok(f"{verb} alias {name}: {expansion}")
    return 0


def _cmd_alias_delete(args: argparse.Namespace, context: CLIContext) -> int:
    name = _require_str(args.name, "name")
    table = _load_aliases(context)
    expansion = table.get(name)
    _update_aliases(context, lambda current: remove_alias(current, name))

    if _flag(args, "json"):
        _emit_json({"command": "alias delete", "alias": name, "expansion": expansion})
        return 0

    _get_renderer(args).ok(f"Deleted alias {name}; was {expansion}")
    return 0


def _cmd_alias_import(args: argparse.Namespace, context: CLIContext) -> int:
    try:
        entries = load_alias_file(args.file)
    except AliasStoreError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.CONFIG_ERROR) from exc

    overwrite = _flag(args, "clobber")

    def _define_all(table: AliasTable) -> AliasTable:
        for name in sorted(entries):
            table = define_alias(
                table,
                name,
                entries[name],
                reserved_names=context.reserved_names,
                overwrite=overwrite,
            )
        return table

    _update_aliases(context, _define_all)
    imported = sorted(entries)

    if _flag(args, "json"):
        _emit_json({"command": "alias import", "file": args.file, "imported": imported})
        return 0

    renderer = _get_renderer(args)
    if not imported:
        renderer.text(f"no aliases found in {args.file}")
        return 0
    for name in imported:
        renderer.ok(f"Imported alias {name}: {entries[name]}")
    return 0


def _cmd_alias_expand(args: argparse.Namespace, context: CLIContext) -> int:
    words = list(args.words)
    if words[:1] == ["--"]:
        words = words[1:]
    if not words:
        raise CLIError("alias expand requires at least one word", exit_code=ExitCode.COMMAND_ERROR)
    table = _load_aliases(context)
    try:
        expanded = expand(words, table)
    except MacroError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.ALIAS_ERROR) from exc

    if _flag(args, "json"):
        _emit_json({"command": "alias expand", "argv": list(words), "expanded": expanded})
        return 0

    _get_renderer(args).text(join_tokens(expanded))
    return 0


def _cmd_completion(args: argparse.Namespace, context: CLIContext) -> int:
    try:
        script = completion_script(args.shell)
    except ValueError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.COMMAND_ERROR) from exc
    print(script, end="")
    return 0


def _cmd_complete(args: argparse.Namespace, context: CLIContext) -> int:
    _print_completions(context.tree, list(args.words))
    return 0


def _cmd_config(args: argparse.Namespace, context: CLIContext) -> int:
    redacted = redact_config(context.config)

    if _flag(args, "json"):
        print(dump_effective_config(context.config))
        return 0

    _get_renderer(args).text(json.dumps(redacted, indent=2, sort_keys=True, ensure_ascii=False))
    return 0


def _cmd_help(args: argparse.Namespace, context: CLIContext) -> int:
    parser: argparse.ArgumentParser = args.root_parser
    for word in args.topic:
        child = _subparser(parser, word)
        if child is None:
            raise CLIError(
                f"unknown help topic: {' '.join(args.topic)}", exit_code=ExitCode.COMMAND_ERROR
            )
        parser = child
    parser.print_help()
    return 0


def _cmd_remote(args: argparse.Namespace, context: CLIContext) -> int:
    path: tuple[str, ...] = args.remote_path
    arguments = {name: getattr(args, name) for name in args.remote_arguments}
    options = {
        dest: value
        for dest in args.remote_options
        if (value := getattr(args, dest, None)) not in (None, False)
    }
    logger.info("remote command resolved", extra={"command_path": list(path)})
    _emit_json({"command": " ".join(path), "arguments": arguments, "options": options})
    return 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_aliases(context: CLIContext) -> AliasTable:
    try:
        return context.store.load()
    except AliasStoreError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.CONFIG_ERROR) from exc


def _update_aliases(context: CLIContext, mutator: Callable[[AliasTable], AliasTable]) -> None:
    try:
        context.store.update(mutator)
    except MacroError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.ALIAS_ERROR) from exc
    except AliasStoreError as exc:
        raise CLIError(str(exc), exit_code=ExitCode.CONFIG_ERROR) from exc


def _subparser(parser: argparse.ArgumentParser, word: str) -> argparse.ArgumentParser | None:
    for action in parser._actions:
        if isinstance(action, argparse._SubParsersAction):
            found = action.choices.get(word)
            if isinstance(found, argparse.ArgumentParser):
                return found
    return None


def _emit_json(payload: Mapping[str, object]) -> None:
    """Emit a JSON payload to stdout with deterministic formatting."""

    print(json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


def _get_renderer(args: argparse.Namespace) -> CLIRenderer:
    return create_renderer(no_color=_flag(args, "no_color"), verbose=_flag(args, "verbose"))


def _require_str(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise CLIError(f"{name} must be a non-empty string", exit_code=ExitCode.COMMAND_ERROR)
    return value


def _flag(args: argparse.Namespace, name: str) -> bool:
    return bool(getattr(args, name, False))


__all__ = ["CLIContext", "CLIError", "build_parser", "main", "run_cli"]
