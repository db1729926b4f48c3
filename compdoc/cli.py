"""CLI entrypoints for compdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List

from .assembler import ManifestAssembler
from .config import CompdocConfig, ConfigError, load_config, resolve_manifest_path
from .extractors import default_extractors
from .library import LibraryLayout, LibraryNotFoundError, optional_library_root, resolve_library_root
from .logging import configure_logging, get_logger
from .query import ComponentIndex, QueryTools, UnknownToolError, UsageExampleRenderer
from .stores import ManifestLoadError, ManifestStore

TRANSPORTS = ("stdio", "http")


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "--config",
        default=None,
        help="Path to .compdoc.yml or the directory holding it (defaults to the current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compdoc",
        description="Extract a component manifest from a Vue design system and serve it to assistants.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Extract the component manifest from the library sources.",
    )
    _add_common_options(generate_parser)
    generate_parser.add_argument(
        "--library",
        default=None,
        help="Path to the component library root (overrides config and environment).",
    )
    generate_parser.add_argument(
        "--output",
        default=None,
        help="Where to write the manifest JSON.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the query tools over MCP stdio or HTTP.",
    )
    _add_common_options(serve_parser)
    serve_parser.add_argument("--manifest", default=None, help="Path to the manifest JSON.")
    serve_parser.add_argument(
        "--library",
        default=None,
        help="Library root used by get_component_source (optional).",
    )
    serve_parser.add_argument(
        "--transport",
        choices=TRANSPORTS,
        default="stdio",
        help="Transport to serve on (default: stdio).",
    )
    serve_parser.add_argument("--host", default=None, help="HTTP bind address.")
    serve_parser.add_argument("--port", type=int, default=None, help="HTTP port.")

    tool_parser = subparsers.add_parser(
        "tool",
        help="Run a single query tool and print its result.",
    )
    _add_common_options(tool_parser)
    tool_parser.add_argument("name", help="Tool name, e.g. get_component.")
    tool_parser.add_argument(
        "--arg",
        dest="arguments",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Tool argument; repeat for several.",
    )
    tool_parser.add_argument("--manifest", default=None, help="Path to the manifest JSON.")
    tool_parser.add_argument("--library", default=None, help="Library root (optional).")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for compdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    try:
        config = load_config(Path(args.config) if args.config else None)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    if args.command == "generate":
        try:
            output = run_generate(config, library=args.library, output=args.output)
        except LibraryNotFoundError as exc:
            parser.exit(1, f"{exc}\n")
        print(f"Manifest written to {_relativize(output)}")
    elif args.command == "serve":
        try:
            tools = build_tools(config, manifest=args.manifest, library=args.library)
        except ManifestLoadError as exc:
            parser.exit(1, f"{exc}\n")
        if args.transport == "http":
            from .service import run_service

            host = args.host or config.server.host
            port = args.port or config.server.port
            run_service(lambda: tools, host=host, port=port)
        else:
            from .mcp_server import run_server

            run_server(tools, config.server.name)
    elif args.command == "tool":
        try:
            arguments = _parse_arguments(args.arguments)
        except ValueError as exc:
            parser.exit(2, f"{exc}\n")
        try:
            tools = build_tools(config, manifest=args.manifest, library=args.library)
            result = tools.call(args.name, arguments)
        except ManifestLoadError as exc:
            parser.exit(1, f"{exc}\n")
        except UnknownToolError:
            parser.exit(1, f"Unknown tool: {args.name}. Available: {', '.join(tools.names)}\n")
        if result.is_error:
            parser.exit(1, f"{result.content}\n")
        print(result.content)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def run_generate(
    config: CompdocConfig, *, library: str | None = None, output: str | None = None
) -> Path:
    """Extract the manifest for the configured library and write it to disk."""
    root = resolve_library_root(config, library)
    layout = LibraryLayout.from_config(root, config)
    assembler = ManifestAssembler(
        layout,
        extractors=default_extractors(config),
        category_overrides=config.extraction.categories,
    )
    manifest = assembler.build()
    manifest_path = resolve_manifest_path(config, output)
    size = ManifestStore(manifest_path).save(manifest)
    assembler.log_summary(manifest, size)
    get_logger("cli").info("Manifest written to %s", manifest_path)
    return manifest_path


def build_tools(
    config: CompdocConfig, *, manifest: str | None = None, library: str | None = None
) -> QueryTools:
    """Load the manifest and wire the query tools for it."""
    store = ManifestStore(resolve_manifest_path(config, manifest))
    index = ComponentIndex(store.load())
    root = optional_library_root(config, library)
    layout = LibraryLayout.from_config(root, config) if root is not None else None
    usage = UsageExampleRenderer(config.usage.tag_prefix, config.usage.import_package)
    return QueryTools(index, layout=layout, usage=usage)


def _parse_arguments(pairs: List[str]) -> Dict[str, str]:
    arguments: Dict[str, str] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key:
            raise ValueError(f"Invalid --arg {pair!r}; expected KEY=VALUE")
        arguments[key] = value
    return arguments


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
