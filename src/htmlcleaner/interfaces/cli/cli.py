"""Command-line interface for htmlcleaner."""

import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ...application.cleaner import HTMLCleaner
from ...config.allowlist import load_allow_list_file, merge_rules, parse_allow_rules
from ...config.settings import Settings, get_settings
from ...domain.models import CleanerConfig, CleanResult, PolicyFlags
from ...utils.sanitization import default_config

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)


@dataclass
class CliOptions:
    """Parsed command-line arguments."""

    rules: List[str] = field(default_factory=list)
    allowlist_path: Optional[Path] = None
    allow_javascript_prefix: bool = False
    allow_querystring: bool = False
    json_output: bool = False
    report: bool = False
    source: Optional[str] = None
    show_help: bool = False


def _parse_args(args: List[str]) -> CliOptions:
    """Parse arguments into CliOptions.

    Args:
        args: Arguments without the program name.

    Returns:
        Parsed options.

    Raises:
        ValueError: On an unknown option, a missing option value or more
            than one input file.
    """
    options = CliOptions()
    remaining = list(args)

    while remaining:
        arg = remaining.pop(0)
        if arg in ("-h", "--help"):
            options.show_help = True
        elif arg in ("-a", "--allow"):
            if not remaining:
                raise ValueError(f"{arg} requires a TAG[:ATTR,...] rule")
            options.rules.append(remaining.pop(0))
        elif arg == "--allowlist":
            if not remaining:
                raise ValueError("--allowlist requires a file path")
            options.allowlist_path = Path(remaining.pop(0))
        elif arg == "--allow-javascript":
            options.allow_javascript_prefix = True
        elif arg == "--allow-querystring":
            options.allow_querystring = True
        elif arg == "--json":
            options.json_output = True
        elif arg == "--report":
            options.report = True
        elif arg.startswith("-") and arg != "-":
            raise ValueError(f"Unknown option: {arg}")
        elif options.source is not None:
            raise ValueError("Only one input file may be given")
        else:
            options.source = arg

    return options


def _build_config(options: CliOptions, settings: Settings) -> CleanerConfig:
    """Resolve the allow-list and policy from options, files and settings.

    Explicit rules and ``--allowlist`` take precedence over the settings
    allow-list, which takes precedence over the built-in default. Policy
    flags are enabled if any source enables them.
    """
    rules = parse_allow_rules(options.rules)
    allowlist_path = options.allowlist_path or (None if rules else settings.allowlist_path)

    if allowlist_path is not None:
        config = merge_rules(load_allow_list_file(allowlist_path), rules)
    elif rules:
        config = merge_rules(CleanerConfig(), rules)
    else:
        config = default_config()

    policy = PolicyFlags(
        allow_javascript_prefix=(
            options.allow_javascript_prefix
            or config.policy.allow_javascript_prefix
            or settings.allow_javascript_prefix
        ),
        allow_querystring=(
            options.allow_querystring
            or config.policy.allow_querystring
            or settings.allow_querystring
        ),
    )
    return CleanerConfig(allow_list=config.allow_list, policy=policy)


def _read_input(source: Optional[str]) -> str:
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _print_error(message: str) -> None:
    error_panel = Panel(
        f"[red]Error:[/red] {escape(message)}",
        title="[bold red]Error[/bold red]",
        border_style="red",
    )
    err_console.print(error_panel)


def _print_report(result: CleanResult, config: CleanerConfig) -> None:
    """Print pass statistics to stderr.

    Args:
        result: Result of the cleaning pass.
        config: Configuration the pass ran with.
    """
    stats = result.stats
    table = Table(
        title="[bold]Sanitization Report[/bold]",
        show_header=True,
        header_style="bold yellow",
        border_style="yellow",
        padding=(0, 1),
        box=None,
    )
    table.add_column("Metric", style="bright_white")
    table.add_column("Value", style="bright_cyan", justify="right")

    table.add_row("Allowed tags", str(len(config.allow_list.tags)))
    table.add_row("Input characters", str(result.source_length or 0))
    table.add_row("Output characters", str(len(result.output)))
    table.add_row("Tags kept", str(stats.tags_kept))
    table.add_row("Tags dropped", str(stats.tags_dropped))
    table.add_row("Subtrees removed", str(stats.subtrees_removed))
    table.add_row("Attributes dropped", str(stats.attributes_dropped))
    table.add_row("Truncated", "[red]yes[/red]" if stats.truncated else "no")
    table.add_row("[bold]Time[/bold]", f"[bold]{result.elapsed:.4f}s[/bold]")

    err_console.print(table)


def _print_help() -> None:
    """Print help message."""
    help_content = Text()
    help_content.append("htmlcleaner", style="bold cyan")
    help_content.append(" - Whitelist-based HTML sanitizer\n\n", style="white")

    help_content.append("Usage:\n", style="bold")
    help_content.append("  htmlcleaner", style="cyan")
    help_content.append(" [options] [FILE|-]\n\n", style="yellow")

    help_content.append("Options:\n", style="bold")
    options = [
        ("-a, --allow TAG[:ATTR,...]", "Allow a tag and its attributes (repeatable)"),
        ("--allowlist FILE", "Load allowed tags from a JSON file"),
        ("--allow-javascript", "Keep javascript: attribute values"),
        ("--allow-querystring", "Keep query strings in attribute values"),
        ("--json", "Print output and statistics as JSON"),
        ("--report", "Print a statistics table to stderr"),
        ("-h, --help", "Show this help"),
    ]
    for flag, description in options:
        help_content.append(f"  {flag:<30}", style="yellow")
        help_content.append(f"{description}\n", style="dim")

    help_content.append("\nExamples:\n", style="bold")
    help_content.append("  htmlcleaner -a p -a a:href,title page.html\n", style="dim")
    help_content.append("  cat page.html | htmlcleaner --allowlist allow.json --report\n\n", style="dim")

    help_content.append("Environment Variables:\n", style="bold")
    help_content.append("  HTMLCLEANER_ALLOWLIST", style="yellow")
    help_content.append("      Default JSON allow-list\n", style="dim")
    help_content.append("  HTMLCLEANER_LOG_LEVEL", style="yellow")
    help_content.append("      Logging level (default WARNING)\n", style="dim")

    help_panel = Panel(
        help_content,
        title="[bold bright_blue]Help[/bold bright_blue]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print(help_panel)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point.

    Usage:
        htmlcleaner -a p -a a:href page.html   # Sanitize a file
        htmlcleaner < page.html                # Default allow-list, stdin
        htmlcleaner --json --report page.html  # JSON output plus report

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = sys.argv[1:] if argv is None else argv

    try:
        options = _parse_args(args)
    except ValueError as e:
        _print_error(str(e))
        return 1

    if options.show_help:
        _print_help()
        return 0

    settings = get_settings()

    try:
        logging.basicConfig(
            level=settings.log_level, format="%(levelname)s %(name)s: %(message)s"
        )
        config = _build_config(options, settings)
        content = _read_input(options.source)
    except (OSError, ValueError) as e:
        logger.debug("Failed to prepare sanitization", exc_info=True)
        _print_error(str(e))
        return 1

    result = HTMLCleaner(config).clean_with_report(content)

    if options.json_output:
        output = {
            "output": result.output,
            "stats": result.stats.model_dump(),
            "elapsed": result.elapsed,
        }
        sys.stdout.write(json.dumps(output, indent=2) + "\n")
    else:
        sys.stdout.write(result.output)

    if options.report:
        _print_report(result, config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
