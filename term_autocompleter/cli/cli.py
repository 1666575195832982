"""
cli.py - command line front end

Two modes:
- `shell` (default): interactive slash-command loop over one in-memory engine,
  rendered with Rich tables
- `serve`: run the threaded JSON HTTP server

Terms live only as long as the process.
"""

import argparse
import shlex
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table
from rich import box
from rich.markup import escape
from rich.text import Text

from term_autocompleter.core.autocompleter import AutoCompleter
from term_autocompleter.errors import InvalidInput
from term_autocompleter.utils.config_manager import Config
from term_autocompleter.utils.logger_utils import configure_logging

HELP = (
    "cmds: /add <term>, /del <term>, /q <prefix> [boost]\n"
    "      /get <term>, /stats, /config, /help, /quit"
)


class CLI:
    """Slash-command shell around a single AutoCompleter."""

    def __init__(self, service: AutoCompleter, cfg: Optional[Config] = None, console: Optional[Console] = None):
        self.service = service
        self.cfg = cfg or Config()
        self.console = console or Console()
        self.running = True

    def run(self):
        self.console.rule("[bold magenta]Term Autocompleter[/bold magenta]")
        self.console.print("[cyan]Type /help for commands. Plain text is treated as a prefix query.[/cyan]")
        while self.running:
            try:
                line = Prompt.ask("[green]>>[/green]", default="", show_default=False, console=self.console)
            except (EOFError, KeyboardInterrupt):
                self.console.print("\nbye.")
                break
            self.handle(line)

    def handle(self, line: str) -> bool:
        """Run one input line. Returns False once the shell should stop."""
        line = line.strip()
        if not line:
            return self.running
        if not line.startswith("/"):
            self._query(line, None)
            return self.running
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]bad input:[/red] {e}")
            return self.running
        self.cmd(parts[0].lower(), parts[1:])
        return self.running

    def cmd(self, c: str, args: List[str]):
        if c in ("/quit", "/exit"):
            self.running = False
            self.console.print("bye.")

        elif c == "/help":
            self.console.print(HELP)

        elif c == "/add" and args:
            try:
                res = self.service.register(" ".join(args))
            except InvalidInput as e:
                self.console.print(f"[red]rejected:[/red] {e}")
                return
            self.console.print(f"[green]{escape(res['term'])}[/green] count={res['count']}")

        elif c == "/del" and args:
            res = self.service.delete(" ".join(args))
            if res["deleted"]:
                self.console.print("[yellow]removed[/yellow]")
            else:
                self.console.print(f"remaining={res['remaining']}")

        elif c == "/q":
            prefix = args[0] if args else ""
            boost = args[1] if len(args) > 1 else None
            self._query(prefix, boost)

        elif c == "/get" and args:
            res = self.service.get(" ".join(args))
            if res is None:
                self.console.print("[dim](unknown term)[/dim]")
            else:
                self.console.print(Text(f"{res['term']} count={res['count']}"))

        elif c == "/stats":
            self._show_stats()

        elif c == "/config":
            self.console.print(Panel(self.cfg.show(), title="Config", border_style="cyan"))

        else:
            self.console.print(f"[red]Unknown command:[/red] {escape(c)}")

    def _query(self, prefix: str, boost: Optional[str]):
        try:
            out = self.service.autocomplete(prefix, boost=boost)
        except InvalidInput as e:
            self.console.print(f"[red]rejected:[/red] {e}")
            return
        suggestions = out["suggestions"]
        if not suggestions:
            self.console.print("[dim](no suggestions)[/dim]")
            return
        table = Table(title="Suggestions", box=box.SIMPLE, show_edge=False)
        table.add_column("#", justify="right", style="cyan")
        table.add_column("Term", style="bold")
        table.add_column("Count", justify="right", style="magenta")
        for i, s in enumerate(suggestions, 1):
            table.add_row(str(i), Text(s["term"]), str(s["count"]))
        self.console.print(table)

    def _show_stats(self):
        st = self.service.stats()
        t = Table(title="Engine", box=box.MINIMAL)
        t.add_column("Metric", style="cyan")
        t.add_column("Value")
        for k in ("terms", "trie_nodes", "limit", "casing_policy"):
            t.add_row(k, str(st[k]))
        for op, v in st["ops"].items():
            t.add_row(op, f"{v['count']} calls, avg {v['avg'] * 1000:.3f} ms")
        self.console.print(t)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="term-autocompleter", description="In-memory prefix autocomplete")
    p.add_argument("--config", help="path to a JSON config file")
    p.add_argument("--log-level", help="override the configured log level")
    sub = p.add_subparsers(dest="mode")
    sub.add_parser("shell", help="interactive shell (default)")
    serve_p = sub.add_parser("serve", help="run the HTTP server")
    serve_p.add_argument("--host")
    serve_p.add_argument("--port", type=int)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config(args.config)
    if args.log_level:
        cfg.set("log_level", args.log_level)
    configure_logging(cfg.get("log_level"), path=cfg.get("log_file") or None)

    service = AutoCompleter.from_config(cfg)

    if args.mode == "serve":
        from term_autocompleter.server import serve

        serve(
            service,
            host=args.host or cfg.get("host"),
            port=args.port if args.port is not None else cfg.get("port"),
        )
        return 0

    CLI(service, cfg).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
