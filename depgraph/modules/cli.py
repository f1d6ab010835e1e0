# depgraph/modules/cli.py
"""
Command line front-end for the dependency graph engine.
- Uses rich for colored output, tables and trees.
- Reads a graph from a JSON description (--graph) or uses the built-in sample.
- Each subcommand loads a fresh graph, so the destructive sort runs once per snapshot.

Usage examples:
  python -m depgraph.modules.cli all
  python -m depgraph.modules.cli --graph deps.json check
  python -m depgraph.modules.cli --graph deps.json order --install
  python -m depgraph.modules.cli dot --out deps.dot
  python -m depgraph.modules.cli im pkgB@2.3.0 --transitive

Exit codes: 0 ok, 1 cycle/conflict found, 2 bad input, 3 unexpected error.
"""

from __future__ import annotations
import argparse
import sys
import traceback
from typing import List, Optional

# rich UI
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.tree import Tree

from depgraph.modules.config import config
from depgraph.modules.conflict import ConflictDetector
from depgraph.modules.cycles import CycleDetector
from depgraph.modules.graph import DependencyGraph, PackageNotFound
from depgraph.modules.impact import ImpactAnalyzer
from depgraph.modules.loader import GraphFormatError, load_graph, sample_graph
from depgraph.modules.logger import get_logger, set_level
from depgraph.modules.package import Package
from depgraph.modules.sorter import TopologicalSorter
from depgraph.modules.visualizer import Visualizer

LOG = get_logger("cli")

EXIT_OK = 0
EXIT_FOUND = 1
EXIT_INPUT = 2
EXIT_ERROR = 3


def print_panel(console: Console, title: str, text: str, style: str = "green"):
    console.print(Panel(text, title=title, style=style))

# Create console with color toggles
def make_console(no_color: bool, quiet: bool) -> Console:
    if no_color:
        return Console(color_system=None, no_color=True, force_terminal=False, quiet=quiet)
    return Console(quiet=quiet)


class CLI:
    def __init__(self, console: Console, graph_path: Optional[str] = None, out=None):
        self.console = console
        self.graph_path = graph_path
        self.out = out or sys.stdout
        self.sorter = TopologicalSorter(strict_reuse=config.getboolean("graph", "strict_reuse", fallback=True))
        self.visualizer = Visualizer(sort_edges=config.getboolean("graph", "sort_edges", fallback=True))
        self.cycles = CycleDetector()
        self.conflicts = ConflictDetector()
        self.impact = ImpactAnalyzer()

    def load(self) -> DependencyGraph:
        if self.graph_path:
            LOG.info(f"loading graph from {self.graph_path}")
            return load_graph(self.graph_path)
        LOG.info("using built-in sample graph")
        return sample_graph()

    def _package_table(self, title: str, packages: List[Package], numbered: bool = False) -> Table:
        table = Table(title=title)
        if numbered:
            table.add_column("#", justify="right")
        table.add_column("Package", style="bold")
        table.add_column("Version")
        for i, pkg in enumerate(packages, 1):
            row = [pkg.name, pkg.version]
            if numbered:
                row.insert(0, str(i))
            table.add_row(*row)
        return table

    def _report_cycle(self, graph: DependencyGraph) -> bool:
        cycle = self.cycles.find_cycle(graph)
        if cycle is None:
            return False
        path = " -> ".join(p.label for p in cycle)
        print_panel(self.console, "cycle", f"Cycle detected! Resolving is not possible.\n{path}", style="red")
        return True

    # -----------------------
    # check
    # -----------------------
    def cmd_check(self, args: argparse.Namespace) -> int:
        graph = self.load()
        has_cycle = self._report_cycle(graph)
        found = self.conflicts.conflicts(graph)
        table = Table(title="Graph check")
        table.add_column("Check", style="bold")
        table.add_column("Result")
        table.add_row("packages", str(len(graph)))
        table.add_row("edges", str(graph.edge_count()))
        table.add_row("cycle", "[red]yes[/red]" if has_cycle else "[green]no[/green]")
        table.add_row("version conflicts", f"[red]{len(found)}[/red]" if found else "[green]0[/green]")
        self.console.print(table)
        return EXIT_FOUND if has_cycle or found else EXIT_OK

    # -----------------------
    # order
    # -----------------------
    def cmd_order(self, args: argparse.Namespace) -> int:
        graph = self.load()
        if args.levels:
            levels = self.sorter.levels(graph)
            if not levels:
                self._report_cycle(graph)
                return EXIT_FOUND
            tree = Tree("[bold]Build levels[/bold]")
            for i, level in enumerate(levels, 1):
                branch = tree.add(f"level {i}")
                for pkg in level:
                    branch.add(pkg.label)
            self.console.print(tree)
            return EXIT_OK

        result = self.sorter.sort(graph)
        if not result.ok:
            self._report_cycle(graph)
            self.console.print("[red]Cycle detected! Topological sort is not possible.[/red]")
            return EXIT_FOUND
        order = result.install_order() if args.install else result.order
        title = "Install order" if args.install else "Topological Order (Build Order)"
        self.console.print(self._package_table(title, order, numbered=True))
        return EXIT_OK

    # -----------------------
    # conflicts
    # -----------------------
    def cmd_conflicts(self, args: argparse.Namespace) -> int:
        graph = self.load()
        found = self.conflicts.conflicts(graph)
        if not found:
            self.console.print("[green]No version conflicts[/green]")
            return EXIT_OK
        table = Table(title="Version conflicts")
        table.add_column("Package", style="bold")
        table.add_column("Version")
        table.add_column("Dependency", style="bold")
        table.add_column("Version")
        for c in found:
            table.add_row(c.package.name, c.package.version, c.dependency.name, c.dependency.version)
        self.console.print(table)
        return EXIT_FOUND

    # -----------------------
    # dot
    # -----------------------
    def cmd_dot(self, args: argparse.Namespace) -> int:
        graph = self.load()
        if args.out:
            path = self.visualizer.write(graph, args.out)
            self.console.print(f"[blue]Wrote[/blue] {path}")
        else:
            self.out.write(self.visualizer.render(graph))
        return EXIT_OK

    # -----------------------
    # impact
    # -----------------------
    def cmd_impact(self, args: argparse.Namespace) -> int:
        graph = self.load()
        target = Package.parse(args.package)
        if not graph.exists(target):
            raise PackageNotFound(target)
        if args.transitive:
            found = self.impact.transitive_dependents(graph, target)
        else:
            found = self.impact.dependents(graph, target)
        if not found:
            self.console.print(f"[green]Nothing depends on {target}[/green]")
            return EXIT_OK
        kind = "transitive" if args.transitive else "direct"
        self.console.print(self._package_table(f"Impact analysis for {target} ({kind})", found))
        return EXIT_OK

    # -----------------------
    # all: cycle check, order, conflicts, dot, impact
    # -----------------------
    def cmd_all(self, args: argparse.Namespace) -> int:
        graph = self.load()
        target = Package.parse(args.target) if args.target else self._default_target(graph)
        if target is not None and not graph.exists(target):
            raise PackageNotFound(target)
        if self._report_cycle(graph):
            return EXIT_FOUND

        status = EXIT_OK
        result = self.sorter.sort(graph)
        self.console.print(self._package_table("Topological Order (Build Order)", result.order, numbered=True))

        for c in self.conflicts.conflicts(graph):
            self.console.print(f"[yellow]Conflict detected:[/yellow] {c.describe()}")
            status = EXIT_FOUND

        print_panel(self.console, "graphviz", self.visualizer.render(graph).rstrip(), style="cyan")

        if target is not None:
            found = self.impact.dependents(graph, target)
            lines = [f"Package {p.label} depends on {target.label}" for p in found] or ["no dependents"]
            print_panel(self.console, f"Impact analysis for package: {target.name}", "\n".join(lines), style="magenta")
        return status

    @staticmethod
    def _default_target(graph: DependencyGraph) -> Optional[Package]:
        # pacote com mais dependentes diretos
        counts = graph.in_degree_snapshot()
        if not counts:
            return None
        return max(sorted(counts, key=Package.sort_key), key=lambda p: counts[p])


# -----------------------
# CLI wiring and argparse setup
# -----------------------
def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="depgraph", description="package dependency graph analysis (rich-enabled)")
    ap.add_argument("--no-color", action="store_true", help="Disable color output")
    ap.add_argument("--quiet", action="store_true", help="Quiet mode; less output")
    ap.add_argument("--graph", help="JSON graph description (default: built-in sample)")
    ap.add_argument("--log-level", choices=("debug", "info", "success", "warning", "error"),
                    help="Override [logging] level from depgraph.conf")
    sub = ap.add_subparsers(dest="command", required=True)

    sub.add_parser("check", aliases=["c"], help="Detect cycles and version conflicts")

    p_order = sub.add_parser("order", aliases=["o"], help="Topological build order")
    p_order.add_argument("--install", action="store_true", help="Show dependencies before dependents")
    p_order.add_argument("--levels", action="store_true", help="Group packages into build levels")

    sub.add_parser("conflicts", aliases=["cf"], help="List edges with incompatible versions")

    p_dot = sub.add_parser("dot", aliases=["d"], help="Export graphviz text")
    p_dot.add_argument("--out", help="Write to file instead of stdout")

    p_impact = sub.add_parser("impact", aliases=["im"], help="Packages depending on PACKAGE")
    p_impact.add_argument("package", help="name@version")
    p_impact.add_argument("--transitive", action="store_true", help="Include indirect dependents")

    p_all = sub.add_parser("all", aliases=["a"], help="Run every analysis in sequence")
    p_all.add_argument("--target", help="Impact analysis target (name@version)")

    return ap


COMMANDS = {
    "check": "cmd_check", "c": "cmd_check",
    "order": "cmd_order", "o": "cmd_order",
    "conflicts": "cmd_conflicts", "cf": "cmd_conflicts",
    "dot": "cmd_dot", "d": "cmd_dot",
    "impact": "cmd_impact", "im": "cmd_impact",
    "all": "cmd_all", "a": "cmd_all",
}


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None, out=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    parser = build_argparser()
    args = parser.parse_args(argv)

    if args.log_level:
        set_level(args.log_level)
    console = console or make_console(args.no_color, args.quiet)
    cli = CLI(console=console, graph_path=args.graph, out=out)

    handler = getattr(cli, COMMANDS[args.command])
    try:
        return handler(args)
    except (GraphFormatError, PackageNotFound, ValueError, OSError) as e:
        console.print(f"[red]{e}[/red]")
        LOG.error(str(e))
        return EXIT_INPUT
    except Exception as e:
        console.print(f"[red]Unhandled CLI error: {e}[/red]")
        LOG.error(traceback.format_exc())
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
