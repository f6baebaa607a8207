from __future__ import annotations

import json
import shlex
from pathlib import Path
from typing import Dict, List, Optional

import typer
from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from follow_graph.analysis.graph_builder import build_ego_graph, export_graphml
from follow_graph.config import Settings, get_settings
from follow_graph.errors import MalformedInputError
from follow_graph.logging import configure_logging, get_logger
from follow_graph.models.entity import (
    CollectionName,
    DisplayMode,
    RelationshipEntity,
    SortKey,
    SortOrder,
    ViewMode,
)
from follow_graph.state import (
    AnalyzerState,
    current_view,
    has_data,
    load_collection,
    monthly_report,
    reconciliation,
    select_view,
    set_sort,
    toggle_display,
    toggle_sort,
    view_counts,
)
from follow_graph.storage.export_reader import read_export
from follow_graph.views import caption, format_event_date, sort_indicator, title

app = typer.Typer(add_completion=False, help="Analyze exported follower/following data.")
LOGGER = get_logger(__name__)
console = Console()

FollowersOpt = typer.Option(None, "--followers", help="Followers export (JSON).")
FollowingOpt = typer.Option(None, "--following", help="Following export (JSON).")
ReceivedOpt = typer.Option(None, "--received", help="Received follow requests export (JSON).")
SentOpt = typer.Option(None, "--sent", help="Sent follow requests export (JSON).")
VerboseOpt = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")


def _settings() -> Settings:
    try:
        return get_settings()
    except Exception as exc:  # noqa: BLE001
        typer.secho(f"Failed to load settings: {exc}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)


def load_exports(state: AnalyzerState, paths: Dict[CollectionName, Optional[Path]]) -> AnalyzerState:
    for name, path in paths.items():
        if path is None:
            continue
        try:
            state = load_collection(state, name, read_export(path))
        except MalformedInputError as exc:
            LOGGER.error("Rejected %s upload %s: %s", name.value, path, exc)
            typer.secho(
                f"Error parsing {path}: {exc}. Please check the file format.",
                err=True,
                fg=typer.colors.RED,
            )
            raise typer.Exit(code=1)
    return state


def _initial_state(
    settings: Settings,
    followers: Optional[Path],
    following: Optional[Path],
    received: Optional[Path],
    sent: Optional[Path],
) -> AnalyzerState:
    return load_exports(
        AnalyzerState.from_settings(settings),
        {
            CollectionName.FOLLOWERS: followers,
            CollectionName.FOLLOWING: following,
            CollectionName.RECEIVED_REQUESTS: received,
            CollectionName.SENT_REQUESTS: sent,
        },
    )


def _entity_payload(entity: RelationshipEntity) -> dict:
    return {"identifier": entity.identifier, "event_time": entity.event_time}


def render_summary(state: AnalyzerState) -> None:
    counts = view_counts(state)
    for mode in ViewMode:
        typer.echo(f"{title(mode)}: {counts[mode]}")
    typer.echo(f"Mutual: {reconciliation(state).mutual_count}")


def render_view(state: AnalyzerState, settings: Settings) -> None:
    users = current_view(state)
    tz = settings.tzinfo()
    header = (
        f"{title(state.view_mode)} ({len(users)})  "
        f"Name {sort_indicator(state.sort_by, state.sort_order, SortKey.NAME)}  "
        f"Date {sort_indicator(state.sort_by, state.sort_order, SortKey.TIMESTAMP)}"
    )
    typer.secho(header, fg=typer.colors.BLUE)
    if not users:
        typer.echo("No accounts in this view.")
        return

    if state.display_mode is DisplayMode.TABLE:
        table = Table()
        table.add_column("Username")
        table.add_column("Date")
        for user in users:
            table.add_row(f"@{user.identifier}", format_event_date(user.event_time, tz))
        console.print(table)
    else:
        label = caption(state.view_mode)
        cards = [
            Panel(f"[bold]@{user.identifier}[/bold]\n{label}: {format_event_date(user.event_time, tz)}", expand=False)
            for user in users
        ]
        console.print(Columns(cards))


@app.command()
def summary(
    followers: Optional[Path] = FollowersOpt,
    following: Optional[Path] = FollowingOpt,
    received: Optional[Path] = ReceivedOpt,
    sent: Optional[Path] = SentOpt,
    verbose: bool = VerboseOpt,
) -> None:
    """Print the number of accounts in every view."""
    configure_logging(verbose=verbose)
    state = _initial_state(_settings(), followers, following, received, sent)
    if not has_data(state):
        typer.secho("No data loaded; pass at least one export file.", fg=typer.colors.YELLOW)
        return
    render_summary(state)


@app.command()
def show(
    followers: Optional[Path] = FollowersOpt,
    following: Optional[Path] = FollowingOpt,
    received: Optional[Path] = ReceivedOpt,
    sent: Optional[Path] = SentOpt,
    view: Optional[ViewMode] = typer.Option(None, help="Collection to display."),
    sort: Optional[SortKey] = typer.Option(None, help="Sort key."),
    order: Optional[SortOrder] = typer.Option(None, help="Sort order."),
    display: Optional[DisplayMode] = typer.Option(None, help="Grid cards or a table."),
    as_json: bool = typer.Option(False, "--json", help="Emit the view as JSON."),
    verbose: bool = VerboseOpt,
) -> None:
    """List the accounts of one view, sorted."""
    configure_logging(verbose=verbose)
    settings = _settings()
    state = _initial_state(settings, followers, following, received, sent)
    if view is not None:
        state = select_view(state, view)
    state = set_sort(state, sort or state.sort_by, order or state.sort_order)
    if display is not None and display is not state.display_mode:
        state = toggle_display(state)

    if as_json:
        typer.echo(json.dumps([_entity_payload(user) for user in current_view(state)], indent=2))
        return
    render_view(state, settings)


@app.command()
def monthly(
    followers: Optional[Path] = FollowersOpt,
    following: Optional[Path] = FollowingOpt,
    received: Optional[Path] = ReceivedOpt,
    sent: Optional[Path] = SentOpt,
    as_json: bool = typer.Option(False, "--json", help="Emit the report as JSON."),
    verbose: bool = VerboseOpt,
) -> None:
    """Print follower activity per calendar month."""
    configure_logging(verbose=verbose)
    settings = _settings()
    state = _initial_state(settings, followers, following, received, sent)
    rows = monthly_report(state, settings.tzinfo())

    if as_json:
        typer.echo(json.dumps([row.model_dump() for row in rows], indent=2))
        return
    if not rows:
        typer.secho("No activity to report.", fg=typer.colors.YELLOW)
        return

    table = Table(title="Activity Over Time")
    table.add_column("Month")
    for name in CollectionName:
        table.add_column(name.value.replace("_", " ").title(), justify="right")
    for row in rows:
        table.add_row(row.period, *(str(row.count_for(name)) for name in CollectionName))
    console.print(table)


@app.command("export-graph")
def export_graph(
    followers: Optional[Path] = FollowersOpt,
    following: Optional[Path] = FollowingOpt,
    received: Optional[Path] = ReceivedOpt,
    sent: Optional[Path] = SentOpt,
    output: Path = typer.Option(Path("data/follow_graph.graphml"), help="Destination path for GraphML export."),
    verbose: bool = VerboseOpt,
) -> None:
    """Build the relationship graph around the account owner and export it as GraphML."""
    configure_logging(verbose=verbose)
    settings = _settings()
    state = _initial_state(settings, followers, following, received, sent)
    graph = build_ego_graph(state.collections(), owner=settings.owner_label)
    export_graphml(graph, output)
    typer.secho(
        f"Graph exported with {graph.number_of_nodes()} nodes and {graph.number_of_edges()} edges to {output}",
        fg=typer.colors.GREEN,
    )


EXPLORE_HELP = """Commands:
  load <collection> <path>   replace a collection ({collections})
  view <mode>                switch view ({modes})
  sort <name|timestamp>      sort by key; repeat to flip the order
  display                    toggle grid/table
  summary                    show counts
  quit"""


def run_command(state: AnalyzerState, line: str) -> Optional[AnalyzerState]:
    """Apply one interactive command; ``None`` ends the session."""
    try:
        parts: List[str] = shlex.split(line)
    except ValueError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.YELLOW)
        return state
    if not parts:
        return state
    command, args = parts[0].lower(), parts[1:]

    if command in {"quit", "exit", "q"}:
        return None
    try:
        if command == "load" and len(args) == 2:
            return load_collection(state, CollectionName(args[0]), read_export(Path(args[1])))
        if command == "view" and len(args) == 1:
            return select_view(state, ViewMode(args[0]))
        if command == "sort" and len(args) == 1:
            return toggle_sort(state, SortKey(args[0]))
    except MalformedInputError as exc:
        typer.secho(f"Error parsing file: {exc}. Previous data kept.", err=True, fg=typer.colors.RED)
        return state
    except ValueError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.YELLOW)
        return state

    if command == "display" and not args:
        return toggle_display(state)
    if command == "summary" and not args:
        render_summary(state)
        return state

    typer.echo(
        EXPLORE_HELP.format(
            collections=", ".join(name.value for name in CollectionName),
            modes=", ".join(mode.value for mode in ViewMode),
        )
    )
    return state


@app.command()
def explore(
    followers: Optional[Path] = FollowersOpt,
    following: Optional[Path] = FollowingOpt,
    received: Optional[Path] = ReceivedOpt,
    sent: Optional[Path] = SentOpt,
    verbose: bool = VerboseOpt,
) -> None:
    """Interactive session: switch views, toggle sorting and reload exports."""
    configure_logging(verbose=verbose)
    settings = _settings()
    state: Optional[AnalyzerState] = _initial_state(settings, followers, following, received, sent)

    while state is not None:
        if has_data(state):
            render_view(state, settings)
        line = typer.prompt("follow-graph", default="help", show_default=False)
        state = run_command(state, line)


def main() -> None:
    app(prog_name="follow-graph")


if __name__ == "__main__":
    main()
