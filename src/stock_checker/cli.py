"""Click-based CLI for stock-checker.

Thin wrapper around library modules: every command delegates to the
market gateways, the search orchestrator, or the preference store, and
only decides how to render the Outcome it gets back.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from datetime import date

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

console = Console(stderr=True)

_API_KEY_OPTION = click.option(
    "--api-key",
    "-k",
    envvar="STOCK_CHECKER_API_KEY",
    required=True,
    help="Alpha Vantage API key (or set STOCK_CHECKER_API_KEY).",
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run_async(coro):
    """Run an async coroutine from synchronous Click code."""
    return asyncio.run(coro)


def _load_config(ctx: click.Context):
    """Load config lazily, caching on first call."""
    if "config" not in ctx.obj:
        from stock_checker.core import load_config

        ctx.obj["config"] = load_config(config_path=ctx.obj.get("config_path"))
        _configure_logging(
            "DEBUG" if ctx.obj.get("verbose") else ctx.obj["config"].logging.level
        )
    return ctx.obj["config"]


def _configure_logging(level: str) -> None:
    """Send log records to stderr through rich; keep request URLs out."""
    from stock_checker.market.client import quiet_transport_loggers

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    quiet_transport_loggers()


def _preferences(ctx: click.Context):
    from stock_checker.prefs import JsonFilePreferenceStore, Preferences

    if "preferences" not in ctx.obj:
        config = _load_config(ctx)
        store = JsonFilePreferenceStore(config.preferences.resolved_path)
        ctx.obj["preferences"] = Preferences(store)
    return ctx.obj["preferences"]


def _language(ctx: click.Context) -> str:
    return ctx.obj.get("lang") or _preferences(ctx).language.value


def _t(ctx: click.Context, key: str) -> str:
    from stock_checker.i18n import translate

    return translate(_language(ctx), key)


def _fail(ctx: click.Context, outcome) -> None:
    """Print a failed Outcome's message and exit 1."""
    console.print(f"[red]{_t(ctx, outcome.reason or 'upstream_error')}[/red]")
    if ctx.obj.get("verbose") and outcome.detail:
        console.print(f"[dim]{outcome.detail}[/dim]")
    raise SystemExit(1)


def _resolve_period(ctx: click.Context, period: str | None):
    from stock_checker.market import parse_period

    if period is None:
        return _preferences(ctx).period
    key = parse_period(period)
    if key is None:
        raise click.UsageError(f"Unknown period: {period}")
    return key


def _output_quote_table(ctx: click.Context, record) -> None:
    """Render a QuoteRecord as a Rich table."""
    colour = "green" if record.change >= 0 else "red"
    sign = "+" if record.change >= 0 else ""

    table = Table(title=f"{record.symbol}  ({record.timestamp})", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", justify="right")
    table.add_row(_t(ctx, "quotePrice"), f"${record.price:.2f}")
    table.add_row(
        _t(ctx, "quoteChange"),
        f"[{colour}]{sign}{record.change:.2f} ({record.change_percent:.2f}%)[/{colour}]",
    )
    table.add_row(_t(ctx, "quoteHigh"), f"${record.high:.2f}")
    table.add_row(_t(ctx, "quoteLow"), f"${record.low:.2f}")
    table.add_row(_t(ctx, "quoteVolume"), f"{record.volume:,}")
    console.print(table)


def _output_chart(ctx: click.Context, history, period) -> None:
    """Render the windowed bars of ``history`` as a Rich table."""
    from stock_checker.market import window_by_period

    windowed = window_by_period(history.bars, period, date.today())
    if not windowed.is_ok:
        console.print(f"[red]{_t(ctx, windowed.reason)}[/red]")
        return
    bars = windowed.unwrap()

    line_style = "bright_cyan" if _preferences(ctx).is_dark_mode else "blue"
    table = Table(
        title=f"{history.symbol} - {_t(ctx, 'chartTitle')} ({_t(ctx, f'period{period.value}')})",
        caption=f"{_t(ctx, 'chartDataPoints')}: {len(bars)}",
    )
    table.add_column("Date")
    table.add_column(_t(ctx, "chartClose"), justify="right", style=line_style)
    table.add_column(_t(ctx, "chartHigh"), justify="right")
    table.add_column(_t(ctx, "chartLow"), justify="right")
    for bar in bars:
        table.add_row(
            f"{bar.date.month}/{bar.date.day}",
            f"${bar.close:.2f}",
            f"${bar.high:.2f}",
            f"${bar.low:.2f}",
        )

    if history.bars and not bars:
        console.print(f"[yellow]{_t(ctx, 'chartNoDataInPeriod')}[/yellow]")
    console.print(table)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    envvar="STOCK_CHECKER_CONFIG",
    default=None,
    help="Path to stock-checker.yml config file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output.",
)
@click.option(
    "--lang",
    type=click.Choice(["ja", "en"]),
    default=None,
    help="Message language (default: saved preference or system locale).",
)
@click.version_option(package_name="stock-checker")
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool, lang: str | None) -> None:
    """Stock Checker: quotes and daily charts from Alpha Vantage."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["lang"] = lang
    ctx.obj["console"] = console


# ---------------------------------------------------------------------------
# quote
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("symbol")
@_API_KEY_OPTION
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
@click.pass_context
def quote(ctx: click.Context, symbol: str, api_key: str, fmt: str) -> None:
    """Show the current quote for SYMBOL."""
    config = _load_config(ctx)

    async def _run():
        from stock_checker.market import AlphaVantageClient, QuoteGateway

        async with AlphaVantageClient(config.provider) as client:
            return await QuoteGateway(client).fetch_quote(symbol, api_key)

    outcome = _run_async(_run())
    if not outcome.is_ok:
        _fail(ctx, outcome)

    record = outcome.unwrap()
    if fmt == "json":
        from stock_checker.api.schemas import QuoteResponse

        click.echo(QuoteResponse.from_record(record).model_dump_json(by_alias=True, indent=2))
    else:
        _output_quote_table(ctx, record)


# ---------------------------------------------------------------------------
# history
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("symbol")
@_API_KEY_OPTION
@click.option(
    "--period",
    "-p",
    type=str,
    default=None,
    help="Chart period: 1W, 1M, 3M, 6M or 1Y (default: saved preference).",
)
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format.",
)
@click.pass_context
def history(ctx: click.Context, symbol: str, api_key: str, period: str | None, fmt: str) -> None:
    """Show daily closes for SYMBOL within a chart period."""
    config = _load_config(ctx)
    period_key = _resolve_period(ctx, period)

    async def _run():
        from stock_checker.market import AlphaVantageClient, HistoryGateway

        async with AlphaVantageClient(config.provider) as client:
            return await HistoryGateway(client).fetch_history(symbol, api_key)

    outcome = _run_async(_run())
    if not outcome.is_ok:
        _fail(ctx, outcome)

    result = outcome.unwrap()
    if fmt == "json":
        from stock_checker.market import window_by_period

        bars = window_by_period(result.bars, period_key, date.today()).unwrap()
        output = {
            "symbol": result.symbol,
            "period": period_key.value,
            "lastRefreshed": result.last_refreshed,
            "data": [b.model_dump(mode="json") for b in bars],
        }
        click.echo(json.dumps(output, indent=2, default=str))
    else:
        _output_chart(ctx, result, period_key)


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------


@cli.command()
@click.argument("symbol")
@_API_KEY_OPTION
@click.option(
    "--server",
    "-s",
    type=str,
    default=None,
    help="Base URL of a running stock-checker API (default: call the provider directly).",
)
@click.option(
    "--period",
    "-p",
    type=str,
    default=None,
    help="Chart period: 1W, 1M, 3M, 6M or 1Y (default: saved preference).",
)
@click.pass_context
def search(
    ctx: click.Context, symbol: str, api_key: str, server: str | None, period: str | None
) -> None:
    """Quote SYMBOL, then fetch its history for the chart.

    The history request waits the configured delay after a successful
    quote. A failed history is reported next to the quote.
    """
    config = _load_config(ctx)
    period_key = _resolve_period(ctx, period)
    language = _language(ctx)

    def _on_change(view) -> None:
        if ctx.obj["verbose"]:
            console.print(f"[dim]{view.symbol}: {view.state}[/dim]")

    async def _run():
        from stock_checker.market import AlphaVantageClient, HistoryGateway, QuoteGateway
        from stock_checker.search import RemoteGateway, SearchOrchestrator

        if server:
            async with RemoteGateway(
                server, language=language, timeout=config.provider.request_timeout
            ) as remote:
                orchestrator = SearchOrchestrator(
                    remote.fetch_quote,
                    remote.fetch_history,
                    delay=config.provider.history_delay_seconds,
                    on_change=_on_change,
                )
                return await orchestrator.search(symbol.upper(), api_key)

        async with AlphaVantageClient(config.provider) as client:
            orchestrator = SearchOrchestrator(
                QuoteGateway(client).fetch_quote,
                HistoryGateway(client).fetch_history,
                delay=config.provider.history_delay_seconds,
                on_change=_on_change,
            )
            return await orchestrator.search(symbol.upper(), api_key)

    with console.status(_t(ctx, "searching")):
        view = _run_async(_run())

    if not view.quote.is_ok:
        _fail(ctx, view.quote)
    _output_quote_table(ctx, view.quote.unwrap())

    if view.history is not None and view.history.is_ok:
        _output_chart(ctx, view.history.unwrap(), period_key)
    else:
        reason = view.history.reason if view.history is not None else "upstream_error"
        console.print(
            f"[yellow]{_t(ctx, 'chartUnavailable')}: {_t(ctx, reason)}[/yellow]"
        )


# ---------------------------------------------------------------------------
# prefs
# ---------------------------------------------------------------------------


@cli.group()
def prefs() -> None:
    """View or change saved language, theme and chart period."""


@prefs.command("show")
@click.pass_context
def prefs_show(ctx: click.Context) -> None:
    """Show current preferences."""
    p = _preferences(ctx)
    table = Table(title="Preferences")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("language", p.language.value)
    table.add_row("theme", p.theme.value)
    table.add_row("chartPeriod", p.period.value)
    console.print(table)


@prefs.command("set-language")
@click.argument("language", type=click.Choice(["ja", "en"]))
@click.pass_context
def prefs_set_language(ctx: click.Context, language: str) -> None:
    """Save the message language."""
    saved = _preferences(ctx).set_language(language)
    console.print(f"[green]✓[/green] language = {saved.value}")


@prefs.command("toggle-language")
@click.pass_context
def prefs_toggle_language(ctx: click.Context) -> None:
    """Switch between Japanese and English."""
    saved = _preferences(ctx).toggle_language()
    console.print(f"[green]✓[/green] language = {saved.value}")


@prefs.command("set-theme")
@click.argument("theme", type=click.Choice(["light", "dark"]))
@click.pass_context
def prefs_set_theme(ctx: click.Context, theme: str) -> None:
    """Save the colour theme."""
    saved = _preferences(ctx).set_theme(theme)
    console.print(f"[green]✓[/green] theme = {saved.value}")


@prefs.command("toggle-theme")
@click.pass_context
def prefs_toggle_theme(ctx: click.Context) -> None:
    """Switch between light and dark."""
    saved = _preferences(ctx).toggle_theme()
    console.print(f"[green]✓[/green] theme = {saved.value}")


@prefs.command("set-period")
@click.argument("period")
@click.pass_context
def prefs_set_period(ctx: click.Context, period: str) -> None:
    """Save the default chart period (1W, 1M, 3M, 6M, 1Y)."""
    try:
        saved = _preferences(ctx).set_period(period)
    except ValueError as e:
        raise click.UsageError(str(e)) from e
    console.print(f"[green]✓[/green] chartPeriod = {saved.value}")


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--host", type=str, default=None, help="Bind address (default: api.host).")
@click.option("--port", "-p", type=int, default=None, help="Port number (default: api.port).")
@click.option("--reload", is_flag=True, default=False, help="Auto-reload on code changes.")
@click.pass_context
def serve(ctx: click.Context, host: str | None, port: int | None, reload: bool) -> None:
    """Start the REST API server."""
    config = _load_config(ctx)
    host = host or config.api.host
    port = port or config.api.port

    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]uvicorn not installed. Install with: "
            "pip install stock-checker[api][/red]"
        )
        raise SystemExit(1)

    # The app factory runs in uvicorn and loads its own config
    if ctx.obj.get("config_path"):
        os.environ["STOCK_CHECKER_CONFIG"] = ctx.obj["config_path"]

    console.print(f"Starting stock-checker API on [bold]{host}:{port}[/bold]")
    console.print(f"API docs: http://{host}:{port}/docs")

    uvicorn.run(
        "stock_checker.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
