# cli.py - interactive terminal storefront
import asyncio
import logging
import sys
from datetime import datetime
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from sdk.booststore import AsyncStoreClient
from sdk.config import settings
from sdk.logs import setup_logging
from sdk.models import PurchaseAccepted
from sdk.notifications import ConsoleSink, Notifier
from sdk.render import StorefrontScreen, render
from sdk.state import ViewPhase
from sdk.storefront import Storefront

console = Console()
logger = logging.getLogger("cli")

# Custom prompt style for prompt_toolkit
custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_storefront(screen: StorefrontScreen):
    if screen.phase is ViewPhase.LOADING:
        console.print("[italic]Loading store...[/italic]")
        return
    if screen.phase is ViewPhase.ERROR_CATALOG:
        console.print(Panel.fit(f"[red]{screen.error}[/red]", title="❌ Store unavailable", border_style="red"))
        return

    coins = "[dim]not signed in[/dim]" if screen.coins is None else f"[green]{screen.coins} GTL[/green]"
    console.print(Panel.fit(f"💰 [bold]Balance:[/bold] {coins}", title="🚀 Store", border_style="green"))

    if not screen.boosts:
        console.print("[italic yellow]No boosts on sale[/italic yellow]")
    else:
        table = Table(
            title="Boost Cards",
            box=box.ROUNDED,
            header_style="bold cyan",
            title_style="bold magenta",
            show_lines=True
        )
        table.add_column("ID", style="dim", width=16)
        table.add_column("Title", style="bold", width=24)
        table.add_column("Price", justify="right", width=10)
        table.add_column("Owned", justify="right", width=8)
        for row in screen.boosts:
            table.add_row(row.id, row.title, f"{row.price} GTL", str(row.owned))
        console.print(table)

    minerals = Table(title="Mineral Cards", box=box.SIMPLE, header_style="bold yellow")
    minerals.add_column("Mineral", width=14)
    minerals.add_column("Image", style="dim", width=22)
    minerals.add_column("Owned", justify="right", width=8)
    for index, mineral in enumerate(screen.minerals, start=1):
        minerals.add_row(f"Mineral {index}", mineral.image_url, str(mineral.owned))
    console.print(minerals)


def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    signed_in = Text("signed in" if settings.session_token else "guest", style="dim")
    header.add_row(
        "🛍️ Boost Store",
        "[bold blue]Purchase boosts, collect minerals[/bold blue]",
        Text.assemble((now, "dim"), "  ", signed_in),
    )
    return Panel(header, style="bold blue")


# ---------------------------
# View lifecycle
# ---------------------------
async def open_storefront(client: AsyncStoreClient, notifier: Notifier) -> Storefront:
    view = Storefront(client, notifier)
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        transient=True,
        console=console,
    ) as progress:
        progress.add_task(description="Loading store...", total=None)
        await view.mount()
    return view


def boost_completer(view: Storefront):
    return WordCompleter([item.id for item in view.catalog], ignore_case=True)


# ---------------------------
# Main menu
# ---------------------------
async def menu(base_url: Optional[str] = None):
    console.clear()
    console.print(create_header())

    session = PromptSession(style=custom_style)
    notifier = Notifier(ConsoleSink(console))
    async with AsyncStoreClient(base_url=base_url) as client:
        view = await open_storefront(client, notifier)
        show_storefront(render(view))

        while True:
            menu_table = Table.grid(padding=(0, 2))
            menu_table.add_column("Key", style="bold cyan", width=4)
            menu_table.add_column("Option", width=30)
            menu_table.add_row("1", "🏪 Show store")
            menu_table.add_row("2", "🛒 Buy a boost")
            menu_table.add_row("3", "🔄 Reload store")
            menu_table.add_row("q", "👋 Quit")
            console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

            choice = (await session.prompt_async(
                "\nChoose an option ",
                completer=WordCompleter(["1", "2", "3", "q", "quit", "exit"]),
            )).strip()

            if choice == "1":
                show_storefront(render(view))

            elif choice == "2":
                if view.phase is not ViewPhase.READY:
                    console.print("[yellow]The store is not available right now.[/yellow]")
                    continue
                item_id = (await session.prompt_async(
                    "Enter boost ID ",
                    completer=boost_completer(view),
                )).strip()
                outcome = await view.purchase(item_id)
                if isinstance(outcome, PurchaseAccepted):
                    show_storefront(render(view))

            elif choice == "3":
                view.unmount()
                view = await open_storefront(client, notifier)
                show_storefront(render(view))

            elif choice.lower() in ("q", "quit", "exit"):
                if Confirm.ask("Are you sure you want to quit?"):
                    view.unmount()
                    console.print(Panel.fit("[bold green]Thanks for shopping! 👋[/bold green]", title="Goodbye"))
                    return

            console.print()
            console.rule(style="dim")


if __name__ == "__main__":
    setup_logging(console=console)
    try:
        asyncio.run(menu())
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
    except Exception as e:
        logger.exception("unexpected error")
        console.print(f"\n\n[bold red]Unexpected error: {e}[/bold red]")
        sys.exit(1)
