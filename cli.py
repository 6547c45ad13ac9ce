# cli.py
import sys
from datetime import datetime
from typing import List, Dict, Any, Optional

from rich.console import Console
from rich.columns import Columns
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from app.config import get_settings
from sdk.catalog import CatalogClient
import requests

console = Console()
c = CatalogClient(base_url=get_settings().api_url)


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
user_cache: List[Dict[str, Any]] = []

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
def product_card(p: Dict[str, Any]) -> Panel:
    body = Text()
    body.append(f"{p.get('category', '')}\n", style="italic cyan")
    body.append(f"{p.get('description', '')}\n\n")
    body.append(f"{p.get('price', '-')} ₽", style="bold green")
    body.append(f"   В наличии: {p.get('stock', 0)}")
    if p.get("rating") is not None:
        body.append(f"\n★ {p['rating']}/5", style="yellow")
    return Panel(
        body,
        title=f"[bold]{p.get('name', 'N/A')}[/bold]",
        subtitle=f"[dim]#{p.get('id', '?')}[/dim]",
        box=box.ROUNDED,
        width=36,
    )


def show_products(products: List[Dict[str, Any]]):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return
    console.print(Panel.fit("[bold magenta]НАСТОЛЬНЫЕ ИГРЫ[/bold magenta]\n"
                            "[dim]Минималистичный каталог для настоящих игроков[/dim]"))
    console.print(Columns([product_card(p) for p in products], equal=True))


def show_users(users: List[Dict[str, Any]]):
    if not users:
        console.print("[italic yellow]No users found[/italic yellow]")
        return

    table = Table(
        title="👥 Users",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=8)
    table.add_column("Name", style="bold", width=24)
    table.add_column("Age", justify="right", width=6)

    for u in users:
        table.add_row(str(u.get("id", "N/A")), str(u.get("name", "N/A")), str(u.get("age", "-")))
    console.print(table)


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper with exception handling
# ---------------------------
def _error_text(e: Exception) -> str:
    # the API puts its reason in {"message": ...}
    if isinstance(e, requests.exceptions.HTTPError) and e.response is not None:
        try:
            return f"HTTP {e.response.status_code}: {e.response.json().get('message', e.response.text)}"
        except ValueError:
            return f"HTTP {e.response.status_code}: {e.response.text}"
    return str(e)


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    Returns the decoded result, or None after showing the error.
    """
    global status_message
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)

        if success_msg:
            status_message = success_msg
            console.print(show_status(success_msg, True))
        return result
    except (requests.exceptions.RequestException, ValueError) as e:
        status_message = f"Error: {_error_text(e)}"
        console.print(show_status(status_message, False))
        return None


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []
    return WordCompleter([str(p.get("id", "")) for p in product_cache], ignore_case=True)


def get_user_completer():
    global user_cache
    if not user_cache:
        user_cache = try_api(c.list_users) or []
    return WordCompleter([str(u.get("id", "")) for u in user_cache])


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    header.add_row(
        "🎲 Board Game Catalog",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{now}[/dim]"
    )
    return Panel(header, style="bold blue")


# ---------------------------
# Input helpers with autocomplete
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_float(message: str, default: float = 0.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_changes(fields: List[str]) -> Dict[str, Any]:
    """Prompt for each field; blank answers leave the field out of the update."""
    changes: Dict[str, Any] = {}
    for name in fields:
        raw = Prompt.ask(f"{name} [dim](blank to keep)[/dim]", default="", show_default=False)
        if raw == "":
            continue
        for cast in (int, float):
            try:
                changes[name] = cast(raw)
                break
            except ValueError:
                continue
        else:
            changes[name] = raw
    return changes


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache, user_cache

    console.clear()
    console.print(create_header())

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "6", "👥 List users"),
            ("2", "ℹ️ Get product by ID", "7", "➕ Create user"),
            ("3", "➕ Create product", "8", "✏️ Update user"),
            ("4", "✏️ Update product", "9", "🗑️ Delete user"),
            ("5", "🗑️ Delete product", "q", "👋 Quit"),
        ]
        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 10)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "3":
            name = prompt_with_autocomplete("Enter product name")
            category = prompt_with_autocomplete("🏷️ Category")
            description = prompt_with_autocomplete("📝 Description")
            price = ask_float("💰 Price in rubles", default=1000.0)
            stock = IntPrompt.ask("📦 Stock", default=1)
            rating = None
            if Confirm.ask("Add a rating?", default=False):
                rating = ask_float("★ Rating out of 5", default=5.0)
            resp = try_api(
                c.create_product, name, category, description, price, stock, rating,
                success_msg=f"Product '{name}' created"
            )
            if resp:
                show_products([resp])
                product_cache = []

        elif choice == "4":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            changes = ask_changes(["name", "category", "description", "price", "stock", "rating"])
            resp = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **changes)
            if resp:
                show_products([resp])
                product_cache = []

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=get_product_completer())
            if Confirm.ask(f"[red]Delete product {pid}?[/red]"):
                resp = try_api(c.delete_product, pid)
                if resp:
                    status_message = resp.get("message", f"Product {pid} deleted")
                    product_cache = []

        elif choice == "6":
            users = try_api(c.list_users, success_msg="Users loaded successfully")
            if users is not None:
                user_cache = users
                show_users(users)

        elif choice == "7":
            name = prompt_with_autocomplete("Enter user name")
            age = IntPrompt.ask("Age", default=18)
            resp = try_api(c.create_user, name, age, success_msg=f"User '{name}' created")
            if resp:
                show_users([resp])
                user_cache = []

        elif choice == "8":
            uid = prompt_with_autocomplete("Enter user ID", completer=get_user_completer())
            changes = ask_changes(["name", "age"])
            resp = try_api(c.update_user, uid, success_msg=f"User {uid} updated", **changes)
            if resp:
                show_users([resp])
                user_cache = []

        elif choice == "9":
            uid = prompt_with_autocomplete("Enter user ID", completer=get_user_completer())
            if Confirm.ask(f"[red]Delete user {uid}?[/red]"):
                resp = try_api(c.delete_user, uid)
                if resp:
                    status_message = resp.get("message", f"User {uid} deleted")
                    user_cache = []

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Спасибо! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
