# mockshop_cli.py
import os
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import IntPrompt, Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.text import Text
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from mockshop_sdk.shopclient import ShopAPIError, ShopClient
import requests

console = Console()
c = ShopClient(base_url=os.environ.get("BASE_URL", "http://localhost:3000"))


# Global state for status messages and caching
status_message = "Ready"
product_cache: List[Dict[str, Any]] = []
email_cache = set()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], title: str = "📦 Products"):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        header_style="bold magenta",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", justify="right", width=4)
    table.add_column("Name", style="bold", width=22)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=14)
    table.add_column("Description", width=40)

    for p in products:
        table.add_row(
            str(p.get("id", "N/A")),
            p.get("name", "N/A"),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            p.get("description", ""),
        )
    console.print(table)


def show_cart(cart: Dict[str, Any]):
    if not cart:
        console.print("[italic yellow]No cart data[/italic yellow]")
        return

    title = Text()
    title.append("🛒 Shopping Cart - ", style="bold")
    title.append(c.email or "Unknown User", style="bold cyan")
    title.append(f" - Total: ${cart.get('total', 0):.2f}", style="bold green")

    items = cart.get("cart", [])
    if not items:
        console.print(Panel("Your cart is empty 🛍️", title=title, style="blue"))
        return

    table = Table(box=box.ROUNDED, header_style="bold blue", show_lines=True)
    table.add_column("Product", style="bold", width=30)
    table.add_column("Qty", justify="right", width=8)
    table.add_column("Price", justify="right", width=12)
    table.add_column("Subtotal", justify="right", width=12)

    for it in items:
        price = it.get("price", 0)
        qty = it.get("quantity", 0)
        table.add_row(
            it.get("name", "Unknown"),
            str(qty),
            f"${price:.2f}",
            f"${price * qty:.2f}",
        )

    console.print(Panel(table, title=title, border_style="blue"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


# ---------------------------
# API wrapper
# ---------------------------
def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.

    Server-side refusals (ShopAPIError) and connection problems are shown
    in the status panel and turned into a None result; anything else
    propagates.
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
    except ShopAPIError as e:
        status_message = f"Error: {e.message}"
        console.print(show_status(f"Error ({e.status_code}): {e.message}", False))
        return None
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
        status_message = f"Error: {e}"
        console.print(show_status(f"Error: cannot reach {c.base_url} ({e})", False))
        return None

    if success_msg:
        status_message = success_msg
        console.print(show_status(success_msg, True))
    return result


# ---------------------------
# Autocompletion helpers
# ---------------------------
def get_product_completer():
    global product_cache
    if not product_cache:
        product_cache = try_api(c.list_products) or []

    ids = [str(p.get("id", "")) for p in product_cache]
    return WordCompleter([i for i in ids if i], ignore_case=True)


def get_email_completer():
    return WordCompleter(list(email_cache), ignore_case=True)


def resolve_product_id(raw: str) -> Optional[int]:
    """Accept either a numeric id or a product name from the cache."""
    raw = raw.strip()
    if raw.isdigit():
        return int(raw)
    for p in product_cache:
        if p.get("name", "").lower() == raw.lower():
            return p["id"]
    console.print(f"[red]Unknown product: {raw}[/red]")
    return None


# ---------------------------
# Layout and Header
# ---------------------------
def create_header():
    header = Table(show_header=False, box=box.ROUNDED)
    header.add_column("left", width=30)
    header.add_column("center", width=40)
    header.add_column("right", width=30)

    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    who = c.email or "not logged in"
    header.add_row(
        "🛍️ Mock Shop",
        f"[bold blue]{c.base_url}[/bold blue]",
        f"[dim]{who} | {now}[/dim]"
    )
    return Panel(header, style="bold blue")


def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_credentials():
    email = prompt_with_autocomplete("Email", completer=get_email_completer())
    password = Prompt.ask("Password", password=True)
    return email.strip(), password


# ---------------------------
# Main menu
# ---------------------------
def menu():
    global status_message, product_cache, email_cache

    console.clear()
    console.print(create_header())

    product_cache = try_api(c.list_products) or []

    while True:
        if status_message:
            console.print(show_status(status_message, "Error" not in status_message))

        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)

        options = [
            ("1", "📦 List products", "5", "🔑 Login"),
            ("2", "🔍 Search products", "6", "🛒 Add to cart"),
            ("3", "ℹ️ Get product by ID", "7", "🧾 View cart"),
            ("4", "📝 Register", "8", "🔄 Reset store"),
            ("", "", "q", "👋 Quit")
        ]

        for row in options:
            menu_table.add_row(*row)

        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([str(i) for i in range(1, 9)] + ["q", "quit", "exit"])
        ).strip()

        if choice == "1":
            products = try_api(c.list_products, success_msg="Products loaded successfully")
            if products is not None:
                product_cache = products
                show_products(products)

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            res = try_api(c.search_products, term, success_msg=f"Search for '{term}' completed")
            if res is not None:
                show_products(res, title=f"🔍 Results for '{term}'")

        elif choice == "3":
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            if pid is None:
                continue
            resp = try_api(c.get_product, pid, success_msg=f"Product {pid} details loaded")
            if resp:
                show_products([resp])

        elif choice == "4":
            email, password = ask_credentials()
            resp = try_api(c.register, email, password, success_msg=f"Registered {email}")
            if resp:
                email_cache.add(email)

        elif choice == "5":
            email, password = ask_credentials()
            resp = try_api(c.login, email, password, success_msg=f"Logged in as {email}")
            if resp:
                email_cache.add(email)

        elif choice == "6":
            if not c.token:
                console.print("[red]Please login first[/red]")
                continue
            pid = resolve_product_id(prompt_with_autocomplete("Enter product ID", completer=get_product_completer()))
            if pid is None:
                continue
            qty = IntPrompt.ask("Enter quantity", default=1)
            resp = try_api(c.add_to_cart, pid, qty, success_msg=f"Added {qty} of product {pid} to cart")
            if resp is not None:
                cart_view = try_api(c.view_cart)
                if cart_view:
                    show_cart(cart_view)

        elif choice == "7":
            resp = try_api(c.view_cart, success_msg="Cart loaded")
            if resp:
                show_cart(resp)

        elif choice == "8":
            if Confirm.ask("[red]This will drop all users and carts. Continue?[/red]"):
                try_api(c.reset, success_msg="Store reset successfully")
                c.set_token(None)
                c.email = None
                product_cache = []
                email_cache = set()

        elif choice.lower() in ("q", "quit", "exit"):
            if Confirm.ask("Are you sure you want to quit?"):
                console.print(Panel.fit("[bold green]Thank you for using Mock Shop! 👋[/bold green]", title="Goodbye"))
                sys.exit(0)

        console.print()
        console.rule(style="dim")


if __name__ == "__main__":
    try:
        menu()
    except KeyboardInterrupt:
        console.print("\n\n[bold red]Interrupted by user[/bold red]")
        sys.exit(1)
