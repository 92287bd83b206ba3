# agilstore/cli.py
import sys
import argparse
import logging
from typing import Callable, Dict, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape
from rich.logging import RichHandler
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

from agilstore.config import Settings, LOG_LEVELS
from agilstore.core import InventoryManager
from agilstore.errors import InventoryError, InvalidFieldError
from agilstore.models import Product, FIELD_PARSERS, parse_id, format_price

logger = logging.getLogger("agilstore.cli")

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})

InputFn = Callable[..., str]

MENU_OPTIONS = [
    ("1", "➕ Adicionar Produto"),
    ("2", "📦 Listar Produtos"),
    ("3", "✏️ Atualizar Produto"),
    ("4", "🗑️ Excluir Produto"),
    ("5", "🔍 Buscar Produto"),
    ("6", "👋 Sair"),
]

# sub-menu key -> (field, prompt, confirmation)
UPDATE_FIELDS: Dict[str, Tuple[str, str, str]] = {
    "1": ("name", "Novo nome: ", "Nome atualizado!"),
    "2": ("category", "Nova categoria: ", "Categoria atualizada!"),
    "3": ("quantity", "Nova quantidade: ", "Quantidade atualizada!"),
    "4": ("price", "Novo preço: ", "Preço atualizado!"),
}

NAME_WIDTH = 20
CATEGORY_WIDTH = 12


# ---------------------------
# Display helpers
# ---------------------------
def truncate(text: str, width: int) -> str:
    return text[:width]


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{escape(message)}[/{style}]", title="Status")


def products_table(products: List[Product]) -> Table:
    # every column is clamped so a narrow console never shortens ids or prices
    id_width = max([len("ID")] + [len(str(p.id)) for p in products])
    qty_width = max([len("Qtd")] + [len(str(p.quantity)) for p in products])
    price_width = max([len("Preço")] + [len(format_price(p.price)) for p in products])

    table = Table(
        title="📦 Lista de Produtos",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
    )
    table.add_column("ID", style="dim", justify="right", no_wrap=True,
                     min_width=id_width, max_width=id_width)
    table.add_column("Nome", style="bold", no_wrap=True,
                     min_width=NAME_WIDTH, max_width=NAME_WIDTH)
    table.add_column("Categoria", no_wrap=True,
                     min_width=CATEGORY_WIDTH, max_width=CATEGORY_WIDTH)
    table.add_column("Qtd", justify="right", no_wrap=True,
                     min_width=qty_width, max_width=qty_width)
    table.add_column("Preço", justify="right", no_wrap=True,
                     min_width=price_width, max_width=price_width)

    for p in products:
        table.add_row(
            str(p.id),
            escape(truncate(p.name, NAME_WIDTH)),
            escape(truncate(p.category, CATEGORY_WIDTH)),
            str(p.quantity),
            format_price(p.price),
        )
    return table


def product_panel(p: Product) -> Panel:
    body = (
        f"[bold]ID:[/bold] {p.id}\n"
        f"[bold]Nome:[/bold] {escape(p.name)}\n"
        f"[bold]Categoria:[/bold] {escape(p.category)}\n"
        f"[bold]Quantidade:[/bold] {p.quantity}\n"
        f"[bold]Preço:[/bold] [green]{format_price(p.price)}[/green]"
    )
    return Panel.fit(body, title="Resultado", border_style="blue")


def prompt_with_autocomplete(message: str, completer=None) -> str:
    return prompt(message, completer=completer, style=custom_style)


# ---------------------------
# Interactive session
# ---------------------------
class InventoryCLI:
    def __init__(self, manager: InventoryManager, console: Optional[Console] = None,
                 input_fn: Optional[InputFn] = None):
        self.manager = manager
        self.console = console or Console()
        self.input_fn = input_fn or prompt_with_autocomplete
        self.actions: Dict[str, Callable[[], None]] = {
            "1": self.add_product,
            "2": self.list_products,
            "3": self.update_product,
            "4": self.delete_product,
            "5": self.search_product,
        }

    def ask(self, message: str, choices: Optional[List[str]] = None) -> str:
        completer = WordCompleter(choices) if choices else None
        return self.input_fn(message, completer=completer)

    def ok(self, message: str):
        self.console.print(show_status(message, True))

    def error(self, message: str):
        self.console.print(show_status(f"Erro: {message}", False))

    def _report_saved(self, message: str):
        self.ok(message)
        if self.manager.dirty:
            self.error("Não foi possível salvar os dados.")

    def add_product(self):
        self.console.print("\n[bold]=== Adicionar Novo Produto ===[/bold]\n")
        values = []
        # each field is checked before the next prompt so a bad value stops the flow
        for field, label in (("name", "Nome do Produto: "), ("category", "Categoria: "),
                             ("quantity", "Quantidade em Estoque: "), ("price", "Preço: ")):
            raw = self.ask(label)
            try:
                FIELD_PARSERS[field](raw)
            except InvalidFieldError as e:
                self.error(e.message)
                return
            values.append(raw)

        product = self.manager.add_product(*values)
        self._report_saved(f"Produto adicionado com sucesso! ID: {product.id}")

    def list_products(self):
        products = self.manager.list_products()
        if not products:
            self.console.print("[italic yellow]Nenhum produto cadastrado ainda.[/italic yellow]")
            return
        self.console.print(products_table(products), crop=False)

    def update_product(self):
        self.console.print("\n[bold]=== Atualizar Produto ===[/bold]\n")
        try:
            product = self.manager.get_product(parse_id(self.ask("ID do Produto: ")))
        except InventoryError as e:
            self.error(str(e))
            return

        menu = Table.grid(padding=(0, 2))
        menu.add_column("Key", style="bold cyan", width=4)
        menu.add_column("Option", width=20)
        for key, label in (("1", "Nome"), ("2", "Categoria"), ("3", "Quantidade"),
                           ("4", "Preço"), ("5", "Cancelar")):
            menu.add_row(key, label)
        self.console.print(Panel(menu, title=f"O que deseja atualizar em \"{escape(product.name)}\"?",
                                 border_style="yellow"))

        choice = self.ask("Opção: ", ["1", "2", "3", "4", "5"]).strip()
        if choice == "5":
            self.ok("Cancelado.")
            return
        if choice not in UPDATE_FIELDS:
            self.error("Opção inválida.")
            return

        field, label, done = UPDATE_FIELDS[choice]
        try:
            self.manager.update_product(product.id, field, self.ask(label))
        except InventoryError as e:
            self.error(str(e))
            return
        self._report_saved(done)

    def delete_product(self):
        self.console.print("\n[bold]=== Excluir Produto ===[/bold]\n")
        try:
            product = self.manager.get_product(parse_id(self.ask("ID do Produto: ")))
        except InventoryError as e:
            self.error(str(e))
            return

        answer = self.ask(f"Tem certeza que quer excluir \"{product.name}\"? (s/n): ")
        if answer.strip().lower() != "s":
            self.ok("Cancelado.")
            return

        self.manager.delete_product(product.id)
        self._report_saved("Produto excluído.")

    def search_product(self):
        self.console.print("\n[bold]=== Buscar Produto ===[/bold]\n")
        mode = self.ask("Buscar por (1) ID ou (2) Nome? ", ["1", "2"]).strip()

        if mode == "1":
            try:
                product_id = parse_id(self.ask("ID: "))
            except InvalidFieldError:
                product_id = None
            results = self.manager.search_by_id(product_id)
        elif mode == "2":
            results = self.manager.search_by_name(self.ask("Nome (ou parte dele): "))
        else:
            self.error("Opção inválida.")
            return

        if not results:
            self.console.print("[italic yellow]Nenhum produto encontrado.[/italic yellow]")
            return
        for p in results:
            self.console.print(product_panel(p))

    def show_menu(self):
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in MENU_OPTIONS:
            menu_table.add_row(*row)
        self.console.print(Panel(menu_table, title="AGILSTORE - Gerenciamento de Produtos",
                                 border_style="yellow"))

    def run(self) -> int:
        if self.manager.load_warning:
            self.console.print(f"[yellow]{escape(self.manager.load_warning)}[/yellow]")

        while True:
            self.show_menu()
            choice = self.ask("Escolha uma opção: ", [key for key, _ in MENU_OPTIONS]).strip()

            if choice == "6":
                self.console.print(Panel.fit("[bold green]Até logo! 👋[/bold green]", title="AgilStore"))
                return 0

            action = self.actions.get(choice)
            if action is None:
                self.error("Opção inválida. Tente novamente.")
            else:
                action()

            self.console.print()
            self.console.rule(style="dim")


# ---------------------------
# Entry point
# ---------------------------
def setup_logging(level: str):
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="agilstore", description="AgilStore - gerenciamento de produtos")
    parser.add_argument("--data-file", help="JSON file holding the products (default: products.json)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, type=str.upper, help="Logging level")
    parser.add_argument("-v", "--verbose", action="store_true", help="Shortcut for --log-level INFO")
    return parser


def main(argv=None, console: Optional[Console] = None, input_fn: Optional[InputFn] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.from_env(
        data_file=args.data_file,
        log_level="INFO" if args.verbose else args.log_level,
    )
    setup_logging(settings.log_level)

    console = console or Console()
    manager = InventoryManager(settings.data_file)
    manager.load()
    logger.info(f"Session started with {len(manager.products)} products from {settings.data_file}")

    try:
        return InventoryCLI(manager, console=console, input_fn=input_fn).run()
    except (KeyboardInterrupt, EOFError):
        console.print("\n\n[bold red]Sessão interrompida[/bold red]")
        return 1
    finally:
        manager.close()


if __name__ == "__main__":
    sys.exit(main())
