# tests/test_cli.py
import io
import json

from rich.console import Console

from agilstore import cli
from agilstore.core import InventoryManager


class ScriptedInput:
    """Feeds canned answers to the menu and records every prompt shown."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, message, completer=None):
        self.prompts.append(message)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def make_console():
    return Console(file=io.StringIO(), width=120, color_system=None, force_terminal=False)


def run_session(tmp_path, *answers):
    console = make_console()
    scripted = ScriptedInput(*answers)
    code = cli.main(["--data-file", str(tmp_path / "products.json")], console=console, input_fn=scripted)
    return code, console.file.getvalue(), scripted


def stored(tmp_path):
    return json.loads((tmp_path / "products.json").read_text(encoding="utf-8"))


def test_empty_store_lists_no_products(tmp_path):
    code, out, _ = run_session(tmp_path, "2", "6")
    assert code == 0
    assert "Nenhum produto cadastrado ainda." in out
    assert "Até logo!" in out


def test_add_then_list_shows_row(tmp_path):
    code, out, _ = run_session(tmp_path, "1", "Mouse", "Perifericos", "10", "49.9", "2", "6")
    assert code == 0
    assert "Produto adicionado com sucesso! ID: 1" in out

    row = [line for line in out.splitlines() if "Mouse" in line and "R$" in line]
    assert len(row) == 1
    for cell in ("1", "Mouse", "Perifericos", "10", "R$ 49.90"):
        assert cell in row[0]

    assert stored(tmp_path) == [
        {"id": 1, "name": "Mouse", "category": "Perifericos", "quantity": 10, "price": 49.9}
    ]


def test_list_truncates_long_values_for_display_only(tmp_path):
    long_name = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    long_category = "Computadores e Notebooks"
    code, out, _ = run_session(tmp_path, "1", long_name, long_category, "1", "10", "2", "6")

    assert "ABCDEFGHIJKLMNOPQRST" in out
    assert "ABCDEFGHIJKLMNOPQRSTU" not in out
    assert "Computadores" in out
    assert "Computadores e" not in out
    assert stored(tmp_path)[0]["name"] == long_name
    assert stored(tmp_path)[0]["category"] == long_category


def test_add_aborts_on_first_invalid_field(tmp_path):
    code, out, scripted = run_session(tmp_path, "1", "   ", "6")
    assert "Nome não pode estar vazio." in out
    # no further field prompts after the failing one
    assert scripted.prompts == ["Escolha uma opção: ", "Nome do Produto: ", "Escolha uma opção: "]
    assert not (tmp_path / "products.json").exists()


def test_add_rejects_negative_price(tmp_path):
    code, out, _ = run_session(tmp_path, "1", "Mouse", "Perifericos", "10", "-1", "2", "6")
    assert "Preço não pode ser negativo." in out
    assert "Nenhum produto cadastrado ainda." in out


def test_update_price_rejected_keeps_value(tmp_path):
    run_session(tmp_path, "1", "Mouse", "Perifericos", "10", "49.9", "6")
    code, out, _ = run_session(tmp_path, "3", "1", "4", "-5", "6")

    assert code == 0
    assert "Preço não pode ser negativo." in out
    assert stored(tmp_path)[0]["price"] == 49.9


def test_update_fields(tmp_path):
    run_session(tmp_path, "1", "Mouse", "Perifericos", "10", "49.9", "6")
    code, out, _ = run_session(
        tmp_path,
        "3", "1", "1", "Mouse Sem Fio",
        "3", "1", "3", "4",
        "3", "1", "5",
        "3", "1", "9",
        "6",
    )
    assert "Nome atualizado!" in out
    assert "Quantidade atualizada!" in out
    assert "Cancelado." in out
    assert "Opção inválida." in out
    assert stored(tmp_path)[0]["name"] == "Mouse Sem Fio"
    assert stored(tmp_path)[0]["quantity"] == 4


def test_update_unknown_and_invalid_id(tmp_path):
    code, out, _ = run_session(tmp_path, "3", "7", "3", "abc", "6")
    assert "Produto 7 não encontrado." in out
    assert "ID inválido." in out


def test_delete_requires_confirmation(tmp_path):
    run_session(tmp_path, "1", "Mouse", "Perifericos", "10", "49.9",
                "1", "Teclado", "Perifericos", "5", "120", "6")

    code, out, scripted = run_session(tmp_path, "4", "1", "n", "4", "99", "6")
    assert "Cancelado." in out
    assert "Produto 99 não encontrado." in out
    assert 'Tem certeza que quer excluir "Mouse"? (s/n): ' in scripted.prompts
    assert [p["id"] for p in stored(tmp_path)] == [1, 2]

    code, out, _ = run_session(tmp_path, "4", "1", "S", "6")
    assert "Produto excluído." in out
    assert [p["id"] for p in stored(tmp_path)] == [2]


def test_search_by_id_and_name(tmp_path):
    run_session(tmp_path, "1", "Mouse", "Perifericos", "10", "49.9",
                "1", "Mousepad", "Acessorios", "3", "30", "6")

    code, out, _ = run_session(tmp_path, "5", "1", "2", "6")
    assert "Nome: Mousepad" in out
    assert "Perifericos" not in out

    code, out, _ = run_session(tmp_path, "5", "2", "mouse", "6")
    assert "Categoria: Perifericos" in out
    assert "Nome: Mousepad" in out
    assert "Preço: R$ 49.90" in out
    assert "Categoria: Acessorios" in out


def test_search_without_results(tmp_path):
    code, out, _ = run_session(tmp_path, "5", "1", "x", "5", "2", "", "5", "3", "6")
    assert out.count("Nenhum produto encontrado.") == 2
    assert "Opção inválida." in out


def test_invalid_menu_option_redisplays_menu(tmp_path):
    code, out, scripted = run_session(tmp_path, "9", "", "6")
    assert code == 0
    assert out.count("Opção inválida. Tente novamente.") == 2
    assert scripted.prompts.count("Escolha uma opção: ") == 3


def test_closed_input_ends_session(tmp_path):
    code, out, _ = run_session(tmp_path, "2")
    assert code == 1
    assert "Sessão interrompida" in out


def test_corrupt_store_warns_and_starts_empty(tmp_path):
    (tmp_path / "products.json").write_text("not json", encoding="utf-8")
    code, out, _ = run_session(tmp_path, "2", "6")
    assert "Não foi possível carregar os produtos anteriores." in out
    assert "Nenhum produto cadastrado ainda." in out


def test_save_failure_is_reported_not_fatal(tmp_path):
    manager = InventoryManager(tmp_path)
    manager.load()
    console = make_console()
    scripted = ScriptedInput("1", "Mouse", "Perifericos", "10", "49.9", "2", "6")

    code = cli.InventoryCLI(manager, console=console, input_fn=scripted).run()
    out = console.file.getvalue()
    assert code == 0
    assert "Produto adicionado com sucesso! ID: 1" in out
    assert "Não foi possível salvar os dados." in out
    assert "R$ 49.90" in out
    assert manager.dirty


def test_list_keeps_ids_and_prices_on_narrow_console(tmp_path):
    manager = InventoryManager(tmp_path / "products.json")
    manager.load()
    manager.add_product("Monitor 24 polegadas Full HD", "Perifericos", "10", "1234.5")
    console = Console(file=io.StringIO(), width=60, color_system=None, force_terminal=False)

    cli.InventoryCLI(manager, console=console, input_fn=ScriptedInput()).list_products()
    out = console.file.getvalue()

    row = [line for line in out.splitlines() if "Monitor" in line]
    assert len(row) == 1
    cells = [cell.strip() for cell in row[0].split("│")[1:-1]]
    assert cells == ["1", "Monitor 24 polegadas", "Perifericos", "10", "R$ 1234.50"]
    assert "…" not in out
