"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("myFlix", style="bold red")
    subtitle = Text("Películas • Directores • Géneros • Favoritos", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="red", padding=(1, 4)))


def _name_of(value: Any) -> str:
    # Genre/Director llegan como objeto anidado {"Name": ...} o como texto.
    if isinstance(value, dict):
        return str(value.get("Name") or "")
    if value is None:
        return ""
    return str(value)


def build_movies_table(movies: list[Any], *, title: str = "Movies") -> Table:
    """Tabla Rich para un listado de películas (o de ids de películas)."""

    # Las celdas van como Text: los datos del servidor no se interpretan como markup.
    table = Table(title=Text(title))
    table.add_column("Title", style="cyan", no_wrap=True)
    table.add_column("Genre", style="white")
    table.add_column("Director", style="green")
    table.add_column("ID", style="dim")

    for movie in movies:
        if not isinstance(movie, dict):
            table.add_row("", "", "", Text(str(movie)))
            continue
        table.add_row(
            Text(str(movie.get("Title") or "")),
            Text(_name_of(movie.get("Genre"))),
            Text(_name_of(movie.get("Director"))),
            Text(str(movie.get("_id") or "")),
        )
    return table


def build_payload_panel(payload: Any, *, title: str) -> Panel:
    """Panel genérico clave/valor para un objeto devuelto por la API."""

    body = Text()
    if isinstance(payload, dict):
        for key, value in payload.items():
            body.append(f"{key}: ", style="bold")
            if isinstance(value, dict):
                body.append(_name_of(value) or str(value))
            elif isinstance(value, list):
                body.append(", ".join(str(v) for v in value) or "-")
            else:
                body.append(str(value))
            body.append("\n")
    else:
        body.append(str(payload))

    return Panel(body, title=Text(title, style="bold yellow"), border_style="yellow")
