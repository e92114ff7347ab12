from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from shimgen.config import load_config
from shimgen.core.modules import build_crate
from shimgen.errors import ShimgenError
from shimgen.models import FunctionDescriptor, Module

console = Console()


def _signature(func: FunctionDescriptor) -> str:
    params = ", ".join(f"{p.name}: {p.type}" for p in func.params)
    ret = f" -> {func.return_type}" if func.return_type is not None else ""
    return f"fn {func.name}({params}){ret}"


def _fill(tree: Tree, module: Module) -> None:
    for item in module.structs:
        label = f"struct {item.name}" + (" (opaque)" if item.opaque else "")
        node = tree.add(f"[cyan]{escape(label)}[/cyan]")
        for field in item.fields:
            node.add(escape(f"{field.name}: {field.type}"))
    for item in module.enums:
        node = tree.add(f"[magenta]{escape(f'enum {item.name}')}[/magenta]")
        for variant in item.variants:
            types = ", ".join(f"{f.name}: {f.type}" for f in variant.fields)
            node.add(escape(f"{variant.name}({types})" if types else variant.name))
    for func in module.functions:
        tree.add(f"[green]{escape(_signature(func))}[/green]")
    for sub in module.submodules:
        _fill(tree.add(f"[bold]mod {escape(sub.name)}[/bold] [dim]{escape(sub.path)}[/dim]"), sub)


def modules(
    path: Annotated[Path, typer.Argument(help="Crate root containing Cargo.toml.")] = Path("."),
    json: Annotated[bool, typer.Option("--json", help="Print the module tree as JSON.")] = False,
) -> None:
    """Show the exposed structs, enums and functions of a crate, module by module."""
    try:
        module = build_crate(path, config=load_config())
    except ShimgenError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1) from exc

    if json:
        typer.echo(module.model_dump_json(indent=2))
        return

    tree = Tree(f"[bold]crate {escape(module.name)}[/bold] [dim]{escape(module.path)}[/dim]")
    _fill(tree, module)
    console.print(tree)
