from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shimgen.config import load_config
from shimgen.core.ast import parse_type
from shimgen.core.mapping import collect_imports, map_module
from shimgen.core.modules import build_crate
from shimgen.errors import ShimgenError, UnimplementedConversionError, UnsupportedShapeError
from shimgen.types.base import CallSite
from shimgen.types.registry import default_registry, registry_for_module

console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(escape(str(v)) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _fail(exc: ShimgenError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(str(exc))}")
    return typer.Exit(1)


def types(
    path: Annotated[Path, typer.Argument(help="Crate root containing Cargo.toml.")] = Path("."),
    package: Annotated[str | None, typer.Option(help="Dart package the imports point into.")] = None,
) -> None:
    """Map every exposed field, parameter and return type of a crate."""
    config = load_config()
    try:
        module = build_crate(path, config=config)
        mappings = map_module(module, registry_for_module(module), package or config.package_for(module.crate_name))
    except ShimgenError as exc:
        raise _fail(exc) from exc

    _render_table(
        ["module", "owner", "member", "site", "type", "behavior", "shim", "ffi", "native"],
        [
            (m.module_path, m.owner, m.member, m.call_site.value, m.type, m.behavior, m.shim, m.ffi, m.native)
            for m in mappings
        ],
    )
    for uri in collect_imports(mappings):
        console.print(f"import '{escape(uri)}';")


def type_info(
    expression: Annotated[str, typer.Argument(help="Rust type, e.g. 'Option<i32>'.")],
    package: Annotated[str, typer.Option(help="Dart package the imports point into.")] = "bindings",
    crate_name: Annotated[str, typer.Option(help="Crate name used in import paths.")] = "crate",
) -> None:
    """Dispatch a single type expression and show what each operation yields."""
    try:
        ty = parse_type(expression)
        behavior = default_registry().dispatch(ty)
        rows: list[tuple[str, str]] = [
            ("behavior", behavior.label),
            ("imports", ", ".join(behavior.required_imports(ty, package, crate_name)) or "-"),
            ("shim", behavior.shim_representation(ty)),
            ("ffi", behavior.ffi_representation(ty, CallSite.ARGUMENT)),
            ("native", behavior.native_representation(ty, CallSite.ARGUMENT)),
        ]
    except ShimgenError as exc:
        raise _fail(exc) from exc

    try:
        rows.insert(1, ("name", behavior.display_name(ty)))
    except UnsupportedShapeError as exc:
        rows.insert(1, ("name", f"unsupported: {exc.reason}"))
    for label, convert in (("native→ffi", behavior.native_to_ffi), ("ffi→native", behavior.ffi_to_native)):
        try:
            rows.append((label, convert(ty, "value")))
        except UnimplementedConversionError:
            rows.append((label, "unimplemented"))
    _render_table(["operation", "result"], rows)
