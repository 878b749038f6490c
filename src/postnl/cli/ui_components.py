"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import ResponseLocation, StatusShipment
from postnl.core.domain.responses import (
    GetDeliveryDateResponse,
    GetSignatureResponseSignature,
    ResponseTimeframes,
)
from postnl.core.errors import CifError, PostNLError


def print_banner(console: Console, mode: ApiMode) -> None:
    """Imprime el banner de bienvenida (se omite en modo `--json`)."""

    title = Text("PostNL", style="bold #ff6200")
    subtitle = Text(f"Envíos • Etiquetas • Seguimiento  ({mode.label()})", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="#ff6200", padding=(1, 4)))


def build_status_table(shipments: list[StatusShipment]) -> Table:
    table = Table(title="Shipment status")
    table.add_column("Barcode", style="cyan", no_wrap=True)
    table.add_column("Reference", style="white")
    table.add_column("Phase", style="magenta")
    table.add_column("Status", style="green")
    table.add_column("Since", style="dim")
    for shipment in shipments:
        status = shipment.status
        table.add_row(
            shipment.barcode or "-",
            shipment.reference or "-",
            (status.current_phase_description if status else None) or "-",
            (status.current_status_description if status else None) or "-",
            (status.current_status_time_stamp if status else None) or "-",
        )
    return table


def build_events_table(shipment: StatusShipment) -> Table:
    table = Table(title=f"Events {shipment.barcode or ''}".strip())
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Code", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Location", style="magenta")
    for event in shipment.events or []:
        table.add_row(event.time_stamp or "-", event.code or "-", event.description or "-", event.location_code or "-")
    return table


def build_signature_panel(result: GetSignatureResponseSignature) -> Panel:
    signature = result.signature
    body = Text()
    if signature is None:
        body.append("No signature available", style="yellow")
    else:
        body.append(f"Barcode: {signature.barcode or '-'}\n")
        body.append(f"Signed:  {signature.signature_date or '-'}\n")
        size = len(signature.signature_image or "")
        body.append(f"Image:   {size} base64 chars", style="dim")
    return Panel(body, title="Signature", border_style="green")


def build_locations_table(locations: list[ResponseLocation]) -> Table:
    table = Table(title="Pickup locations")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Address", style="magenta")
    table.add_column("Distance (m)", style="green", justify="right")
    for location in locations:
        address = location.address
        line = " ".join(
            p for p in (address.street, address.house_nr, address.zipcode, address.city) if p
        ) if address else "-"
        table.add_row(
            location.location_code or "-",
            location.name or "-",
            line or "-",
            str(location.distance) if location.distance is not None else "-",
        )
    return table


def build_timeframes_table(result: ResponseTimeframes) -> Table:
    table = Table(title="Delivery timeframes")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("From", style="white")
    table.add_column("To", style="white")
    table.add_column("Options", style="magenta")
    for day in result.timeframes or []:
        for frame in day.timeframes or []:
            table.add_row(day.date or "-", frame.from_ or "-", frame.to or "-", ", ".join(frame.options or []))
    for reason in result.reason_no_timeframes or []:
        table.add_row(reason.date or "-", "-", "-", f"[red]{reason.description or reason.code or '-'}[/red]")
    return table


def build_delivery_date_panel(result: GetDeliveryDateResponse) -> Panel:
    body = Text()
    body.append(f"{result.delivery_date or '-'}", style="bold")
    if result.options:
        body.append(f"\nOptions: {', '.join(result.options)}", style="dim")
    return Panel(body, title="Delivery date", border_style="cyan")


def build_error_panel(exc: PostNLError) -> Panel:
    body = Text(str(exc))
    if isinstance(exc, CifError):
        for entry in exc.errors:
            body.append(f"\n- [{entry.get('code') or '?'}] {entry.get('message') or ''}", style="dim")
    return Panel(body, title=type(exc).__name__, border_style="red")
