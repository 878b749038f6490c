"""CLI principal (`postnl`).

Por qué Typer + Rich:
- Typer da subcomandos y ayuda a partir de type hints.
- Rich pinta tablas/paneles y se encarga del logging (`RichHandler`).

Opciones globales: `--verbose`, `--legacy` (SOAP), `--sandbox/--live`.
Cada comando acepta `--json PATH` para volcar el resultado.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from postnl.adapters.json_exporter import export_entity_json
from postnl.cli import doctor
from postnl.cli.ui_components import (
    build_delivery_date_panel,
    build_error_panel,
    build_events_table,
    build_locations_table,
    build_signature_panel,
    build_status_table,
    build_timeframes_table,
    print_banner,
)
from postnl.client import PostNL
from postnl.core.config import PostNLSettings, write_user_env_vars
from postnl.core.domain.api_mode import ApiMode
from postnl.core.domain.entities import CutOffTime, Location, Shipment, Timeframe, Weekday
from postnl.core.domain.requests import (
    CompleteStatus,
    CurrentStatus,
    DeliveryDateQuery,
    GetDeliveryDate,
    GetNearestLocations,
    GetSignature,
    GetTimeframes,
)
from postnl.core.errors import PostNLError

app = typer.Typer(no_args_is_help=True, help="PostNL shipping API from the command line.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


class _State:
    mode: ApiMode | None = None
    sandbox: bool | None = None


_state = _State()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # httpx es muy verboso en DEBUG.
    logging.getLogger("httpx").setLevel(logging.INFO if verbose else logging.WARNING)


def build_postnl(settings: PostNLSettings | None = None) -> PostNL:
    """Construye el cliente a partir de la config y las opciones globales."""

    settings = settings or PostNLSettings()
    return PostNL(settings=settings, mode=_state.mode, sandbox=_state.sandbox)


def _emit(result: Any, json_path: Path | None) -> bool:
    """Exporta a JSON si se pidió; devuelve True si ya no hay que pintar nada."""

    if json_path is None:
        return False
    path = export_entity_json(result=result, output_path=json_path)
    _console.print(f"[green]Saved JSON to:[/green] {path}")
    return True


def _run(action):
    try:
        with build_postnl() as client:
            return action(client)
    except PostNLError as exc:
        _console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request (DEBUG)."),
    legacy: Optional[bool] = typer.Option(None, "--legacy/--rest", help="Use the SOAP (legacy) API."),
    sandbox: Optional[bool] = typer.Option(None, "--sandbox/--live", help="Target the sandbox or live API."),
) -> None:
    configure_logging(verbose)
    _state.mode = ApiMode.from_bool(legacy) if legacy is not None else None
    _state.sandbox = sandbox


@app.command()
def status(
    barcode: Optional[str] = typer.Argument(None, help="Shipment barcode."),
    reference: Optional[str] = typer.Option(None, "--reference", "-r", help="Look up by customer reference."),
    complete: bool = typer.Option(False, "--complete", "-c", help="Include the event history."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the result to a JSON file."),
) -> None:
    """Current (or complete) status of a shipment."""

    if not barcode and not reference:
        raise typer.BadParameter("pass a BARCODE or --reference")
    shipment = Shipment(reference=reference) if reference else Shipment(barcode=barcode)

    def action(client: PostNL):
        if complete:
            return client.complete_status(CompleteStatus(shipment=shipment))
        return client.current_status(CurrentStatus(shipment=shipment))

    result = _run(action)
    if _emit(result, json_path):
        return
    shipments = result.shipments or []
    _console.print(build_status_table(shipments))
    if complete:
        for item in shipments:
            if item.events:
                _console.print(build_events_table(item))


@app.command()
def signature(
    barcode: str = typer.Argument(..., help="Shipment barcode."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the result to a JSON file."),
) -> None:
    """Delivery signature of a shipment."""

    result = _run(lambda client: client.get_signature(GetSignature(shipment=Shipment(barcode=barcode))))
    if not _emit(result, json_path):
        _console.print(build_signature_panel(result))


@app.command()
def barcode(
    country: str = typer.Option("NL", "--country", help="Destination country (ISO 3166-1 alpha-2)."),
    count: int = typer.Option(1, "--count", "-n", min=1, max=100, help="How many barcodes."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the result to a JSON file."),
) -> None:
    """Generate barcodes for a destination country."""

    country = country.upper()
    if count == 1:
        barcodes = {country: [_run(lambda client: client.generate_barcode_by_country_code(country))]}
    else:
        barcodes = _run(lambda client: client.generate_barcodes_by_country_codes({country: count}))
    if _emit(barcodes, json_path):
        return
    for value in barcodes[country]:
        _console.print(value)


@app.command()
def locations(
    postal_code: str = typer.Argument(..., help="Postal code to search around."),
    country: str = typer.Option("NL", "--country"),
    house_nr: Optional[str] = typer.Option(None, "--house-nr"),
    delivery_option: list[str] = typer.Option(["PG"], "--option", help="Delivery options (PG, PGE...)."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the result to a JSON file."),
) -> None:
    """Pickup locations nearest to a postal code."""

    request = GetNearestLocations(
        countrycode=country.upper(),
        location=Location(postalcode=postal_code, house_nr=house_nr, delivery_options=delivery_option),
    )
    result = _run(lambda client: client.get_nearest_locations(request))
    if _emit(result, json_path):
        return
    found = result.get_locations_result.response_location if result.get_locations_result else None
    _console.print(build_locations_table(found or []))


@app.command()
def timeframes(
    postal_code: str = typer.Argument(...),
    house_nr: str = typer.Option(..., "--house-nr"),
    start_date: str = typer.Option(..., "--start", help="dd-mm-YYYY"),
    end_date: str = typer.Option(..., "--end", help="dd-mm-YYYY"),
    country: str = typer.Option("NL", "--country"),
    option: list[str] = typer.Option(["Daytime"], "--option", help="Daytime, Evening, Sunday..."),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the result to a JSON file."),
) -> None:
    """Delivery timeframes for an address."""

    request = GetTimeframes(
        timeframe=[
            Timeframe(
                postal_code=postal_code,
                house_nr=house_nr,
                country_code=country.upper(),
                start_date=start_date,
                end_date=end_date,
                options=option,
            )
        ]
    )
    result = _run(lambda client: client.get_timeframes(request))
    if not _emit(result, json_path):
        _console.print(build_timeframes_table(result))


@app.command(name="delivery-date")
def delivery_date(
    postal_code: str = typer.Argument(...),
    shipping_date: str = typer.Option(..., "--shipping-date", help="dd-mm-YYYY HH:MM:SS"),
    shipping_duration: str = typer.Option("1", "--duration"),
    cut_off: str = typer.Option("17:00:00", "--cut-off", help="Cut-off time for every day."),
    country: str = typer.Option("NL", "--country"),
    json_path: Optional[Path] = typer.Option(None, "--json", help="Write the result to a JSON file."),
) -> None:
    """Expected delivery date of a shipment sent on a given date."""

    request = GetDeliveryDate(
        get_delivery_date=DeliveryDateQuery(
            postal_code=postal_code,
            country_code=country.upper(),
            shipping_date=shipping_date,
            shipping_duration=shipping_duration,
            cut_off_times=[CutOffTime(day=Weekday.ALL, time=cut_off)],
            options=["Daytime"],
        )
    )
    result = _run(lambda client: client.get_delivery_date(request))
    if not _emit(result, json_path):
        _console.print(build_delivery_date_panel(result))


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    api_key = typer.prompt("PostNL API key", hide_input=True, confirmation_prompt=False).strip()
    customer_number = typer.prompt("Customer number", default="", show_default=False).strip()
    customer_code = typer.prompt("Customer code", default="", show_default=False).strip()
    sandbox = typer.confirm("Use the sandbox API?", default=True)

    if not api_key:
        raise typer.BadParameter("the API key is required")

    env_path = write_user_env_vars(
        {
            "POSTNL_API_KEY": api_key,
            "POSTNL_CUSTOMER_NUMBER": customer_number or None,
            "POSTNL_CUSTOMER_CODE": customer_code or None,
            "POSTNL_SANDBOX": "true" if sandbox else "false",
        }
    )
    _console.print(f"[green]Saved PostNL config to:[/green] {env_path}")


@app.command()
def banner() -> None:
    """Show the banner and the active API mode."""

    settings = PostNLSettings()
    print_banner(_console, _state.mode or settings.api_mode)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
