from collections.abc import Iterator
from contextlib import contextmanager

import click
import tomlkit
from pydantic import TypeAdapter

from pairswap.amm.liquidity_math import burn_amounts, mint_amount
from pairswap.amm.swap_math import get_amount_in, get_amount_out, get_spot_price
from pairswap.config import CONFIG_FILE, save_config_to_file, settings
from pairswap.constants import PRICE_SCALE
from pairswap.exceptions import PairswapError
from pairswap.validation.evm_values import validate_uint256
from pairswap.version import __version__


@contextmanager
def _report_pool_errors() -> Iterator[None]:
    try:
        yield
    except PairswapError as exc:
        raise click.ClickException(exc.message or exc.__class__.__name__) from exc


def _format_scaled(value: int, decimals: int) -> str:
    whole, fraction = divmod(value, PRICE_SCALE)
    if decimals == 0:
        return str(whole)
    return f"{whole}.{str(fraction).zfill(len(str(PRICE_SCALE)) - 1)[:decimals]}"


@click.group()
@click.version_option(version=__version__)
def cli() -> None: ...


@cli.group()
def config() -> None:
    """
    Configuration commands
    """


@config.command("show")
@click.option(
    "--json",
    "output_format",
    flag_value="json",
    type=str,
    help="Show configuration in JSON format",
)
@click.option(
    "--toml",
    "output_format",
    flag_value="toml",
    type=str,
    help="Show configuration in TOML format (default)",
    default=True,
)
def config_show(output_format: str) -> None:
    """
    Display the current configuration in JSON or TOML (default) format.
    """

    match output_format:
        case "json":
            click.echo(
                TypeAdapter(dict).dump_json(
                    settings.model_dump(),
                    indent=2,
                ),
            )
        case "toml":
            click.echo(
                tomlkit.dumps(
                    settings.model_dump(),
                ),
            )
        case _:
            ...


@config.command("init")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def config_init(*, force: bool) -> None:
    """
    Write the current configuration to the configuration file.
    """

    if (
        CONFIG_FILE.exists()
        and not force
        and not click.confirm(
            f"An existing configuration was found at {CONFIG_FILE}. Do you want to overwrite it?",
            default=False,
        )
    ):
        raise click.Abort

    save_config_to_file(settings, CONFIG_FILE)
    click.echo(f"Configuration written to {CONFIG_FILE}")


@cli.command("quote")
@click.argument("amount", type=int)
@click.argument("reserves_in", type=int)
@click.argument("reserves_out", type=int)
@click.option(
    "--exact-out",
    is_flag=True,
    help="Treat AMOUNT as the desired output and print the required input",
)
def quote(amount: int, reserves_in: int, reserves_out: int, *, exact_out: bool) -> None:
    """
    Quote a swap against a pool holding RESERVES_IN and RESERVES_OUT.
    """

    with _report_pool_errors():
        if exact_out:
            result = get_amount_in(
                amount_out=amount,
                reserves_in=reserves_in,
                reserves_out=reserves_out,
            )
        else:
            result = get_amount_out(
                amount_in=amount,
                reserves_in=reserves_in,
                reserves_out=reserves_out,
            )
    click.echo(result)


@cli.command("mint")
@click.argument("amount0", type=int)
@click.argument("amount1", type=int)
@click.option("--reserves", type=(int, int), default=(0, 0), help="Current pool reserves")
@click.option("--total-supply", type=int, default=0, help="Current total share supply")
def mint(amount0: int, amount1: int, reserves: tuple[int, int], total_supply: int) -> None:
    """
    Print the shares minted for a deposit of AMOUNT0 and AMOUNT1.
    """

    with _report_pool_errors():
        click.echo(
            mint_amount(
                amount0=validate_uint256(amount0),
                amount1=validate_uint256(amount1),
                reserves0=validate_uint256(reserves[0]),
                reserves1=validate_uint256(reserves[1]),
                total_supply=validate_uint256(total_supply),
            )
        )


@cli.command("burn")
@click.argument("shares", type=int)
@click.option("--reserves", type=(int, int), required=True, help="Current pool reserves")
@click.option("--total-supply", type=int, required=True, help="Current total share supply")
def burn(shares: int, reserves: tuple[int, int], total_supply: int) -> None:
    """
    Print the token amounts returned for burning SHARES.
    """

    with _report_pool_errors():
        amount0, amount1 = burn_amounts(
            shares=validate_uint256(shares),
            reserves0=validate_uint256(reserves[0]),
            reserves1=validate_uint256(reserves[1]),
            total_supply=validate_uint256(total_supply),
        )
    click.echo(f"{amount0} {amount1}")


@cli.command("price")
@click.argument("reserves0", type=int)
@click.argument("reserves1", type=int)
def price(reserves0: int, reserves1: int) -> None:
    """
    Print the spot price of token0 in units of token1, scaled and as a decimal.
    """

    with _report_pool_errors():
        scaled_price = get_spot_price(reserves_in=reserves0, reserves_out=reserves1)
    click.echo(f"{scaled_price} ({_format_scaled(scaled_price, settings.display.price_decimals)})")
