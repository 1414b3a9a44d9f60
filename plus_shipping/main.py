"""
Plus Shipping CLI - consignor (shipping origin) management.

Generates consignor INSERT scripts for a shop's distribution centers and
deploys or rolls them back in a cluster database reachable through kubectl.
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.syntax import Syntax
from rich.table import Table

from plus_shipping.core.config import get_environment_info, get_settings
from plus_shipping.core.logging_config import setup_logging
from plus_shipping.domain.models import Shop
from plus_shipping.services.consignors.wiring import ConsignorServices, create_consignor_services
from plus_shipping.utils.error_handler import AppException, log_error
from plus_shipping.version import version_string

console = Console()
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plus-shipping",
        description="Manage Plus Shipping consignors (shipping origins) for Shopify shops",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s shops                                            # List registered shops
  %(prog)s shop-info -s 81-test-store-plan-silver           # Show one shop
  %(prog)s consignor generate -s 81-test-store-plan-silver -t
  %(prog)s consignor deploy -s 81-test-store-plan-silver -e tes --dry-run
  %(prog)s consignor deploy -s 81-test-store-plan-silver -e tes -y
  %(prog)s consignor rollback -s 81-test-store-plan-silver -e tes
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {version_string()}")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--shops-config", metavar="FILE", help="Shop registry (default: SHOPS_CONFIG_PATH)")
    parser.add_argument("--locations", metavar="FILE", help="Location catalog (default: LOCATIONS_DATA_PATH)")

    commands = parser.add_subparsers(dest="command", required=True)

    consignor = commands.add_parser("consignor", help="Consignor SQL generation and deployment")
    consignor_commands = consignor.add_subparsers(dest="consignor_command", required=True)

    generate = consignor_commands.add_parser("generate", help="Write consignor INSERT SQL to a file")
    generate.add_argument("-s", "--shop", required=True, help="Shop name in the registry")
    generate.add_argument(
        "-t", "--test-data", action="store_true", help="Accepted status with the shop's existing detail ids"
    )
    generate.add_argument("-o", "--output-dir", help="Output directory (default: SQL_OUTPUT_DIR)")

    deploy = consignor_commands.add_parser("deploy", help="Insert test consignors into a cluster database")
    deploy.add_argument("-s", "--shop", required=True, help="Shop name in the registry")
    deploy.add_argument("-e", "--env", required=True, help="Environment name (e.g. tes)")
    deploy.add_argument(
        "--production-data",
        action="store_true",
        help="Deploy not_applied consignors with no detail ids instead of test data",
    )
    deploy.add_argument("--dry-run", action="store_true", help="Print the SQL without touching the cluster")
    deploy.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    rollback = consignor_commands.add_parser("rollback", help="Delete a shop's distribution-center consignors")
    rollback.add_argument("-s", "--shop", required=True, help="Shop name in the registry")
    rollback.add_argument("-e", "--env", required=True, help="Environment name (e.g. tes)")
    rollback.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")

    commands.add_parser("shops", help="List registered shops")

    shop_info = commands.add_parser("shop-info", help="Show a shop's environments and credentials")
    shop_info.add_argument("-s", "--shop", required=True, help="Shop name in the registry")

    return parser


# === COMMANDS ===


def cmd_shops(services: ConsignorServices, args: argparse.Namespace) -> int:
    shops = services.shop_repository.list_all()
    if not shops:
        console.print("[yellow]No shops registered[/yellow]")
        return 0

    table = Table(title="Registered shops")
    table.add_column("Name", style="cyan")
    table.add_column("Shopify Shop ID")
    table.add_column("Store ID", justify="right")
    table.add_column("Environments")
    table.add_column("Test credentials", justify="center")

    for name, shop in shops.items():
        table.add_row(
            name,
            str(shop.shopify_shop_id),
            str(shop.store_id),
            ", ".join(shop.environments) or "-",
            "✅" if shop.has_test_credentials() else "❌",
        )

    console.print(table)
    return 0


def cmd_shop_info(services: ConsignorServices, args: argparse.Namespace) -> int:
    shop = services.shop_repository.find_by_name(args.shop)
    credentials = shop.get_credentials()

    console.print(
        Panel.fit(
            f"[bold]Shopify Shop ID:[/bold] {shop.shopify_shop_id}\n"
            f"[bold]Store URL:[/bold] {shop.shopify_shop_id.store_url}\n"
            f"[bold]Store ID:[/bold] {shop.store_id}\n"
            f"[bold]Sagawa detail ID:[/bold] {credentials.sagawa_detail_id}\n"
            f"[bold]Yamato detail ID:[/bold] {credentials.yamato_detail_id}\n"
            f"[bold]Japan Post detail ID:[/bold] {credentials.japan_post_detail_id}",
            title=f"🏪 {args.shop}",
        )
    )

    table = Table(title="Environments")
    for column in ("Environment", "Namespace", "Context", "DB name", "ConfigMap", "Secret"):
        table.add_column(column)
    for name, env in shop.environments.items():
        table.add_row(name, env.namespace, env.context, env.db_name, env.db_config_map, env.db_secret)
    console.print(table)
    return 0


def cmd_generate(services: ConsignorServices, args: argparse.Namespace) -> int:
    output = services.generate_sql.execute(args.shop, args.test_data, args.output_dir)

    console.print(
        Panel.fit(
            f"[green]✅ SQL generated[/green]\n"
            f"[bold]File:[/bold] {output.filepath}\n"
            f"[bold]Consignors:[/bold] {output.consignor_count}\n"
            f"[bold]Application status:[/bold] {output.application_status}",
            title="📄 consignor generate",
        )
    )
    return 0


async def cmd_deploy(services: ConsignorServices, args: argparse.Namespace) -> int:
    is_test_data = not args.production_data
    shop = services.shop_repository.find_by_name(args.shop)
    env = shop.get_environment(args.env)
    consignors = services.deploy.build_consignors(args.shop, is_test_data)

    console.print(
        Panel.fit(
            f"[bold]Shop:[/bold] {shop.shopify_shop_id} (store {shop.store_id})\n"
            f"[bold]Environment:[/bold] {args.env} ({env.context} / {env.namespace})\n"
            f"[bold]Consignors:[/bold] {len(consignors)}\n"
            f"[bold]Data:[/bold] {'test data (accepted)' if is_test_data else 'production (not_applied)'}",
            title="🚚 consignor deploy",
        )
    )

    if args.dry_run:
        sql = "\n\n".join(consignor.to_sql() for consignor in consignors)
        console.print(Syntax(sql, "sql", word_wrap=True))
        console.print("[yellow]Dry run: no changes were made[/yellow]")
        return 0

    if not args.yes and not Confirm.ask(
        f"Insert {len(consignors)} consignors into {args.env}?", console=console, default=False
    ):
        console.print("[yellow]Cancelled[/yellow]")
        return 0

    with console.status("Deploying consignors..."):
        output = await services.deploy.execute(args.shop, args.env, is_test_data)

    if not output.success:
        console.print(f"[red]❌ Deploy failed: {output.error_message}[/red]")
        return 1

    console.print(f"[green]✅ Deployed {output.deployed_count} consignors to {output.environment}[/green]")
    await _print_verification(services, shop, args.env)
    return 0


async def _print_verification(services: ConsignorServices, shop: Shop, environment: str) -> None:
    try:
        rows = await services.orchestrator.verify(shop, environment)
    except AppException as e:
        log_error(e, {"operation": "verify"}, level=logging.WARNING)
        console.print(f"[yellow]⚠️  Could not verify the deployment: {e}[/yellow]")
        return

    table = Table(title=f"consignors for {shop.shopify_shop_id}")
    for column in ("location_name", "prefecture", "application_status_yamato"):
        table.add_column(column)
    for row in rows:
        table.add_row(
            row.get("location_name", ""), row.get("prefecture", ""), row.get("application_status_yamato", "")
        )
    console.print(table)


async def cmd_rollback(services: ConsignorServices, args: argparse.Namespace) -> int:
    shop = services.shop_repository.find_by_name(args.shop)
    env = shop.get_environment(args.env)

    console.print(
        Panel.fit(
            f"[bold]Shop:[/bold] {shop.shopify_shop_id}\n"
            f"[bold]Environment:[/bold] {args.env} ({env.context} / {env.namespace})\n"
            "[red]Deletes every 配送センター consignor of this shop[/red]",
            title="↩️  consignor rollback",
        )
    )

    if not args.yes and not Confirm.ask(
        f"Delete consignors of {shop.shopify_shop_id} in {args.env}?", console=console, default=False
    ):
        console.print("[yellow]Cancelled[/yellow]")
        return 0

    with console.status("Rolling back consignors..."):
        result = await services.orchestrator.rollback(str(shop.shopify_shop_id), args.env)

    if not result.success:
        console.print(f"[red]❌ Rollback failed: {result.error_message}[/red]")
        return 1

    console.print(f"[green]✅ Deleted {result.deleted_count} consignors from {args.env}[/green]")
    return 0


async def dispatch(services: ConsignorServices, args: argparse.Namespace) -> int:
    if args.command == "shops":
        return cmd_shops(services, args)
    if args.command == "shop-info":
        return cmd_shop_info(services, args)
    if args.consignor_command == "generate":
        return cmd_generate(services, args)
    if args.consignor_command == "deploy":
        return await cmd_deploy(services, args)
    return await cmd_rollback(services, args)


async def main(argv: Optional[Sequence[str]] = None, services: Optional[ConsignorServices] = None) -> int:
    """Main function to handle CLI arguments and execute the command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else "WARNING")
    logger.debug(f"Environment: {get_environment_info()}")

    try:
        services = services or create_consignor_services(
            get_settings(), shops_config_path=args.shops_config, locations_data_path=args.locations
        )
        return await dispatch(services, args)
    except AppException as e:
        log_error(e, {"command": args.command}, level=logging.DEBUG)
        console.print(f"[red]❌ {e}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("[yellow]Operation cancelled by user[/yellow]")
        return 130


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
