'''
# main.py
Command line entry point: one-shot printer and scan destination operations.
'''
import argparse
import asyncio
import json
import sys
import httpx
from pydantic_settings import BaseSettings
from epson_connect.api_clients.client import Client
from epson_connect.config import get_settings
from epson_connect.exceptions import EpsonConnectError
from epson_connect.utils.logger import configure_logging, logger

SENSITIVE_FIELDS = {
    "EPSON_CONNECT_API_CLIENT_SECRET",
    "EPSON_CONNECT_API_CLIENT_ID",
}


def masked_settings_dump(settings: BaseSettings) -> dict:
    data = settings.model_dump()
    for key in SENSITIVE_FIELDS:
        if key in data and data[key]:
            data[key] = "********"
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="epson-connect",
        description="Print and manage scan destinations through Epson Connect.")
    parser.add_argument("--log-level", default=None,
                        help="Console log level (default: INFO, DEBUG when DEBUG is set)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("info", help="Show printer information")

    print_cmd = sub.add_parser("print", help="Print a local file or URL")
    print_cmd.add_argument("file")
    print_cmd.add_argument("--mode", choices=["document", "photo"], default="document")
    print_cmd.add_argument("--job-name", default=None)

    job_cmd = sub.add_parser("job", help="Show print job information")
    job_cmd.add_argument("job_id")

    cancel_cmd = sub.add_parser("cancel", help="Cancel a pending print job")
    cancel_cmd.add_argument("job_id")
    cancel_cmd.add_argument("--operated-by", choices=["user", "operator"], default="user")

    dest_cmd = sub.add_parser("destinations", help="Manage scan destinations")
    dest_sub = dest_cmd.add_subparsers(dest="action", required=True)
    dest_sub.add_parser("list")
    add_cmd = dest_sub.add_parser("add")
    add_cmd.add_argument("alias_name")
    add_cmd.add_argument("destination")
    add_cmd.add_argument("--type", dest="type_", choices=["mail", "url"], default="mail")
    update_cmd = dest_sub.add_parser("update")
    update_cmd.add_argument("id")
    update_cmd.add_argument("--alias-name", default=None)
    update_cmd.add_argument("--destination", default=None)
    update_cmd.add_argument("--type", dest="type_", choices=["mail", "url"], default=None)
    remove_cmd = dest_sub.add_parser("remove")
    remove_cmd.add_argument("id")

    sub.add_parser("deauth", help="Remove this client's registration of the printer")
    return parser


async def run(args: argparse.Namespace) -> object:
    async with Client() as client:
        if args.command == "info":
            return await client.printer.info()
        if args.command == "print":
            settings = {"print_mode": args.mode}
            if args.job_name:
                settings["job_name"] = args.job_name
            return {"job_id": await client.printer.print(args.file, settings)}
        if args.command == "job":
            return await client.printer.job_info(args.job_id)
        if args.command == "cancel":
            return await client.printer.cancel_print(args.job_id, args.operated_by)
        if args.command == "destinations":
            scanner = client.scanner
            if args.action == "list":
                destinations = await scanner.list(use_cache=True)
                return [dest.model_dump() for dest in destinations]
            if args.action == "add":
                dest = await scanner.add(args.alias_name, args.destination, args.type_)
                return dest.model_dump()
            if args.action == "update":
                dest = await scanner.update(args.id, args.alias_name,
                                            args.destination, args.type_)
                return dest.model_dump()
            return await scanner.remove(args.id)
        await client.deauthenticate()
        return {"message": "Printer deauthenticated."}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    level = args.log_level or ("DEBUG" if settings.DEBUG else "INFO")
    configure_logging(level.upper(), settings.LOG_FILE)

    pretty_settings = json.dumps(masked_settings_dump(settings), indent=2)
    logger.debug(f"SDK Configuration: {pretty_settings}")

    try:
        result = asyncio.run(run(args))
    except (EpsonConnectError, httpx.HTTPError) as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
