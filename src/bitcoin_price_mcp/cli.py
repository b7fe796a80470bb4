"""Command-line entry point.

Without flags, fetches the price once and prints a coloured summary,
exiting 1 if every provider failed. ``--mcp-server`` runs the HTTP/SSE
server instead.
"""
import argparse
import sys
from datetime import datetime
from typing import List, Optional, TextIO

from .errors import AllProvidersFailedError
from .fallback import FallbackOrchestrator
from .schemas import PriceRecord

RESET = "\x1b[0m"
BRIGHT = "\x1b[1m"
GREEN = "\x1b[32m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"


def _local_time(timestamp: str) -> str:
    try:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except ValueError:
        return timestamp
    return moment.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")


def format_price(record: PriceRecord) -> str:
    """Render a record as the multi-line terminal summary."""
    change = float(record.percent_change_24h)
    change_color = GREEN if change >= 0 else RED
    change_prefix = "+" if change >= 0 else ""
    market_cap_billions = float(record.market_cap) / 1e9

    lines = [
        "",
        f"{BRIGHT}{YELLOW}Bitcoin (BTC) Price Information{RESET}",
        "",
        f"{BRIGHT}Price:{RESET} {GREEN}${record.price} USD{RESET}",
        f"{BRIGHT}24h Change:{RESET} {change_color}{change_prefix}{record.percent_change_24h}%{RESET}",
        f"{BRIGHT}Market Cap:{RESET} ${market_cap_billions:.2f} Billion USD",
        f"{BRIGHT}Last Updated:{RESET} {_local_time(record.last_updated)}",
        f"{BRIGHT}Data Source:{RESET} {CYAN}{record.source.value}{RESET}",
        "",
    ]
    return "\n".join(lines)


def run_once(
    orchestrator: Optional[FallbackOrchestrator] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None
) -> int:
    """Fetch once and print. Returns the process exit code."""
    orchestrator = orchestrator or FallbackOrchestrator()
    out = out or sys.stdout
    err = err or sys.stderr
    print("Fetching Bitcoin price data...", file=out)
    try:
        record = orchestrator.get_price()
    except AllProvidersFailedError as e:
        print(f"{RED}Error:{RESET} {e.message}", file=err)
        return 1
    print(format_price(record), file=out)
    return 0


def serve() -> None:
    import uvicorn
    from .config import settings

    uvicorn.run("bitcoin_price_mcp.main:app", host=settings.host, port=settings.port)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="bitcoin-price", description="Current Bitcoin (BTC) price in USD")
    ap.add_argument("--mcp-server", action="store_true", help="run the HTTP/SSE tool server")
    args = ap.parse_args(argv)

    if args.mcp_server:
        serve()
        return 0
    return run_once()


if __name__ == "__main__":
    sys.exit(main())
