"""CLI to probe a running opportunity radar API.

Usage:
  opportunity-radar-probe health
  opportunity-radar-probe opportunities list --category Airdrops --head 3
  opportunity-radar-probe opportunities hot --limit 4
  opportunity-radar-probe analytics velocity --hours 12
  opportunity-radar-probe alerts create ETH 3000 above --user alice
"""
import argparse
import json
import sys

import httpx


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


def _print_list(data: list, label: str, head: int) -> None:
    print(f"Found {len(data)} {label}")
    print_json(data[:head] if head else data)


def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_opportunities_list(client: httpx.Client, args: argparse.Namespace) -> int:
    params: dict[str, object] = {"excludeMainstream": args.exclude_mainstream}
    if args.category:
        params["category"] = args.category
    if args.time_frame:
        params["timeFrame"] = args.time_frame
    if args.search:
        params["search"] = args.search
    if args.limit:
        params["limit"] = args.limit
    r = client.get("/api/opportunities", params=params)
    r.raise_for_status()
    _print_list(r.json(), "opportunities", args.head)
    return 0


def cmd_opportunities_hot(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/opportunities/hot", params={"limit": args.limit})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_opportunities_get(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/api/opportunities/{args.opportunity_id}")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_opportunities_history(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/api/opportunities/{args.opportunity_id}/history", params={"days": args.days})
    r.raise_for_status()
    _print_list(r.json(), f"history points for {args.opportunity_id}", args.head)
    return 0


def cmd_stats(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/stats")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_analytics_velocity(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/analytics/velocity", params={"hours": args.hours})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_analytics_hotness(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/analytics/hotness-progression")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_analytics_sources(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/analytics/source-correlation")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_alerts_list(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get("/api/alerts", params={"userId": args.user})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_alerts_create(client: httpx.Client, args: argparse.Namespace) -> int:
    body = {"symbol": args.symbol, "targetPrice": args.target_price, "condition": args.condition}
    r = client.post("/api/alerts", params={"userId": args.user}, json=body)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_alerts_deactivate(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.post(f"/api/alerts/{args.alert_id}/deactivate", params={"userId": args.user})
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_status(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/data-sources/status")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_sentiment(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/api/social/sentiment")
    r.raise_for_status()
    print_json(r.json())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Probe opportunity radar API routes.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8001",
        help="API base URL (default: http://localhost:8001)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Request timeout in seconds (default: 30)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")
    subparsers.add_parser("stats", help="GET /api/stats")
    subparsers.add_parser("status", help="GET /api/data-sources/status")
    subparsers.add_parser("sentiment", help="GET /api/social/sentiment")

    # opportunities
    opps = subparsers.add_parser("opportunities", help="Opportunity routes (/api/opportunities)")
    opps_sub = opps.add_subparsers(dest="opportunities_cmd", required=True)
    p = opps_sub.add_parser("list", help="GET /api/opportunities")
    p.add_argument("--category", default=None, help="Category label (e.g. 'P2E Games') or 'all'")
    p.add_argument("--time-frame", choices=["1h", "6h", "24h", "7d"], default=None)
    p.add_argument("--search", default=None, help="Text search")
    p.add_argument("--limit", type=int, default=0, help="Max records (0 = all)")
    p.add_argument("--exclude-mainstream", action="store_true", help="Hide mainstream assets")
    p.add_argument("--head", type=int, default=0, help="Show only first N (0 = all)")
    p = opps_sub.add_parser("hot", help="GET /api/opportunities/hot")
    p.add_argument("--limit", type=int, default=4, help="Max records (default: 4)")
    p = opps_sub.add_parser("get", help="GET /api/opportunities/{id}")
    p.add_argument("opportunity_id", type=int)
    p = opps_sub.add_parser("history", help="GET /api/opportunities/{id}/history")
    p.add_argument("opportunity_id", type=int)
    p.add_argument("--days", type=int, default=30, help="Days of history (default: 30)")
    p.add_argument("--head", type=int, default=0, help="Show only first N points (0 = all)")

    # analytics
    analytics = subparsers.add_parser("analytics", help="Analytics routes (/api/analytics)")
    analytics_sub = analytics.add_subparsers(dest="analytics_cmd", required=True)
    p = analytics_sub.add_parser("velocity", help="GET /api/analytics/velocity")
    p.add_argument("--hours", type=int, default=24, help="Trailing window (default: 24)")
    analytics_sub.add_parser("hotness", help="GET /api/analytics/hotness-progression")
    analytics_sub.add_parser("sources", help="GET /api/analytics/source-correlation")

    # alerts
    alerts = subparsers.add_parser("alerts", help="Price alert routes (/api/alerts)")
    alerts_sub = alerts.add_subparsers(dest="alerts_cmd", required=True)
    p = alerts_sub.add_parser("list", help="GET /api/alerts")
    p.add_argument("--user", default="anonymous", help="User id (default: anonymous)")
    p = alerts_sub.add_parser("create", help="POST /api/alerts")
    p.add_argument("symbol", help="Asset symbol (e.g. ETH)")
    p.add_argument("target_price", type=float)
    p.add_argument("condition", choices=["above", "below"])
    p.add_argument("--user", default="anonymous", help="User id (default: anonymous)")
    p = alerts_sub.add_parser("deactivate", help="POST /api/alerts/{id}/deactivate")
    p.add_argument("alert_id", type=int)
    p.add_argument("--user", default="anonymous", help="User id (default: anonymous)")
    return parser


HANDLERS = {
    "health": cmd_health,
    "stats": cmd_stats,
    "status": cmd_status,
    "sentiment": cmd_sentiment,
    "opportunities": {
        "list": cmd_opportunities_list,
        "hot": cmd_opportunities_hot,
        "get": cmd_opportunities_get,
        "history": cmd_opportunities_history,
    },
    "analytics": {
        "velocity": cmd_analytics_velocity,
        "hotness": cmd_analytics_hotness,
        "sources": cmd_analytics_sources,
    },
    "alerts": {
        "list": cmd_alerts_list,
        "create": cmd_alerts_create,
        "deactivate": cmd_alerts_deactivate,
    },
}


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    base_url = args.base_url.rstrip("/")

    handler = HANDLERS[args.command]
    if isinstance(handler, dict):
        handler = handler[getattr(args, f"{args.command}_cmd")]

    try:
        with httpx.Client(base_url=base_url, timeout=args.timeout) as client:
            return handler(client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
