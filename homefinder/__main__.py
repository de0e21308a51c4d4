"""CLI for the homefinder store.

Usage:
    python -m homefinder status                 Show collection counts
    python -m homefinder reset                  Reset the database to seed data
    python -m homefinder listings [filters]     Search listings
    python -m homefinder users                  List users (no passwords)
    python -m homefinder agents                 List agent profiles
    python -m homefinder config                 Show current config
"""

import argparse
import asyncio
import sys

from .app import create_app
from .core.models import ListingFilters, ListingType, PropertyType
from .utils.config import load_config
from .utils.logging import setup_logging


def cmd_status(app) -> int:
    """Show collection counts."""
    print("=== Homefinder Store ===\n")
    print(f"Backend: {app.config['storage']['backend']}")
    for name, count in app.store.counts().items():
        print(f"  {name:<22} {count}")

    user = app.auth.current_user()
    print(f"\nSession user: {user.email if user else '(none)'}")
    return 0


def cmd_reset(app) -> int:
    """Reset the database to seed data."""
    app.store.reset()
    app.session.clear()
    print("Database reset to seed data.")
    return 0


def cmd_listings(app, args) -> int:
    """Search listings."""
    filters = ListingFilters(
        type=ListingType(args.type) if args.type else None,
        property_type=PropertyType(args.property_type) if args.property_type else None,
        min_price=args.min_price,
        max_price=args.max_price,
        min_area=args.min_area,
        max_area=args.max_area,
        bedrooms=args.bedrooms,
        district=args.district,
        city=args.city,
        search_query=args.query,
        include_hidden=args.include_hidden,
    )
    result = asyncio.run(app.listings.list(filters))
    if not result.success:
        print(f"ERROR: {result.message}")
        return 1

    print(f"Found {len(result.data)} listing(s)\n")
    for listing in result.data:
        hidden = " [hidden]" if listing.is_hidden else ""
        print(f"  {listing.id}  {listing.title}{hidden}")
        print(f"      {listing.type.value}/{listing.property_type.value}  "
              f"{listing.price:,.0f} {listing.price_unit}  {listing.area} m2  "
              f"{listing.district}, {listing.city}  views={listing.views}")
    return 0


def cmd_users(app) -> int:
    """List users."""
    result = asyncio.run(app.users.list_all_users())
    for user in result.data:
        print(f"  {user.id:<16} {user.role.value:<6} {user.name} <{user.email}>")
    return 0


def cmd_agents(app) -> int:
    """List agent profiles."""
    result = asyncio.run(app.users.list_all_agents())
    for agent in result.data:
        print(f"  {agent.id:<10} {agent.name} (user {agent.agent_user_id}) "
              f"rating={agent.rating} listings={agent.total_listings}")
    return 0


def cmd_config(app) -> int:
    """Show current configuration."""
    for section, values in app.config.items():
        print(f"[{section}]")
        for key, value in (values or {}).items():
            print(f"  {key} = {value}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        prog='homefinder',
        description='Simulated real-estate classifieds store',
    )
    parser.add_argument('--config', help='Path to config YAML')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    subparsers.add_parser('status', help='Show collection counts')
    subparsers.add_parser('reset', help='Reset the database to seed data')
    subparsers.add_parser('users', help='List users')
    subparsers.add_parser('agents', help='List agent profiles')
    subparsers.add_parser('config', help='Show current config')

    listings = subparsers.add_parser('listings', help='Search listings')
    listings.add_argument('--type', choices=[t.value for t in ListingType])
    listings.add_argument('--property-type', choices=[p.value for p in PropertyType])
    listings.add_argument('--min-price', type=float)
    listings.add_argument('--max-price', type=float)
    listings.add_argument('--min-area', type=float)
    listings.add_argument('--max-area', type=float)
    listings.add_argument('--bedrooms', type=int)
    listings.add_argument('--district')
    listings.add_argument('--city')
    listings.add_argument('-q', '--query')
    listings.add_argument('--include-hidden', action='store_true')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    config = load_config(config_path=args.config)
    setup_logging(config.get('logging'))

    # The CLI has no UI to wait on
    config['latency']['scale'] = 0
    app = create_app(config)

    simple_commands = {
        'status': cmd_status,
        'reset': cmd_reset,
        'users': cmd_users,
        'agents': cmd_agents,
        'config': cmd_config,
    }

    if args.command in simple_commands:
        return simple_commands[args.command](app)
    elif args.command == 'listings':
        return cmd_listings(app, args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
