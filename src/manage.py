"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                       # Create all tables
    python src/manage.py drop-db                        # Drop all tables
    python src/manage.py promote-admin --email a@b.com  # Grant back-office access
    python src/manage.py send-cart-reminders --idle-hours 24
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def promote_admin(email):
    from storefront.identity.user.registration import PromoteToAdmin

    domain = _domain()
    with domain.domain_context():
        domain.process(PromoteToAdmin(email=email), asynchronous=False)
    print(f"{email} is now an administrator.")


def send_cart_reminders(idle_hours=None):
    from storefront.ordering.cart.reminders import SendAbandonedCartReminders

    domain = _domain()
    with domain.domain_context():
        count = domain.process(SendAbandonedCartReminders(idle_hours=idle_hours), asynchronous=False)
    print(f"Reminders sent for {count} cart(s).")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    promote_parser = subparsers.add_parser("promote-admin", help="Grant administrator rights to a user")
    promote_parser.add_argument("--email", required=True)

    reminder_parser = subparsers.add_parser("send-cart-reminders", help="Email owners of idle carts")
    reminder_parser.add_argument("--idle-hours", type=int, default=None)

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "promote-admin":
        promote_admin(args.email)
    elif args.command == "send-cart-reminders":
        send_cart_reminders(args.idle_hours)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
