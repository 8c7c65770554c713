"""Marketplace domain composition root.

Accounts, stores, the product catalogue, orders, payments and reviews all
live in this single domain. ``marketplace.init()`` traverses the package and
registers every aggregate, command, handler and repository found in it.
"""

from protean.domain import Domain

from marketplace.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", file_prefix="marketplace")

logger = get_logger(__name__)

marketplace = Domain(name="marketplace")
