"""Operation category detection from the order number (OS).

Aliança OS numbers look like ``12ALC1234567A``, Mercosul ones like
``SP123456A``. When a trip is created from a collection order, the detected
category is linked to the driver and the customer so their operation lists
stay current.
"""

import logging
import re

from als.schemas.driver import DriverOperation

logger = logging.getLogger(__name__)

_OS_PATTERNS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"^[0-9]*ALC[0-9]{7}A$"), "Aliança"),
    (re.compile(r"^[0-9]*SP[0-9]{6}A$"), "Mercosul"),
]

NO_CATEGORY = "Nenhum"


def detect_category_from_os(os_number: str | None) -> str | None:
    clean = (os_number or "").upper().strip()
    for pattern, category in _OS_PATTERNS:
        if pattern.match(clean):
            return category
    return None


async def sync_category_links(
    storage,
    category: str | None,
    driver_id: str | None,
    customer_id: str | None,
) -> None:
    """Add ``category`` to the driver's and customer's operations when absent."""
    if not category or category == NO_CATEGORY:
        return

    customer = None
    if customer_id:
        customer = next((c for c in await storage.get_customers() if c.id == customer_id), None)
    client = customer.name if customer else "Geral"

    if driver_id:
        driver = next((d for d in await storage.get_drivers() if d.id == driver_id), None)
        if driver:
            linked = any(
                op.category.upper() == category.upper() and op.client.upper() == client.upper()
                for op in driver.operations
            )
            if not linked:
                operations = [*driver.operations, DriverOperation(category=category, client=client)]
                await storage.save_driver(driver.model_copy(update={"operations": operations}))
                logger.info(f"Linked category {category}/{client} to driver {driver_id}")

    if customer and not any(op.upper() == category.upper() for op in customer.operations):
        await storage.save_customer(
            customer.model_copy(update={"operations": [*customer.operations, category]})
        )
        logger.info(f"Linked category {category} to customer {customer_id}")
