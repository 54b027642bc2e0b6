"""Login access for drivers.

A driver with access has a ``u-<driverId>`` user. Default credentials are the
CPF digits as username and first name + last four CPF digits as password.
"""

import logging

from als.schemas.driver import Driver, DriverCredentials
from als.schemas.staff import User
from als.services.storage import StorageFacade
from als.utils.ids import utc_now_iso

logger = logging.getLogger(__name__)


def generate_default_credentials(driver: Driver) -> DriverCredentials:
    cpf = "".join(ch for ch in (driver.cpf or "") if ch.isdigit())
    parts = (driver.name or "").strip().split()
    first_name = parts[0].lower() if parts else "als"
    return DriverCredentials(username=cpf, password=f"{first_name}{cpf[-4:]}")


async def sync_user_record(
    storage: StorageFacade,
    driver_id: str,
    driver: Driver,
    custom_password: str | None = None,
) -> DriverCredentials:
    """Create or refresh the driver's user; returns the credentials in effect."""
    defaults = generate_default_credentials(driver)
    credentials = DriverCredentials(
        username=defaults.username,
        password=custom_password or defaults.password,
    )
    user = User(
        id=f"u-{driver_id}",
        username=credentials.username,
        password=credentials.password,
        display_name=driver.name or "Motorista",
        role="motoboy" if driver.driver_type == "Motoboy" else "driver",
        driver_id=driver_id,
        last_login=utc_now_iso(),
        position=driver.driver_type or "Motorista",
        status=driver.status or "Ativo",
        photo=driver.photo,
        is_first_login=False,
    )
    await storage.save_user(user)
    logger.info(f"Access synced for driver {driver_id}")
    return credentials


async def update_driver_password(storage: StorageFacade, driver_id: str, new_password: str) -> bool:
    user = next((u for u in await storage.get_users() if u.driver_id == driver_id), None)
    if user is None:
        return False
    await storage.save_user(user.model_copy(update={"password": new_password}))
    return True
