import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers import config_validation as cv

from .constants import (
    API_DEFAULTS,
    CONF_ACCESS_TOKEN,
    CONF_DEVICE_ID,
    CONF_GATEWAY_SERIAL,
    CONF_INSTALLATION_ID,
    CONF_POLLING_INTERVAL,
    DOMAIN,
    PLATFORMS,
)
from .coordinator import ViCareDashboardCoordinator
from .models import DeviceInfo, DeviceSettings
from .vicare_api import ViCareAPI

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

_LOGGER = logging.getLogger(__name__)


def device_from_entry(entry: ConfigEntry) -> DeviceInfo:
    """Build the device identity stored in a config entry."""
    return DeviceInfo(
        installation_id=str(entry.data[CONF_INSTALLATION_ID]),
        gateway_serial=str(entry.data[CONF_GATEWAY_SERIAL]),
        device_id=str(entry.data.get(CONF_DEVICE_ID) or "0"),
        name=entry.title if isinstance(entry.title, str) else "",
    )


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry):
    hass.data.setdefault(DOMAIN, {})
    api = ViCareAPI(entry.data[CONF_ACCESS_TOKEN])
    device = device_from_entry(entry)
    settings = DeviceSettings.from_options(entry.options)
    polling_interval = int(entry.options.get(CONF_POLLING_INTERVAL) or API_DEFAULTS.POLLING_INTERVAL)

    coordinator = ViCareDashboardCoordinator(
        hass,
        api,
        device,
        settings=settings,
        polling_interval=polling_interval,
        config_entry=entry,
    )
    try:
        await coordinator.async_config_entry_first_refresh()
    except Exception:
        await api.close()
        raise

    hass.data[DOMAIN][entry.entry_id] = {
        "api": api,
        "coordinator": coordinator,
        "device": device,
    }
    _LOGGER.debug(f"ViCare dashboard set up for {device.cache_key} (polling every {polling_interval}s)")

    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    entry.async_on_unload(entry.add_update_listener(async_reload_entry))
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry):
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unload_ok:
        data = hass.data[DOMAIN].pop(entry.entry_id)
        await data["api"].close()
    return unload_ok


async def async_reload_entry(hass: HomeAssistant, entry: ConfigEntry):
    """Reload the entry so changed options reach the calculators."""
    await hass.config_entries.async_reload(entry.entry_id)
