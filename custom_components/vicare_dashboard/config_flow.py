import logging

import voluptuous as vol

from homeassistant.config_entries import ConfigEntry, ConfigFlow, OptionsFlow

from .constants import (
    API_DEFAULTS,
    CONF_ACCESS_TOKEN,
    CONF_COMPRESSOR_RPM_MAX,
    CONF_COMPRESSOR_RPM_MIN,
    CONF_DEVICE_ID,
    CONF_GATEWAY_SERIAL,
    CONF_HAS_HOT_WATER_BUFFER,
    CONF_INSTALLATION_ID,
    CONF_POLLING_INTERVAL,
    CONF_POWER_CORRECTION_FACTOR,
    CONF_USE_AIR_INTAKE_LABEL,
    DOMAIN,
)
from .infrastructure.errors import ViCareDashboardAuthError, ViCareDashboardError
from .models import DeviceInfo
from .validators import (
    validate_access_token,
    validate_device_id,
    validate_gateway_serial,
    validate_installation_id,
    validate_rpm_range,
)
from .vicare_api import ViCareAPI

_LOGGER = logging.getLogger(__name__)

TRI_STATE_OPTIONS = ["auto", "yes", "no"]


def _tri_state_default(value) -> str:
    if value is True or value == "yes":
        return "yes"
    if value is False or value == "no":
        return "no"
    return "auto"


class ViCareDashboardConfigFlow(ConfigFlow, domain=DOMAIN):
    VERSION = 1

    def _create_api(self, access_token: str) -> ViCareAPI:
        return ViCareAPI(access_token)

    async def async_step_user(self, user_input=None):
        errors = {}

        if user_input is not None:
            for field, validator in (
                (CONF_INSTALLATION_ID, validate_installation_id),
                (CONF_GATEWAY_SERIAL, validate_gateway_serial),
                (CONF_DEVICE_ID, validate_device_id),
                (CONF_ACCESS_TOKEN, validate_access_token),
            ):
                is_valid, message = validator(user_input[field])
                if not is_valid:
                    _LOGGER.debug(f"Invalid {field}: {message}")
                    errors[field] = f"invalid_{field}"

            if not errors:
                device = DeviceInfo(
                    installation_id=str(user_input[CONF_INSTALLATION_ID]).strip(),
                    gateway_serial=user_input[CONF_GATEWAY_SERIAL].strip(),
                    device_id=str(user_input[CONF_DEVICE_ID]).strip(),
                )
                await self.async_set_unique_id("_".join(device.cache_key))
                self._abort_if_unique_id_configured()

                api = self._create_api(user_input[CONF_ACCESS_TOKEN].strip())
                try:
                    document = await api.async_get_features(device, force_refresh=True)
                except ViCareDashboardAuthError:
                    errors["base"] = "invalid_auth"
                except ViCareDashboardError as e:
                    _LOGGER.warning(f"Test fetch for {device.cache_key} failed: {e}")
                    errors["base"] = "cannot_connect"
                else:
                    if document.feature_count == 0:
                        errors["base"] = "no_features"
                    else:
                        return self.async_create_entry(
                            title=f"ViCare {device.gateway_serial}/{device.device_id}",
                            data={
                                CONF_INSTALLATION_ID: device.installation_id,
                                CONF_GATEWAY_SERIAL: device.gateway_serial,
                                CONF_DEVICE_ID: device.device_id,
                                CONF_ACCESS_TOKEN: user_input[CONF_ACCESS_TOKEN].strip(),
                            },
                        )
                finally:
                    await api.close()

        return self.async_show_form(
            step_id="user",
            data_schema=vol.Schema(
                {
                    vol.Required(CONF_INSTALLATION_ID): str,
                    vol.Required(CONF_GATEWAY_SERIAL): str,
                    vol.Required(CONF_DEVICE_ID, default="0"): str,
                    vol.Required(CONF_ACCESS_TOKEN): str,
                }
            ),
            errors=errors,
        )

    @classmethod
    def async_get_options_flow(cls, entry: ConfigEntry):
        return ViCareDashboardOptionsFlow(entry)


class ViCareDashboardOptionsFlow(OptionsFlow):
    def __init__(self, entry):
        self.entry = entry

    async def async_step_init(self, user_input=None):
        errors = {}

        if user_input is not None:
            is_valid, message = validate_rpm_range(
                user_input.get(CONF_COMPRESSOR_RPM_MIN, 0),
                user_input.get(CONF_COMPRESSOR_RPM_MAX, 0),
            )
            if is_valid:
                return self.async_create_entry(title="", data=user_input)
            _LOGGER.debug(f"Rejected compressor RPM range: {message}")
            errors[CONF_COMPRESSOR_RPM_MAX] = "invalid_rpm_range"

        options = self.entry.options
        return self.async_show_form(
            step_id="init",
            data_schema=vol.Schema(
                {
                    vol.Optional(
                        CONF_COMPRESSOR_RPM_MIN,
                        default=options.get(CONF_COMPRESSOR_RPM_MIN, 0),
                    ): vol.All(vol.Coerce(int), vol.Range(min=0, max=20000)),
                    vol.Optional(
                        CONF_COMPRESSOR_RPM_MAX,
                        default=options.get(CONF_COMPRESSOR_RPM_MAX, 0),
                    ): vol.All(vol.Coerce(int), vol.Range(min=0, max=20000)),
                    vol.Optional(
                        CONF_HAS_HOT_WATER_BUFFER,
                        default=_tri_state_default(options.get(CONF_HAS_HOT_WATER_BUFFER)),
                    ): vol.In(TRI_STATE_OPTIONS),
                    vol.Optional(
                        CONF_USE_AIR_INTAKE_LABEL,
                        default=_tri_state_default(options.get(CONF_USE_AIR_INTAKE_LABEL)),
                    ): vol.In(TRI_STATE_OPTIONS),
                    vol.Optional(
                        CONF_POWER_CORRECTION_FACTOR,
                        default=options.get(CONF_POWER_CORRECTION_FACTOR, 1.0),
                    ): vol.All(vol.Coerce(float), vol.Range(min=0.01, max=10)),
                    vol.Optional(
                        CONF_POLLING_INTERVAL,
                        default=options.get(CONF_POLLING_INTERVAL, API_DEFAULTS.POLLING_INTERVAL),
                    ): vol.All(vol.Coerce(int), vol.Range(min=10, max=3600)),
                }
            ),
            errors=errors,
        )
