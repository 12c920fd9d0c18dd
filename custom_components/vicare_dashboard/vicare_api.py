# vicare_api.py
"""Client for the Viessmann IoT feature API.

Fetches the flat feature list of one device and turns it into a
categorized TelemetryDocument. Documents are cached per device for a few
minutes; a failed fetch falls back to the last cached document.
"""

import asyncio
import logging
from datetime import UTC, datetime

import aiohttp

from .constants import API_DEFAULTS
from .infrastructure.errors import (
    ViCareDashboardAPIError,
    ViCareDashboardAuthError,
    ViCareDashboardConnectionError,
    ViCareDashboardError,
    ViCareDashboardTimeoutError,
)
from .models import DeviceInfo, TelemetryDocument

_LOGGER = logging.getLogger(__name__)

FEATURES_PATH = (
    "/iot/v2/features/installations/{installation_id}/gateways/{gateway_serial}"
    "/devices/{device_id}/features"
)

# Status codes worth another attempt
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class ViCareAPI:
    def __init__(
        self,
        access_token: str,
        *,
        base_url: str = API_DEFAULTS.BASE_URL,
        read_timeout: int = API_DEFAULTS.READ_TIMEOUT,
        cache_ttl: float = API_DEFAULTS.CACHE_TTL,
        max_retries: int = API_DEFAULTS.MAX_RETRIES,
        retry_backoff: float = API_DEFAULTS.RETRY_BACKOFF,
        session: aiohttp.ClientSession | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.read_timeout = read_timeout
        self.cache_ttl = cache_ttl
        self.max_retries = max_retries
        self.retry_backoff = retry_backoff
        self._access_token = access_token
        self._request_lock = asyncio.Lock()
        self._session = session
        self._owns_session = session is None
        # Cache for telemetry documents: {(installation, gateway, device): (document, timestamp)}
        self._document_cache: dict[tuple[str, str, str], tuple[TelemetryDocument, float]] = {}

    def _get_current_time(self) -> float:
        """Get current monotonic time for cache expiry."""
        return asyncio.get_event_loop().time()

    def _get_from_cache(self, cache_key: tuple[str, str, str]) -> TelemetryDocument | None:
        """Get a document from cache if it's still valid.

        Expired entries are kept as a fallback for failed fetches.
        """
        if cache_key in self._document_cache:
            document, timestamp = self._document_cache[cache_key]
            if (self._get_current_time() - timestamp) < self.cache_ttl:
                _LOGGER.debug(f"Cache hit for {cache_key}")
                return document
        return None

    def invalidate_cache(self, device: DeviceInfo | None = None) -> None:
        """Drop the cached document of one device, or all of them."""
        if device is None:
            self._document_cache.clear()
        else:
            self._document_cache.pop(device.cache_key, None)

    def set_access_token(self, access_token: str) -> None:
        self._access_token = access_token

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session.

        Note: Timeouts are set per-request, not on the session level.
        """
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self):
        """Close the aiohttp session if this client created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def features_url(self, device: DeviceInfo) -> str:
        path = FEATURES_PATH.format(
            installation_id=device.installation_id,
            gateway_serial=device.gateway_serial,
            device_id=device.device_id,
        )
        return f"{self.base_url}{path}?includeDeviceFeatures=true"

    async def _async_request_json(self, url: str) -> dict:
        """Perform one authenticated GET and decode the JSON body."""
        timeout = aiohttp.ClientTimeout(total=self.read_timeout)
        headers = {"Authorization": f"Bearer {self._access_token}"}
        session = await self._get_session()
        try:
            async with session.get(url, headers=headers, timeout=timeout) as response:
                if response.status in (401, 403):
                    raise ViCareDashboardAuthError(
                        f"Access token rejected with status {response.status}",
                        status=response.status,
                    )
                if response.status != 200:
                    body = await response.text()
                    raise ViCareDashboardAPIError(
                        f"API returned status {response.status}: {body[:200]}",
                        status=response.status,
                    )
                data = await response.json()
        except TimeoutError as e:
            raise ViCareDashboardTimeoutError(f"Timeout after {self.read_timeout}s fetching {url}") from e
        except (aiohttp.ContentTypeError, ValueError) as e:
            raise ViCareDashboardAPIError(f"Invalid JSON from {url}: {e}") from e
        except aiohttp.ClientError as e:
            raise ViCareDashboardConnectionError(f"Connection to {self.base_url} failed: {e}") from e

        if not isinstance(data, dict):
            raise ViCareDashboardAPIError(f"Unexpected response type {type(data).__name__} from {url}")
        return data

    @staticmethod
    def _is_transient(error: ViCareDashboardError) -> bool:
        if isinstance(error, ViCareDashboardAuthError):
            return False
        if isinstance(error, ViCareDashboardAPIError):
            return error.status in RETRY_STATUS_CODES
        return isinstance(error, (ViCareDashboardConnectionError, ViCareDashboardTimeoutError))

    async def _async_fetch_document(self, device: DeviceInfo) -> TelemetryDocument:
        """Fetch and categorize the features of one device, with retries."""
        url = self.features_url(device)
        async with self._request_lock:
            for attempt in range(self.max_retries + 1):
                try:
                    data = await self._async_request_json(url)
                    break
                except ViCareDashboardError as e:
                    if not self._is_transient(e) or attempt >= self.max_retries:
                        raise
                    # Exponential backoff: 1s, 2s, 4s with the default base
                    wait_time = self.retry_backoff * 2**attempt
                    _LOGGER.warning(
                        f"Feature fetch failed (attempt {attempt + 1}/{self.max_retries + 1}), "
                        f"retrying in {wait_time}s: {type(e).__name__}: {e}"
                    )
                    await asyncio.sleep(wait_time)

        features = data.get("data")
        if not isinstance(features, list):
            raise ViCareDashboardAPIError(f"Response from {url} has no feature list")

        document = TelemetryDocument.from_feature_list(
            features,
            installation_id=device.installation_id,
            gateway_id=device.gateway_serial,
            device_id=device.device_id,
            fetched_at=datetime.now(UTC),
        )
        _LOGGER.debug(f"Fetched {len(features)} features for device {device.cache_key}")
        return document

    async def async_get_features(self, device: DeviceInfo, force_refresh: bool = False) -> TelemetryDocument:
        """Return the telemetry document of a device.

        Args:
            device: Device to fetch.
            force_refresh: Bypass the document cache.

        Returns:
            The fresh or cached document. A stale cached document is
            returned when the fetch fails.

        Raises:
            ViCareDashboardAuthError: If the access token is rejected.
            ViCareDashboardError: If the fetch fails and nothing is cached.
        """
        cache_key = device.cache_key
        if not force_refresh:
            cached = self._get_from_cache(cache_key)
            if cached is not None:
                return cached

        try:
            document = await self._async_fetch_document(device)
        except ViCareDashboardAuthError:
            raise
        except ViCareDashboardError as e:
            if cache_key not in self._document_cache:
                raise
            stale, _ = self._document_cache[cache_key]
            _LOGGER.warning(f"Fetching features for {cache_key} failed, using cached data from {stale.last_update}: {e}")
            return stale

        self._document_cache[cache_key] = (document, self._get_current_time())
        return document
