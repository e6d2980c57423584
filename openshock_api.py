"""
OpenShock API Client

Handles requests to the OpenShock REST API: backend version, hub listing,
shocker listing and command dispatch. Every call is a single blocking
round-trip; responses are validated against per-endpoint models and mapped
into DeviceHub and Shocker records.
"""

import json
import os
from urllib.parse import quote

import requests
from pydantic import ValidationError

from models import (
    ClientConfig,
    ControlCommand,
    ControlRequest,
    ControlResponse,
    ControlType,
    DEFAULT_BASE_URL,
    HubListResponse,
    HubShockers,
    HubResponse,
    MAX_DURATION_MS,
    MIN_DURATION_MS,
    OwnedShockersResponse,
    VersionResponse,
)
from openshock_errors import (
    HttpStatusError,
    InvalidArgumentError,
    OpenShockAPIError,
    OpenShockError,
    ParseError,
    ShapeError,
    TransportError,
)
from openshock_hub import DeviceHub
from tools import logger


def validate_duration(duration):
    """
    Check a command duration before it is sent.

    Raises:
        InvalidArgumentError: duration is not an int within [300, 65535] ms
    """
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise InvalidArgumentError("Duration must be an integer number of milliseconds.")
    if duration < MIN_DURATION_MS or duration > MAX_DURATION_MS:
        raise InvalidArgumentError(
            f"Duration must be between {MIN_DURATION_MS} and {MAX_DURATION_MS} milliseconds, got {duration}."
        )


def validate_control_type(control_type):
    """Return the ControlType for ``control_type`` or raise InvalidArgumentError."""
    if isinstance(control_type, ControlType):
        return control_type
    try:
        return ControlType(control_type)
    except (TypeError, ValueError):
        allowed = ", ".join(t.value for t in ControlType)
        raise InvalidArgumentError(f"Invalid control type {control_type!r}, expected one of: {allowed}.") from None


class OpenShockClient:
    """Client for interacting with the OpenShock API"""

    AUTH_HEADER = "OpenShockToken"

    VERSION_ENDPOINT = "/1"
    DEVICES_ENDPOINT = "/1/devices"
    DEVICE_ENDPOINT = "/1/devices/{hub_id}"
    OWN_SHOCKERS_ENDPOINT = "/1/shockers/own"
    CONTROL_ENDPOINT = "/2/shockers/control"

    def __init__(self, api_key, base_url=None, config=None):
        """
        Initialize OpenShock API client

        Args:
            api_key: OpenShock API token
            base_url: Optional API origin, overrides config.base_url
            config: Optional ClientConfig; defaults are used when omitted
        """
        if not api_key or not isinstance(api_key, str):
            raise InvalidArgumentError("A valid API key is required.")

        if base_url is not None and not isinstance(base_url, str):
            raise InvalidArgumentError("Base URL must be a string.")

        config = config or ClientConfig()
        if base_url:
            config = config.model_copy(update={"base_url": base_url})
        elif not config.base_url:
            config = config.model_copy(update={"base_url": DEFAULT_BASE_URL})

        self._api_key = api_key
        self._config = config

    @property
    def api_key(self):
        return self._api_key

    @property
    def base_url(self):
        return self._config.base_url

    @property
    def config(self):
        return self._config

    def _build_url(self, endpoint):
        return f"{self.base_url.removesuffix('/')}{endpoint}"

    def _make_request(self, method, endpoint, use_auth=True, body=None):
        """
        Make a request to the OpenShock API

        Args:
            method: HTTP method (GET, POST)
            endpoint: API path starting with "/"
            use_auth: Attach the API token header
            body: Encoded JSON request body, if any

        Returns:
            Response JSON data

        Raises:
            TransportError: no response was received
            HttpStatusError: status outside [200, 300), carries the raw body
            ParseError: body is not valid JSON
        """
        from tools import VERBOSE

        url = self._build_url(endpoint)
        headers = {
            "Accept": "application/json",
            "User-Agent": self._config.user_agent,
        }
        if body is not None:
            headers["Content-Type"] = "application/json"
            headers["Content-Length"] = str(len(body))
        if use_auth:
            headers[self.AUTH_HEADER] = self._api_key

        logger.debug(f"OpenShock API Request: {method} {url}")

        try:
            response = requests.request(method, url, headers=headers, data=body, timeout=self._config.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug(f"OpenShock API Response: {response.status_code} for {method} {url}")
        if VERBOSE:
            logger.debug(f"Response body: {response.text}")

        if response.status_code < 200 or response.status_code >= 300:
            raise HttpStatusError(response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise ParseError("Failed to parse JSON response.") from e

    def fetch_data(self, endpoint, use_auth=True):
        """GET ``endpoint`` and return the decoded JSON body."""
        return self._make_request("GET", endpoint, use_auth=use_auth)

    def post_data(self, endpoint, data, use_auth=True):
        """POST ``data`` as JSON to ``endpoint`` and return the decoded JSON body."""
        body = json.dumps(data).encode("utf-8")
        return self._make_request("POST", endpoint, use_auth=use_auth, body=body)

    @staticmethod
    def _parse(model, payload):
        try:
            return model.model_validate(payload)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"]) or "body"
            raise ShapeError(f"Invalid response from the API ({location}: {first['msg']}).") from e

    @staticmethod
    def _fail(operation, cause, message=None):
        error = OpenShockAPIError(operation, cause, message)
        logger.error(error.message)
        return error

    def backend_version(self):
        """
        Fetch the backend version

        Returns:
            Version string, e.g. "1.2.3"
        """
        try:
            response = self._parse(VersionResponse, self.fetch_data(self.VERSION_ENDPOINT, use_auth=False))
        except OpenShockError as e:
            raise self._fail("Failed to fetch backend version", e) from e
        return response.data.version

    def fetch_hubs(self):
        """
        List all hubs owned by the account

        Returns:
            List of DeviceHub objects in server order
        """
        try:
            response = self._parse(HubListResponse, self.fetch_data(self.DEVICES_ENDPOINT))
        except OpenShockError as e:
            raise self._fail("Failed to fetch hubs", e) from e

        logger.debug(f"Found {len(response.data)} hub(s)")
        return [DeviceHub.from_data(self, hub) for hub in response.data]

    def fetch_hub(self, hub_id):
        """
        Get a single hub by ID

        Args:
            hub_id: OpenShock hub ID

        Returns:
            DeviceHub
        """
        if not hub_id or not isinstance(hub_id, str):
            raise InvalidArgumentError("A valid hub ID is required.")

        endpoint = self.DEVICE_ENDPOINT.format(hub_id=quote(hub_id, safe=""))
        try:
            response = self._parse(HubResponse, self.fetch_data(endpoint))
        except OpenShockError as e:
            raise self._fail("Failed to fetch hub", e) from e
        return DeviceHub.from_data(self, response.data)

    def fetch_shockers(self, hub):
        """
        List the shockers attached to a hub

        The API only lists shockers grouped by hub for the whole account, so the
        groups are scanned for the first one whose id matches ``hub.id``.

        Args:
            hub: DeviceHub (or any object with a non-empty ``id``)

        Returns:
            List of Shocker records in server order
        """
        hub_id = getattr(hub, "id", None)
        if not hub_id or not isinstance(hub_id, str):
            raise InvalidArgumentError("A valid hub object with an ID is required.")

        try:
            response = self._parse(OwnedShockersResponse, self.fetch_data(self.OWN_SHOCKERS_ENDPOINT))
            hub_data = next((group for group in response.data if group.id == hub_id), None)
            if hub_data is None or hub_data.shockers is None:
                raise ShapeError("No shockers found for the specified hub.")
            # Only the matched hub's shockers are validated
            shockers = self._parse(HubShockers, {"shockers": hub_data.shockers}).shockers
        except OpenShockError as e:
            raise self._fail("Failed to fetch shockers", e) from e

        return shockers

    @staticmethod
    def _server_message(error):
        """Extract a "message" from a failed response body, if there is one."""
        body = getattr(error, "body", None)
        if not body:
            return None
        try:
            decoded = json.loads(body)
        except (TypeError, ValueError):
            return None
        if isinstance(decoded, dict) and decoded.get("message"):
            return str(decoded["message"])
        return None

    def send_control(self, shocker_id, control_type, intensity=None, duration=None, custom_name=None, exclusive=True):
        """
        Send a command to a shocker

        Args:
            shocker_id: OpenShock shocker ID
            control_type: ControlType or one of "Shock", "Vibrate", "Sound", "Stop"
            intensity: Command intensity (default: config.intensity)
            duration: Duration in ms, 300 to 65535 (default: config.duration)
            custom_name: Label shown in the shocker log (default: config.custom_name);
                falsy values are sent as null
            exclusive: Preempt any command already running on the shocker

        Returns:
            Message returned by the API
        """
        if not shocker_id or not isinstance(shocker_id, str):
            raise InvalidArgumentError("A valid shocker ID is required.")
        control_type = validate_control_type(control_type)

        if intensity is None:
            intensity = self._config.intensity
        if isinstance(intensity, bool) or not isinstance(intensity, int):
            raise InvalidArgumentError("Intensity must be an integer.")

        if duration is None:
            duration = self._config.duration
        validate_duration(duration)

        if custom_name is None:
            custom_name = self._config.custom_name
        if custom_name is not None and not isinstance(custom_name, str):
            raise InvalidArgumentError("Custom name must be a string.")

        request = ControlRequest(
            shocks=[
                ControlCommand(
                    id=shocker_id,
                    type=control_type,
                    intensity=intensity,
                    duration=duration,
                    exclusive=bool(exclusive),
                )
            ],
            custom_name=custom_name or None,
        )
        payload = request.to_payload()
        logger.info(f"Sending control command {json.dumps(payload)}")

        try:
            response = self._parse(ControlResponse, self.post_data(self.CONTROL_ENDPOINT, payload))
        except OpenShockError as e:
            raise self._fail("Failed to send control command", e, self._server_message(e)) from e
        return response.message

    def stop(self, shocker_id, custom_name=None):
        """Stop whatever the shocker is doing."""
        return self.send_control(
            shocker_id,
            ControlType.STOP,
            intensity=1,
            duration=1000,
            custom_name=custom_name,
        )


def create_client_from_env():
    """
    Create OpenShock client from environment variables

    Returns:
        OpenShockClient instance or None if no API key is set
    """
    api_key = os.getenv("OPENSHOCK_API_KEY") or os.getenv("SHOCK_API_KEY")
    base_url = os.getenv("OPENSHOCK_BASE_URL")

    if not api_key:
        logger.warning("OpenShock API key not configured (OPENSHOCK_API_KEY). Skipping client setup.")
        return None

    client = OpenShockClient(api_key, base_url=base_url)
    logger.info(f"OpenShock API client initialized for {client.base_url}")
    return client
