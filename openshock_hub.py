"""
OpenShock hub handle.

A hub is the physical controller registered to an account; shockers are
attached to it. DeviceHub is a lightweight value object built from API
responses; it keeps a reference to the client that produced it only to
delegate shocker listing.
"""

from models import parse_created_on


class DeviceHub:
    """
    Lightweight hub container with a shocker-listing shortcut.

    Two hubs compare equal when id, name and created_on match, regardless of
    which client or call produced them.
    """

    def __init__(self, client, hub_id, name=None, created_on=None):
        """
        Initialize a hub.

        Args:
            client: OpenShockClient that fetched this hub (not owned by the hub)
            hub_id: OpenShock hub ID
            name: Human-readable hub name
            created_on: Creation timestamp as sent by the API
        """
        self._client = client
        self.id = hub_id
        self.name = name
        self.created_on = created_on

    @classmethod
    def from_data(cls, client, hub_data):
        """Build a hub from a validated HubData response item."""
        return cls(
            client,
            hub_id=hub_data.id,
            name=hub_data.name,
            created_on=hub_data.created_on,
        )

    @property
    def created_on_datetime(self):
        return parse_created_on(self.created_on)

    def fetch_shockers(self):
        """
        List the shockers attached to this hub.

        Returns:
            List of Shocker records in server order
        """
        return self._client.fetch_shockers(self)

    def __eq__(self, other):
        if not isinstance(other, DeviceHub):
            return NotImplemented
        return (self.id, self.name, self.created_on) == (other.id, other.name, other.created_on)

    def __repr__(self):
        return f"DeviceHub(id={self.id!r}, name={self.name!r}, created_on={self.created_on!r})"
