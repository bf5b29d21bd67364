"""DCInventory — data-center inventory and IP address management."""

__version__ = "0.1.0"
