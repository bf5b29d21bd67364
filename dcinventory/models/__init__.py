"""SQLAlchemy ORM models."""

from dcinventory.models.asset import Asset
from dcinventory.models.base import Base
from dcinventory.models.change_log import ChangeLog
from dcinventory.models.customer import Customer, Project
from dcinventory.models.data_center import DataCenter
from dcinventory.models.ip_pool import IpAddress, IpPool
from dcinventory.models.rack import Rack

__all__ = [
    "Base", "Asset", "ChangeLog", "Customer", "DataCenter", "IpAddress",
    "IpPool", "Project", "Rack",
]
