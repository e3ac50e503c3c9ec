# =============================================================================
# core/directory.py - Directory service interface and dry-run wrapper
# =============================================================================

from abc import ABC, abstractmethod
from typing import List, Set, Tuple
import logging

from core.models import UserRecord, ou_dn, user_dn


class DirectoryService(ABC):
    """Operations the provisioner needs from a directory"""

    @abstractmethod
    def get_forest_dns_name(self) -> str:
        """DNS name of the forest root domain, e.g. example.com"""
        pass

    @abstractmethod
    def get_domain_dn(self) -> str:
        """Distinguished name of the domain, e.g. DC=example,DC=com"""
        pass

    @abstractmethod
    def ou_exists(self, dn: str) -> bool:
        pass

    @abstractmethod
    def create_ou(self, name: str, parent_dn: str) -> str:
        """Create OU=<name>,<parent_dn> and return its DN"""
        pass

    @abstractmethod
    def create_user(self, user: UserRecord, path: str) -> str:
        """Create the user account under path and return its DN"""
        pass


class DryRunDirectory(DirectoryService):
    """Delegates reads to a real directory and records writes instead of issuing them"""

    def __init__(self, directory: DirectoryService):
        self.directory = directory
        self.planned_ous: List[str] = []
        self.planned_users: List[Tuple[str, str]] = []
        self._planned_dns: Set[str] = set()
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_forest_dns_name(self) -> str:
        return self.directory.get_forest_dns_name()

    def get_domain_dn(self) -> str:
        return self.directory.get_domain_dn()

    def ou_exists(self, dn: str) -> bool:
        if dn.lower() in self._planned_dns:
            return True
        return self.directory.ou_exists(dn)

    def create_ou(self, name: str, parent_dn: str) -> str:
        dn = ou_dn(name, parent_dn)
        self.logger.info(f"[dry-run] Would create OU {dn}")
        self.planned_ous.append(dn)
        self._planned_dns.add(dn.lower())
        return dn

    def create_user(self, user: UserRecord, path: str) -> str:
        dn = user_dn(user.full_name, path)
        self.logger.info(f"[dry-run] Would create user {user.account_name} at {dn}")
        self.planned_users.append((user.account_name, dn))
        return dn
