# =============================================================================
# processors/account_materializer.py - User account creation
# =============================================================================

from typing import Iterable, List
import logging

from core.directory import DirectoryService
from core.models import UserRecord


class AccountMaterializer:
    """Creates synthesized accounts one at a time, isolating failures"""

    def __init__(self, directory: DirectoryService):
        self.directory = directory
        self.attempted = 0
        self.created: List[UserRecord] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def success_count(self) -> int:
        return len(self.created)

    def materialize(self, users: Iterable[UserRecord], path: str) -> List[UserRecord]:
        """Create each user under path; return the ones this call created"""
        self.attempted = 0
        self.created = []
        for user in users:
            self.attempted += 1
            try:
                dn = self.directory.create_user(user, path)
            except Exception as e:
                self.logger.warning(f"Failed to create user {user.account_name}: {e}")
                continue

            self.created.append(user)
            self.logger.info(f"Created user {user.account_name} ({user.department}) at {dn}")

        return list(self.created)
