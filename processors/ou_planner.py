# =============================================================================
# processors/ou_planner.py - Lab OU tree planning and creation
# =============================================================================

from typing import Dict, List, Tuple
import logging

from core.directory import DirectoryService
from core.models import OUAction, OUEntry, OU_SUBTREE, ou_dn


class DirectoryStructurePlanner:
    """Ensures the top-level lab OU and its fixed subtree exist"""

    def __init__(self, directory: DirectoryService, ou_name: str):
        self.directory = directory
        self.ou_name = ou_name
        self.logger = logging.getLogger(self.__class__.__name__)

    def plan(self, domain_dn: str) -> List[OUEntry]:
        """Top-level OU first, then the subtree beneath it"""
        top = OUEntry(name=self.ou_name, parent_dn=domain_dn)
        return [top] + [OUEntry(name=name, parent_dn=top.dn) for name in OU_SUBTREE]

    def users_ou_dn(self, domain_dn: str) -> str:
        return OUEntry(name='Users', parent_dn=ou_dn(self.ou_name, domain_dn)).dn

    def ensure(self, domain_dn: str) -> List[Tuple[OUEntry, OUAction]]:
        """Create every missing OU in the plan; never fails on existing ones"""
        outcomes = []
        top_level_dn = ou_dn(self.ou_name, domain_dn)
        parent_checked: Dict[str, bool] = {}

        for entry in self.plan(domain_dn):
            if entry.parent_dn == top_level_dn:
                if entry.parent_dn not in parent_checked:
                    parent_checked[entry.parent_dn] = self._exists(entry.parent_dn)
                if not parent_checked[entry.parent_dn]:
                    self.logger.warning(f"Skipping OU {entry.dn}: parent {entry.parent_dn} does not exist")
                    outcomes.append((entry, OUAction.SKIPPED))
                    continue

            outcomes.append((entry, self.ensure_ou(entry)))

        return outcomes

    def ensure_ou(self, entry: OUEntry) -> OUAction:
        if self._exists(entry.dn):
            self.logger.info(f"OU {entry.dn} already exists")
            return OUAction.EXISTS

        try:
            self.directory.create_ou(entry.name, entry.parent_dn)
        except Exception as e:
            self.logger.warning(f"Failed to create OU {entry.dn}: {e}")
            return OUAction.FAILED

        self.logger.info(f"Created OU {entry.dn}")
        return OUAction.CREATED

    def _exists(self, dn: str) -> bool:
        try:
            return self.directory.ou_exists(dn)
        except Exception as e:
            self.logger.warning(f"Could not check whether OU {dn} exists: {e}")
            return False
