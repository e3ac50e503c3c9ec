# =============================================================================
# core/models.py - Provisioning data models
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from ldap3.utils.dn import escape_rdn


DEFAULT_DEPARTMENTS: Tuple[str, ...] = (
    "Accounting",
    "Engineering",
    "Human Resources",
    "Information Technology",
    "Legal",
    "Marketing",
    "Operations",
    "Sales",
)

# Subtree created beneath the top-level OU, in creation order
OU_SUBTREE: Tuple[str, ...] = ("Users", "Computers", "Groups", "Resources", "Shared")

# Printable ASCII, codes 33-126
PASSWORD_CHARSET: str = ''.join(chr(code) for code in range(33, 127))


def ou_dn(name: str, parent_dn: str) -> str:
    return f"OU={escape_rdn(name)},{parent_dn}"


def user_dn(full_name: str, path: str) -> str:
    return f"CN={escape_rdn(full_name)},{path}"


class OUAction(Enum):
    """Outcome of ensuring a single OU"""
    CREATED = "created"
    EXISTS = "exists"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ProvisioningConfig:
    """Run settings, built once at startup"""
    input_file: str
    password_length: int = 16
    fixed_password: Optional[str] = None
    ou_name: str = "CORP"
    upn_suffix: Optional[str] = None
    country: str = "US"
    city: str = "Seattle"
    departments: Tuple[str, ...] = DEFAULT_DEPARTMENTS
    dry_run: bool = False
    output_csv: Optional[str] = None


@dataclass(frozen=True)
class NameRecord:
    """First/last name pair parsed from one input line"""
    first_name: str
    last_name: str = ""


@dataclass(frozen=True)
class UserRecord:
    """Synthesized account, ready to be created in the directory"""
    full_name: str
    account_name: str
    first_name: str
    last_name: str
    department: str
    office_phone: str
    password: str
    country: str
    city: str
    user_principal_name: str


@dataclass(frozen=True)
class OUEntry:
    """One step of the OU plan"""
    name: str
    parent_dn: str

    @property
    def dn(self) -> str:
        return ou_dn(self.name, self.parent_dn)


@dataclass
class ProvisioningStats:
    """Statistics for a provisioning run"""
    total_users: int = 0
    created_users: int = 0
    failed_users: int = 0
    ou_action_counts: Dict[OUAction, int] = field(default_factory=dict)

    def record_ou(self, action: OUAction) -> None:
        self.ou_action_counts[action] = self.ou_action_counts.get(action, 0) + 1

    @property
    def all_users_created(self) -> bool:
        return self.created_users == self.total_users

    @property
    def summary_line(self) -> str:
        return f"{self.created_users} out of {self.total_users} users created."
