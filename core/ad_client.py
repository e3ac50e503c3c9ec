# =============================================================================
# core/ad_client.py - Active Directory client
# =============================================================================

import logging
from typing import Dict, Any, List, Optional
from ldap3 import Server, Connection, ALL, BASE
from ldap3.utils.dn import parse_dn

from core.directory import DirectoryService
from core.exceptions import DirectoryOperationError
from core.models import UserRecord, ou_dn, user_dn

# userAccountControl: NORMAL_ACCOUNT, enabled
NORMAL_ACCOUNT = 0x200


def dn_to_dns_name(dn: str) -> str:
    """Convert DC=corp,DC=example,DC=com to corp.example.com"""
    return '.'.join(value for attr, value, _ in parse_dn(dn) if attr.upper() == 'DC')


def encode_ad_password(password: str) -> bytes:
    """unicodePwd wants the password in double quotes, UTF-16LE encoded"""
    return f'"{password}"'.encode('utf-16-le')


class ActiveDirectoryClient(DirectoryService):
    """Active Directory client used to build the lab OU tree and accounts"""

    def __init__(self, server_url: str, username: str, password: str,
                 base_dn: Optional[str] = None, use_ssl: bool = True):
        self.server_url = server_url
        self.username = username
        self.password = password
        self.base_dn = base_dn
        self.use_ssl = use_ssl
        self.connection: Optional[Connection] = None
        self.logger = logging.getLogger(__name__)

    def __enter__(self):
        """Context manager entry"""
        if not self.connect():
            raise ConnectionError(f"Could not bind to {self.server_url}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit"""
        self.disconnect()

    def connect(self) -> bool:
        """Establish connection to Active Directory"""
        try:
            server = Server(self.server_url, use_ssl=self.use_ssl, get_info=ALL)
            self.connection = Connection(
                server,
                user=self.username,
                password=self.password,
                auto_bind=True
            )
            self.logger.info("Successfully connected to Active Directory")
            return True
        except Exception as e:
            self.logger.error(f"Failed to connect to AD: {e}")
            return False

    def disconnect(self) -> None:
        """Close Active Directory connection"""
        if self.connection:
            self.connection.unbind()
            self.connection = None
            self.logger.info("Disconnected from Active Directory")

    def _require_connection(self) -> Connection:
        if not self.connection:
            raise ConnectionError("Not connected to Active Directory")
        return self.connection

    def _root_dse_value(self, attribute: str) -> Optional[str]:
        """Read a single RootDSE attribute from the server info"""
        info = self._require_connection().server.info
        if info is None:
            return None
        values: List[str] = info.other.get(attribute) or []
        return values[0] if values else None

    def get_domain_dn(self) -> str:
        """Domain DN: BASE_DN override, else the RootDSE defaultNamingContext"""
        if self.base_dn:
            return self.base_dn
        domain_dn = self._root_dse_value('defaultNamingContext')
        if not domain_dn:
            raise DirectoryOperationError('rootDSE', 'defaultNamingContext',
                                          {'description': 'attribute not published'})
        return domain_dn

    def get_forest_dns_name(self) -> str:
        """Forest DNS name from rootDomainNamingContext, falling back to the domain DN"""
        forest_dn = self._root_dse_value('rootDomainNamingContext') or self.get_domain_dn()
        return dn_to_dns_name(forest_dn)

    def ou_exists(self, dn: str) -> bool:
        """Base-scope search for an organizationalUnit at dn"""
        connection = self._require_connection()
        found = connection.search(
            search_base=dn,
            search_filter='(objectClass=organizationalUnit)',
            search_scope=BASE,
            attributes=['ou']
        )
        self.logger.debug(f"OU {dn} {'exists' if found else 'not found'}")
        return bool(found)

    def create_ou(self, name: str, parent_dn: str) -> str:
        dn = ou_dn(name, parent_dn)
        self._add(dn, ['top', 'organizationalUnit'], {'ou': name})
        return dn

    def create_user(self, user: UserRecord, path: str) -> str:
        dn = user_dn(user.full_name, path)
        self._add(dn, ['top', 'person', 'organizationalPerson', 'user'],
                  self._build_user_attributes(user))
        return dn

    def _build_user_attributes(self, user: UserRecord) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {
            'cn': user.full_name,
            'displayName': user.full_name,
            'givenName': user.first_name,
            'sn': user.last_name,
            'sAMAccountName': user.account_name,
            'userPrincipalName': user.user_principal_name,
            'department': user.department,
            'telephoneNumber': user.office_phone,
            'c': user.country,
            'l': user.city,
            'unicodePwd': encode_ad_password(user.password),
            'userAccountControl': NORMAL_ACCOUNT,
        }
        # AD rejects empty attribute values (e.g. sn for single-token names)
        return {key: value for key, value in attributes.items() if value != ''}

    def _add(self, dn: str, object_class: List[str], attributes: Dict[str, Any]) -> None:
        connection = self._require_connection()
        if not connection.add(dn, object_class, attributes):
            raise DirectoryOperationError('add', dn, connection.result)
        self.logger.debug(f"Added {dn}")
