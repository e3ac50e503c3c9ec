import pytest

from core.directory import DirectoryService
from core.exceptions import DirectoryOperationError
from core.models import ProvisioningConfig, ou_dn, user_dn
from core.random_source import RandomSource


class FakeDirectory(DirectoryService):
    """In-memory directory that records every call made against it"""

    def __init__(self, domain_dn="DC=example,DC=com", forest_dns_name="example.com"):
        self.domain_dn = domain_dn
        self.forest_dns_name = forest_dns_name
        self.ous = set()
        self.users = {}
        self.calls = []
        self.failing_ous = set()
        self.failing_users = set()

    @property
    def create_calls(self):
        return [call for call in self.calls if call[0] in ('create_ou', 'create_user')]

    def get_forest_dns_name(self):
        self.calls.append(('get_forest_dns_name',))
        return self.forest_dns_name

    def get_domain_dn(self):
        self.calls.append(('get_domain_dn',))
        return self.domain_dn

    def ou_exists(self, dn):
        self.calls.append(('ou_exists', dn))
        return dn.lower() in self.ous

    def create_ou(self, name, parent_dn):
        self.calls.append(('create_ou', name, parent_dn))
        dn = ou_dn(name, parent_dn)
        if name in self.failing_ous:
            raise DirectoryOperationError('add', dn, {'description': 'insufficientAccessRights'})
        self.ous.add(dn.lower())
        return dn

    def create_user(self, user, path):
        self.calls.append(('create_user', user.account_name, path))
        dn = user_dn(user.full_name, path)
        if user.account_name in self.failing_users or user.account_name in self.users:
            raise DirectoryOperationError('add', dn, {'description': 'entryAlreadyExists'})
        self.users[user.account_name] = user
        return dn


class ScriptedRandom(RandomSource):
    """Deterministic RandomSource returning scripted values"""

    def __init__(self, ints=None, choice_index=0):
        self.ints = list(ints or [])
        self.choice_index = choice_index

    def randint(self, low, high):
        value = self.ints.pop(0) if self.ints else low
        assert low <= value <= high
        return value

    def choice(self, items):
        return items[self.choice_index]


@pytest.fixture
def directory():
    return FakeDirectory()


@pytest.fixture
def names_file(tmp_path):
    path = tmp_path / "names.txt"
    path.write_text("Alice Smith\nBob Jones\n", encoding="utf-8")
    return path


@pytest.fixture
def make_config(names_file):
    def _make(**overrides):
        settings = {'input_file': str(names_file), 'upn_suffix': 'example.com'}
        settings.update(overrides)
        return ProvisioningConfig(**settings)
    return _make
