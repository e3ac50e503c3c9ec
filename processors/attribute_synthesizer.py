# =============================================================================
# processors/attribute_synthesizer.py - Name to account derivation
# =============================================================================

from typing import Iterable, List, Optional
import logging

from core.models import NameRecord, PASSWORD_CHARSET, ProvisioningConfig, UserRecord
from core.random_source import RandomSource


class AttributeSynthesizer:
    """Derives account identifiers and randomized attributes from name lines"""

    PHONE_PREFIX = '555-'

    def __init__(self, config: ProvisioningConfig, random_source: RandomSource):
        if not config.departments:
            raise ValueError("At least one department is required")
        self.config = config
        self.random_source = random_source
        self.logger = logging.getLogger(self.__class__.__name__)

    def parse_name(self, line: str) -> Optional[NameRecord]:
        """Split a line into first and last name; blank lines give None"""
        tokens = line.strip().split(None, 2)
        if not tokens:
            return None
        if len(tokens) == 1:
            self.logger.warning(f"Name '{tokens[0]}' has no last name, continuing with an empty one")
            return NameRecord(first_name=tokens[0])
        return NameRecord(first_name=tokens[0], last_name=tokens[1])

    def generate_phone(self) -> str:
        return f"{self.PHONE_PREFIX}{self.random_source.randint(0, 9999):04d}"

    def pick_department(self) -> str:
        # choice() covers every index, including the last department
        return self.random_source.choice(self.config.departments)

    def generate_password(self) -> str:
        if self.config.fixed_password is not None:
            return self.config.fixed_password
        return ''.join(self.random_source.choice(PASSWORD_CHARSET)
                       for _ in range(self.config.password_length))

    def build_user(self, name: NameRecord, upn_suffix: str) -> UserRecord:
        account_name = f"{name.first_name}.{name.last_name}"
        full_name = f"{name.first_name} {name.last_name}".strip()
        return UserRecord(
            full_name=full_name,
            account_name=account_name,
            first_name=name.first_name,
            last_name=name.last_name,
            department=self.pick_department(),
            office_phone=self.generate_phone(),
            password=self.generate_password(),
            country=self.config.country,
            city=self.config.city,
            user_principal_name=f"{account_name}@{upn_suffix}",
        )

    def synthesize(self, lines: Iterable[str], forest_dns_name: str) -> List[UserRecord]:
        """Build one UserRecord per non-blank line"""
        upn_suffix = self.config.upn_suffix or forest_dns_name
        users = []

        for line_number, line in enumerate(lines, start=1):
            name = self.parse_name(line)
            if name is None:
                self.logger.debug(f"Skipping blank line {line_number}")
                continue
            users.append(self.build_user(name, upn_suffix))

        self.logger.info(f"Synthesized {len(users)} user records (UPN suffix: {upn_suffix})")
        return users
