# =============================================================================
# processors/lab_provisioner.py - Provisioning run workflow
# =============================================================================

from typing import Any, Dict, Optional
import logging

from core.directory import DirectoryService
from core.models import OUAction, ProvisioningConfig, ProvisioningStats, UserRecord
from core.random_source import RandomSource, SystemRandomSource
from processors.account_materializer import AccountMaterializer
from processors.attribute_synthesizer import AttributeSynthesizer
from processors.name_reader import NameSourceReader
from processors.ou_planner import DirectoryStructurePlanner
from utils.csv_utils import CSVHandler


class LabProvisioner:
    """Runs one provisioning pass: validate, OU tree, synthesize, create, report"""

    CREDENTIAL_FIELDNAMES = [
        'account_name', 'user_principal_name', 'full_name',
        'department', 'office_phone', 'password'
    ]

    def __init__(self, directory: DirectoryService, config: ProvisioningConfig,
                 random_source: Optional[RandomSource] = None):
        self.directory = directory
        self.config = config
        self.reader = NameSourceReader(config.input_file)
        self.synthesizer = AttributeSynthesizer(config, random_source or SystemRandomSource())
        self.planner = DirectoryStructurePlanner(directory, config.ou_name)
        self.materializer = AccountMaterializer(directory)
        self.logger = logging.getLogger(self.__class__.__name__)

    def run(self) -> ProvisioningStats:
        # Raises NotFoundError before the directory is touched
        self.reader.validate()

        stats = ProvisioningStats()
        domain_dn = self.directory.get_domain_dn()
        self.logger.info(f"Provisioning OU={self.config.ou_name} under {domain_dn}")

        for entry, action in self.planner.ensure(domain_dn):
            stats.record_ou(action)

        forest_dns_name = '' if self.config.upn_suffix else self.directory.get_forest_dns_name()
        users = self.synthesizer.synthesize(self.reader.read_lines(), forest_dns_name)
        stats.total_users = len(users)

        created = self.materializer.materialize(users, self.planner.users_ou_dn(domain_dn))
        stats.created_users = len(created)
        stats.failed_users = stats.total_users - stats.created_users

        if self.config.output_csv:
            CSVHandler.write_csv([self.user_record_to_dict(user) for user in created],
                                 self.config.output_csv, self.CREDENTIAL_FIELDNAMES)

        self.log_statistics(stats)
        return stats

    def user_record_to_dict(self, user: UserRecord) -> Dict[str, Any]:
        return {field: getattr(user, field) for field in self.CREDENTIAL_FIELDNAMES}

    def log_statistics(self, stats: ProvisioningStats) -> None:
        ou_counts = {action.value: stats.ou_action_counts.get(action, 0) for action in OUAction}
        self.logger.info(f"OU summary: {ou_counts}")
        self.logger.info(stats.summary_line)
