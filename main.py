# =============================================================================
# main.py - CLI entry point
# =============================================================================

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from core.ad_client import ActiveDirectoryClient
from core.directory import DryRunDirectory
from core.exceptions import NotFoundError
from core.models import ProvisioningConfig
from processors.lab_provisioner import LabProvisioner
from processors.name_reader import NameSourceReader
from utils.config import Config
from utils.console import colorize

DEFAULT_NAMES_FILE = Path(__file__).resolve().parent / "core" / "data" / "names.txt"


def setup_logging(level: str = "INFO", log_dir: str = "logs") -> str:
    """Log to stdout at the requested level and to a per-run DEBUG file"""
    log_path = Path(log_dir)
    log_path.mkdir(exist_ok=True)
    log_filename = log_path / f"lab_provisioner_{datetime.now():%Y%m%d_%H%M%S}.log"

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    handlers = [
        (logging.StreamHandler(sys.stdout), getattr(logging, level.upper())),
        (logging.FileHandler(log_filename, encoding='utf-8'), logging.DEBUG),
    ]
    for handler, handler_level in handlers:
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    logging.getLogger(__name__).info(f"Console log level {level.upper()}, full log in {log_filename}")
    return str(log_filename)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Provision a test-lab OU tree and user accounts in Active Directory")
    parser.add_argument('--input-file', default=str(DEFAULT_NAMES_FILE),
                        help='Name list, one "First Last" per line (default: bundled list)')
    parser.add_argument('--password-length', type=positive_int, default=16,
                        help='Length of generated passwords (default: 16)')
    parser.add_argument('--password', dest='fixed_password',
                        help='Use this password for every account instead of generating one')
    parser.add_argument('--ou-name', default='CORP', help='Top-level OU name (default: CORP)')
    parser.add_argument('--upn-suffix', help='UPN suffix (default: forest DNS name)')
    parser.add_argument('--country', default='US', help='Country code set on accounts (default: US)')
    parser.add_argument('--city', default='Seattle', help='City set on accounts (default: Seattle)')
    parser.add_argument('--dry-run', action='store_true',
                        help='Query the directory but only log the OUs and users that would be created')
    parser.add_argument('--output-csv', help='Write created accounts and their passwords to this CSV file')
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level')
    return parser


def build_provisioning_config(args: argparse.Namespace) -> ProvisioningConfig:
    return ProvisioningConfig(
        input_file=args.input_file,
        password_length=args.password_length,
        fixed_password=args.fixed_password,
        ou_name=args.ou_name,
        upn_suffix=args.upn_suffix,
        country=args.country,
        city=args.city,
        dry_run=args.dry_run,
        output_csv=args.output_csv,
    )


def main(argv=None):
    """Main CLI entry point"""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    provisioning_config = build_provisioning_config(args)

    try:
        NameSourceReader(provisioning_config.input_file).validate()
    except NotFoundError as e:
        logger.warning(str(e))
        sys.exit(1)

    config = Config()
    if not config.validate_ad_config():
        missing_vars = config.get_missing_ad_vars()
        logger.error(f"Missing required environment variables: {missing_vars}")
        sys.exit(1)

    try:
        with ActiveDirectoryClient(
                config.ad_server, config.ad_username,
                config.ad_password, config.base_dn, config.use_ssl
        ) as ad_client:
            directory = DryRunDirectory(ad_client) if provisioning_config.dry_run else ad_client
            stats = LabProvisioner(directory, provisioning_config).run()

    except Exception as e:
        logger.error(f"Provisioning failed: {e}")
        sys.exit(1)

    print(colorize(stats.summary_line, 'green' if stats.all_users_created else 'yellow'))


if __name__ == "__main__":
    main()
