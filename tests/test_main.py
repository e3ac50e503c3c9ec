import logging

import pytest

import main
from conftest import FakeDirectory


class FakeClientContext:
    def __init__(self, directory):
        self.directory = directory

    def __enter__(self):
        return self.directory

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    root_logger = logging.getLogger()
    handlers, level = list(root_logger.handlers), root_logger.level
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def ad_env(monkeypatch):
    monkeypatch.setenv("AD_SERVER", "ldaps://dc01")
    monkeypatch.setenv("AD_USERNAME", "LAB\\admin")
    monkeypatch.setenv("AD_PASSWORD", "secret")


def test_missing_input_file_exits_before_connecting(monkeypatch, ad_env, tmp_path):
    calls = []
    monkeypatch.setattr(main, 'ActiveDirectoryClient', lambda *args: calls.append(args))

    with pytest.raises(SystemExit) as excinfo:
        main.main(['--input-file', str(tmp_path / 'missing.txt')])

    assert excinfo.value.code == 1
    assert calls == []


def test_missing_environment_exits(monkeypatch, names_file):
    for name in ("AD_SERVER", "AD_USERNAME", "AD_PASSWORD"):
        monkeypatch.setenv(name, "")

    with pytest.raises(SystemExit) as excinfo:
        main.main(['--input-file', str(names_file)])

    assert excinfo.value.code == 1


def test_prints_summary(monkeypatch, ad_env, names_file, capsys):
    directory = FakeDirectory()
    monkeypatch.setattr(main, 'ActiveDirectoryClient', lambda *args: FakeClientContext(directory))

    main.main(['--input-file', str(names_file), '--upn-suffix', 'example.com'])

    assert capsys.readouterr().out.rstrip().endswith("2 out of 2 users created.")
    assert sorted(directory.users) == ["Alice.Smith", "Bob.Jones"]


def test_dry_run_does_not_create(monkeypatch, ad_env, names_file, capsys):
    directory = FakeDirectory()
    monkeypatch.setattr(main, 'ActiveDirectoryClient', lambda *args: FakeClientContext(directory))

    main.main(['--input-file', str(names_file), '--dry-run'])

    assert directory.create_calls == []
    assert "2 out of 2 users created." in capsys.readouterr().out


def test_build_provisioning_config_defaults():
    args = main.build_parser().parse_args([])
    config = main.build_provisioning_config(args)

    assert config.input_file == str(main.DEFAULT_NAMES_FILE)
    assert config.password_length == 16
    assert config.fixed_password is None
    assert config.ou_name == "CORP"
    assert config.upn_suffix is None


def test_password_length_must_be_positive():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(['--password-length', '0'])


def test_bundled_name_list_exists():
    assert main.DEFAULT_NAMES_FILE.exists()


def test_missing_input_file_is_reported(ad_env, tmp_path, capsys):
    with pytest.raises(SystemExit):
        main.main(['--input-file', str(tmp_path / 'missing.txt')])

    assert "Input file not found" in capsys.readouterr().out


def test_setup_logging_writes_dated_file(tmp_path):
    log_file = main.setup_logging("WARNING", log_dir=str(tmp_path / "logs"))

    assert log_file.startswith(str(tmp_path / "logs" / "lab_provisioner_"))
    assert logging.getLogger().handlers[0].level == logging.WARNING
