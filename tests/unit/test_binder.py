"""Unit tests for line-by-line binding into dataclass targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pytest

from inibind.binder import BindReport, IniBinder, load_ini, load_ini_bytes
from inibind.config import BindConfig
from inibind.errors import (
    FileAccessError,
    IniSyntaxError,
    UnsupportedFieldKindError,
    UsageError,
    ValueTypeError,
)
from inibind.sample import AppConfig, MysqlConfig, RedisConfig
from inibind.schema import ini_field


@dataclass
class _MetricsSection:
    enabled: bool = ini_field("enabled", default=False)
    ratio: float = ini_field("ratio", default=0.5)


@dataclass
class _MetricsConfig:
    metrics: _MetricsSection = field(
        default_factory=_MetricsSection, metadata={"ini": "metrics"}
    )


@dataclass
class _NamedConfig:
    name: str = ini_field("name", default="plain")


class _RecordingLogger:
    """Bind logger test double that records emitted events."""

    def __init__(self) -> None:
        self.events: list[tuple[str, ...]] = []

    def log_load_start(self, source: str) -> None:
        self.events.append(("start", source))

    def log_load_complete(self, source: str, applied: int, skipped: int) -> None:
        self.events.append(("complete", source, str(applied), str(skipped)))

    def log_load_failure(self, source: str, error_type: str, line: int | None) -> None:
        self.events.append(("failure", source, error_type, str(line)))

    def log_section_skipped(self, section: str, line: int) -> None:
        self.events.append(("section_skipped", section, str(line)))

    def log_key_skipped(self, key: str, line: int, reason: str) -> None:
        self.events.append(("key_skipped", key, str(line), reason))


def _crlf(*lines: str) -> bytes:
    """Join lines with CRLF line endings."""

    return "\r\n".join(lines).encode("utf-8")


def test_load_ini_bytes_binds_example_file_and_leaves_other_fields_default() -> None:
    """The reference example should bind four fields and leave the rest untouched."""

    config = load_ini_bytes(
        _crlf(
            "[mysql]",
            "address=127.0.0.1",
            "port=3306",
            "[redis]",
            "host=127.0.0.1",
            "test=true",
        ),
        AppConfig(),
    )

    assert config.mysql == MysqlConfig(address="127.0.0.1", port=3306)
    assert config.redis == RedisConfig(host="127.0.0.1", test=True)


def test_duplicate_keys_use_last_assignment_in_file_order() -> None:
    """Repeated keys and repeated sections should be last-write-wins."""

    config = load_ini_bytes(
        _crlf("[mysql]", "port=1", "[redis]", "port=2", "[mysql]", "port=3"),
        AppConfig(),
    )

    assert config.mysql.port == 3
    assert config.redis.port == 2


def test_undeclared_section_skips_keys_until_next_header() -> None:
    """Keys under an unknown section should not touch the target."""

    binder = IniBinder()
    config = AppConfig()

    report = binder.bind_bytes(
        _crlf("[postgres]", "port=5432", "address=db", "[redis]", "port=6379"),
        config,
    )

    assert config.mysql == MysqlConfig()
    assert config.redis.port == 6379
    assert report == BindReport(sections=2, applied=1, skipped=2)


def test_unknown_key_is_skipped_and_siblings_still_apply() -> None:
    """An undeclared key should not block declared keys in the same section."""

    config = load_ini_bytes(
        _crlf("[mysql]", "address=10.0.0.1", "timeout=30", "username=root"),
        AppConfig(),
    )

    assert config.mysql == MysqlConfig(address="10.0.0.1", username="root")


def test_assignment_before_any_section_is_ignored() -> None:
    """Keys outside any section should be skipped without error."""

    logger = _RecordingLogger()
    config = AppConfig()

    IniBinder(logger=logger).bind_bytes(_crlf("port=3306"), config)

    assert config == AppConfig()
    assert ("key_skipped", "port", "1", "no_active_section") in logger.events


@pytest.mark.parametrize(
    ("lines", "line_number"),
    [
        (("[mysql]", "port=1", "[section"), 3),
        (("; header", "[]"), 2),
        (("[mysql]", "", "=value"), 3),
        (("[mysql]", "novalue"), 2),
    ],
)
def test_malformed_lines_raise_syntax_error_with_line_number(
    lines: tuple[str, ...], line_number: int
) -> None:
    """Syntax errors should report the exact 1-based failing line."""

    with pytest.raises(IniSyntaxError) as exc_info:
        load_ini_bytes(_crlf(*lines), AppConfig())

    assert exc_info.value.line == line_number


def test_first_error_aborts_and_earlier_assignments_remain_applied() -> None:
    """Binding is fail-fast with no rollback of already applied lines."""

    config = AppConfig()

    with pytest.raises(ValueTypeError) as exc_info:
        load_ini_bytes(
            _crlf("[mysql]", "address=127.0.0.1", "port=abc", "username=root"),
            config,
        )

    assert exc_info.value.line == 3
    assert config.mysql.address == "127.0.0.1"
    assert config.mysql.username == ""


def test_boolean_field_rejects_unknown_spelling() -> None:
    """A boolean key given `maybe` should fail at its line and keep the default."""

    config = AppConfig()

    with pytest.raises(ValueTypeError) as exc_info:
        load_ini_bytes(_crlf("[redis]", "test=maybe"), config)

    assert exc_info.value.line == 2
    assert config.redis.test is False


def test_unsupported_field_kind_raises_by_default() -> None:
    """Keys bound to non-scalar fields should raise unless configured to ignore."""

    with pytest.raises(UnsupportedFieldKindError) as exc_info:
        load_ini_bytes(_crlf("[metrics]", "enabled=1", "ratio=0.9"), _MetricsConfig())

    assert exc_info.value.line == 3


def test_unsupported_field_kind_is_left_unmodified_when_ignored() -> None:
    """`ignore` mode should skip unsupported fields and bind the rest."""

    config = load_ini_bytes(
        _crlf("[metrics]", "ratio=0.9", "enabled=1"),
        _MetricsConfig(),
        config=BindConfig(unsupported_kinds="ignore"),
    )

    assert config.metrics.ratio == 0.5
    assert config.metrics.enabled is True


def test_section_bound_to_scalar_field_raises_usage_error_with_line() -> None:
    """A header naming a non-dataclass field should fail at the header line."""

    config = _NamedConfig()

    with pytest.raises(UsageError) as exc_info:
        load_ini_bytes(_crlf("; comment", "[name]", "x=1"), config)

    assert exc_info.value.line == 2
    assert str(exc_info.value).startswith("line 2: field `name` bound to section `name`")
    assert config.name == "plain"


@pytest.mark.parametrize(
    "config",
    [BindConfig(line_endings="cr"), BindConfig(unsupported_kinds="warn"), BindConfig(tag=" ")],
)
def test_invalid_bind_config_raises_usage_error(config: BindConfig) -> None:
    """Library entry points should reject invalid settings as usage errors."""

    with pytest.raises(UsageError, match="invalid bind config"):
        load_ini_bytes(_crlf("[mysql]", "port=1"), AppConfig(), config=config)


def test_lf_only_content_depends_on_line_ending_mode() -> None:
    """LF files bind in universal mode and collapse to one line in CRLF mode."""

    content = b"[mysql]\nport=3306\n"

    assert load_ini_bytes(content, AppConfig()).mysql.port == 3306
    with pytest.raises(IniSyntaxError) as exc_info:
        load_ini_bytes(content, AppConfig(), config=BindConfig(line_endings="crlf"))
    assert exc_info.value.line == 1


def test_binder_reuse_does_not_carry_active_section() -> None:
    """Each bind should start with no active section."""

    binder = IniBinder()
    first = AppConfig()
    second = AppConfig()

    binder.bind_bytes(_crlf("[mysql]", "port=1"), first)
    binder.bind_bytes(_crlf("port=2"), second)

    assert first.mysql.port == 1
    assert second.mysql.port == 0


def test_binder_logs_skipped_section_and_outcome() -> None:
    """The binder should report skips and completion through its logger."""

    logger = _RecordingLogger()

    IniBinder(logger=logger).bind_bytes(_crlf("[extra]", "k=v"), AppConfig())

    assert logger.events == [
        ("start", "<bytes>"),
        ("section_skipped", "extra", "1"),
        ("key_skipped", "k", "2", "no_active_section"),
        ("complete", "<bytes>", "0", "1"),
    ]


def test_binder_logs_failure_with_error_type_and_line() -> None:
    """Terminal errors should be logged before they propagate."""

    logger = _RecordingLogger()

    with pytest.raises(IniSyntaxError):
        IniBinder(logger=logger).bind_bytes(_crlf("[mysql", "port=1"), AppConfig())

    assert logger.events[-1] == ("failure", "<bytes>", "IniSyntaxError", "1")


def test_load_ini_reads_crlf_fixture(fixture_path: Callable[[str], Path]) -> None:
    """File loading should bind the CRLF fixture and return the same target."""

    target = AppConfig()

    result = load_ini(fixture_path("conf.ini"), target)

    assert result is target
    assert target.mysql == MysqlConfig(address="127.0.0.1", port=3306)
    assert target.redis == RedisConfig(host="127.0.0.1", test=True)


def test_load_ini_wraps_missing_file_as_file_access_error(tmp_path: Path) -> None:
    """An unreadable path should raise a file-access error chained to the OS error."""

    with pytest.raises(FileAccessError) as exc_info:
        load_ini(tmp_path / "missing.ini", AppConfig())

    assert isinstance(exc_info.value.__cause__, FileNotFoundError)
    assert exc_info.value.line is None


def test_load_ini_rejects_bad_target_before_touching_filesystem(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Target validation should happen before any file read."""

    def _fail_read(*_: object, **__: object) -> bytes:
        raise AssertionError("filesystem must not be accessed")

    monkeypatch.setattr(Path, "read_bytes", _fail_read)

    with pytest.raises(UsageError):
        load_ini(tmp_path / "conf.ini", AppConfig)
    with pytest.raises(UsageError):
        load_ini(tmp_path / "conf.ini", 42)
