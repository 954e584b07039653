import pytest

from elfcat.core.engine import ElfcatEngine
from elfcat.core.errors import BadMagic
from shared.config import ElfcatConfig, ReportConfig
from shared.logger import ElfcatLogger


@pytest.fixture
def engine():
    return ElfcatEngine(logger=ElfcatLogger("test-engine", console_output=False))


def test_analyze_reads_and_decodes(engine, sample_elf64, tmp_path):
    path = tmp_path / "prog"
    path.write_bytes(sample_elf64)
    decoded = engine.analyze(path)
    assert decoded.filename == str(path)
    assert decoded.contents == sample_elf64
    assert len(decoded.section_headers) == 3


def test_missing_file(engine, tmp_path):
    with pytest.raises(FileNotFoundError):
        engine.analyze(tmp_path / "missing")


def test_directory_is_not_a_file(engine, tmp_path):
    with pytest.raises(FileNotFoundError):
        engine.analyze(tmp_path)


def test_size_limit(minimal_elf64, tmp_path):
    path = tmp_path / "prog"
    path.write_bytes(minimal_elf64)
    config = ElfcatConfig(report=ReportConfig(max_file_size=32))
    engine = ElfcatEngine(config=config, logger=ElfcatLogger("test-engine", console_output=False))
    with pytest.raises(ValueError, match="too large"):
        engine.analyze(path)


def test_decode_errors_propagate(engine, tmp_path):
    path = tmp_path / "script.sh"
    path.write_bytes(b"#!/bin/sh\necho not an elf file\n")
    with pytest.raises(BadMagic):
        engine.analyze(path)
