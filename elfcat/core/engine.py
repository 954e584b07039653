"""
elfcat Engine
==============

Reads an input file from disk and hands its bytes to the structural
decoder.  This is the only layer of elfcat that touches the filesystem on
the input side; the decoder itself works purely on bytes.
"""

from __future__ import annotations

from pathlib import Path

from shared.config import ElfcatConfig
from shared.logger import ElfcatLogger

from elfcat.core.models import DecodedElf
from elfcat.parsers.elf_parser import ELFDecoder
from elfcat.utils import human_format_bytes


class ElfcatEngine:
    """Loads and decodes ELF files.

    Usage::

        engine = ElfcatEngine()
        decoded = engine.analyze("/bin/true")
        print(len(decoded.overlay), "ranges")
    """

    def __init__(
        self,
        config: ElfcatConfig | None = None,
        logger: ElfcatLogger | None = None,
    ) -> None:
        """Initialise the engine.

        Args:
            config: elfcat configuration.  Defaults are used if not provided.
            logger: Logger instance.  A new one is created if not provided.
        """
        self._config: ElfcatConfig = config or ElfcatConfig()
        self._logger: ElfcatLogger = logger or ElfcatLogger("engine")

    def analyze(self, file_path: str | Path) -> DecodedElf:
        """Read *file_path* and decode it.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file exceeds the configured size limit.
            ElfError: If the contents are not a decodable ELF file.
        """
        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        file_size = path.stat().st_size
        max_size = self._config.report.max_file_size
        if file_size > max_size:
            raise ValueError(
                f"File too large: {human_format_bytes(file_size)} "
                f"(max: {human_format_bytes(max_size)})"
            )

        with self._logger.operation("decode"):
            self._logger.info("Decoding %s (%s)", path, human_format_bytes(file_size))
            with self._logger.timed(f"decode of {path.name}"):
                decoded = ELFDecoder(
                    path.read_bytes(), str(path), logger=self._logger
                ).decode()

        self._logger.debug(
            "%s: %d program headers, %d section headers, %d ranges, %d notes",
            path.name,
            len(decoded.program_headers),
            len(decoded.section_headers),
            len(decoded.overlay),
            len(decoded.notes),
        )
        return decoded
