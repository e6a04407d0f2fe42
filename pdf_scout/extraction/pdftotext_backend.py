"""
pdftotext-based text extraction backend.

Runs the poppler ``pdftotext`` converter restricted to the first page
and captures its standard output. Output is read up to a fixed byte
bound; anything beyond it is dropped and the converter is stopped.
"""

import subprocess
import tempfile
import threading
from pathlib import Path
from typing import List, Tuple, Union

from ..core import get_config, get_logger, ExtractionError

logger = get_logger(__name__)


class PdftotextBackend:
    """
    First-page extraction through the external pdftotext binary.

    Fast and layout-faithful; needs poppler-utils installed. A missing
    binary, a non-zero exit status or a timeout raise ExtractionError.
    """

    name = "pdftotext"

    def __init__(
        self,
        binary: str = None,
        max_output_bytes: int = None,
        timeout_seconds: float = None
    ):
        """
        Initialize the backend.

        Args:
            binary: Executable name or path of pdftotext.
            max_output_bytes: Upper bound on captured stdout.
            timeout_seconds: Kill the converter after this long.
        """
        config = get_config()

        self.binary = binary or config.extraction.pdftotext_binary
        self.max_output_bytes = max_output_bytes or config.extraction.max_output_bytes
        self.timeout_seconds = timeout_seconds or config.extraction.timeout_seconds

    def extract_first_page(self, filepath: Union[str, Path]) -> str:
        """
        Extract text from page 1 of a PDF.

        Args:
            filepath: Path to the PDF file.

        Returns:
            Raw text printed by pdftotext, at most max_output_bytes long.

        Raises:
            ExtractionError: If the converter is missing, fails or times out.
        """
        text, _ = self.read_first_page(filepath)
        return text

    def read_first_page(self, filepath: Union[str, Path]) -> Tuple[str, bool]:
        """
        Extract text from page 1 and report whether the output was cut.

        Args:
            filepath: Path to the PDF file.

        Returns:
            Tuple of (text, truncated), where truncated is True when
            pdftotext printed more than max_output_bytes.

        Raises:
            ExtractionError: If the converter cannot be started, fails or
                times out.
        """
        filepath = Path(filepath)
        cmd = [self.binary, "-f", "1", "-l", "1", str(filepath), "-"]

        try:
            data, truncated, returncode, stderr, timed_out = self._run(cmd, filepath)
        except OSError as e:
            raise ExtractionError(
                f"Cannot run {self.binary}: {e}",
                filepath=str(filepath),
                details={"binary": self.binary}
            )

        if timed_out:
            raise ExtractionError(
                f"pdftotext timed out after {self.timeout_seconds}s",
                filepath=str(filepath)
            )

        if returncode != 0 and not truncated:
            raise ExtractionError(
                f"pdftotext exited with status {returncode}: {stderr}",
                filepath=str(filepath),
                details={"returncode": returncode}
            )

        # A cut inside a multi-byte sequence leaves a partial character at the end.
        return data.decode("utf-8", errors="ignore"), truncated

    def _run(self, cmd: List[str], filepath: Path) -> Tuple[bytes, bool, int, str, bool]:
        # stderr goes to a file so a chatty converter cannot fill the pipe and stall.
        with tempfile.TemporaryFile() as err:
            proc = subprocess.Popen(
                cmd,
                stdout=subprocess.PIPE,
                stderr=err,
                stdin=subprocess.DEVNULL
            )

            timed_out = threading.Event()

            def _kill() -> None:
                timed_out.set()
                proc.kill()

            timer = threading.Timer(self.timeout_seconds, _kill)
            timer.start()

            try:
                data = proc.stdout.read(self.max_output_bytes + 1)
                truncated = len(data) > self.max_output_bytes

                if truncated:
                    logger.warning(
                        f"pdftotext output exceeded {self.max_output_bytes} bytes, "
                        f"truncating: {filepath.name}"
                    )
                    data = data[:self.max_output_bytes]
                    proc.kill()

                returncode = proc.wait()
            finally:
                timer.cancel()
                proc.stdout.close()

            err.seek(0)
            stderr = err.read(4096).decode("utf-8", errors="replace").strip()

        return data, truncated, returncode, stderr, timed_out.is_set()
