"""
Wrapper around the Fernflower decompiler (java-decompiler.jar).
"""

import logging
from pathlib import Path

from mvn2src.utils.process_runner import ProcessTimeoutError, execute


DECOMPILE_TIMEOUT = 2 * 60


class DecompilerWrapper:
    """
    Decompiles binary jars by running the decompiler jar with ``java -jar``.
    """

    def __init__(self, decompiler_path, java_command='java', timeout=DECOMPILE_TIMEOUT, logger=None):
        """
        Initialize the wrapper.

        Args:
            decompiler_path (Path): Path to java-decompiler.jar.
            java_command (str): Java executable used to launch it.
            timeout (float): Timeout per jar, in seconds.
            logger (logging.Logger, optional): Logger instance. If None, a new logger is created.
        """
        self.decompiler_path = Path(decompiler_path)
        self.java_command = java_command
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def is_available(self):
        return self.decompiler_path.is_file()

    def decompile(self, jar_path, output_dir):
        """
        Decompile a jar into a directory.

        Args:
            jar_path (Path): Binary jar to decompile.
            output_dir (Path): Directory receiving the decompiled sources.

        Returns:
            bool: True if the decompiler exited successfully, False otherwise.
        """
        if not self.decompiler_path.exists():
            self.logger.error(f"Decompiler not found: {self.decompiler_path}")
            return False

        output_dir = Path(output_dir)

        cmd = [
            self.java_command,
            '-jar',
            str(self.decompiler_path),
            '-hes=0',  # hide empty super
            '-hdc=0',  # hide default constructor
            str(jar_path),
            str(output_dir)
        ]

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            self.logger.debug(f"Decompiling: {jar_path} -> {output_dir}")
            result = execute(cmd, timeout=self.timeout)
        except (OSError, ProcessTimeoutError) as e:
            self.logger.error(f"Decompilation error for {jar_path}: {e}")
            return False

        if result.is_success():
            self.logger.debug(f"Decompilation succeeded: {jar_path}")
            return True

        self.logger.warning(f"Decompilation failed for {jar_path}: {result.stderr.strip()}")
        return False
