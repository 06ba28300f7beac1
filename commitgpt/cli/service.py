import logging
import subprocess
from typing import Callable, List, Optional, Sequence

from commitgpt.errors import EncodingError, GitCommitError, GitDiffError
from commitgpt.logger import commitgpt_logger

RunProcess = Callable[[Sequence[str]], subprocess.CompletedProcess]


class GitService:
    """Run the git commands commitgpt needs: read the staged diff and commit."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        run_process: Optional[RunProcess] = None,
        run_attached: Optional[RunProcess] = None,
    ) -> None:
        self._logger = logger or commitgpt_logger(__name__)
        self._run_process = run_process or self._default_run_process
        self._run_attached = run_attached or self._default_run_attached

    # --- Public API ---
    def extract_diff(self, paths: Sequence[str] = (), ignore_space: bool = True) -> str:
        """Return the staged diff, optionally limited to *paths*.

        Raises:
            GitDiffError: If git cannot be run or exits non-zero.
            EncodingError: If the output is not valid UTF-8.
        """
        args = self.diff_command(paths, ignore_space)
        self._logger.debug("Running git command: %s", " ".join(args))

        try:
            result = self._run_process(args)
        except OSError as exc:
            self._logger.error("Unable to run git diff: %s", exc)
            raise GitDiffError(f"unable to run command 'git diff': {exc}") from exc

        if result.returncode != 0:
            stderr = self._decode_lossy(result.stderr)
            self._logger.error("git diff exited with %d: %s", result.returncode, stderr)
            detail = f": {stderr}" if stderr else ""
            raise GitDiffError(f"unable to run command 'git diff'{detail}")

        try:
            diff = result.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            self._logger.error("git diff output is not UTF-8: %s", exc)
            raise EncodingError(f"unable to parse to utf8: {exc}") from exc

        self._logger.debug("Diff length: %d", len(diff))
        return diff

    def commit(self, message: str) -> None:
        """Commit with *message*, opening the editor so it can be amended.

        Raises:
            GitCommitError: If git cannot be run or exits non-zero.
        """
        args = ["git", "commit", "--message", message, "--edit"]
        self._logger.debug("Running git commit (message length: %d)", len(message))

        try:
            result = self._run_attached(args)
        except OSError as exc:
            self._logger.error("Unable to run git commit: %s", exc)
            raise GitCommitError(f"unable to run command 'git commit': {exc}") from exc

        if result.returncode != 0:
            self._logger.warning("git commit exited with %d", result.returncode)
            raise GitCommitError("unable to run command 'git commit'")

        self._logger.debug("Commit created")

    # --- Static helpers ---
    @staticmethod
    def diff_command(paths: Sequence[str], ignore_space: bool) -> List[str]:
        args = ["git", "--no-pager", "diff", "--staged"]
        if ignore_space:
            args.extend(["--ignore-space-change", "--ignore-blank-lines"])
        if paths:
            args.append("--")
            args.extend(paths)
        return args

    @staticmethod
    def _decode_lossy(output: Optional[bytes]) -> str:
        return output.decode("utf-8", errors="replace").strip() if output else ""

    @staticmethod
    def _default_run_process(args: Sequence[str]) -> subprocess.CompletedProcess:
        return subprocess.run(args, capture_output=True, check=False)

    @staticmethod
    def _default_run_attached(args: Sequence[str]) -> subprocess.CompletedProcess:
        return subprocess.run(args, check=False)
