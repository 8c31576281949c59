"""Git command wrapper used by the publisher."""

import logging
import subprocess
from pathlib import Path

from ..models.options import GitUser
from ..utils.exceptions import GitError, ProcessError
from .base import CommandResult

logger = logging.getLogger(__name__)

REDACTED = "[secure]"

# `git ls-remote --exit-code` exits with 2 when no matching ref was found
LS_REMOTE_NO_MATCH = 2


class Git:
    """
    Runs git commands against a single working tree.

    Every command goes through :meth:`exec`, which raises
    :class:`ProcessError` when git exits with a non-zero status and keeps the
    output of the last successful command in :attr:`output`.
    """

    def __init__(
        self,
        cwd: str | Path = ".",
        cmd: str = "git",
        timeout: int | None = None,
        secrets: list[str] | None = None,
    ):
        """
        Initialize the wrapper.

        Args:
            cwd: Working tree the commands run in
            cmd: Git executable
            timeout: Per-command timeout in seconds (None waits forever)
            secrets: Strings hidden from log output and error messages
        """
        self.cwd = str(cwd)
        self.cmd = cmd or "git"
        self.timeout = timeout
        self.secrets = [s for s in (secrets or []) if s]
        self.output = ""

    @classmethod
    def clone(
        cls,
        repo: str,
        dir: str | Path,
        branch: str,
        depth: int = 1,
        git: str = "git",
        remote: str = "origin",
        timeout: int | None = None,
        secrets: list[str] | None = None,
    ) -> "Git":
        """
        Clone a repo into the given dir if it doesn't already exist.

        A shallow single-branch clone is tried first. If that fails, usually
        because the branch does not exist yet, a full clone is made instead.

        Args:
            repo: Repository URL
            dir: Target directory
            branch: Branch name
            depth: Clone depth
            git: Git executable
            remote: Name given to the cloned remote
            timeout: Per-command timeout in seconds
            secrets: Strings hidden from log output and error messages

        Returns:
            Git: Wrapper for the clone
        """
        target = Path(dir)
        git_repo = cls(cwd=target, cmd=git, timeout=timeout, secrets=secrets)
        if target.exists():
            logger.debug(f"Reusing existing clone in {target}")
            return git_repo

        target.resolve().parent.mkdir(parents=True, exist_ok=True)

        args = [
            "clone",
            repo,
            str(target),
            "--branch",
            branch,
            "--single-branch",
            "--origin",
            remote,
            "--depth",
            str(depth),
        ]
        try:
            git_repo.spawn(git_repo.cmd, args, cwd=".")
        except ProcessError as e:
            logger.warning(
                f"Shallow clone of branch {branch} failed, retrying full clone: "
                f"{git_repo._redact(e.message)}"
            )
            git_repo.spawn(
                git_repo.cmd, ["clone", repo, str(target), "--origin", remote], cwd="."
            )
        return git_repo

    def _redact(self, text: str) -> str:
        for secret in self.secrets:
            text = text.replace(secret, REDACTED)
        return text

    def spawn(self, exe: str, args: list[str], cwd: str | Path | None = None) -> str:
        """
        Run a process and return its output.

        Args:
            exe: Executable
            args: Arguments
            cwd: Working directory (defaults to this wrapper's working tree)

        Returns:
            str: The process' standard output

        Raises:
            ProcessError: If the process exits with a non-zero status
            GitError: If the process cannot be started or times out
        """
        if isinstance(args, str):
            args = [args]
        cwd = str(cwd) if cwd is not None else self.cwd
        command = self._redact(" ".join([exe] + list(args)))

        logger.debug(f"Executing: {command} in {cwd}")
        try:
            completed = subprocess.run(
                [exe] + list(args),
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            raise GitError(
                f"Command timed out after {self.timeout} seconds: {command}",
                command=command,
            ) from e
        except OSError as e:
            raise GitError(f"Failed to execute {command}: {e}", command=command) from e

        result = CommandResult(
            success=completed.returncode == 0,
            output=completed.stdout or "",
            error=completed.stderr or "",
            exit_code=completed.returncode,
        )

        if not result.success:
            message = self._redact(
                result.combined_output.strip() or f"Process failed: {result.exit_code}"
            )
            logger.debug(f"Command failed ({result.exit_code}): {command}")
            raise ProcessError(result.exit_code, message, command=command)

        return result.output

    def exec(self, *args: str) -> "Git":
        """
        Execute an arbitrary git command.

        Args:
            args: Arguments (e.g. ``"remote", "update"``)

        Returns:
            Git: self, with :attr:`output` set
        """
        self.output = self.spawn(self.cmd, list(args), self.cwd)
        return self

    def add(self, files: str | list[str]) -> "Git":
        """Stage files."""
        if isinstance(files, str):
            files = [files]
        return self.exec("add", *files)

    def checkout(self, remote: str, branch: str) -> "Git":
        """
        Check out a branch, creating an orphan if it doesn't exist on the remote.

        An existing branch is checked out, cleaned and hard reset to the
        remote's version. A branch only present locally, left by an
        earlier unpushed publish, is checked out as is.

        Args:
            remote: Remote alias
            branch: Branch name
        """
        treeish = f"{remote}/{branch}"
        try:
            self.exec("ls-remote", "--exit-code", ".", treeish)
        except ProcessError as e:
            if e.code == LS_REMOTE_NO_MATCH:
                if self.has_ref(f"refs/heads/{branch}"):
                    logger.info(f"Branch {branch} not found on {remote}, using local branch")
                    return self.exec("checkout", branch)
                logger.info(f"Branch {branch} not found on {remote}, creating orphan")
                return self.exec("checkout", "--orphan", branch)
            raise

        self.exec("checkout", branch)
        self.clean()
        return self.reset(remote, branch)

    def clean(self) -> "Git":
        """Remove untracked files and directories."""
        return self.exec("clean", "-f", "-d")

    def commit(self, message: str) -> bool:
        """
        Commit staged changes, if there are any.

        Args:
            message: Commit message

        Returns:
            bool: True if a commit was made
        """
        try:
            self.exec("diff-index", "--quiet", "HEAD")
        except ProcessError as e:
            # Exit 1 means changes; 128 means no HEAD yet (fresh orphan branch)
            logger.debug(f"diff-index reported changes ({e.code})")
            self.exec("commit", "-m", message)
            return True

        logger.info("No changes to commit")
        return False

    def delete_ref(self, branch: str) -> "Git":
        """Delete the local branch ref, dropping its history."""
        return self.exec("update-ref", "-d", f"refs/heads/{branch}")

    def fetch(self, remote: str) -> "Git":
        """Fetch from a remote repository."""
        return self.exec("fetch", remote)

    def get_remote_url(self, remote: str) -> str:
        """
        Get the URL for a remote.

        Args:
            remote: Remote alias

        Returns:
            str: The remote's URL

        Raises:
            GitError: If the URL is not configured
        """
        try:
            self.exec("config", "--get", f"remote.{remote}.url")
        except ProcessError as e:
            raise GitError(
                f"Failed to get remote.{remote}.url (task must either be run in a "
                f"git repository with a configured {remote} remote or must be "
                f'configured with the "repo" option).',
                command=e.command,
                exit_code=e.exit_code,
                stderr=e.stderr,
            ) from e

        repo = self.output.splitlines()[0].strip() if self.output.strip() else ""
        if not repo:
            raise GitError("Failed to get repo URL from options or current directory.")
        return repo

    def has_ref(self, ref: str) -> bool:
        """Check whether a ref exists in the local repository."""
        try:
            self.exec("rev-parse", "--verify", "--quiet", ref)
        except ProcessError:
            return False
        return True

    def init(self) -> "Git":
        """Initialize a repository."""
        return self.exec("init")

    def push(self, remote: str, branch: str, force: bool = False) -> "Git":
        """
        Push a branch along with tags.

        Args:
            remote: Remote alias
            branch: Branch name
            force: Force push
        """
        args = ["push", "--tags", remote, branch]
        if force:
            args.append("--force")
        return self.exec(*args)

    def rm(self, files: str | list[str]) -> "Git":
        """Remove files from the index and the working tree."""
        if isinstance(files, str):
            files = [files]
        return self.exec("rm", "--ignore-unmatch", "-r", "-f", "--", *files)

    def reset(self, remote: str, branch: str) -> "Git":
        """Hard reset to remote/branch."""
        return self.exec("reset", "--hard", f"{remote}/{branch}")

    def set_user(self, user: GitUser) -> "Git":
        """Configure the commit identity for this working tree."""
        self.exec("config", "user.email", user.email)
        if user.name:
            self.exec("config", "user.name", user.name)
        return self

    def tag(self, name: str) -> "Git":
        """Add a lightweight tag."""
        return self.exec("tag", name)
