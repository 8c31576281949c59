"""Publish a directory of files to a branch of a git repository."""

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..models.options import GitUser, PublishOptions
from ..utils.exceptions import GitError, PublishError, ValidationError
from ..utils.file_copy import copy_files
from ..utils.file_matcher import match_files
from ..utils.path_manager import PathManager
from .base import BaseService
from .git_service import REDACTED, Git

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """
    Outcome of a publish.

    Attributes:
        repo: Repository URL that was published to
        clone_dir: Cached clone the commit was made in
        branch: Branch that was published
        files: Files copied into the branch, relative to the base directory
        committed: Whether a commit was made (False when nothing changed)
        tagged: Whether the requested tag was created
        pushed: Whether the branch was pushed
    """

    repo: str
    clone_dir: Path
    branch: str
    files: list[str] = field(default_factory=list)
    committed: bool = False
    tagged: bool = False
    pushed: bool = False


class PagesPublisher(BaseService):
    """
    Service that publishes a built directory to a git branch.

    The repository is cloned once into the cache directory and reused by
    later publishes; each publish resets the clone to the remote branch,
    copies the files in, commits and pushes.
    """

    def __init__(
        self,
        options: PublishOptions | None = None,
        git_factory: type[Git] = Git,
        timeout: int | None = None,
    ):
        """
        Initialize the publisher.

        Args:
            options: Publish options (defaults if None)
            git_factory: Git wrapper class, replaceable for tests
            timeout: Per-command timeout in seconds
        """
        super().__init__()
        self.options = options or PublishOptions()
        self._git_factory = git_factory
        self.timeout = timeout

    def _do_initialize(self) -> None:
        """Validate the options before the first publish."""
        self.options.validate()

    def _display(self, repo: str) -> str:
        return REDACTED if self.options.silent else repo

    def _resolve_repo(self, secrets: list[str]) -> str:
        if self.options.repo:
            return self.options.repo
        cwd_git = self._git_factory(
            cwd=os.getcwd(), cmd=self.options.git, timeout=self.timeout, secrets=secrets
        )
        return cwd_git.get_remote_url(self.options.remote)

    def publish(
        self,
        base_dir: str | Path,
        before_add: Callable[[Git], None] | None = None,
        get_user: Callable[[], GitUser | None] | None = None,
    ) -> PublishResult:
        """
        Publish the files of ``base_dir`` matching the ``src`` option.

        Args:
            base_dir: Directory containing the files to publish
            before_add: Hook called with the clone's Git wrapper after the
                files were copied and before they are staged
            get_user: Callable returning the commit identity, used when the
                ``user`` option is not set

        Returns:
            PublishResult: What was published

        Raises:
            ValidationError: If the base directory or the options are invalid
            GitError: If a git command fails
            PublishError: If the cached clone points at another repository
            FileSystemError: If files cannot be copied
        """
        self.initialize()
        options = self.options

        base = Path(base_dir)
        if not base.is_dir():
            raise ValidationError(
                'The "base" option must be an existing directory',
                field="base",
                value=str(base_dir),
            )

        files = match_files(base, options.src, dotfiles=options.dotfiles)
        if not files:
            raise ValidationError(
                'The pattern in the "src" property didn\'t match any files.',
                field="src",
                value=options.src,
            )

        user = options.user or (get_user() if get_user else None)

        secrets = [options.repo] if options.silent and options.repo else []
        repo = self._resolve_repo(secrets)
        if options.silent:
            secrets = [repo]

        clone_dir = PathManager.get_clone_dir(repo, options.cache_dir)
        logger.info(f"Cloning {self._display(repo)} into {clone_dir}")

        git = self._git_factory.clone(
            repo,
            clone_dir,
            options.branch,
            depth=options.depth,
            git=options.git,
            remote=options.remote,
            timeout=self.timeout,
            secrets=secrets,
        )

        url = git.get_remote_url(options.remote)
        if url != repo:
            raise PublishError(
                f'Remote url mismatch. Got "{self._display(url)}" but expected '
                f'"{self._display(repo)}" in {git.cwd}. Try running the '
                f"`pages-publisher clean` command first.",
                repo=self._display(repo),
                suggested_action="Run `pages-publisher clean` to remove cached clones",
            )

        # Only required if someone mucks with the checkout between builds
        logger.info("Cleaning")
        git.clean()

        logger.info(f"Fetching {options.remote}")
        git.fetch(options.remote)

        logger.info(f"Checking out {options.remote}/{options.branch}")
        git.checkout(options.remote, options.branch)

        if not options.history:
            git.delete_ref(options.branch)

        destination = Path(git.cwd) / options.destination
        if not options.add and options.remove:
            self._remove_existing(git, destination)

        logger.info("Copying files")
        copy_files(files, base, destination)

        if before_add:
            before_add(git)

        logger.info("Adding all")
        git.add(".")

        if user:
            git.set_user(user)

        logger.info("Committing")
        committed = git.commit(options.message)

        tagged = False
        if options.tag:
            logger.info("Tagging")
            try:
                git.tag(options.tag)
                tagged = True
            except GitError as e:
                # Usually the tag already exists
                logger.warning(f"Tagging failed, continuing: {e.message}")

        pushed = False
        if options.push:
            logger.info("Pushing")
            git.push(options.remote, options.branch, force=not options.history)
            pushed = True

        logger.info("Published")
        return PublishResult(
            repo=repo,
            clone_dir=clone_dir,
            branch=options.branch,
            files=files,
            committed=committed,
            tagged=tagged,
            pushed=pushed,
        )

    def _remove_existing(self, git: Git, destination: Path) -> None:
        if not destination.is_dir():
            return

        matches = match_files(destination, self.options.remove)
        if not matches:
            return

        logger.info("Removing files")
        prefix = Path(self.options.destination)
        git.rm([(prefix / match).as_posix() for match in matches])


def publish(
    base_dir: str | Path,
    before_add: Callable[[Git], None] | None = None,
    get_user: Callable[[], GitUser | None] | None = None,
    **options,
) -> PublishResult:
    """
    Publish ``base_dir`` with the given options.

    Keyword arguments are :class:`PublishOptions` fields; ``user`` may be a
    :class:`GitUser`, a mapping or a ``"Name <email>"`` string.
    """
    publisher = PagesPublisher(PublishOptions.from_dict(options))
    return publisher.publish(base_dir, before_add=before_add, get_user=get_user)


def clean_cache(cache_dir: str | Path | None = None) -> bool:
    """
    Remove all cached clones.

    Returns:
        bool: True if anything was removed
    """
    removed = PathManager.remove_cache_dir(cache_dir)
    if removed:
        logger.info("Removed cached clones")
    else:
        logger.info("No cached clones to remove")
    return removed
