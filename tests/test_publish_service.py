"""Tests for the publish orchestration."""

from pathlib import Path
from unittest.mock import Mock, patch

import pytest

from pages_publisher.models.options import GitUser, PublishOptions
from pages_publisher.services.publish_service import (
    PagesPublisher,
    clean_cache,
    publish,
)
from pages_publisher.utils.exceptions import (
    GitError,
    ProcessError,
    PublishError,
    ValidationError,
)

REPO = "https://github.com/user/site.git"


class FakeGit:
    """Records git calls instead of running them."""

    remote_url = REPO
    fail_tag = False
    instances: list["FakeGit"] = []

    def __init__(self, cwd=".", cmd="git", timeout=None, secrets=None):
        self.cwd = str(cwd)
        self.cmd = cmd
        self.secrets = secrets or []
        self.calls = []
        FakeGit.instances.append(self)

    @classmethod
    def clone(cls, repo, dir, branch, depth=1, git="git", remote="origin",
              timeout=None, secrets=None):
        Path(dir).mkdir(parents=True, exist_ok=True)
        git_repo = cls(cwd=dir, cmd=git, timeout=timeout, secrets=secrets)
        git_repo.calls.append(("clone", repo, branch, depth, remote))
        return git_repo

    def names(self):
        return [c[0] for c in self.calls]

    def get_remote_url(self, remote):
        self.calls.append(("get_remote_url", remote))
        return self.remote_url

    def clean(self):
        self.calls.append(("clean",))

    def fetch(self, remote):
        self.calls.append(("fetch", remote))

    def checkout(self, remote, branch):
        self.calls.append(("checkout", remote, branch))

    def delete_ref(self, branch):
        self.calls.append(("delete_ref", branch))

    def rm(self, files):
        self.calls.append(("rm", sorted(files)))

    def add(self, files):
        self.calls.append(("add", files))

    def set_user(self, user):
        self.calls.append(("set_user", user))

    def commit(self, message):
        self.calls.append(("commit", message))
        return True

    def tag(self, name):
        self.calls.append(("tag", name))
        if self.fail_tag:
            raise ProcessError(128, f"fatal: tag '{name}' already exists")

    def push(self, remote, branch, force=False):
        self.calls.append(("push", remote, branch, force))


@pytest.fixture(autouse=True)
def reset_fake_git():
    FakeGit.instances = []
    FakeGit.remote_url = REPO
    FakeGit.fail_tag = False
    yield


@pytest.fixture
def site(tmp_path):
    base = tmp_path / "dist"
    (base / "css").mkdir(parents=True)
    (base / "index.html").write_text("<h1>home</h1>")
    (base / "css" / "site.css").write_text("body {}")
    (base / ".nojekyll").write_text("")
    return base


def make_publisher(tmp_path, **options):
    options.setdefault("repo", REPO)
    options.setdefault("cache_dir", str(tmp_path / "cache"))
    return PagesPublisher(PublishOptions.from_dict(options), git_factory=FakeGit)


class TestPagesPublisher:
    """Test cases for PagesPublisher."""

    def test_initialization(self, tmp_path):
        publisher = make_publisher(tmp_path)
        assert not publisher.is_initialized()
        publisher.initialize()
        assert publisher.is_initialized()

    def test_invalid_options_rejected(self, site, tmp_path):
        publisher = make_publisher(tmp_path, branch="")
        with pytest.raises(ValidationError):
            publisher.publish(site)

    def test_publish_sequence(self, site, tmp_path):
        """Test the full clone, checkout, copy, commit and push sequence."""
        result = make_publisher(tmp_path).publish(site)

        git = FakeGit.instances[-1]
        assert git.names() == [
            "clone",
            "get_remote_url",
            "clean",
            "fetch",
            "checkout",
            "add",
            "commit",
            "push",
        ]
        assert git.calls[0] == ("clone", REPO, "gh-pages", 1, "origin")
        assert git.calls[-1] == ("push", "origin", "gh-pages", False)

        clone_dir = Path(git.cwd)
        assert (clone_dir / "index.html").read_text() == "<h1>home</h1>"
        assert (clone_dir / "css" / "site.css").exists()
        assert not (clone_dir / ".nojekyll").exists()

        assert result.repo == REPO
        assert result.clone_dir == clone_dir
        assert result.files == ["css/site.css", "index.html"]
        assert result.committed
        assert result.pushed
        assert not result.tagged

    def test_clone_dir_is_derived_from_repo(self, site, tmp_path):
        result = make_publisher(tmp_path).publish(site)
        assert result.clone_dir == tmp_path / "cache" / "https___github.com_user_site.git"

    def test_dotfiles(self, site, tmp_path):
        result = make_publisher(tmp_path, dotfiles=True).publish(site)
        assert ".nojekyll" in result.files
        assert (result.clone_dir / ".nojekyll").exists()

    def test_src_pattern(self, site, tmp_path):
        result = make_publisher(tmp_path, src="**/*.css").publish(site)
        assert result.files == ["css/site.css"]

    def test_destination(self, site, tmp_path):
        result = make_publisher(tmp_path, destination="docs/latest").publish(site)
        assert (result.clone_dir / "docs" / "latest" / "index.html").exists()
        assert not (result.clone_dir / "index.html").exists()

    def test_base_dir_must_exist(self, tmp_path):
        with pytest.raises(ValidationError, match="existing directory"):
            make_publisher(tmp_path).publish(tmp_path / "missing")

    def test_src_must_match(self, site, tmp_path):
        with pytest.raises(ValidationError, match="didn't match any files"):
            make_publisher(tmp_path, src="*.md").publish(site)
        assert FakeGit.instances == []

    def test_remote_url_mismatch(self, site, tmp_path):
        FakeGit.remote_url = "https://github.com/someone/else.git"

        with pytest.raises(PublishError) as exc_info:
            make_publisher(tmp_path).publish(site)

        assert "Remote url mismatch" in exc_info.value.message
        assert "clean" in exc_info.value.message
        assert FakeGit.instances[-1].names() == ["clone", "get_remote_url"]

    def test_silent_hides_repo(self, site, tmp_path):
        FakeGit.remote_url = "https://token@github.com/someone/else.git"

        with pytest.raises(PublishError) as exc_info:
            make_publisher(
                tmp_path, repo="https://token@github.com/user/site.git", silent=True
            ).publish(site)

        assert "https://token@github.com" not in exc_info.value.message
        assert "[secure]" in exc_info.value.message
        assert FakeGit.instances[-1].secrets == ["https://token@github.com/user/site.git"]

    def test_repo_defaults_to_remote_of_cwd(self, site, tmp_path):
        publisher = PagesPublisher(
            PublishOptions(cache_dir=str(tmp_path / "cache")), git_factory=FakeGit
        )

        result = publisher.publish(site)

        assert result.repo == REPO
        assert FakeGit.instances[0].calls == [("get_remote_url", "origin")]

    def test_missing_remote_propagates(self, site, tmp_path):
        publisher = PagesPublisher(
            PublishOptions(cache_dir=str(tmp_path / "cache")), git_factory=FakeGit
        )
        with patch.object(
            FakeGit, "get_remote_url", side_effect=GitError("no remote")
        ):
            with pytest.raises(GitError):
                publisher.publish(site)

    def test_no_history(self, site, tmp_path):
        make_publisher(tmp_path, history=False).publish(site)

        git = FakeGit.instances[-1]
        assert ("delete_ref", "gh-pages") in git.calls
        assert git.names().index("delete_ref") > git.names().index("checkout")
        assert git.calls[-1] == ("push", "origin", "gh-pages", True)

    def test_no_push(self, site, tmp_path):
        result = make_publisher(tmp_path, push=False).publish(site)
        assert "push" not in FakeGit.instances[-1].names()
        assert not result.pushed

    def test_removes_existing_files(self, site, tmp_path):
        clone_dir = tmp_path / "cache" / "https___github.com_user_site.git"
        (clone_dir / "old").mkdir(parents=True)
        (clone_dir / "old" / "page.html").write_text("stale")
        (clone_dir / "CNAME").write_text("example.com")
        (clone_dir / ".nojekyll").write_text("")

        make_publisher(tmp_path).publish(site)

        git = FakeGit.instances[-1]
        assert ("rm", ["CNAME", "old/page.html"]) in git.calls
        assert git.names().index("rm") < git.names().index("add")

    def test_remove_pattern_with_destination(self, site, tmp_path):
        clone_dir = tmp_path / "cache" / "https___github.com_user_site.git"
        (clone_dir / "docs").mkdir(parents=True)
        (clone_dir / "docs" / "a.html").write_text("a")
        (clone_dir / "docs" / "keep.txt").write_text("keep")

        make_publisher(tmp_path, destination="docs", remove="*.html").publish(site)

        assert ("rm", ["docs/a.html"]) in FakeGit.instances[-1].calls

    def test_add_skips_removal(self, site, tmp_path):
        clone_dir = tmp_path / "cache" / "https___github.com_user_site.git"
        clone_dir.mkdir(parents=True)
        (clone_dir / "CNAME").write_text("example.com")

        make_publisher(tmp_path, add=True).publish(site)

        assert "rm" not in FakeGit.instances[-1].names()

    def test_user_option(self, site, tmp_path):
        user = GitUser(email="ci@example.com", name="CI")
        make_publisher(tmp_path, user=user).publish(site)

        git = FakeGit.instances[-1]
        assert ("set_user", user) in git.calls
        assert git.names().index("set_user") < git.names().index("commit")

    def test_get_user_callback(self, site, tmp_path):
        user = GitUser(email="bot@example.com")
        get_user = Mock(return_value=user)

        make_publisher(tmp_path).publish(site, get_user=get_user)

        get_user.assert_called_once_with()
        assert ("set_user", user) in FakeGit.instances[-1].calls

    def test_user_option_wins_over_callback(self, site, tmp_path):
        get_user = Mock()
        make_publisher(tmp_path, user="CI <ci@example.com>").publish(
            site, get_user=get_user
        )
        get_user.assert_not_called()

    def test_before_add_hook(self, site, tmp_path):
        seen = []

        def before_add(git):
            seen.append(list(git.names()))
            (Path(git.cwd) / "CNAME").write_text("example.com")

        result = make_publisher(tmp_path).publish(site, before_add=before_add)

        assert seen and "add" not in seen[0]
        assert (result.clone_dir / "CNAME").read_text() == "example.com"

    def test_tag(self, site, tmp_path):
        result = make_publisher(tmp_path, tag="v1.2.0").publish(site)

        git = FakeGit.instances[-1]
        assert ("tag", "v1.2.0") in git.calls
        assert git.names().index("tag") < git.names().index("push")
        assert result.tagged

    def test_failed_tag_is_ignored(self, site, tmp_path):
        FakeGit.fail_tag = True

        result = make_publisher(tmp_path, tag="v1.2.0").publish(site)

        assert not result.tagged
        assert result.pushed

    def test_commit_message(self, site, tmp_path):
        make_publisher(tmp_path, message="Deploy abc123").publish(site)
        assert ("commit", "Deploy abc123") in FakeGit.instances[-1].calls


class TestModuleFunctions:
    """Test cases for the module-level helpers."""

    def test_publish_builds_options(self, site, tmp_path):
        with patch(
            "pages_publisher.services.publish_service.PagesPublisher"
        ) as mock_publisher:
            publish(site, branch="pages", user="CI <ci@example.com>")

        options = mock_publisher.call_args.args[0]
        assert options.branch == "pages"
        assert options.user == GitUser(email="ci@example.com", name="CI")
        mock_publisher.return_value.publish.assert_called_once_with(
            site, before_add=None, get_user=None
        )

    def test_clean_cache(self, tmp_path):
        cache = tmp_path / "cache"
        (cache / "clone").mkdir(parents=True)

        assert clean_cache(cache)
        assert not cache.exists()
        assert not clean_cache(cache)
