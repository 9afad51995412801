"""Unit tests for plain-text thread rendering."""

from datetime import datetime, timedelta, timezone

from discuss.adapter.inmemory import InMemoryUserRepository
from discuss.domain.service import TreeMaterializer, UserDirectory
from discuss.domain.value import CommentId, UserRole
from discuss.interface.render.expansion import ExpansionPolicy, ExpansionState
from discuss.interface.render.text import render_thread, time_ago
from tests.conftest import BASE_TIME, make_comment, make_user

NOW = BASE_TIME + timedelta(hours=2)


class TestTimeAgo:
    """Tests for time_ago."""

    def test_recent_is_just_now(self):
        assert time_ago(NOW - timedelta(seconds=30), NOW) == "just now"

    def test_singular_and_plural_units(self):
        assert time_ago(NOW - timedelta(minutes=1), NOW) == "1 minute ago"
        assert time_ago(NOW - timedelta(hours=5), NOW) == "5 hours ago"
        assert time_ago(NOW - timedelta(days=2), NOW) == "2 days ago"
        assert time_ago(NOW - timedelta(days=400), NOW) == "1 year ago"

    def test_naive_datetimes_are_utc(self):
        naive = datetime(2024, 1, 1, 11, 0)
        aware_now = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

        assert time_ago(naive, aware_now) == "1 hour ago"


class TestRenderThread:
    """Tests for render_thread."""

    def setup_method(self):
        self.directory = UserDirectory(InMemoryUserRepository())
        self.policy = ExpansionPolicy(max_depth=3)
        self.state = ExpansionState()

    def render(self, roots, viewer_is_moderator=False):
        return render_thread(
            self.policy.layout(roots, self.state),
            total=sum(1 + root.descendant_count for root in roots),
            directory=self.directory,
            state=self.state,
            viewer_is_moderator=viewer_is_moderator,
            now=NOW,
        )

    def test_empty_thread(self):
        assert self.render(()) == [
            "0 Comments",
            "No comments yet. Be the first to comment!",
        ]

    def test_comment_lines(self):
        """Each comment should show author, age, votes, text and reply toggle."""
        # Arrange
        ada = make_user("u-ada", "Ada")
        root = make_comment(
            "A", author_id="u-ada", author=ada, upvote_count=2, text="Hello\nWorld"
        ).model_copy(update={"descendant_count": 3})

        # Act
        lines = self.render((root,))

        # Assert
        assert lines == [
            "4 Comments",
            "Ada · 2 hours ago · ▲2",
            "  Hello",
            "  World",
            "  [3 replies]",
        ]

    def test_single_comment_header_and_unknown_author(self):
        lines = self.render((make_comment("A", author_id="ghost"),))

        assert lines[0] == "1 Comment"
        assert lines[1].startswith("Loading… · ")

    def test_upvoted_marker(self):
        root = make_comment("A", upvote_count=1).model_copy(
            update={"has_upvoted_locally": True}
        )

        assert self.render((root,))[1].endswith("· ▲*1")

    def test_moderator_badge_only_for_moderator_viewers(self):
        self.directory.remember(make_user("u-mod", "Mo", role=UserRole.MODERATOR))
        root = make_comment("A", author_id="u-mod")

        assert self.render((root,))[1].startswith("Mo · ")
        assert self.render((root,), viewer_is_moderator=True)[1].startswith(
            "Mo [Moderator] · "
        )

    def test_deleted_comment_keeps_its_replies(self):
        """A tombstone should still lead to its replies."""
        # Arrange
        flat = [
            make_comment("A", is_deleted=True, text=""),
            make_comment("C", "A", minutes=1),
        ]
        materializer = TreeMaterializer()
        root = materializer.build_roots(flat)[0]
        root = materializer.attach_replies(root, flat[1:], flat)
        self.state.expand(CommentId("A"))

        # Act
        lines = self.render((root,))

        # Assert
        assert lines[1:3] == ["[Comment deleted]", "  [Hide reply]"]
        assert lines[3].startswith("  Loading… · ")
        assert lines[4] == "    Comment C"

    def test_continue_and_collapse_gates(self):
        # Arrange
        flat = [
            make_comment("A"),
            make_comment("C", "A", minutes=1),
            make_comment("D", "C", minutes=2),
            make_comment("E", "D", minutes=3),
            make_comment("F", "E", minutes=4),
        ]
        materializer = TreeMaterializer()
        root = materializer.build_roots(flat)[0]
        by_id = {comment.id: comment for comment in flat}
        e = materializer.attach_replies(by_id["E"].as_unloaded(1), [by_id["F"]], flat)
        d = by_id["D"].model_copy(update={"children": (e,), "descendant_count": 2})
        c = by_id["C"].model_copy(update={"children": (d,), "descendant_count": 3})
        root = root.model_copy(update={"children": (c,)})
        for comment_id in ("A", "C", "D", "E"):
            self.state.expand(CommentId(comment_id))

        # Act
        closed = self.render((root,))
        self.state.continue_thread(CommentId("E"))
        opened = self.render((root,))

        # Assert
        assert closed[-1] == "        Continue thread (1 reply)"
        assert "        Collapse thread" in opened
        assert opened[-2].startswith("| Loading… · ")
        assert opened[-1] == "|   Comment F"
