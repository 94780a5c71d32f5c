"""Tests for comments, replies and comment claps."""

import pytest

from inkwell.core.errors import NotAuthorized, NotFound, Unauthenticated, ValidationError


@pytest.fixture
async def post(blog, alice):
    return await blog.posts.create("Discussed", "<p>body</p>")


class TestCreateComment:
    """Tests for CommentService.create()."""

    async def test_content_is_trimmed(self, blog, post):
        """Test stored content has surrounding whitespace removed."""
        comment = await blog.comments.create(post.id, "  Great read!  ")
        assert comment.content == "Great read!"
        assert comment.claps == 0
        assert comment.edited_at is None

    async def test_blank_content_rejected(self, blog, post):
        """Test whitespace-only comments fail validation."""
        with pytest.raises(ValidationError, match="Comment content cannot be empty"):
            await blog.comments.create(post.id, "   ")

    async def test_unknown_post(self, blog, alice):
        """Test commenting on a missing post raises NotFound."""
        with pytest.raises(NotFound, match="Post not found"):
            await blog.comments.create("missing", "hi")

    async def test_parent_must_belong_to_post(self, blog, alice, post):
        """Test replies cannot point at another post's comment."""
        other = await blog.posts.create("Other", "body")
        foreign = await blog.comments.create(other.id, "elsewhere")
        with pytest.raises(NotFound, match="Comment not found"):
            await blog.comments.create(post.id, "reply", parent_id=foreign.id)

    async def test_requires_user(self, blog, auth, post):
        """Test anonymous comments are rejected."""
        auth.sign_out()
        with pytest.raises(Unauthenticated):
            await blog.comments.create(post.id, "hi")


class TestCommentTree:
    """Tests for CommentService.list_by_post()."""

    async def test_tree_shape_and_order(self, blog, auth, alice, bob, post):
        """Test roots newest first, replies oldest first under their root."""
        first = await blog.comments.create(post.id, "first")
        reply_a = await blog.comments.create(post.id, "reply a", parent_id=first.id)
        auth.sign_in(bob.id)
        second = await blog.comments.create(post.id, "second")
        reply_b = await blog.comments.create(post.id, "reply b", parent_id=first.id)
        nested = await blog.comments.create(post.id, "nested", parent_id=reply_a.id)

        tree = await blog.comments.list_by_post(post.id)

        assert [n.comment.id for n in tree] == [second.id, first.id]
        assert [n.comment.id for n in tree[1].replies] == [reply_a.id, reply_b.id, nested.id]
        assert tree[0].replies == []
        assert tree[0].author.name == "Bob Jones"
        assert tree[0].can_edit
        assert not tree[1].can_edit

    async def test_count(self, blog, post):
        """Test the count includes replies."""
        root = await blog.comments.create(post.id, "root")
        await blog.comments.create(post.id, "reply", parent_id=root.id)
        assert await blog.comments.count_by_post(post.id) == 2

    async def test_anonymous_viewer(self, blog, auth, post):
        """Test anonymous viewers see comments without edit rights."""
        await blog.comments.create(post.id, "hello")
        auth.sign_out()
        tree = await blog.comments.list_by_post(post.id)
        assert len(tree) == 1
        assert not tree[0].can_edit
        assert not tree[0].has_clapped


class TestCommentMutations:
    """Tests for update, remove and claps."""

    async def test_update_marks_edited(self, blog, post):
        """Test edits set edited_at."""
        comment = await blog.comments.create(post.id, "typo")
        updated = await blog.comments.update(comment.id, "fixed")
        assert updated.content == "fixed"
        assert updated.edited_at is not None

    async def test_update_by_other_user(self, blog, auth, bob, post):
        """Test only the author can edit."""
        comment = await blog.comments.create(post.id, "mine")
        auth.sign_in(bob.id)
        with pytest.raises(NotAuthorized, match="Not authorized to edit this comment"):
            await blog.comments.update(comment.id, "theirs")

    async def test_remove_deletes_replies(self, blog, post):
        """Test removing a comment removes its replies."""
        root = await blog.comments.create(post.id, "root")
        reply = await blog.comments.create(post.id, "reply", parent_id=root.id)
        await blog.comments.create(post.id, "nested", parent_id=reply.id)
        keep = await blog.comments.create(post.id, "keep")

        await blog.comments.remove(root.id)

        tree = await blog.comments.list_by_post(post.id)
        assert [n.comment.id for n in tree] == [keep.id]
        assert await blog.comments.count_by_post(post.id) == 1

    async def test_remove_missing(self, blog, alice):
        """Test deleting an unknown comment raises NotFound."""
        with pytest.raises(NotFound):
            await blog.comments.remove("missing")

    async def test_toggle_clap(self, blog, auth, bob, post):
        """Test one clap per user, toggled on repeat."""
        comment = await blog.comments.create(post.id, "clap me")
        first = await blog.comments.toggle_clap(comment.id)
        assert (first.claps, first.has_clapped) == (1, True)

        auth.sign_in(bob.id)
        second = await blog.comments.toggle_clap(comment.id)
        assert (second.claps, second.has_clapped) == (2, True)
        tree = await blog.comments.list_by_post(post.id)
        assert tree[0].has_clapped

        undone = await blog.comments.toggle_clap(comment.id)
        assert (undone.claps, undone.has_clapped) == (1, False)
