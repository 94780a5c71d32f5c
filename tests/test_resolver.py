"""Tests for the uniqueness resolver."""

from inkwell.core.slug import SlugGenerator
from inkwell.identifiers import resolve_unique


def _lookup(held: dict[str, str]):
    calls: list[str] = []

    async def lookup(token: str) -> str | None:
        calls.append(token)
        return held.get(token)

    lookup.calls = calls  # type: ignore[attr-defined]
    return lookup


class TestResolveUnique:
    """Tests for resolve_unique()."""

    async def test_free_base_is_returned(self):
        """Test an unused base comes back unchanged after one lookup."""
        lookup = _lookup({})
        assert await resolve_unique("hello-world", lookup) == "hello-world"
        assert lookup.calls == ["hello-world"]

    async def test_collision_appends_counter(self):
        """Test the first free numeric suffix wins."""
        lookup = _lookup({"hello-world": "a", "hello-world-1": "b"})
        assert await resolve_unique("hello-world", lookup) == "hello-world-2"
        assert lookup.calls == ["hello-world", "hello-world-1", "hello-world-2"]

    async def test_excluded_holder_is_not_a_collision(self):
        """Test an entity never collides with its own token."""
        lookup = _lookup({"hello-world": "a"})
        assert await resolve_unique("hello-world", lookup, exclude_id="a") == "hello-world"

    async def test_excluded_holder_of_suffix(self):
        """Test self-exclusion also applies to suffixed candidates."""
        lookup = _lookup({"hello-world": "a", "hello-world-1": "b"})
        result = await resolve_unique("hello-world", lookup, exclude_id="b")
        assert result == "hello-world-1"

    async def test_timestamp_fallback_after_max_attempts(self):
        """Test the resolver gives up on counters and uses a timestamp suffix."""
        lookup = _lookup({"x": "1", "x-1": "2", "x-2": "3"})
        result = await resolve_unique("x", lookup, max_attempts=3, clock=lambda: 1700000000.0)
        assert result == "x-1700000000000"
        assert len(lookup.calls) == 3

    async def test_result_is_free(self):
        """Test the returned token is not held by anyone."""
        held = {"post": "1", **{f"post-{i}": str(i + 1) for i in range(1, 25)}}
        result = await resolve_unique("post", _lookup(held))
        assert result == "post-25"
        assert result not in held

    async def test_suffixes_respect_generator_cap(self):
        """Test suffixed candidates and the timestamp fallback stay within the cap."""
        generator = SlugGenerator(max_length=16)
        lookup = _lookup({"hello-wonderful": "a", "hello-wonderfu-1": "b"})
        result = await resolve_unique("hello-wonderful", lookup, generator=generator)
        assert result == "hello-wonderfu-2"
        assert all(len(token) <= 16 for token in lookup.calls)

        fallback = await resolve_unique(
            "hello-wonderful",
            lookup,
            max_attempts=2,
            generator=generator,
            clock=lambda: 1700000000.0,
        )
        assert fallback == "he-1700000000000"
