"""Tests for slug normalization."""

import re

import pytest

from inkwell.core.slug import POST_FALLBACK, USER_FALLBACK, SlugGenerator, normalize

TOKEN_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

SAMPLES = [
    "Hello World",
    "  ¡Hola, Mundo!  ",
    "What's the Deal with AI?!",
    "multiple   spaces\tand\nnewlines",
    "--leading and trailing--",
    "already-a-slug",
    "UPPER CASE 123",
    "a - b -- c",
    "émoji 🎉 party",
    "   ",
    "",
    "!!!",
    "-",
]


class TestNormalize:
    """Tests for normalize()."""

    def test_basic_title(self):
        """Test a plain title becomes a hyphenated lowercase slug."""
        assert normalize("My First Post") == "my-first-post"

    def test_strips_non_ascii_and_punctuation(self):
        """Test non-ASCII letters and punctuation are dropped."""
        assert normalize("  ¡Hola, Mundo!  ") == "hola-mundo"

    def test_punctuation_inside_words_is_removed(self):
        """Test apostrophes join rather than split words."""
        assert normalize("What's the Deal with AI?!") == "whats-the-deal-with-ai"

    def test_collapses_hyphen_runs(self):
        """Test whitespace and hyphen runs collapse to one hyphen."""
        assert normalize("a - b -- c") == "a-b-c"

    def test_empty_uses_post_fallback(self):
        """Test empty input falls back to the content token."""
        assert normalize("") == POST_FALLBACK
        assert normalize("   ") == POST_FALLBACK

    def test_empty_uses_user_fallback(self):
        """Test identities fall back to the user token."""
        assert normalize("!!!", USER_FALLBACK) == USER_FALLBACK

    @pytest.mark.parametrize("text", SAMPLES)
    def test_output_shape(self, text):
        """Test every result is canonical or the fallback."""
        token = normalize(text)
        assert token == POST_FALLBACK or TOKEN_PATTERN.match(token)
        assert token == token.lower()
        assert not any(ch.isspace() for ch in token)
        assert "--" not in token
        assert not token.startswith("-") and not token.endswith("-")

    @pytest.mark.parametrize("text", SAMPLES)
    def test_idempotent(self, text):
        """Test normalizing twice changes nothing."""
        assert normalize(normalize(text)) == normalize(text)


class TestSlugGenerator:
    """Tests for SlugGenerator."""

    def test_uses_bound_fallback(self):
        """Test the generator applies its own fallback."""
        assert SlugGenerator(USER_FALLBACK).slugify("???") == "user"

    def test_no_truncation_by_default(self):
        """Test long titles are kept whole without a max length."""
        title = "word " * 40
        assert SlugGenerator().slugify(title) == normalize(title)

    def test_truncation_drops_trailing_hyphen(self):
        """Test truncation never leaves a dangling hyphen."""
        generator = SlugGenerator(max_length=9)
        assert generator.slugify("Hello Wonderful World") == "hello-won"
        assert generator.slugify("Hello World Again") == "hello-wor"
        assert SlugGenerator(max_length=6).slugify("Hello World") == "hello"

    def test_with_suffix(self):
        """Test collision suffixes are hyphen-joined."""
        assert SlugGenerator().with_suffix("hello-world", 2) == "hello-world-2"

    def test_with_suffix_respects_max_length(self):
        """Test the base is shortened so base plus suffix fits the cap."""
        generator = SlugGenerator(max_length=16)
        assert generator.with_suffix("hello-wonderful", 1) == "hello-wonderfu-1"
        assert generator.with_suffix("hello-world", 2) == "hello-world-2"
        assert generator.with_suffix("hello-wonderful", 12) == "hello-wonderf-12"

    def test_with_suffix_drops_hyphen_before_suffix(self):
        """Test shortening never produces a double hyphen."""
        assert SlugGenerator(max_length=16).with_suffix("hello-world-again", 100) == "hello-world-100"

    def test_with_suffix_timestamp_fits_minimum_cap(self):
        """Test a millisecond timestamp suffix fits the smallest allowed cap."""
        result = SlugGenerator(max_length=16).with_suffix("hello-wonderful", 1700000000000)
        assert result == "he-1700000000000"
        assert len(result) == 16
