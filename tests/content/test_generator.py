"""Tests for ContentGenerator prompts and output cleanup."""

from datetime import date

import pytest

from studio_automator.content import ContentGenerator, clean_message
from studio_automator.errors import GenerationError


class TestCleanMessage:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('"Join us Saturday!"', "Join us Saturday!"),
            ("```\nJoin us Saturday!\n```", "Join us Saturday!"),
            ("  Join us Saturday!  ", "Join us Saturday!"),
            ('He said "hi" to us', 'He said "hi" to us'),
        ],
    )
    def test_cleanup(self, raw, expected):
        assert clean_message(raw) == expected


class TestContentGenerator:

    @pytest.mark.asyncio
    async def test_message_prompt_carries_description_and_limits(self, mock_text_provider):
        mock_text_provider.generate.return_value = '"Sunrise flow Saturday 7am! Reply to book"'
        generator = ContentGenerator(mock_text_provider)

        message = await generator.generate_message("Sunrise flow on Saturday")

        assert message == "Sunrise flow Saturday 7am! Reply to book"
        prompt = mock_text_provider.generate.call_args.args[0]
        assert "Sunrise flow on Saturday" in prompt
        assert "160 characters" in prompt
        assert "max 4 emojis" in prompt

    @pytest.mark.asyncio
    async def test_blog_prompt_includes_date_and_frontmatter_template(self, mock_text_provider):
        mock_text_provider.generate.return_value = "---\ntitle: \"Yin Night\"\n---\n\nBody"
        generator = ContentGenerator(mock_text_provider)

        post = await generator.generate_blog_post("Yin yoga night", today=date(2024, 6, 1))

        prompt = mock_text_provider.generate.call_args.args[0]
        assert 'date: "2024-06-01"' in prompt
        assert "300-500 words" in prompt
        assert post.endswith("Body\n")

    @pytest.mark.asyncio
    async def test_blog_code_fence_is_removed(self, mock_text_provider):
        mock_text_provider.generate.return_value = "```markdown\n---\ntitle: \"X\"\n---\nBody\n```"
        generator = ContentGenerator(mock_text_provider)

        post = await generator.generate_blog_post("X")

        assert post.startswith("---")
        assert "```" not in post

    @pytest.mark.asyncio
    async def test_chat_prompt_suggests_commands(self, mock_text_provider):
        mock_text_provider.generate.return_value = "Happy to help!"
        generator = ContentGenerator(mock_text_provider)

        assert await generator.generate_chat_reply("hi") == "Happy to help!"
        prompt = mock_text_provider.generate.call_args.args[0]
        assert "Send a message about" in prompt
        assert "Create everything for" in prompt

    @pytest.mark.asyncio
    async def test_empty_output_raises_with_provider(self, mock_text_provider):
        mock_text_provider.generate.return_value = '""'
        generator = ContentGenerator(mock_text_provider)

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate_message("anything")
        assert exc_info.value.provider == "openai"
