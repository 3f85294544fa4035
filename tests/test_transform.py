"""
Unit tests for message format conversion.
"""

import json

import pytest

from basket_openrouter.transform import convert_to_openai_messages, convert_to_r1_format
from basket_openrouter.types import ConversationMessage, TextBlock

IMAGE = {"type": "image", "source": {"type": "base64", "media_type": "image/png", "data": "AAA"}}
IMAGE_URL = {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAA"}}


class TestOpenAIFormat:
    """Tests for convert_to_openai_messages()."""

    def test_string_content(self):
        """Test plain string messages pass through."""
        result = convert_to_openai_messages([
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi there"},
        ])

        assert result == [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi there"},
        ]

    def test_accepts_models(self):
        """Test ConversationMessage instances are accepted."""
        msg = ConversationMessage(role="user", content=[TextBlock(text="Hello")])

        assert convert_to_openai_messages([msg]) == [
            {"role": "user", "content": [{"type": "text", "text": "Hello"}]},
        ]

    def test_user_text_and_image(self):
        """Test multi-part user content with an image."""
        result = convert_to_openai_messages([
            {"role": "user", "content": [{"type": "text", "text": "Look at this:"}, IMAGE]},
        ])

        assert result == [
            {"role": "user", "content": [{"type": "text", "text": "Look at this:"}, IMAGE_URL]},
        ]

    def test_assistant_tool_use(self):
        """Test tool_use blocks become tool_calls."""
        result = convert_to_openai_messages([
            {
                "role": "assistant",
                "content": [
                    {"type": "text", "text": "Reading the file."},
                    {"type": "tool_use", "id": "call_1", "name": "read", "input": {"path": "a.txt"}},
                ],
            },
        ])

        assert len(result) == 1
        message = result[0]
        assert message["role"] == "assistant"
        assert message["content"] == "Reading the file."
        assert message["tool_calls"][0]["id"] == "call_1"
        assert message["tool_calls"][0]["function"]["name"] == "read"
        assert json.loads(message["tool_calls"][0]["function"]["arguments"]) == {"path": "a.txt"}

    def test_tool_results_come_first(self):
        """Test tool results are emitted as tool messages before the user text."""
        result = convert_to_openai_messages([
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Here you go"},
                    {"type": "tool_result", "tool_use_id": "call_1", "content": "file contents"},
                ],
            },
        ])

        assert result == [
            {"role": "tool", "tool_call_id": "call_1", "content": "file contents"},
            {"role": "user", "content": [{"type": "text", "text": "Here you go"}]},
        ]

    def test_tool_result_images_follow_in_user_message(self):
        """Test images inside tool results are moved to a user message."""
        result = convert_to_openai_messages([
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "call_1",
                        "content": [{"type": "text", "text": "screenshot"}, IMAGE],
                    },
                ],
            },
        ])

        assert result[0]["role"] == "tool"
        assert result[0]["content"].startswith("screenshot")
        assert result[1] == {"role": "user", "content": [IMAGE_URL]}

    def test_tool_result_only_has_no_user_message(self):
        """Test no empty user message is produced."""
        result = convert_to_openai_messages([
            {"role": "user", "content": [{"type": "tool_result", "tool_use_id": "call_1", "content": "ok"}]},
        ])

        assert result == [{"role": "tool", "tool_call_id": "call_1", "content": "ok"}]

    def test_unknown_user_part_passes_through(self):
        """Test parts of an unknown type are sent as they are."""
        document = {"type": "document", "source": {"type": "url", "url": "https://example.com/a.pdf"}}

        result = convert_to_openai_messages([
            {"role": "user", "content": [{"type": "text", "text": "Summarize"}, document]},
        ])

        assert result == [
            {"role": "user", "content": [{"type": "text", "text": "Summarize"}, document]},
        ]

    def test_malformed_known_part_passes_through(self):
        """Test a known part type that does not validate is kept unchanged."""
        broken = {"type": "image", "source": None}

        result = convert_to_openai_messages([{"role": "user", "content": [broken]}])

        assert result == [{"role": "user", "content": [broken]}]

    def test_unknown_assistant_part_passes_through(self):
        """Test assistant text stays structured when unknown parts are kept."""
        refusal = {"type": "refusal", "refusal": "no"}

        result = convert_to_openai_messages([
            {"role": "assistant", "content": [{"type": "text", "text": "Sorry"}, refusal]},
        ])

        assert result == [
            {"role": "assistant", "content": [{"type": "text", "text": "Sorry"}, refusal]},
        ]

    def test_system_history_entry(self):
        """Test system turns in the history are kept."""
        result = convert_to_openai_messages([
            {"role": "system", "content": "Be brief"},
            {"role": "system", "content": [{"type": "text", "text": "Use English"}]},
            {"role": "user", "content": "Hi"},
        ])

        assert result == [
            {"role": "system", "content": "Be brief"},
            {"role": "system", "content": [{"type": "text", "text": "Use English"}]},
            {"role": "user", "content": "Hi"},
        ]

    @pytest.mark.parametrize("content", [None, 42, {"text": "odd"}])
    def test_unexpected_content_passes_through(self, content):
        """Test content that is neither a string nor a list is left alone."""
        message = {"role": "user", "content": content}

        result = convert_to_openai_messages([message])

        assert result == [message]
        assert result[0] is not message


class TestR1Format:
    """Tests for convert_to_r1_format()."""

    def test_merges_consecutive_roles(self):
        """Test consecutive same-role messages are merged."""
        result = convert_to_r1_format([
            {"role": "user", "content": "system prompt"},
            {"role": "user", "content": "question"},
            {"role": "assistant", "content": "answer"},
            {"role": "user", "content": "follow up"},
        ])

        assert result == [
            {"role": "user", "content": "system prompt\nquestion"},
            {"role": "assistant", "content": "answer"},
            {"role": "user", "content": "follow up"},
        ]

    def test_text_parts_are_flattened(self):
        """Test text-only part lists become plain strings."""
        result = convert_to_r1_format([
            {"role": "user", "content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]},
        ])

        assert result == [{"role": "user", "content": "a\nb"}]

    def test_images_are_kept(self):
        """Test merging with an image message keeps structured parts."""
        result = convert_to_r1_format([
            {"role": "user", "content": "system prompt"},
            {"role": "user", "content": [{"type": "text", "text": "what is this?"}, IMAGE]},
        ])

        assert result == [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "system prompt"},
                    {"type": "text", "text": "what is this?"},
                    IMAGE_URL,
                ],
            },
        ]

    def test_no_system_role(self):
        """Test the output never contains a system message."""
        result = convert_to_r1_format([{"role": "user", "content": "sys"}])
        assert all(msg["role"] != "system" for msg in result)

    def test_unknown_part_is_kept(self):
        """Test unknown parts keep the content structured."""
        document = {"type": "document", "data": "AAA"}

        result = convert_to_r1_format([
            {"role": "user", "content": "system prompt"},
            {"role": "user", "content": [{"type": "text", "text": "read this"}, document]},
        ])

        assert result == [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "system prompt"},
                    {"type": "text", "text": "read this"},
                    document,
                ],
            },
        ]

    def test_unexpected_content_is_not_merged(self):
        """Test a message without usable content is kept as its own turn."""
        result = convert_to_r1_format([
            {"role": "user", "content": "system prompt"},
            {"role": "user", "content": None},
            {"role": "user", "content": "question"},
        ])

        assert result == [
            {"role": "user", "content": "system prompt"},
            {"role": "user", "content": None},
            {"role": "user", "content": "question"},
        ]

    def test_system_history_entry(self):
        """Test system turns from the history are kept in place."""
        result = convert_to_r1_format([
            {"role": "user", "content": "system prompt"},
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "question"},
        ])

        assert result == [
            {"role": "user", "content": "system prompt"},
            {"role": "system", "content": "Be brief"},
            {"role": "user", "content": "question"},
        ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
