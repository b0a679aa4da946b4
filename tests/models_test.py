# -*- coding: utf-8 -*-
"""Unit tests for the data models."""
import unittest

from realtime_conversation._models import (
    AudioContent,
    InputAudioContent,
    InputTextContent,
    Message,
    ItemRole,
    ItemStatus,
    Session,
    TextContent,
    ToolChoiceMode,
    content_text,
)


class ModelsTest(unittest.TestCase):
    """Test cases for the data models."""

    def test_content_text(self) -> None:
        """Text parts give their text, audio parts their transcript."""
        self.assertEqual(content_text(TextContent(text="a")), "a")
        self.assertEqual(content_text(InputTextContent(text="b")), "b")
        self.assertEqual(content_text(AudioContent(transcript="c")), "c")
        self.assertIsNone(content_text(InputAudioContent()))

        with self.assertRaises(TypeError):
            content_text("text")

    def test_type_literals(self) -> None:
        """The wire discriminators are fixed per variant."""
        self.assertEqual(TextContent().type, "text")
        self.assertEqual(InputTextContent().type, "input_text")
        self.assertEqual(AudioContent().type, "audio")
        self.assertEqual(InputAudioContent().type, "input_audio")
        self.assertEqual(Message(id="m", role=ItemRole.USER).type, "message")

    def test_defaults(self) -> None:
        """Test the default values."""
        session = Session(model="m", instructions="i")
        self.assertEqual(session.tool_choice, ToolChoiceMode.AUTO)
        self.assertEqual(session.tools, [])
        self.assertIsNone(session.id)

        message = Message(id="m", role=ItemRole.USER)
        self.assertEqual(message.status, ItemStatus.COMPLETED)
        self.assertEqual(message.content, [])


if __name__ == "__main__":
    unittest.main()
